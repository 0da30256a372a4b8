# errors.py


class TermdeskError(Exception):
    """Base class for toolkit errors."""


class TerminalError(TermdeskError):
    """Raised when the terminal cannot be put into (or queried for) raw mode."""
