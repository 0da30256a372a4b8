"""
Application configuration.

Every tunable lives on one dataclass; the command line overrides fields
before the application is built.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Config:
    """Main application configuration."""

    # ─────────────────────────────────────────────────────────────────────────
    # Screen
    # ─────────────────────────────────────────────────────────────────────────

    # Fallback grid size, used when the terminal size is not queried
    screen_width: int = 120
    screen_height: int = 30

    # Ask the terminal for its size when the loop starts
    auto_size: bool = True

    # Draw on the alternate screen buffer, leaving the shell scrollback alone
    alternate_screen: bool = True

    # ─────────────────────────────────────────────────────────────────────────
    # Loop
    # ─────────────────────────────────────────────────────────────────────────

    # Target frame rate
    target_fps: int = 60

    # Bytes taken per non-blocking read
    read_size: int = 16

    # ─────────────────────────────────────────────────────────────────────────
    # Development
    # ─────────────────────────────────────────────────────────────────────────

    dev_mode: bool = False
    log_file: str = "termdesk.log"
    log_level: str = "INFO"

    # ─────────────────────────────────────────────────────────────────────────
    # Computed Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def frame_delay(self) -> int:
        """Frame interval in microseconds."""
        return 1_000_000 // max(1, self.target_fps)

    @property
    def screen_size(self) -> Tuple[int, int]:
        return (self.screen_width, self.screen_height)

    def __post_init__(self):
        """Apply dev mode defaults."""
        self.target_fps = max(1, int(self.target_fps))
        if self.dev_mode:
            self.log_level = "DEBUG"


# Default configuration instance
DEFAULT_CONFIG = Config()
