"""
Centralized Configuration for Ghostwriter

Manages path configuration, environment variables, and defaults for the
per-session settings.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MODEL = "gpt-4.1-nano-2025-04-14"
DEFAULT_TIMER_SECONDS = 60
DEFAULT_STREAM_INTERVAL_MS = 30
DEFAULT_ADVANCE_DELAY = 0.5
TIMER_CHOICES = (30, 60, 120, 180, 300)


class GhostwriterConfig:
    """Central configuration for Ghostwriter paths and settings."""

    def __init__(self, root_dir: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            root_dir: Root directory of the Ghostwriter checkout.
                     If None, auto-detects based on this file's location.
        """
        if root_dir is None:
            # ghostwriter/config.py -> parent is root
            self._root_dir = Path(__file__).parent.parent.resolve()
        else:
            self._root_dir = Path(root_dir).resolve()

    @property
    def root_dir(self) -> Path:
        """Root directory of the checkout."""
        return self._root_dir

    @property
    def logs_dir(self) -> Path:
        """Directory for application logs and the conversation log."""
        custom_path = os.getenv('GHOSTWRITER_LOGS_DIR')
        if custom_path:
            return Path(custom_path).resolve()
        return self._root_dir / "logs"

    @property
    def exports_dir(self) -> Path:
        """Directory where saved documents are written."""
        custom_path = os.getenv('GHOSTWRITER_EXPORTS_DIR')
        if custom_path:
            return Path(custom_path).resolve()
        return self._root_dir / "exports"

    @property
    def openai_api_key(self) -> Optional[str]:
        return os.getenv('OPENAI_API_KEY')

    @property
    def openai_model(self) -> str:
        return os.getenv('OPENAI_MODEL') or DEFAULT_MODEL

    def provider_status(self) -> dict:
        """Summarize provider configuration without exposing the key."""
        return {
            "openai_key": "configured" if self.openai_api_key else "missing",
            "openai_model": self.openai_model,
        }

    def ensure_directories(self):
        """Create essential directories if they don't exist."""
        self.logs_dir.mkdir(exist_ok=True, parents=True)
        self.exports_dir.mkdir(exist_ok=True, parents=True)

    def __repr__(self) -> str:
        return (
            f"GhostwriterConfig(\n"
            f"  root_dir={self.root_dir},\n"
            f"  logs_dir={self.logs_dir},\n"
            f"  exports_dir={self.exports_dir}\n"
            f")"
        )


# Global config instance
# Import this in other modules: from ghostwriter.config import config
config = GhostwriterConfig()
