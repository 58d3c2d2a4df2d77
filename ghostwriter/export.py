"""
EXPORT - save the shared document as a plain-text file.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import config
from .exceptions import ExportError
from .logging_config import get_logger

logger = get_logger(__name__)

FILENAME_PREFIX = "ghostwriter"


def export_filename(now: Optional[datetime] = None) -> str:
    """ghostwriter-YYYY-MM-DDTHH-MM-SS.txt"""
    now = now or datetime.now()
    stamp = now.strftime("%Y-%m-%dT%H-%M-%S")
    return f"{FILENAME_PREFIX}-{stamp}.txt"


def save_document(text: str, directory: Optional[Path] = None, now: Optional[datetime] = None) -> Path:
    """
    Write the document to a timestamped text file.

    Args:
        text: Plain text of the document
        directory: Target directory (defaults to the configured exports dir)
        now: Timestamp for the filename (defaults to the current time)

    Returns:
        Path of the written file

    Raises:
        ExportError: if the document is empty or the file cannot be written
    """
    if not text or not text.strip():
        raise ExportError("Nothing to save: the document is empty")

    directory = Path(directory) if directory else config.exports_dir
    path = directory / export_filename(now)

    try:
        directory.mkdir(exist_ok=True, parents=True)
        # The stream sentinel is a non-breaking space; files get a plain one
        path.write_text(text.replace("\u00a0", " ").strip() + "\n", encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to save document to {path}: {e}", exc_info=True)
        raise ExportError(f"Could not write {path.name}: {e}", path=str(path)) from e

    logger.info(f"Content saved as {path.name}")
    return path
