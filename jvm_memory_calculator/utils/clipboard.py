"""Clipboard export of the recommended JVM command line."""
import logging
from dataclasses import dataclass

import pyperclip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CopyResult:
    """Outcome of a clipboard write. Failures are reported here, never raised."""

    success: bool
    message: str


def copy_to_clipboard(text: str) -> CopyResult:
    """Copy text to the system clipboard."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning(f"Failed to copy JVM parameters: {e}")
        return CopyResult(success=False, message=str(e))
    return CopyResult(success=True, message="JVM parameters copied to clipboard!")
