import logging
import shutil
import subprocess
import sys
from typing import List, Optional

logger = logging.getLogger(__name__)

CLIPBOARD_TIMEOUT = 5

# Tried in order on Linux; the first one on PATH wins.
LINUX_CLIPBOARD_COMMANDS = [
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
]


def find_clipboard_command(platform: Optional[str] = None) -> Optional[List[str]]:
    """Return the clipboard utility invocation for the platform, or None."""
    platform = platform or sys.platform
    if platform == "darwin":
        return ["pbcopy"]
    if platform.startswith("win"):
        return ["clip"]
    if platform.startswith("linux"):
        for command in LINUX_CLIPBOARD_COMMANDS:
            if shutil.which(command[0]):
                return command
    return None


class ClipboardWriter:
    """Copies text to the system clipboard through a platform utility."""

    def __init__(self, command: Optional[List[str]] = None):
        self.command = command

    @classmethod
    def for_platform(cls, platform: Optional[str] = None) -> "ClipboardWriter":
        return cls(find_clipboard_command(platform))

    @property
    def available(self) -> bool:
        return bool(self.command)

    def copy(self, text: str) -> bool:
        """
        Best-effort copy. Failing to spawn or feed the utility is logged and
        otherwise ignored.

        Returns:
            True if the utility accepted the text.
        """
        if not self.command:
            return False
        try:
            subprocess.run(
                self.command,
                input=text,
                text=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=True,
                timeout=CLIPBOARD_TIMEOUT,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Clipboard copy with {self.command[0]} failed: {e}")
            return False
        logger.info(f"Copied output to clipboard with {self.command[0]}")
        return True
