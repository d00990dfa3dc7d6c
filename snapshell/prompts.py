"""
System instructions sent ahead of the user's request.

The instruction is picked from a fixed override chain and always ends with a
note naming the environment the commands should target.
"""
import logging
import sys
from typing import Optional

from .config import Config

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = "/etc/os-release"

DEFAULT_SINGLE_LINE = (
    "You are a strict shell command generator. OUTPUT ONLY shell commands or shell syntax in plain text "
    "with no explanations, no commentary, and no additional prose. DO NOT output any markdown, code fences, "
    "backticks, or formatting of any kind. The entire response MUST be a single-line shell command with no "
    "extra text. Never add numbering, bullets, examples, or any text before or after the command. If you do "
    "NOT know the correct command, respond exactly with the following format and nothing else: "
    "(NOT ABLE TO ANSWER): <one-sentence reason>; the reason should be a single short sentence explaining "
    "why the command cannot be provided. Always respond only with the shell command(s) or the one-line "
    "failure phrase in the format above."
)

DEFAULT_MULTILINE = (
    "You are a strict shell command generator. OUTPUT ONLY shell commands or shell syntax in plain text "
    "with no explanations, no commentary, and no additional prose. DO NOT output any markdown, code fences, "
    "backticks, or formatting of any kind. Multi-line shell scripts are allowed when necessary. Never add "
    "numbering, bullets, examples, or any text before or after the command. If you do NOT know the correct "
    "command, respond exactly with the following format and nothing else: (NOT ABLE TO ANSWER): "
    "<one-sentence reason>; the reason should be a single short sentence explaining why the command cannot "
    "be provided. Always respond only with the shell command(s) or the one-line failure phrase in the format "
    "above."
)

ENVIRONMENT_NOTE = " Target environment: {}. Ensure generated commands are compatible with this environment."


def detect_environment(platform: Optional[str] = None, os_release_path: str = OS_RELEASE_PATH) -> str:
    """
    Name the environment generated commands should target.

    Args:
        platform: A ``sys.platform`` value; defaults to the running interpreter's.
        os_release_path: Location of the Linux OS-release descriptor.

    Returns:
        One of ``macos``, ``windows``, ``linux (debian/ubuntu)``,
        ``linux (fedora)``, ``linux (arch)``, ``linux`` or ``unknown``.
    """
    platform = platform or sys.platform
    if platform == "darwin":
        return "macos"
    if platform.startswith("win") or platform == "cygwin":
        return "windows"
    if not platform.startswith("linux"):
        return "unknown"

    try:
        with open(os_release_path, 'r', encoding="utf-8", errors="replace") as f:
            release = f.read().lower()
    except OSError:
        logger.info(f"No readable {os_release_path}; assuming generic linux")
        return "linux"

    if "debian" in release or "ubuntu" in release:
        return "linux (debian/ubuntu)"
    if "fedora" in release:
        return "linux (fedora)"
    if "arch" in release:
        return "linux (arch)"
    return "linux"


def _first_set(*candidates: Optional[str]) -> Optional[str]:
    for candidate in candidates:
        if candidate:
            return candidate
    return None


def select_system_instruction(
    config: Config,
    multiline: bool = False,
    cli_system: Optional[str] = None,
    cli_system_single: Optional[str] = None,
    cli_system_multiline: Optional[str] = None,
) -> str:
    """
    Pick the instruction text before the environment note is added.

    Precedence, highest first: ``--system``, the per-invocation override for
    the current mode, the configured override for the current mode, the
    configured generic override, and the built-in default for the mode.
    Empty strings are treated as unset.
    """
    if multiline:
        chosen = _first_set(cli_system, cli_system_multiline, config.system_multiline, config.system)
        return chosen or DEFAULT_MULTILINE
    chosen = _first_set(cli_system, cli_system_single, config.system_single, config.system)
    return chosen or DEFAULT_SINGLE_LINE


def build_system_instruction(
    config: Config,
    multiline: bool = False,
    cli_system: Optional[str] = None,
    cli_system_single: Optional[str] = None,
    cli_system_multiline: Optional[str] = None,
    environment: Optional[str] = None,
) -> str:
    """Compose the full system instruction, environment note included."""
    instruction = select_system_instruction(
        config,
        multiline=multiline,
        cli_system=cli_system,
        cli_system_single=cli_system_single,
        cli_system_multiline=cli_system_multiline,
    )
    environment = environment or detect_environment()
    logger.info(f"Composed system instruction for environment: {environment}")
    return instruction + ENVIRONMENT_NOTE.format(environment)
