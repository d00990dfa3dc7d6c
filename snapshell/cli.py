import argparse
import logging
from typing import List, Optional

from . import __version__
from .api import EFFORT_LEVELS, OpenRouterClient
from .clipboard import ClipboardWriter
from .config import API_KEY_VAR, Config
from .exceptions import ApiError, HistoryError
from .history import HistoryStore, print_history
from .logger import setup_logging
from .prompts import build_system_instruction
from .session import run_interactive, run_single_shot
from .ui import print_error, print_usage, print_warning

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapshell",
        description="Snappy shell command generation from natural language.",
    )
    parser.add_argument("input", nargs="?", help="Command instruction or chat text.")
    parser.add_argument("-H", "--history", action="store_true",
                        help="Show history of prompts and generated commands.")
    parser.add_argument("-a", "--ask", action="store_true",
                        help="Interactive LLM chat mode (prints conversation).")
    parser.add_argument("-r", "--reasoning", choices=EFFORT_LEVELS, default="low",
                        help="Reasoning effort (default: low).")
    parser.add_argument("-m", "--model",
                        help="Model to use (defaults to SNAPSHELL_MODEL or openai/gpt-oss-20b).")
    parser.add_argument("-L", "--multiline", action="store_true",
                        help="Allow multi-line shell script output instead of forcing a single-line command.")
    parser.add_argument("-s", "--system",
                        help="Custom system instruction for both single- and multiline modes.")
    parser.add_argument("--system-single", help="Custom system instruction for single-line mode.")
    parser.add_argument("--system-multiline", help="Custom system instruction for multiline mode.")
    parser.add_argument("-S", "--show-reasoning", action="store_true",
                        help='Print model reasoning after the command as {"reasoning": "..."}.')
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_cli(argv: Optional[List[str]] = None, config: Optional[Config] = None) -> int:
    """
    Parse arguments and run the requested mode.

    Returns:
        The process exit code.
    """
    args = build_parser().parse_args(argv)
    config = config or Config()
    if args.verbose:
        config.verbose = True
    setup_logging(config)
    logger.info(f"Loaded configuration: {config}")

    history = HistoryStore(config.history_file)

    if args.history:
        try:
            print_history(history)
        except HistoryError as e:
            print_error(f"Failed to read history: {e}")
            return 1
        return 0

    if args.input is None:
        print_usage()
        return 1

    if not config.validate():
        print_warning(f"Set {API_KEY_VAR} env var for OpenRouter integration.")

    client = OpenRouterClient(
        api_key=config.api_key,
        model=args.model or config.model,
        api_url=config.api_url,
        timeout=config.timeout,
    )

    try:
        if args.ask:
            run_interactive(client, args.input, effort=args.reasoning)
        else:
            system_instruction = build_system_instruction(
                config,
                multiline=args.multiline,
                cli_system=args.system,
                cli_system_single=args.system_single,
                cli_system_multiline=args.system_multiline,
            )
            run_single_shot(
                client,
                args.input,
                history,
                system_instruction=system_instruction,
                effort=args.reasoning,
                show_reasoning=args.show_reasoning,
                clipboard=ClipboardWriter.for_platform(),
            )
    except ApiError as e:
        print_error(f"LLM request failed: {e}")
        return 1
    except HistoryError as e:
        print_error(f"Failed to save history: {e}")
        return 1

    return 0
