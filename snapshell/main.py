import logging
import sys

from dotenv import find_dotenv, load_dotenv

from .cli import run_cli
from .ui import print_error

logger = logging.getLogger(__name__)


def main():
    """Main entry point for the application."""
    load_dotenv(find_dotenv(usecwd=True))
    try:
        exit_code = run_cli()
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        print_error("\nOperation cancelled by user")
        sys.exit(130)  # 128 + SIGINT
    except Exception as e:
        logger.exception(f"Unhandled exception: {str(e)}")
        print_error(f"Error: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
