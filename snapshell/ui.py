from rich.console import Console
from rich.markup import escape

# stdout stays plain so the generated command can be piped; diagnostics go here
err_console = Console(stderr=True, highlight=False)

USAGE = "Usage: ss 'command instructions'  (or ss -a 'ask something')"
INTERACTIVE_BANNER = "Entering interactive chat mode. Type '/exit' or empty line to quit."


def print_error(message: str) -> None:
    err_console.print(f"[bold red]{escape(message)}[/bold red]", soft_wrap=True)


def print_warning(message: str) -> None:
    err_console.print(f"[yellow]{escape(message)}[/yellow]", soft_wrap=True)


def print_usage() -> None:
    err_console.print(USAGE, markup=False, soft_wrap=True)


console = Console(highlight=False)


def read_line(prompt: str = "> ") -> str:
    """Prompt on stdout and read one line from stdin."""
    return console.input(escape(prompt))
