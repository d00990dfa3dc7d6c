"""
Conversation driving and output side effects.

A single-shot run sends one request and then decides whether the answer is
worth keeping: refusals in the ``(NOT ABLE TO ANSWER): <reason>`` format are
printed only, everything else is also copied to the clipboard and recorded
in history. Interactive runs keep a transcript and resend it every turn.
"""
import logging
from typing import Callable, List, Optional

from .api import Completion, Message, OpenRouterClient
from .clipboard import ClipboardWriter
from .history import HistoryStore
from .reasoning import format_reasoning_line
from .ui import INTERACTIVE_BANNER, read_line as read_stdin_line

logger = logging.getLogger(__name__)

NOT_ABLE_PREFIX = "(not able to answer):"
MIN_NOT_ABLE_LENGTH = 22
EXIT_COMMAND = "/exit"


def is_not_able_response(text: str) -> bool:
    """True when the model answered with the refusal sentinel."""
    text = text.strip()
    if len(text) < MIN_NOT_ABLE_LENGTH:
        return False
    return text.lower().startswith(NOT_ABLE_PREFIX)


def build_messages(prompt: str, system_instruction: Optional[str] = None) -> List[Message]:
    messages = []
    if system_instruction is not None:
        messages.append(Message(role="system", content=system_instruction))
    messages.append(Message(role="user", content=prompt))
    return messages


def dispatch_output(
    prompt: str,
    output: str,
    history: HistoryStore,
    clipboard: Optional[ClipboardWriter] = None,
) -> bool:
    """
    Print the output and, unless it is a refusal, copy and record it.

    Returns:
        True if the output was recorded in history.

    Raises:
        HistoryError: If the history entry cannot be written.
    """
    print(output)
    if is_not_able_response(output):
        logger.info("Model could not answer; skipping clipboard and history")
        return False

    if clipboard is not None and clipboard.available:
        clipboard.copy(output)
    entry = history.record(prompt, output)
    logger.info(f"Recorded history entry at {entry.timestamp}")
    return True


def run_single_shot(
    client: OpenRouterClient,
    prompt: str,
    history: HistoryStore,
    system_instruction: Optional[str] = None,
    effort: str = "low",
    show_reasoning: bool = False,
    clipboard: Optional[ClipboardWriter] = None,
) -> Completion:
    """
    Send one request and handle its answer.

    The normalized reasoning line, when requested and present, is printed
    after the command on its own line.
    """
    messages = build_messages(prompt, system_instruction)
    completion = client.complete(messages, effort)

    dispatch_output(prompt, completion.text, history, clipboard)

    if show_reasoning and completion.reasoning is not None:
        print(format_reasoning_line(completion.reasoning))
    return completion


def run_interactive(
    client: OpenRouterClient,
    prompt: str,
    effort: str = "low",
    read_line: Optional[Callable[[str], str]] = None,
) -> List[Message]:
    """
    Chat until the user sends an empty line or ``/exit``.

    No system message is sent. A failed read ends the session quietly.

    Returns:
        The full transcript, oldest message first.
    """
    read_line = read_line or read_stdin_line
    transcript = [Message(role="user", content=prompt)]

    print(INTERACTIVE_BANNER)
    while True:
        completion = client.complete(transcript, effort)
        transcript.append(Message(role="assistant", content=completion.content))
        print(completion.text)

        try:
            line = read_line("> ")
        except (EOFError, OSError, KeyboardInterrupt):
            logger.info("Input closed; ending interactive session")
            break

        line = line.strip()
        if not line or line == EXIT_COMMAND:
            break
        transcript.append(Message(role="user", content=line))

    return transcript
