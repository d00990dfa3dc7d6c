import logging
from dataclasses import dataclass
from typing import Any, List, Literal, Optional

import requests
from pydantic import BaseModel, StrictStr, ValidationError

from .config import DEFAULT_API_URL, DEFAULT_MODEL, DEFAULT_TIMEOUT
from .exceptions import ApiError
from .reasoning import Reasoning, classify_reasoning

logger = logging.getLogger(__name__)

Role = Literal["system", "user", "assistant"]
Effort = Literal["low", "medium", "high"]

EFFORT_LEVELS = ("low", "medium", "high")


class Message(BaseModel):
    """One entry of the conversation, oldest first."""
    role: Role
    content: str


class ReasoningOptions(BaseModel):
    effort: Effort = "low"


class RequestBody(BaseModel):
    """Body POSTed to the chat-completions endpoint."""
    model: str
    messages: List[Message]
    reasoning: ReasoningOptions


class ChoiceMessage(BaseModel):
    content: StrictStr
    reasoning: Any = None


class Choice(BaseModel):
    message: ChoiceMessage


class CompletionResponse(BaseModel):
    """The part of the response envelope we rely on; anything else is ignored."""
    choices: List[Choice]


@dataclass
class Completion:
    """First choice of a completion, reduced to what the CLI prints."""
    content: str
    reasoning: Optional[Reasoning] = None

    @property
    def text(self) -> str:
        return self.content.strip()

    @classmethod
    def from_response(cls, response: CompletionResponse) -> "Completion":
        if not response.choices:
            return cls(content="")
        message = response.choices[0].message
        # An explicit null is still a reasoning value; only a missing key means none
        reasoning = None
        if "reasoning" in message.model_fields_set:
            reasoning = classify_reasoning(message.reasoning)
        return cls(content=message.content, reasoning=reasoning)


class OpenRouterClient:
    """A client for the OpenRouter chat-completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initializes the OpenRouterClient.

        Args:
            api_key: The OpenRouter API key. An empty key sends requests
                without an Authorization header.
            model: The model to use for generation.
            api_url: The chat-completions endpoint.
            timeout: Seconds to wait for a response.
            session: Optional pre-configured requests session.
        """
        self.api_key = api_key or ""
        self.model = model
        self.api_url = api_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        logger.info(f"Initialized OpenRouter client with model: {self.model}")

    def build_request(self, messages: List[Message], effort: str = "low") -> RequestBody:
        """Wrap the transcript with the model name and reasoning effort."""
        return RequestBody(
            model=self.model,
            messages=list(messages),
            reasoning=ReasoningOptions(effort=effort),
        )

    def _headers(self) -> dict:
        if self.api_key:
            return {"Authorization": f"Bearer {self.api_key}"}
        return {}

    def complete(self, messages: List[Message], effort: str = "low") -> Completion:
        """
        Send the transcript once and return the first choice.

        Raises:
            ApiError: On transport failure, a non-2xx status, a body that is
                not JSON, or JSON that does not match the expected envelope.
        """
        body = self.build_request(messages, effort)
        logger.info(f"Sending {len(body.messages)} message(s) to {self.api_url} (effort={effort})")

        try:
            response = self.session.post(
                self.api_url,
                json=body.model_dump(),
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Request to {self.api_url} failed: {e}")
            raise ApiError(str(e)) from e
        except ValueError as e:
            logger.error(f"Response from {self.api_url} was not JSON: {e}")
            raise ApiError(f"invalid JSON in response: {e}") from e

        try:
            parsed = CompletionResponse.model_validate(payload)
        except ValidationError as e:
            logger.error(f"Unexpected response shape: {e}")
            raise ApiError(f"unexpected response shape: {e}") from e

        return Completion.from_response(parsed)
