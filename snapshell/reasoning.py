"""
Normalization of the model's reasoning payload.

Providers return reasoning as a plain string, as an object, or occasionally
as some other JSON value. Every shape is reduced to ``{"reasoning": ...}``.
"""
import json
from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class ReasoningText:
    text: str


@dataclass(frozen=True)
class ReasoningObject:
    data: Dict[str, Any]


@dataclass(frozen=True)
class ReasoningOther:
    """Numbers, arrays, booleans and null."""
    value: Any


Reasoning = Union[ReasoningText, ReasoningObject, ReasoningOther]


def to_compact_json(value: Any) -> str:
    """Serialize without whitespace between tokens, keeping non-ASCII as-is."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def classify_reasoning(value: Any) -> Reasoning:
    """Tag a decoded JSON value with its reasoning shape."""
    if isinstance(value, str):
        return ReasoningText(value)
    if isinstance(value, dict):
        return ReasoningObject(value)
    return ReasoningOther(value)


def normalize_reasoning(reasoning: Reasoning) -> Dict[str, Any]:
    """
    Reduce a tagged reasoning value to its canonical form.

    Strings are wrapped, objects that already carry a ``reasoning`` key are
    passed through, and anything else is serialized and wrapped.
    """
    if isinstance(reasoning, ReasoningText):
        return {"reasoning": reasoning.text}
    if isinstance(reasoning, ReasoningObject):
        if "reasoning" in reasoning.data:
            return reasoning.data
        return {"reasoning": to_compact_json(reasoning.data)}
    if isinstance(reasoning, ReasoningOther):
        return {"reasoning": to_compact_json(reasoning.value)}
    raise TypeError(f"Unsupported reasoning variant: {type(reasoning).__name__}")


def format_reasoning_line(reasoning: Reasoning) -> str:
    """The single JSON line printed after the command."""
    return to_compact_json(normalize_reasoning(reasoning))
