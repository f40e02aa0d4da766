"""
Domain entities for a single text-generation exchange.
See docs/CleanArchitecture.md — Phase 1 for the architectural rationale.
Zero external dependencies — pure Python dataclasses and enums only.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


class GenerationMode(str, Enum):
    """Selects which model profile serves the request."""

    CHAT = "chat"
    CODE = "code"


def clamp_temperature(value: float) -> float:
    """Clamp *value* into [MIN_TEMPERATURE, MAX_TEMPERATURE].

    Raises:
        ValueError: if *value* is not a real number or is NaN.
    """
    if isinstance(value, bool):
        raise ValueError(f"temperature must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"temperature must be a number, got {value!r}") from exc
    if math.isnan(number):
        raise ValueError("temperature must not be NaN")
    return min(max(number, MIN_TEMPERATURE), MAX_TEMPERATURE)


TEXT_FIELDS = ("system_instruction", "user_instruction", "credential")


def _text_field(name: str, value: object) -> str:
    """None becomes ""; any other non-str value raises ValueError."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class ModelProfile:
    mode: GenerationMode
    model_id: str
    default_system_instruction: str


@dataclass(frozen=True)
class GenerationRequest:
    """Inputs of one node invocation.

    mode and temperature are normalised in __post_init__: the mode accepts
    its string literal and the temperature is clamped into [0, 2].
    credential is an opaque handle resolved by an ISecretStore, never the key itself.
    """

    mode: GenerationMode
    system_instruction: str
    user_instruction: str
    temperature: float
    credential: str
    user_id: Optional[str] = None
    session_id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", GenerationMode(self.mode))
        object.__setattr__(self, "temperature", clamp_temperature(self.temperature))
        for name in TEXT_FIELDS:
            object.__setattr__(self, name, _text_field(name, getattr(self, name)))


@dataclass(frozen=True)
class GenerationResult:
    response: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("exactly one of response or error must be set")

    @classmethod
    def success(cls, text: str) -> "GenerationResult":
        return cls(response=text)

    @classmethod
    def failure(cls, message: str) -> "GenerationResult":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.response is not None

    def as_outputs(self) -> dict[str, str]:
        """Return the single populated output channel, keyed "response" or "error"."""
        if self.response is not None:
            return {"response": self.response}
        return {"error": self.error}
