"""Single-slot yank register."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

RegisterType = Literal["character", "line"]


@dataclass(frozen=True, slots=True)
class RegisterValue:
    text: str
    type: RegisterType = "character"


class Register:
    """Holds the most recent yank. Pasting reads it without clearing."""

    def __init__(self) -> None:
        self._value = RegisterValue(text="")

    def get(self) -> RegisterValue:
        return self._value

    def yank(self, text: str, *, register_type: RegisterType = "character") -> None:
        self._value = RegisterValue(text=text, type=register_type)

    @property
    def is_empty(self) -> bool:
        return not self._value.text
