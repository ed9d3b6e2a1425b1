"""Immutable text storage for trainer buffers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BufferDocument:
    """Flat text plus a version counter bumped on every replacement."""

    text: str = ""
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(text=text, version=0)

    def replace(self, text: str) -> "BufferDocument":
        """Return a new document holding ``text`` with a bumped version."""

        return BufferDocument(text=text, version=self.version + 1)

    @property
    def length(self) -> int:
        return len(self.text)
