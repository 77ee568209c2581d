"""Listing entry types.

An :class:`Entry` is one immediate child in a listing. Real entries come
from a directory read; ghost entries come from the workspace manifest.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, field_serializer


def display_text(text: str) -> str:
    """Printable form of an OS-decoded string.

    Bytes that are not valid UTF-8 reach Python as lone surrogates, which no
    encoder accepts. They become U+FFFD here; the raw string is left alone
    for comparisons.
    """
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


class EntryKind(StrEnum):
    """Where a listing entry came from."""

    REAL = "real"
    GHOST = "ghost"


class Entry(BaseModel):
    """A single child name in a listing.

    INVARIANT: within one listing, names are unique. When a name would be
    produced both ways only the REAL entry survives.
    """

    model_config = {"frozen": True}

    name: str
    kind: EntryKind

    @field_serializer("name")
    def _serialize_name(self, name: str) -> str:
        return display_text(name)

    @property
    def is_ghost(self) -> bool:
        return self.kind is EntryKind.GHOST

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")

    @classmethod
    def real(cls, name: str) -> Entry:
        return cls(name=name, kind=EntryKind.REAL)

    @classmethod
    def ghost(cls, name: str) -> Entry:
        return cls(name=name, kind=EntryKind.GHOST)
