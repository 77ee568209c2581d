"""Workspace manifest model and parser.

The manifest is a JSON object mapping logical keys (``//areas/clients/web``)
to records carrying at least a string ``id``. Extra record fields are kept
but never validated, so newer manifests still parse.

INVARIANT: a Manifest is immutable after construction. It is loaded at most
once per listing invocation and shared read-only across recursive levels.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ValidationError

from wls.domain.errors import ManifestParseError
from wls.domain.paths import KEY_MARKER, CanonicalPath, ManifestKey

logger = logging.getLogger(__name__)


class ManifestRecord(BaseModel):
    """Metadata attached to one manifest key."""

    model_config = {"frozen": True, "extra": "allow"}

    id: str


class Manifest(Mapping[ManifestKey, ManifestRecord]):
    """Read-only mapping of manifest keys to records."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[ManifestKey, ManifestRecord] | None = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    def __getitem__(self, key: ManifestKey) -> ManifestRecord:
        return self._entries[key]

    def __iter__(self) -> Iterator[ManifestKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Manifest({len(self._entries)} keys)"

    def declares(self, prefix: CanonicalPath) -> bool:
        """Whether any key equals or extends *prefix*."""
        return any(key.starts_with(prefix) for key in self._entries)


def parse_manifest(raw: bytes | str) -> Manifest:
    """Deserialize manifest JSON into a :class:`Manifest`.

    Raises :class:`ManifestParseError` for invalid UTF-8, malformed JSON,
    a non-object top level, keys missing the ``//`` marker, or records that
    are not objects with a string ``id``.

    Keys that carry the marker but name nothing inside the tree (empty,
    ``.`` or ``..`` segments) are skipped and logged at debug level.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        data: Any = json.loads(text)
    except UnicodeDecodeError as exc:
        raise ManifestParseError(f"not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ManifestParseError(f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestParseError(f"top level must be an object, got {type(data).__name__}")

    entries: dict[ManifestKey, ManifestRecord] = {}
    for raw_key, value in data.items():
        if not raw_key.startswith(KEY_MARKER):
            raise ManifestParseError(f"key {raw_key!r} does not start with {KEY_MARKER!r}")
        try:
            record = ManifestRecord.model_validate(value)
        except ValidationError as exc:
            raise ManifestParseError(f"invalid record for {raw_key!r}: {exc}") from exc
        try:
            key = ManifestKey.parse(raw_key)
        except ValueError:
            logger.debug("Ignoring manifest key outside tree namespace: %r", raw_key)
            continue
        entries[key] = record

    return Manifest(entries)
