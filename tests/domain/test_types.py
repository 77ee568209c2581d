"""Tests for listing entries and their display form."""

import json

from wls.domain.types import Entry, EntryKind, display_text


class TestDisplayText:
    def test_plain_text_unchanged(self) -> None:
        assert display_text("admin-web") == "admin-web"
        assert display_text("café") == "café"

    def test_undecodable_bytes_replaced(self) -> None:
        assert display_text("bad\udcff") == "bad�"


class TestEntry:
    def test_constructors(self) -> None:
        assert Entry.real("a").kind is EntryKind.REAL
        assert Entry.ghost("a").is_ghost

    def test_hidden(self) -> None:
        assert Entry.real(".git").is_hidden
        assert not Entry.ghost("git").is_hidden

    def test_raw_name_kept_for_comparison(self) -> None:
        entry = Entry.real("bad\udcff")
        assert entry.name == "bad\udcff"
        assert entry != Entry.real("bad�")

    def test_serialized_name_is_printable(self) -> None:
        entry = Entry.real("bad\udcff")
        assert entry.model_dump(mode="json") == {"name": "bad�", "kind": "real"}
        assert json.loads(entry.model_dump_json())["name"] == "bad�"
