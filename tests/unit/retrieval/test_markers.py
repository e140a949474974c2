"""
Library Reference Marker Tests

Tests for tolerant parsing and stripping of [LIBRARY_ITEM:type:id:title].
"""

from sidekick.retrieval.markers import parse_library_references, strip_library_markers
from sidekick.retrieval.models import ContentType, LibraryReference


class TestParseLibraryReferences:
    """Tests for parse_library_references()."""

    def test_parses_markers_in_order(self) -> None:
        reply = (
            "Try [LIBRARY_ITEM:prompt:p1:Block Party Supply Sign-Up] and read "
            "[LIBRARY_ITEM:story:s9:Our First Block Party]."
        )

        assert parse_library_references(reply) == [
            LibraryReference(ContentType.PROMPT, "p1", "Block Party Supply Sign-Up"),
            LibraryReference(ContentType.STORY, "s9", "Our First Block Party"),
        ]

    def test_type_tag_is_case_insensitive(self) -> None:
        refs = parse_library_references("[LIBRARY_ITEM:Tool:t1:Party Kit]")

        assert refs == [LibraryReference(ContentType.TOOL, "t1", "Party Kit")]

    def test_title_may_contain_colons(self) -> None:
        refs = parse_library_references("[LIBRARY_ITEM:prompt:p1:Gardens: A Guide]")

        assert refs[0].title == "Gardens: A Guide"

    def test_unknown_type_is_ignored(self) -> None:
        assert parse_library_references("[LIBRARY_ITEM:video:v1:Clip]") == []

    def test_malformed_markers_are_ignored(self) -> None:
        reply = "[LIBRARY_ITEM:prompt] [LIBRARY_ITEM:prompt:p1 [LIBRARY_ITEM:]"

        assert parse_library_references(reply) == []

    def test_no_markers(self) -> None:
        assert parse_library_references("Plain reply.") == []


class TestStripLibraryMarkers:
    """Tests for strip_library_markers()."""

    def test_removes_markers_and_trims(self) -> None:
        reply = "Here you go [LIBRARY_ITEM:tool:t1:Party Kit]"

        assert strip_library_markers(reply) == "Here you go"

    def test_removes_malformed_markers_too(self) -> None:
        assert strip_library_markers("a [LIBRARY_ITEM:video] b") == "a  b"
