"""
Library Reference Markers

The model cites library records inline as [LIBRARY_ITEM:type:id:title]. The
convention is prompted, not enforced, so parsing is tolerant: malformed
markers and unknown types are skipped silently.
"""

import re
from typing import Final

from sidekick.retrieval.models import ContentType, LibraryReference

# id stops at ':'; the title may contain ':' but never brackets
MARKER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"\[LIBRARY_ITEM:\s*([A-Za-z]+)\s*:\s*([^:\[\]]+?)\s*:\s*([^\[\]]*?)\s*\]"
)

# Anything that looks like a marker, well-formed or not
ANY_MARKER_PATTERN: Final[re.Pattern[str]] = re.compile(r"\[LIBRARY_ITEM:[^\]]+\]")


def parse_library_references(text: str) -> list[LibraryReference]:
    """Extract the library references cited in a model reply.

    Args:
        text: Model reply

    Returns:
        References in order of appearance
    """
    references: list[LibraryReference] = []
    for match in MARKER_PATTERN.finditer(text or ""):
        type_tag, item_id, title = match.groups()
        try:
            content_type = ContentType(type_tag.lower())
        except ValueError:
            continue
        if not item_id:
            continue
        references.append(LibraryReference(type=content_type, id=item_id, title=title))
    return references


def strip_library_markers(text: str) -> str:
    """Remove all markers from a reply, as the demo chat displays it."""
    return ANY_MARKER_PATTERN.sub("", text or "").strip()
