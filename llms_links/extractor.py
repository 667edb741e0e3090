"""Link extraction: pulls Markdown link targets out of qualifying sections.

A qualifying section starts at a ``## Resources`` or ``## Documentation``
heading and runs until the next second-level heading of any kind.  Scanning is
a two-state automaton over lines; :func:`classify_line` decides what each line
is and :func:`next_state` decides where that leaves the automaton.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import List

from llms_links.models import DocumentPath, ExtractedLink

_QUALIFYING_HEADING = re.compile(r"^##\s+(?:Resources|Documentation)(?=\s|$)")
_MARKDOWN_LINK = re.compile(r"\[.*?\]\((.*?)\)")


class LineKind(Enum):
    QUALIFYING_HEADING = "qualifying_heading"
    OTHER_HEADING = "other_heading"
    BODY = "body"


class SectionState(Enum):
    IN_SECTION = "in_section"
    OUT_OF_SECTION = "out_of_section"


# ---------------------------------------------------------------------------
# Automaton
# ---------------------------------------------------------------------------

def classify_line(line: str) -> LineKind:
    """Return the :class:`LineKind` of a single line."""
    if _QUALIFYING_HEADING.match(line):
        return LineKind.QUALIFYING_HEADING
    if line.startswith("## "):
        return LineKind.OTHER_HEADING
    return LineKind.BODY


def next_state(state: SectionState, kind: LineKind) -> SectionState:
    if kind is LineKind.QUALIFYING_HEADING:
        return SectionState.IN_SECTION
    if kind is LineKind.OTHER_HEADING:
        return SectionState.OUT_OF_SECTION
    return state


def links_in_line(line: str) -> List[str]:
    """Return every ``[text](target)`` target on *line*, in order."""
    return _MARKDOWN_LINK.findall(line)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_links(content: str) -> List[str]:
    """Return the de-duplicated link targets found in qualifying sections.

    Targets keep their first-seen order.  The qualifying heading line itself
    is scanned too.  Content that matches nothing simply yields no links.
    """
    state = SectionState.OUT_OF_SECTION
    seen: set[str] = set()
    urls: List[str] = []

    for line in content.split("\n"):
        line = line.rstrip("\r")
        state = next_state(state, classify_line(line))
        if state is not SectionState.IN_SECTION:
            continue
        for url in links_in_line(line):
            if url not in seen:
                seen.add(url)
                urls.append(url)
    return urls


def extract_file_links(path: DocumentPath) -> List[ExtractedLink]:
    """Read *path* as UTF-8 and return its links paired with the file."""
    content = Path(path).read_text(encoding="utf-8")
    return [ExtractedLink(url=url, source=path) for url in extract_links(content)]
