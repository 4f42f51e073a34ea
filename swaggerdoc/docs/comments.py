"""Block comment extraction and tag parsing for documented sources."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ..utils.errors import CommentParseError


class Dialect(str, Enum):
    """Source dialects that carry documentation in block comments."""

    NATIVE = "native"
    TRANSPILED = "transpiled"


# Compiler output may reflow ``/**`` into ``/*``, so transpiled sources accept any star count.
_BLOCK_PATTERNS = {
    Dialect.NATIVE: re.compile(r"/\*\*([\s\S]*?)\*/", re.MULTILINE),
    Dialect.TRANSPILED: re.compile(r"/\**([\s\S]*?)\*/", re.MULTILINE),
}

_OPENER_RE = re.compile(r"^\s*/\**")
_CLOSER_RE = re.compile(r"\*/\s*$")
_STAR_LINE_RE = re.compile(r"^\s*\*(?!/) ?(.*)$")
_TAG_LINE_RE = re.compile(r"^\s*@(?P<title>[A-Za-z_][\w-]*)(?:[ \t]?(?P<rest>.*))?$")


@dataclass
class Tag:
    title: str
    description: str = ""


@dataclass
class DocComment:
    """A parsed block comment: leading prose followed by its tags."""

    description: str = ""
    tags: List[Tag] = field(default_factory=list)


def extract_comments(text: str, dialect: Dialect = Dialect.NATIVE) -> List[str]:
    """Return every block comment in *text*, in source order."""

    if not text:
        return []
    pattern = _BLOCK_PATTERNS[Dialect(dialect)]
    return [match.group(0) for match in pattern.finditer(text)]


def _unwrap(block: str) -> List[str]:
    if not block.lstrip().startswith("/") or not _CLOSER_RE.search(block):
        raise CommentParseError(f"Not a terminated block comment: {block[:40]!r}")
    body = _CLOSER_RE.sub("", _OPENER_RE.sub("", block, count=1), count=1)
    lines = []
    for raw in body.splitlines():
        match = _STAR_LINE_RE.match(raw)
        lines.append((match.group(1) if match else raw).rstrip())
    return lines


def _join(lines: List[str]) -> str:
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def parse_comment(block: str) -> DocComment:
    """Parse one block comment in unwrap mode.

    Comment markers are stripped from every line, keeping whatever
    indentation follows the single space after ``*`` so that YAML bodies
    survive. A line starting with ``@title`` opens a tag whose description
    runs until the next tag line.
    """

    doc = DocComment()
    preamble: List[str] = []
    current: List[str] = preamble
    open_tag: Tag | None = None

    for line in _unwrap(block):
        match = _TAG_LINE_RE.match(line)
        if match is None:
            current.append(line)
            continue
        if open_tag is not None:
            open_tag.description = _join(current)
        open_tag = Tag(title=match.group("title"))
        doc.tags.append(open_tag)
        rest = match.group("rest") or ""
        current = [rest] if rest.strip() else []

    if open_tag is not None:
        open_tag.description = _join(current)
    doc.description = _join(preamble)
    return doc


__all__ = ["Dialect", "DocComment", "Tag", "extract_comments", "parse_comment"]
