"""
backend/parse-core/extractors/javadoc.py

Structured-comment (Javadoc) correlation.

A raw comment such as

    /**
     * Reads the file.
     *
     * @param path  where to read from
     * @return the bytes read
     * @throws IOException on failure
     */

is split into a free-text description and an ordered list of block tags.
Lookups on the parsed comment implement the correlation rules used by the
extractors:

  - description           verbatim, trimmed ("" if the comment only has tags)
  - @return               first tag wins
  - @throws / @exception  every tag kept in order; descriptions are last-wins
  - @param                first tag whose name equals the parameter name
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

# Tags whose first word is a name rather than description text
NAMED_TAGS = {"param", "throws", "exception"}
THROWS_TAGS = {"throws", "exception"}

_BLOCK_TAG = re.compile(r"^\s*@(\w+)(.*)$", re.S)


@dataclass(frozen=True)
class BlockTag:
    tag: str
    name: Optional[str]
    content: str


@dataclass(frozen=True)
class StructuredComment:
    description: str
    tags: Tuple[BlockTag, ...] = ()

    def tags_of(self, *kinds: str) -> List[BlockTag]:
        return [t for t in self.tags if t.tag in kinds]

    def return_description(self) -> Optional[str]:
        returns = self.tags_of("return")
        if not returns:
            return None
        return returns[0].content

    def param_description(self, name: str) -> Optional[str]:
        for t in self.tags_of("param"):
            if t.name == name:
                return t.content
        return None

    def thrown_conditions(self) -> Tuple[Tuple[str, ...], Dict[str, str]]:
        names: List[str] = []
        descriptions: Dict[str, str] = {}
        for t in self.tags_of(*THROWS_TAGS):
            exc = t.name or ""
            names.append(exc)
            descriptions[exc] = t.content
        return tuple(names), descriptions


def _strip_delimiters(raw: str) -> str:
    body = raw.strip()
    if body.startswith("/**"):
        body = body[3:]
    elif body.startswith("/*"):
        body = body[2:]
    if body.endswith("*/"):
        body = body[:-2]
    return body


def _clean_lines(body: str) -> List[str]:
    lines = []
    for line in body.splitlines():
        stripped = line.lstrip()
        if stripped.startswith("*"):
            stripped = stripped[1:]
            if stripped[:1] in (" ", "\t"):
                stripped = stripped[1:]
            line = stripped
        if not line.strip():
            line = ""
        lines.append(line.rstrip())

    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def _block_tag(text: str) -> BlockTag:
    m = _BLOCK_TAG.match(text)
    tag = m.group(1)
    rest = m.group(2).strip()

    name = None
    if tag in NAMED_TAGS:
        parts = rest.split(None, 1)
        name = parts[0] if parts else ""
        rest = parts[1].strip() if len(parts) > 1 else ""

    return BlockTag(tag=tag, name=name, content=rest)


def parse_comment(raw: Optional[str]) -> Optional[StructuredComment]:
    """
    Parse a raw structured comment. Returns None when there is no comment,
    which callers must keep apart from a comment with an empty description.
    """
    if raw is None:
        return None

    lines = _clean_lines(_strip_delimiters(raw))

    description_lines: List[str] = []
    tag_blocks: List[List[str]] = []
    for line in lines:
        if _BLOCK_TAG.match(line):
            tag_blocks.append([line])
        elif tag_blocks:
            # continuation of the previous tag; alignment padding is dropped
            tag_blocks[-1].append(line.lstrip())
        else:
            description_lines.append(line)

    description = "\n".join(description_lines).strip()
    tags = tuple(_block_tag("\n".join(block)) for block in tag_blocks)
    return StructuredComment(description=description, tags=tags)
