"""Bullet segmentation for resume claim text.

Resume text arrives as PDF-derived tokens, typed prose or already-bulleted
lists. `smart_split` tries splitters from cheapest and most reliable to most
aggressive and keeps the first one that yields more than one segment.
"""

from __future__ import annotations

import re

BULLET_GLYPHS = "•◦▪▸►‣➢"
BULLET_LINE_RE = re.compile(rf"^\s*[{BULLET_GLYPHS}\-*]\s+")

_INLINE_GLYPH_RE = re.compile(rf"\s+[{BULLET_GLYPHS}*]\s+(?=[A-Z0-9])")
_INLINE_HYPHEN_RE = re.compile(r"\s+-\s+(?=[A-Z0-9])")
_CLAUSE_RE = re.compile(r"\s*;\s+(?=[A-Z0-9$])")
_PARAGRAPH_RE = re.compile(r"\n\s*\n")


def normalize_text(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return re.sub(r"\s+", " ", text).strip()


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_by_line_bullets(text: str) -> list[str]:
    """Split on lines that start with a bullet glyph or hyphen.

    Continuation lines are joined onto the preceding bullet; blank lines end
    the current segment.
    """
    segments: list[str] = []
    current: list[str] = []

    def flush() -> None:
        segment = normalize_text(" ".join(current))
        if segment:
            segments.append(segment)
        current.clear()

    for raw_line in _normalize_newlines(text).split("\n"):
        line = raw_line.strip()
        if not line:
            flush()
            continue
        if BULLET_LINE_RE.match(line):
            flush()
            current.append(BULLET_LINE_RE.sub("", line).strip())
            continue
        current.append(line)

    flush()
    return segments


def split_by_paragraphs(text: str) -> list[str]:
    """Split on blank lines."""
    paragraphs = _PARAGRAPH_RE.split(_normalize_newlines(text))
    segments = [normalize_text(BULLET_LINE_RE.sub("", p.strip())) for p in paragraphs]
    return [segment for segment in segments if segment]


def split_inline_bullets(text: str) -> list[str]:
    """Split on bullet glyphs embedded mid-line.

    A glyph only counts as a boundary when followed by a capital letter or
    digit, so hyphenated ranges and ordinary punctuation stay intact.
    """
    normalized = _INLINE_GLYPH_RE.sub("\n• ", _normalize_newlines(text))
    normalized = _INLINE_HYPHEN_RE.sub("\n- ", normalized)
    return split_by_line_bullets(normalized)


def split_clauses(text: str) -> list[str]:
    """Split on semicolons that start a new capitalized or numeric clause."""
    segments = [normalize_text(part) for part in _CLAUSE_RE.split(text)]
    return [segment.rstrip(";").strip() for segment in segments if segment]


def smart_split(text: str) -> list[str]:
    """Split claim text into bullet segments.

    Never raises; text with no recognizable boundaries comes back as a single
    segment and empty text as an empty list.
    """
    for splitter in (
        split_by_line_bullets,
        split_by_paragraphs,
        split_inline_bullets,
        split_clauses,
    ):
        segments = splitter(text)
        if len(segments) > 1:
            return segments

    single = normalize_text(text)
    return [single] if single else []
