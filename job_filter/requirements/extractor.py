"""Requirement extraction from free-text job descriptions."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Literal

from job_filter.requirements.models import Requirement, RequirementPriority
from job_filter.requirements.patterns import (
    BULLET_PREFIX_RE,
    CERTIFICATION_RE,
    EDUCATION_RE,
    IGNORED_HEADING_RE,
    INLINE_MUST_RE,
    INLINE_PREFERRED_RE,
    MARKDOWN_HEADING_RE,
    MAX_HEADING_WORDS,
    MIN_SKILL_WORDS,
    MUST_HEADING_RE,
    NEUTRAL_HEADING_RE,
    PREFERRED_HEADING_RE,
    SENIORITY_RE,
    TOOL_VOCABULARY,
    YEARS_RE,
    YEARS_SUBJECT_PREFIX_RE,
    find_tools,
)

logger = logging.getLogger(__name__)

SectionKind = Literal["default", "must", "preferred", "neutral", "ignored"]

_SECTION_PRIORITY: dict[str, RequirementPriority] = {
    "default": "Must",
    "must": "Must",
    "neutral": "Must",
    "preferred": "Preferred",
}


def normalize_requirement_text(line: str) -> str:
    """Strip bullet glyphs and trailing punctuation and capitalize the first letter."""
    value = BULLET_PREFIX_RE.sub("", line)
    value = re.sub(r"\s+", " ", value).strip()
    value = value.rstrip(",;.").strip()
    if not value:
        return ""
    return value[0].upper() + value[1:]


def _heading_label(line: str) -> tuple[str, str]:
    """Split a candidate heading line into (label, inline remainder)."""
    value = MARKDOWN_HEADING_RE.sub("", line).strip().strip("*_").strip()
    if ":" in value:
        label, _, remainder = value.partition(":")
    else:
        label, remainder = value, ""
    label = label.strip().strip("*_").strip().lower().replace("’", "'")
    label = re.sub(r"[^a-z0-9'&\- ]+", " ", label)
    label = re.sub(r"\s+", " ", label).strip()
    return label, remainder.strip().strip("*_").strip()


def classify_heading(line: str) -> tuple[SectionKind, str] | None:
    """Return (section kind, inline remainder) if `line` is a section heading."""
    if BULLET_PREFIX_RE.match(line) and not MARKDOWN_HEADING_RE.match(line):
        return None

    label, remainder = _heading_label(line)
    if not label or len(label.split()) > MAX_HEADING_WORDS:
        return None

    # Preferred before must: "preferred qualifications" also names qualifications.
    if PREFERRED_HEADING_RE.fullmatch(label):
        return "preferred", remainder
    if MUST_HEADING_RE.fullmatch(label):
        return "must", remainder
    if NEUTRAL_HEADING_RE.fullmatch(label):
        return "neutral", remainder
    if IGNORED_HEADING_RE.fullmatch(label):
        return "ignored", remainder
    return None


def _line_priority(line: str, section_priority: RequirementPriority) -> RequirementPriority:
    priority = section_priority
    if INLINE_PREFERRED_RE.search(line):
        priority = "Preferred"
    if INLINE_MUST_RE.search(line):
        priority = "Must"
    return priority


def _experience_requirement(
    line: str, description: str, priority: RequirementPriority
) -> Requirement | None:
    years_match = YEARS_RE.search(line)
    if years_match:
        return Requirement(
            type="experience",
            description=description,
            priority=priority,
            years_needed=int(years_match.group(1)),
            jd_evidence=line,
        )
    if SENIORITY_RE.search(line):
        return Requirement(
            type="experience",
            description=description,
            priority=priority,
            jd_evidence=line,
        )
    return None


def experience_subject(requirement: Requirement) -> str:
    """Return the subject of an experience requirement ("growth marketing")."""
    source = requirement.jd_evidence or requirement.description
    years_match = YEARS_RE.search(source)
    if not years_match:
        return requirement.description
    subject = YEARS_SUBJECT_PREFIX_RE.sub("", source[years_match.end() :])
    subject = subject.strip().rstrip(",;.").strip()
    return subject or requirement.description


def _iter_lines(source: str | Iterable[str] | None) -> list[str]:
    if source is None:
        return []
    if isinstance(source, str):
        return source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    lines: list[str] = []
    for chunk in source:
        lines.extend(str(chunk).replace("\r\n", "\n").replace("\r", "\n").split("\n"))
    return lines


def extract_requirements(source: str | Iterable[str] | None) -> list[Requirement]:
    """Extract structured requirements from a job description.

    Accepts the raw description text or the ordered lines produced by a text
    extractor. Output preserves document order. Extraction is best-effort: text
    that cannot be read yields an empty list, never an exception.
    """
    requirements: list[Requirement] = []
    seen_tools: set[str] = set()
    section: SectionKind = "default"
    has_education = False
    has_certification = False

    for raw_line in _iter_lines(source):
        line = raw_line.strip()
        if not line:
            continue

        heading = classify_heading(line)
        if heading is not None:
            section, remainder = heading
            if not remainder:
                continue
            line = remainder

        if section == "ignored":
            continue

        priority = _line_priority(line, _SECTION_PRIORITY[section])
        description = normalize_requirement_text(line)
        if not description:
            continue

        classified = False

        experience = _experience_requirement(line, description, priority)
        if experience is not None:
            requirements.append(experience)
            classified = True

        for tool in find_tools(line):
            classified = True
            if tool in seen_tools:
                continue
            seen_tools.add(tool)
            requirements.append(
                Requirement(
                    type="tool",
                    description=TOOL_VOCABULARY.get(tool, tool.title()),
                    priority=priority,
                    jd_evidence=line,
                )
            )

        if EDUCATION_RE.search(line):
            classified = True
            if not has_education:
                has_education = True
                requirements.append(
                    Requirement(
                        type="education",
                        description=description,
                        priority=priority,
                        jd_evidence=line,
                    )
                )

        if CERTIFICATION_RE.search(line):
            classified = True
            if not has_certification:
                has_certification = True
                requirements.append(
                    Requirement(
                        type="certification",
                        description=description,
                        priority=priority,
                        jd_evidence=line,
                    )
                )

        if classified or section == "neutral":
            continue

        is_bullet = bool(BULLET_PREFIX_RE.match(raw_line.strip()))
        if section == "default" and not is_bullet:
            continue
        if len(description.split()) < MIN_SKILL_WORDS:
            continue

        requirements.append(
            Requirement(
                type="skill",
                description=description,
                priority=priority,
                jd_evidence=line,
            )
        )

    logger.debug(f"Extracted {len(requirements)} requirement(s)")
    return requirements
