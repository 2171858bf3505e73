"""Assemble commit messages from a classification and the section template."""
from pathlib import PurePosixPath
import re
import textwrap
from typing import Iterable, List, Optional

from ..config import Config
from ..models import (
    ClassificationResult,
    CommitMessage,
    MessageOverrides,
    Section,
    TemplateSection,
)

MAX_CHANGES_PER_FILE = 3

# Leading indentation plus an optional list marker ("- ", "* ", "1. ", "- [ ] ")
LIST_PREFIX = re.compile(r"^(\s*(?:[-*+]\s+(?:\[[ xX]\]\s+)?|\d+[.)]\s+)?)")

# "# Title [Tag]" lines start a section of their own when a message is parsed
UNKNOWN_HEADING = re.compile(r"^#\s+\S.*\[[^\]]+\]$")


def trim_blank_lines(lines: List[str]) -> List[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def wrap_text(text: str, width: int) -> str:
    """Wrap every line of ``text`` to ``width`` columns.

    Lines are only broken at whitespace; words longer than ``width`` are kept
    whole. Continuation lines of list items are indented under the item text.
    """
    wrapped: List[str] = []
    for line in text.splitlines():
        line = line.rstrip()
        if len(line) <= width:
            wrapped.append(line)
            continue

        prefix = LIST_PREFIX.match(line).group(1)
        indent = " " * len(prefix) if len(prefix) < width // 2 else ""
        wrapped.extend(textwrap.wrap(
            line,
            width=width,
            subsequent_indent=indent,
            break_long_words=False,
            break_on_hyphens=False,
        ))
    return "\n".join(trim_blank_lines(wrapped))


def is_heading(line: str, headings: Iterable[str]) -> bool:
    return line in headings or UNKNOWN_HEADING.match(line) is not None


def guard_headings(body: str, headings: Iterable[str]) -> str:
    """Indent body lines that would read as section headings."""
    headings = set(headings)
    return "\n".join(
        " " + line if is_heading(line, headings) else line
        for line in body.splitlines()
    )


def _summary(classification: ClassificationResult) -> str:
    if classification.scopes:
        return "changes in " + ", ".join(classification.scopes)

    paths = classification.unscoped
    if len(paths) == 1:
        return PurePosixPath(paths[0]).name
    if paths:
        tops = {PurePosixPath(path).parts[0] for path in paths}
        if len(tops) == 1 and len(PurePosixPath(paths[0]).parts) > 1:
            return tops.pop()
        return f"{len(paths)} files"
    return "codebase"


def _shorten(subject: str, limit: int) -> str:
    if len(subject) <= limit:
        return subject
    cut = subject[:limit + 1].rsplit(" ", 1)[0].rstrip(" ,;:")
    return cut or subject[:limit]


def _tidy_subject(subject: str) -> str:
    subject = " ".join(subject.split()).rstrip(".").rstrip()
    return subject[:1].upper() + subject[1:]


def compose_subject(
    classification: ClassificationResult,
    config: Config,
    overrides: Optional[MessageOverrides] = None,
) -> str:
    overrides = overrides or MessageOverrides()
    subject = _tidy_subject(overrides.subject or "")
    if subject:
        return subject

    verb = overrides.verb or classification.verb
    if overrides.summary and overrides.summary.strip():
        return _tidy_subject(f"{verb} {overrides.summary}")

    subject = _tidy_subject(f"{verb} {_summary(classification)}")
    return _tidy_subject(_shorten(subject, config.rules.subject_max_length))


def _generated_text(source: Optional[str], classification: ClassificationResult) -> str:
    lines: List[str] = []
    if source == "changes":
        for path, added in classification.changes.items():
            shown = added[:MAX_CHANGES_PER_FILE]
            lines.append(f"* In {path}:" if shown else f"* In {path}")
            lines.extend(f"  - {change}" for change in shown)
    elif source == "breaking":
        for item in classification.breaking_evidence:
            lines.append(f"* Breaking change in {item.path or 'diff'}:")
            lines.append(f"  {item.text}")
    return "\n".join(lines)


def _section_text(
    section: TemplateSection,
    classification: ClassificationResult,
    overrides: MessageOverrides,
) -> str:
    text = overrides.sections.get(section.name)
    if text is not None and text.strip():
        return text

    parts = [section.placeholder, _generated_text(section.generated, classification)]
    return "\n\n".join(part for part in parts if part.strip())


def _included(
    section: TemplateSection,
    classification: ClassificationResult,
    overrides: MessageOverrides,
) -> bool:
    if section.include_when == "breaking" and not classification.breaking:
        return False
    if section.required:
        return True
    return bool(overrides.sections.get(section.name, "").strip())


def compose(
    classification: ClassificationResult,
    config: Config,
    overrides: Optional[MessageOverrides] = None,
) -> CommitMessage:
    """Build a commit message draft.

    Args:
        classification: Result of classifying the staged diff
        config: Section template and format rules
        overrides: Author edits to the subject and section bodies

    Returns:
        CommitMessage: A new message value; the inputs are not modified
    """
    overrides = overrides or MessageOverrides()
    width = config.rules.body_line_max_length
    headings = [section.heading for section in config.sections]

    sections = [
        Section(
            name=section.name,
            heading=section.heading,
            body=guard_headings(
                wrap_text(_section_text(section, classification, overrides), width),
                headings,
            ),
        )
        for section in config.sections
        if _included(section, classification, overrides)
    ]

    return CommitMessage(
        subject=compose_subject(classification, config, overrides),
        sections=sections,
        separator_lines=1 if sections else None,
    )
