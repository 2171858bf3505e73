"""Parsing and rendering of raw commit message text."""
from typing import Dict, List, Optional

from ..config import Config
from ..errors import ParseError, StructureError
from ..models import CommitMessage, Section
from .composer import is_heading, trim_blank_lines


def _split_sections(lines: List[str], headings: Dict[str, str]) -> List[Section]:
    sections: List[Section] = []
    name: Optional[str] = None
    heading: Optional[str] = None
    buffer: List[str] = []

    def flush() -> None:
        body = trim_blank_lines(buffer)
        if heading is None and not body:
            return
        sections.append(Section(name=name, heading=heading, body="\n".join(body)))

    for line in lines:
        if is_heading(line, headings):
            flush()
            name, heading, buffer = headings.get(line), line, []
        else:
            buffer.append(line)
    flush()
    return sections


def parse(raw_text: str, config: Optional[Config] = None, strict: bool = True) -> CommitMessage:
    """Split raw message text into a subject and body sections.

    Args:
        raw_text: Message as found in a commit message file
        config: Supplies the recognised section headings
        strict: Raise on a malformed subject/body separator instead of
            recording it on the result

    Raises:
        ParseError: If the text has no non-blank line
        StructureError: If strict and subject and body are not separated by
            exactly one blank line
    """
    config = config or Config()
    lines = [line.rstrip() for line in raw_text.splitlines()]

    start = next((index for index, line in enumerate(lines) if line.strip()), None)
    if start is None:
        raise ParseError("Empty commit message")

    subject = lines[start].strip()
    rest = lines[start + 1:]
    while rest and not rest[-1].strip():
        rest.pop()
    if not rest:
        return CommitMessage(subject=subject)

    separator = 0
    while not rest[separator].strip():
        separator += 1

    if strict and separator == 0:
        raise StructureError("No blank line between subject and body", line=start + 2)
    if strict and separator > 1:
        raise StructureError(
            f"Subject and body separated by {separator} blank lines instead of one",
            line=start + 3,
        )

    headings = {section.heading: section.name for section in config.sections}
    return CommitMessage(
        subject=subject,
        sections=_split_sections(rest[separator:], headings),
        separator_lines=separator,
    )


def render(message: CommitMessage) -> str:
    """Serialise a message back to text; ``parse`` reverses it."""
    blocks = []
    for section in message.sections:
        if section.heading is None:
            if section.body:
                blocks.append(section.body)
        elif section.body:
            blocks.append(f"{section.heading}\n{section.body}")
        else:
            blocks.append(section.heading)

    text = message.subject
    if blocks:
        text += "\n\n" + "\n\n".join(blocks)
    return text + "\n"
