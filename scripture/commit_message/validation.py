"""Commit message format rules.

Each rule is a small handler that inspects a parsed message and reports every
violation it finds. Rules run as an ordered list and never stop each other, so
the result always lists all problems in a stable order.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from ..config import Config
from ..models import CommitMessage, ValidationViolation


@dataclass
class MessageContext:
    """Everything a rule may look at."""

    lines: List[str]
    subject_index: int
    message: CommitMessage
    breaking: bool = False

    @property
    def subject(self) -> str:
        return self.message.subject

    @property
    def subject_line(self) -> int:
        return self.subject_index + 1


class ValidationRule(ABC):
    """Abstract base class for validation rules."""

    rule_id = ""

    def __init__(self, config: Config):
        self.config = config
        self.rules = config.rules

    def violation(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> ValidationViolation:
        return ValidationViolation(rule=self.rule_id, message=message, line=line, column=column)

    @abstractmethod
    def check(self, context: MessageContext) -> List[ValidationViolation]:
        """Return the violations of this rule, empty if the message complies."""
        pass


class SubjectLengthRule(ValidationRule):
    rule_id = "subject-length"

    def check(self, context: MessageContext) -> List[ValidationViolation]:
        limit = self.rules.subject_max_length
        length = len(context.subject)
        if length > limit:
            return [self.violation(
                f"Subject line too long ({length} > {limit})",
                line=context.subject_line,
                column=limit + 1,
            )]
        return []


class StandardVerbRule(ValidationRule):
    rule_id = "subject-verb"

    def check(self, context: MessageContext) -> List[ValidationViolation]:
        words = context.subject.split()
        first_word = words[0] if words else ""
        if first_word not in self.config.verb_labels:
            return [self.violation(
                "Subject must start with standard verb: " + ", ".join(self.config.verb_labels),
                line=context.subject_line,
                column=1,
            )]
        return []


class CapitalizationRule(ValidationRule):
    rule_id = "subject-capitalized"

    def check(self, context: MessageContext) -> List[ValidationViolation]:
        if not context.subject[:1].isupper():
            return [self.violation("Subject line not capitalised", line=context.subject_line, column=1)]
        return []


class TrailingPeriodRule(ValidationRule):
    rule_id = "subject-period"

    def check(self, context: MessageContext) -> List[ValidationViolation]:
        if context.subject.endswith("."):
            return [self.violation(
                "Subject line should not end with a period",
                line=context.subject_line,
                column=len(context.subject),
            )]
        return []


class BlankLineRule(ValidationRule):
    rule_id = "blank-line"

    def check(self, context: MessageContext) -> List[ValidationViolation]:
        separator = context.message.separator_lines
        if separator is None or separator == 1:
            return []
        if separator == 0:
            text = "No blank line between subject and body"
        else:
            text = f"Leave exactly one blank line after subject, found {separator}"
        return [self.violation(text, line=context.subject_line + 1)]


class BodyLineLengthRule(ValidationRule):
    rule_id = "body-line-length"

    def check(self, context: MessageContext) -> List[ValidationViolation]:
        limit = self.rules.body_line_max_length
        violations = []
        for index in range(context.subject_index + 1, len(context.lines)):
            length = len(context.lines[index])
            if length > limit:
                violations.append(self.violation(
                    f"Line {index + 1} exceeds {limit} characters ({length})",
                    line=index + 1,
                    column=limit + 1,
                ))
        return violations


class RequiredSectionRule(ValidationRule):
    """Reports required template sections missing from a message body.

    A subject-only message has no body to hold sections and is not checked.
    Sections included only for breaking changes are required only when the
    change is known to be breaking.
    """

    rule_id = "missing-section"

    def check(self, context: MessageContext) -> List[ValidationViolation]:
        if not context.message.sections:
            return []

        violations = []
        for section in self.config.sections:
            if not section.required:
                continue
            if section.include_when == "breaking" and not context.breaking:
                continue
            if context.message.section(section.name) is None:
                violations.append(self.violation(f"Missing required section: {section.heading}"))
        return violations


def create_validation_rules(config: Config) -> List[ValidationRule]:
    """Create the ordered rule list enabled by the format rules."""
    rules = config.rules
    enabled = [SubjectLengthRule]
    if rules.require_standard_verb:
        enabled.append(StandardVerbRule)
    if rules.require_capitalized:
        enabled.append(CapitalizationRule)
    if rules.forbid_trailing_period:
        enabled.append(TrailingPeriodRule)
    if rules.require_blank_line:
        enabled.append(BlankLineRule)
    enabled.extend([BodyLineLengthRule, RequiredSectionRule])

    return [rule(config) for rule in enabled]
