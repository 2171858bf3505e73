"""Commit message validation."""
from typing import List, Optional, Tuple, Union

from ..config import Config
from ..models import CommitMessage, ValidationViolation
from .parser import parse, render
from .validation import MessageContext, create_validation_rules


class CommitMessageValidator:
    """Validates commit messages against the configured format rules."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.rules = create_validation_rules(self.config)

    def violations(
        self,
        message: Union[str, CommitMessage],
        breaking: bool = False,
    ) -> List[ValidationViolation]:
        """List every rule violation in ``message``.

        Raw text is parsed leniently so that a bad subject/body separator is
        reported as a violation. Empty text raises ``ParseError``.
        """
        text = render(message) if isinstance(message, CommitMessage) else message
        parsed = parse(text, self.config, strict=False)

        lines = text.splitlines()
        subject_index = next(index for index, line in enumerate(lines) if line.strip())
        context = MessageContext(
            lines=lines,
            subject_index=subject_index,
            message=parsed,
            breaking=breaking,
        )

        result: List[ValidationViolation] = []
        for rule in self.rules:
            result.extend(rule.check(context))
        return result

    def validate(
        self,
        message: Union[str, CommitMessage],
        breaking: bool = False,
    ) -> Tuple[bool, List[ValidationViolation]]:
        """Validate a commit message against standards."""
        found = self.violations(message, breaking=breaking)
        return not found, found


def validate(
    message: Union[str, CommitMessage],
    config: Optional[Config] = None,
    breaking: bool = False,
) -> List[ValidationViolation]:
    """Return the ordered violations of ``message``; empty means valid."""
    return CommitMessageValidator(config).violations(message, breaking=breaking)
