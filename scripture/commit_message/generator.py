"""Commit message draft generation."""
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import Config
from ..models import ClassificationResult, CommitMessage, MessageOverrides, ValidationViolation
from .classifier import classify
from .composer import compose
from .parser import render
from .validator import CommitMessageValidator


@dataclass
class Draft:
    """A composed message together with what produced it and what is wrong with it."""

    classification: ClassificationResult
    message: CommitMessage
    violations: List[ValidationViolation] = field(default_factory=list)

    @property
    def text(self) -> str:
        return render(self.message)

    @property
    def is_valid(self) -> bool:
        return not self.violations


class CommitMessageGenerator:
    """Runs classification, composition and validation with one config."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.validator = CommitMessageValidator(self.config)

    def classify(self, diff_text: str) -> ClassificationResult:
        return classify(diff_text, self.config)

    def draft(
        self,
        classification: ClassificationResult,
        overrides: Optional[MessageOverrides] = None,
    ) -> Draft:
        """Compose and validate a message; safe to call again after every edit."""
        message = compose(classification, self.config, overrides)
        return Draft(
            classification=classification,
            message=message,
            violations=self.validator.violations(message, breaking=classification.breaking),
        )

    def generate(self, diff_text: str, overrides: Optional[MessageOverrides] = None) -> Draft:
        return self.draft(self.classify(diff_text), overrides)
