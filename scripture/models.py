"""Shared models for scripture."""
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class StandardVerb(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    description: str = ""


class ChangeIndicator(BaseModel):
    """A keyword found in a diff and what it implies about the change."""

    model_config = ConfigDict(frozen=True)

    keyword: str
    verb: Optional[str] = Field(
        default=None,
        description="Standard verb implied by the keyword, if any"
    )
    breaking: bool = Field(
        default=False,
        description="Whether the keyword signals a backward-incompatible change"
    )


class ScopePattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    pattern: str = Field(description="Path prefix, or a glob when it contains *, ? or [")


class TemplateSection(BaseModel):
    """A named block of the commit message body."""

    model_config = ConfigDict(frozen=True)

    name: str
    heading: str
    required: bool = False
    include_when: Optional[Literal["breaking"]] = Field(
        default=None,
        description="Condition under which the section is included at all"
    )
    placeholder: str = ""
    generated: Optional[Literal["changes", "breaking"]] = Field(
        default=None,
        description="Classification data appended to the placeholder"
    )


class FormatRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    subject_max_length: int = Field(default=50, gt=0)
    body_line_max_length: int = Field(default=72, gt=0)
    require_standard_verb: bool = True
    require_capitalized: bool = True
    forbid_trailing_period: bool = True
    require_blank_line: bool = True


class Evidence(BaseModel):
    """A diff line that matched a change indicator."""

    model_config = ConfigDict(frozen=True)

    line_number: int
    path: Optional[str]
    keyword: str
    text: str
    breaking: bool = False


class ClassificationResult(BaseModel):
    verb: str
    scopes: List[str] = Field(default_factory=list)
    unscoped: List[str] = Field(default_factory=list, description="Touched paths matching no scope pattern")
    breaking: bool = False
    counts: Dict[str, int] = Field(default_factory=dict)
    evidence: List[Evidence] = Field(default_factory=list)
    changes: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Added lines per touched path, in diff order"
    )

    @property
    def breaking_evidence(self) -> List[Evidence]:
        return [item for item in self.evidence if item.breaking]


class MessageOverrides(BaseModel):
    """Edits supplied by the author on top of the generated draft."""

    verb: Optional[str] = None
    summary: Optional[str] = None
    subject: Optional[str] = None
    sections: Dict[str, str] = Field(default_factory=dict)


class ValidationViolation(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule: str
    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        if self.line is not None:
            return f"{self.message} (line {self.line})"
        return self.message


@dataclass
class Section:
    """One body section. No heading means the implicit overview; a heading
    without a name is an unrecognized section kept as-is."""

    name: Optional[str]
    heading: Optional[str]
    body: str


@dataclass
class CommitMessage:
    subject: str
    sections: List[Section] = field(default_factory=list)
    separator_lines: Optional[int] = field(default=None, compare=False)

    def section(self, name: str) -> Optional[Section]:
        for section in self.sections:
            if section.name == name:
                return section
        return None
