"""Commit message classification, composition, parsing and validation."""

from .classifier import classify
from .composer import compose, wrap_text
from .generator import CommitMessageGenerator, Draft
from .parser import parse, render
from .validator import CommitMessageValidator, validate

__all__ = [
    'classify',
    'compose',
    'wrap_text',
    'parse',
    'render',
    'validate',
    'CommitMessageGenerator',
    'CommitMessageValidator',
    'Draft',
]
