"""Standardized git commit messages from staged changes."""

__version__ = "0.1.0"

from .commit_message import classify, compose, parse, render, validate
from .config import Config
from .errors import ConfigError, MessageIOError, ParseError, ScriptureError, StructureError
from .models import ClassificationResult, CommitMessage, MessageOverrides, Section, ValidationViolation

__all__ = [
    '__version__',
    'classify',
    'compose',
    'parse',
    'render',
    'validate',
    'Config',
    'ClassificationResult',
    'CommitMessage',
    'MessageOverrides',
    'Section',
    'ValidationViolation',
    'ScriptureError',
    'ParseError',
    'StructureError',
    'ConfigError',
    'MessageIOError',
]
