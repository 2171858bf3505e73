"""Configuration management for scripture."""
from datetime import datetime
import os
from pathlib import Path
import re
from typing import List, Optional

import click
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
import tomli
import tomli_w

from .errors import ConfigError
from .models import ChangeIndicator, FormatRules, ScopePattern, StandardVerb, TemplateSection

APP_NAME = "scripture"
DEFAULT_CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "SCRIPTURE_CONFIG"

DEFAULT_VERBS = [
    StandardVerb(label="Add", description="Create a capability, e.g. feature, test, dependency"),
    StandardVerb(label="Cut", description="Remove a capability, e.g. feature, test, dependency"),
    StandardVerb(label="Fix", description="Fix an issue, e.g. bug, typo, error, misstatement"),
    StandardVerb(label="Bump", description="Increase the version of something, e.g. a dependency"),
    StandardVerb(label="Make", description="Change the build process, tooling or infrastructure"),
    StandardVerb(label="Start", description="Begin doing something, e.g. enable a feature flag"),
    StandardVerb(label="Stop", description="End doing something, e.g. disable a feature flag"),
    StandardVerb(label="Refactor", description="Change code without changing its behaviour"),
    StandardVerb(label="Reformat", description="Refactor of formatting, e.g. omit whitespace"),
    StandardVerb(label="Optimize", description="Refactor of performance, e.g. speed up code"),
    StandardVerb(label="Document", description="Refactor of documentation, e.g. help files"),
]

DEFAULT_INDICATORS = [
    ChangeIndicator(keyword="fix", verb="Fix"),
    ChangeIndicator(keyword="bug", verb="Fix"),
    ChangeIndicator(keyword="issue", verb="Fix"),
    ChangeIndicator(keyword="remove", verb="Cut", breaking=True),
    ChangeIndicator(keyword="delete", verb="Cut", breaking=True),
    ChangeIndicator(keyword="drop", verb="Cut", breaking=True),
    ChangeIndicator(keyword="deprecate", verb="Stop", breaking=True),
    ChangeIndicator(keyword="rename", verb="Refactor", breaking=True),
    ChangeIndicator(keyword="refactor", verb="Refactor", breaking=True),
    ChangeIndicator(keyword="migrate", verb="Make", breaking=True),
    ChangeIndicator(keyword="break", breaking=True),
    ChangeIndicator(keyword="bump", verb="Bump"),
    ChangeIndicator(keyword="upgrade", verb="Bump"),
    ChangeIndicator(keyword="optimize", verb="Optimize"),
    ChangeIndicator(keyword="performance", verb="Optimize"),
    ChangeIndicator(keyword="document", verb="Document"),
    ChangeIndicator(keyword="docstring", verb="Document"),
    ChangeIndicator(keyword="reformat", verb="Reformat"),
    ChangeIndicator(keyword="whitespace", verb="Reformat"),
    ChangeIndicator(keyword="build", verb="Make"),
    ChangeIndicator(keyword="add", verb="Add"),
    ChangeIndicator(keyword="create", verb="Add"),
]

DEFAULT_SCOPES = [
    ScopePattern(name="docs", pattern="docs/"),
    ScopePattern(name="tests", pattern="tests/"),
    ScopePattern(name="ci", pattern=".github/"),
    ScopePattern(name="config", pattern="*.toml"),
]

DEFAULT_SECTIONS = [
    TemplateSection(
        name="references",
        heading="# References [Required]",
        required=True,
        placeholder=(
            "# Link to related tickets, docs, or discussions\n"
            "Closes #\n"
            "Relates to #\n"
            "See also:"
        ),
    ),
    TemplateSection(
        name="changes",
        heading="# Changes Overview [Required]",
        required=True,
        placeholder="# Briefly describe the purpose of these changes",
        generated="changes",
    ),
    TemplateSection(
        name="breaking",
        heading="# Breaking Changes [Required if any]",
        required=True,
        include_when="breaking",
        placeholder="# List any backward-incompatible changes and migration steps",
        generated="breaking",
    ),
    TemplateSection(
        name="testing",
        heading="# Testing Instructions [Optional]",
        placeholder=(
            "# Describe how to test these changes\n"
            "1. Steps to test\n"
            "2. Expected outcomes\n"
            "3. Edge cases to verify"
        ),
    ),
    TemplateSection(
        name="dependencies",
        heading="# Dependencies [Optional]",
        placeholder=(
            "# List any prerequisite changes or dependencies\n"
            "- [ ] Database migrations\n"
            "- [ ] Configuration updates\n"
            "- [ ] External service changes"
        ),
    ),
]


class Config(BaseModel):
    """Configuration settings for scripture.

    Verbs, indicators, scopes and sections are plain data tables, so new
    vocabulary or template sections never need code changes. The model is
    frozen: one value is loaded per run and passed to every core call.
    """

    model_config = ConfigDict(frozen=True)

    standard_verbs: List[StandardVerb] = Field(
        default_factory=lambda: list(DEFAULT_VERBS),
        description="Verbs a subject line may start with"
    )

    default_verb: str = Field(
        default="Add",
        description="Verb used when no change indicator matches the diff"
    )

    indicators: List[ChangeIndicator] = Field(
        default_factory=lambda: list(DEFAULT_INDICATORS),
        description="Keywords scanned for in diffs, in priority order"
    )

    scopes: List[ScopePattern] = Field(
        default_factory=lambda: list(DEFAULT_SCOPES),
        description="Path patterns naming the scope of touched files"
    )

    sections: List[TemplateSection] = Field(
        default_factory=lambda: list(DEFAULT_SECTIONS),
        description="Body sections in the order they are written"
    )

    rules: FormatRules = Field(default_factory=FormatRules)

    output_file: str = Field(
        default="commit.md",
        description="File the generated message is written to"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    @model_validator(mode="after")
    def _check_tables(self) -> "Config":
        if not self.standard_verbs:
            raise ConfigError("At least one standard verb must be configured")

        labels = [verb.label for verb in self.standard_verbs]
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise ConfigError(f"Duplicate standard verbs: {', '.join(duplicates)}")

        if self.default_verb not in labels:
            raise ConfigError(f"Default verb '{self.default_verb}' is not a standard verb")

        for indicator in self.indicators:
            if indicator.verb is not None and indicator.verb not in labels:
                raise ConfigError(
                    f"Indicator '{indicator.keyword}' maps to unknown verb '{indicator.verb}'"
                )

        names = [section.name for section in self.sections]
        if len(set(names)) != len(names):
            raise ConfigError("Template section names must be unique")
        return self

    @property
    def verb_labels(self) -> List[str]:
        return [verb.label for verb in self.standard_verbs]

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Strip control characters from values taken from the environment."""
        if not value:
            return value
        return re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value).strip()

    @staticmethod
    def default_path() -> Path:
        """Location of the user configuration file."""
        override = os.environ.get(CONFIG_ENV_VAR)
        if override:
            return Path(override)
        return Path(click.get_app_dir(APP_NAME)) / DEFAULT_CONFIG_FILENAME

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from the config file.

        Args:
            config_path: Path to the TOML file, defaults to the user config location

        Returns:
            Config: Configuration object with values from file or defaults

        Raises:
            ConfigError: If the file exists but cannot be read or is invalid
        """
        config_path = config_path or cls.default_path()

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            raise ConfigError(f"Error reading config file {config_path}: {e}") from e

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    def save(self, config_path: Optional[Path] = None) -> Path:
        """Save configuration to the config file.

        Args:
            config_path: Path to the TOML file, defaults to the user config location

        Returns:
            Path: The file that was written
        """
        config_path = config_path or self.default_path()

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with config_path.open('wb') as f:
                tomli_w.dump(self.model_dump(exclude_none=True), f)
        except OSError as e:
            raise ConfigError(f"Error saving config file {config_path}: {e}") from e
        return config_path

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"scripture_log-{timestamp}.log")
        elif self.log_file:
            return Path(self.log_file)
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support."""
        env_data = {}

        env_mapping = {
            'SCRIPTURE_DEFAULT_VERB': 'default_verb',
            'SCRIPTURE_OUTPUT_FILE': 'output_file',
            'SCRIPTURE_ALWAYS_LOG': 'always_log',
            'SCRIPTURE_LOG_FILE': 'log_file',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = self._sanitize_string(os.environ[env_var])

                if field_name == 'always_log':
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        # Explicit values win over the environment
        merged_data = {**env_data, **data}

        super().__init__(**merged_data)
