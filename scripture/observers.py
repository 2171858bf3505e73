"""Observer pattern for message operations."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .models import ValidationViolation


class MessageObserver(ABC):
    """Abstract base class for message operation observers."""

    @abstractmethod
    def on_message_written(self, path: Path, subject: str) -> None:
        """Called when a message file is written."""
        pass

    @abstractmethod
    def on_validation_completed(self, violations: List[ValidationViolation]) -> None:
        """Called when a message has been validated."""
        pass

    @abstractmethod
    def on_commit_created(self, commit_hash: str, subject: str) -> None:
        """Called when a commit is created from a message file."""
        pass


class ConsoleLogObserver(MessageObserver):
    """Observer that logs message operations to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def on_message_written(self, path: Path, subject: str) -> None:
        self.console.print(f"[green]Wrote commit message to {escape(str(path))}[/green]")

    def on_validation_completed(self, violations: List[ValidationViolation]) -> None:
        if not violations:
            self.console.print("[green]Commit message is valid[/green]")
            return
        self.console.print("[red]Commit message validation failed:[/red]")
        for violation in violations:
            self.console.print(f"[red]- {escape(str(violation))}[/red]")

    def on_commit_created(self, commit_hash: str, subject: str) -> None:
        self.console.print(f"[green]Created commit {commit_hash[:7]}: {escape(subject)}[/green]")


class FileLogObserver(MessageObserver):
    """Observer that logs message operations to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_message_written(self, path: Path, subject: str) -> None:
        self._log(f"Wrote commit message to {path}: {subject}")

    def on_validation_completed(self, violations: List[ValidationViolation]) -> None:
        if not violations:
            self._log("Commit message is valid")
            return
        self._log(f"Commit message has {len(violations)} violation(s)")
        for violation in violations:
            self._log(f"  {violation.rule}: {violation}")

    def on_commit_created(self, commit_hash: str, subject: str) -> None:
        self._log(f"Created commit {commit_hash}: {subject}")
