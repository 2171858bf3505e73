"""Core functionality for scripture: repository access and message file I/O."""
from pathlib import Path
from typing import List, Optional

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from rich.console import Console

from .commands import CommitCommand, MessageCommand, WriteMessageCommand
from .commit_message import CommitMessageGenerator, Draft
from .config import Config
from .errors import MessageIOError
from .models import MessageOverrides, ValidationViolation
from .observers import MessageObserver


def open_repo(repo_path: str) -> Repo:
    try:
        return Repo(repo_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise MessageIOError(f"Not a git repository: {repo_path}") from e


def read_message_file(path: Path) -> str:
    """Read a commit message file.

    Raises:
        MessageIOError: If the file cannot be read
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MessageIOError(f"Failed to read file: {e}") from e


class ChangeAnalyzer:
    """Reads the staged changes of a repository and drafts a message for them."""

    def __init__(self, repo_path: str, config: Optional[Config] = None):
        self.repo = open_repo(repo_path)
        self.repo_path = repo_path
        self.generator = CommitMessageGenerator(config)

    def get_staged_diff(self) -> str:
        """Return ``git diff --cached`` output, empty when nothing is staged."""
        try:
            return self.repo.git.diff("--cached")
        except GitCommandError as e:
            raise MessageIOError(f"Failed to read staged changes: {e}") from e

    def analyze_changes(self, overrides: Optional[MessageOverrides] = None) -> Draft:
        return self.generator.generate(self.get_staged_diff(), overrides)


class MessageCommitter:
    """Runs message commands, keeping a history for undo."""

    def __init__(self, repo_path: str = ".", console: Optional[Console] = None):
        self.repo_path = repo_path
        self.console = console or Console()
        self.observers: List[MessageObserver] = []
        self.command_history: List[MessageCommand] = []

    def add_observer(self, observer: MessageObserver) -> None:
        """Add an observer to be notified of message operations."""
        self.observers.append(observer)

    def remove_observer(self, observer: MessageObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    def execute_command(self, command: MessageCommand) -> bool:
        """Execute a command and store it in history if successful."""
        for observer in self.observers:
            command.add_observer(observer)

        success = command.execute()

        if success:
            self.command_history.append(command)

        return success

    def undo_last_command(self) -> bool:
        """Undo the last executed command."""
        if not self.command_history:
            self.console.print("[yellow]No commands to undo[/yellow]")
            return False

        command = self.command_history.pop()
        return command.undo()

    def write_message(self, path: Path, text: str) -> bool:
        return self.execute_command(WriteMessageCommand(path, text, self.console))

    def commit(self, message_path: Path, no_verify: bool = False) -> bool:
        repo = open_repo(self.repo_path)
        command = CommitCommand(repo, message_path, self.console, no_verify=no_verify)
        return self.execute_command(command)

    def report_validation(self, violations: List[ValidationViolation]) -> None:
        for observer in self.observers:
            observer.on_validation_completed(violations)
