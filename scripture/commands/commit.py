"""Command for creating a git commit from a message file."""

from pathlib import Path
from typing import Optional

from git import GitCommandError, Repo
from rich.console import Console
from rich.markup import escape

from .base import MessageCommand


class CommitCommand(MessageCommand):
    """Command for committing the staged changes with a message file.

    Attributes:
        repo (Repo): The git repository to commit in
        message_path (Path): File holding the commit message
        commit_hash (Optional[str]): The hash of the created commit
    """

    def __init__(
        self,
        repo: Repo,
        message_path: Path,
        console: Optional[Console] = None,
        no_verify: bool = False,
    ):
        """Initialize the commit command.

        Args:
            repo: The git repository to commit in
            message_path: File holding the commit message
            console: Optional Rich console for output
            no_verify: Skip commit hooks
        """
        super().__init__(console)
        self.repo = repo
        self.message_path = Path(message_path)
        self.commit_hash: Optional[str] = None
        self.no_verify = no_verify

    def execute(self) -> bool:
        """Run ``git commit -F <message file>`` and notify observers."""
        args = ["-F", str(self.message_path.absolute())]
        if self.no_verify:
            args.append("--no-verify")

        try:
            self.repo.git.commit(*args)
        except GitCommandError as e:
            self.console.print(f"[red]Failed to create commit: {escape(str(e))}[/red]")
            return False

        commit = self.repo.head.commit
        self.commit_hash = commit.hexsha
        subject = commit.message.splitlines()[0] if commit.message else ""

        for observer in self.observers:
            observer.on_commit_created(self.commit_hash, subject)
        return True

    def undo(self) -> bool:
        """Undo the commit, leaving its changes staged."""
        if not self.commit_hash:
            self.console.print("[yellow]No commit to undo[/yellow]")
            return False

        if not self.repo.head.commit.parents:
            self.console.print("[yellow]Cannot undo the initial commit[/yellow]")
            return False

        try:
            self.repo.git.reset("--soft", "HEAD~1")
        except GitCommandError as e:
            self.console.print(f"[red]Failed to undo commit: {escape(str(e))}[/red]")
            return False

        self.commit_hash = None
        return True
