"""Command for writing a commit message file."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .base import MessageCommand


class WriteMessageCommand(MessageCommand):
    """Command that writes message text to a file.

    The previous content of the file, if any, is kept so the write can be
    undone.

    Attributes:
        path (Path): File the message is written to
        text (str): Message text
    """

    def __init__(self, path: Path, text: str, console: Optional[Console] = None):
        super().__init__(console)
        self.path = Path(path)
        self.text = text
        self._existed = False
        self._previous: Optional[str] = None
        self._written = False

    def execute(self) -> bool:
        try:
            self._existed = self.path.exists()
            if self._existed:
                self._previous = self.path.read_text(encoding="utf-8")

            self.path.write_text(self.text, encoding="utf-8")
            self._written = True
        except OSError as e:
            self.console.print(
                f"[red]Failed to write commit message: {escape(str(e))}[/red]"
            )
            return False

        subject = self.text.strip().splitlines()[0] if self.text.strip() else ""
        for observer in self.observers:
            observer.on_message_written(self.path, subject)
        return True

    def undo(self) -> bool:
        """Restore the file to what it was before execute()."""
        if not self._written:
            self.console.print("[yellow]No message write to undo[/yellow]")
            return False

        try:
            if self._existed:
                self.path.write_text(self._previous or "", encoding="utf-8")
            else:
                self.path.unlink()
        except OSError as e:
            self.console.print(
                f"[red]Failed to undo message write: {escape(str(e))}[/red]"
            )
            return False

        self._written = False
        return True
