"""Shared base for the commands that act on a commit message file."""

from abc import ABC, abstractmethod
from typing import List, Optional

from rich.console import Console

from ..observers import MessageObserver


class MessageCommand(ABC):
    """A reversible step in getting a message from the editor into git.

    ``execute`` writes or commits the message and tells the observers what
    happened; ``undo`` puts the file or the branch back the way it was. Both
    print their own errors and return False instead of raising, so the caller
    only keeps successful commands in its undo history.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.observers: List[MessageObserver] = []

    def add_observer(self, observer: MessageObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: MessageObserver) -> None:
        self.observers.remove(observer)

    @abstractmethod
    def execute(self) -> bool:
        """Write or commit the message; False if it did not happen."""

    @abstractmethod
    def undo(self) -> bool:
        """Reverse a successful ``execute``; False if there is nothing to reverse."""
