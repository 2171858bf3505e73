"""Message file operations using the Command Pattern.

Example:
    ```python
    from scripture.commands import WriteMessageCommand
    from scripture.observers import FileLogObserver

    command = WriteMessageCommand(Path("commit.md"), text)
    command.add_observer(FileLogObserver("scripture.log"))
    success = command.execute()

    # Restore the previous file content if needed
    success = command.undo()
    ```
"""

from .base import MessageCommand
from .commit import CommitCommand
from .write import WriteMessageCommand

__all__ = [
    "MessageCommand",
    "CommitCommand",
    "WriteMessageCommand",
]
