"""Interactive refinement of a drafted commit message."""
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from .commit_message import CommitMessageGenerator, Draft, parse
from .errors import ScriptureError
from .models import ClassificationResult, CommitMessage, MessageOverrides

ACTIONS = {
    "a": "accept",
    "s": "change summary",
    "v": "change verb",
    "e": "edit a section",
    "o": "open the whole message in $EDITOR",
    "q": "quit without writing",
}


class MessageEditor:
    """Loop that shows the draft, its violations, and applies the author's edits.

    Every edit is recorded as a ``MessageOverrides`` value and the draft is
    composed and validated again from scratch, so the last edit always wins.
    """

    def __init__(
        self,
        generator: CommitMessageGenerator,
        classification: ClassificationResult,
        console: Optional[Console] = None,
        overrides: Optional[MessageOverrides] = None,
    ):
        self.generator = generator
        self.config = generator.config
        self.classification = classification
        self.console = console or Console()
        self.overrides = overrides or MessageOverrides()

    def show(self, draft: Draft) -> None:
        title = f"Commit message ({escape(draft.classification.verb)})"
        if draft.classification.breaking:
            title += " [red]breaking[/red]"
        self.console.print(Panel(Text(draft.text.rstrip("\n")), title=title))

        if not draft.violations:
            self.console.print("[green]No formatting problems found[/green]")
            return

        table = Table(title="Formatting problems", show_lines=False)
        table.add_column("Line", justify="right")
        table.add_column("Rule")
        table.add_column("Problem")
        for violation in draft.violations:
            line = str(violation.line) if violation.line is not None else "-"
            table.add_row(line, violation.rule, escape(violation.message))
        self.console.print(table)

    def run(self) -> Optional[CommitMessage]:
        """Edit until the author accepts (returns the message) or quits (None)."""
        legend = "  ".join(f"[bold]{key}[/bold] {label}" for key, label in ACTIONS.items())

        while True:
            draft = self.generator.draft(self.classification, self.overrides)
            self.show(draft)
            self.console.print(legend)

            action = Prompt.ask(
                "Action", choices=list(ACTIONS), default="a", console=self.console
            )

            if action == "a":
                return draft.message
            if action == "q":
                return None
            if action == "s":
                self._edit_summary()
            elif action == "v":
                self._choose_verb(draft)
            elif action == "e":
                self._edit_section(draft)
            elif action == "o":
                message = self._edit_whole(draft)
                if message is not None:
                    return message

    def _update(self, **changes) -> None:
        self.overrides = self.overrides.model_copy(update=changes)

    def _edit_summary(self) -> None:
        summary = Prompt.ask("Summary", console=self.console)
        self._update(summary=summary, subject=None)

    def _choose_verb(self, draft: Draft) -> None:
        current = self.overrides.verb or draft.classification.verb
        verb = Prompt.ask(
            "Verb",
            choices=self.config.verb_labels,
            default=current,
            console=self.console,
        )
        self._update(verb=verb, subject=None)

    def _edit_section(self, draft: Draft) -> None:
        names = [section.name for section in self.config.sections]
        name = Prompt.ask("Section", choices=names, default=names[0], console=self.console)

        template = next(section for section in self.config.sections if section.name == name)
        present = draft.message.section(name)
        current = present.body if present is not None else template.placeholder

        edited = click.edit(current, extension=".md")
        if edited is None:
            self.console.print("[yellow]Section unchanged[/yellow]")
            return

        if template.include_when == "breaking" and not self.classification.breaking:
            self.console.print(
                f"[yellow]{escape(template.heading)} is only included for breaking changes[/yellow]"
            )
        sections = dict(self.overrides.sections)
        sections[name] = edited
        self._update(sections=sections)

    def _edit_whole(self, draft: Draft) -> Optional[CommitMessage]:
        edited = click.edit(draft.text, extension=".md")
        if edited is None:
            self.console.print("[yellow]Message unchanged[/yellow]")
            return None

        try:
            message = parse(edited, self.config, strict=False)
            violations = self.generator.validator.violations(
                edited, breaking=self.classification.breaking
            )
        except ScriptureError as e:
            self.console.print(f"[red]Error: {escape(str(e))}[/red]")
            return None

        self.show(Draft(self.classification, message, violations))
        if Confirm.ask("Use this message?", default=True, console=self.console):
            return message
        return None
