#!/usr/bin/env python3
import sys
from pathlib import Path
from typing import Optional

import click
import pyperclip
from rich.console import Console
from rich.markup import escape

from . import __version__
from .commit_message import render, validate
from .config import Config
from .core import ChangeAnalyzer, MessageCommitter, read_message_file
from .editor import MessageEditor
from .errors import ScriptureError
from .observers import ConsoleLogObserver, FileLogObserver

console = Console()

COMMIT_INSTRUCTIONS = """
To utilise this commit message:

1. Review the generated {name} file
2. Complete any sections marked with \\[Required]
3. Update any sections marked with \\[Optional]
4. Use it directly with git commit:
   git commit -F {name}

Or copy specific sections into your commit:
   cat {name} | git commit -F -
"""


def print_config(config: Config, config_path: Path) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {escape(str(config_path))}[/dim]", soft_wrap=True)
        source = "config"
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")
        source = "default"

    console.print(f"\n{'Setting':<22} {'Value':<30} {'Source':<10}")
    console.print("-" * 64)

    def print_setting(name: str, value: object) -> None:
        console.print(f"{name:<22} {escape(str(value)):<30} {source:<10}", soft_wrap=True)

    print_setting("default_verb", config.default_verb)
    print_setting("output_file", config.output_file)
    print_setting("always_log", config.always_log)
    print_setting("log_file", config.log_file or "None")
    print_setting("subject_max_length", config.rules.subject_max_length)
    print_setting("body_line_max_length", config.rules.body_line_max_length)
    print_setting("standard_verbs", ", ".join(config.verb_labels))
    print_setting("sections", ", ".join(section.name for section in config.sections))

    console.print(f"\nTo modify these settings, edit {escape(str(config_path))}", soft_wrap=True)


def report_violations(violations) -> None:
    console.print("[red]Commit message validation failed:[/red]")
    for violation in violations:
        console.print(f"[red]- {escape(str(violation))}[/red]", soft_wrap=True)


@click.command()
@click.option(
    "-m",
    "--message",
    "message_string",
    help="Verify if a commit message follows standards",
)
@click.option(
    "-f",
    "--file",
    "message_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Verify if a commit message file follows standards",
)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File to write the message to (overrides config setting)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (defaults to the user configuration directory)",
)
@click.option("--no-edit", is_flag=True, help="Write the generated message without editing it")
@click.option(
    "--commit",
    "do_commit",
    is_flag=True,
    help="Commit the staged changes with the message once it is valid",
)
@click.option("--no-verify", is_flag=True, help="Skip git hooks when committing")
@click.option(
    "--config-list", is_flag=True, help="Display current configuration settings"
)
@click.option(
    "--config-dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log message operations (overrides config setting)",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
def main(
    message_string: Optional[str],
    message_file: Optional[Path],
    path: Path,
    output: Optional[Path],
    config_file: Optional[Path],
    no_edit: bool,
    do_commit: bool,
    no_verify: bool,
    config_list: bool,
    config_dir: bool,
    log_file: Optional[Path],
    version: bool,
):
    """
    Write standardized commit messages from your staged changes.

    Without options, scripture inspects the staged diff, proposes a subject
    and templated body, lets you refine it and writes it to commit.md.
    Use -m or -f to check an existing message instead.
    """
    try:
        if version:
            console.print(f"scripture {__version__}")
            return

        config_path = config_file or Config.default_path()

        if config_dir:
            if not config_path.exists():
                Config().save(config_path)
                console.print(
                    "[yellow]Created new config file with default values[/yellow]"
                )

            console.print(
                f"[green]Config file location:[/green] {escape(str(config_path))}",
                soft_wrap=True,
            )
            try:
                pyperclip.copy(str(config_path))
                console.print("[green]Path copied to clipboard![/green]")
            except pyperclip.PyperclipException as e:
                console.print(f"[yellow]Could not copy to clipboard: {escape(str(e))}[/yellow]")
            return

        config = Config.load(config_path)

        if config_list:
            print_config(config, config_path)
            return

        if log_file is not None:
            config = config.model_copy(update={"log_file": str(log_file), "always_log": False})

        committer = MessageCommitter(str(path), console)
        log_file_path = config.get_log_file()
        if log_file_path:
            committer.add_observer(FileLogObserver(str(log_file_path)))

        if message_string is not None or message_file is not None:
            text = message_string if message_string is not None else read_message_file(message_file)
            violations = validate(text, config)
            committer.report_validation(violations)
            if violations:
                report_violations(violations)
                sys.exit(1)
            console.print("[green]Commit message is valid[/green]")
            return

        committer.add_observer(ConsoleLogObserver(console))

        analyzer = ChangeAnalyzer(str(path), config)
        diff = analyzer.get_staged_diff()
        if not diff.strip():
            console.print(
                "[red]No staged changes found. Please stage changes with 'git add' first.[/red]"
            )
            sys.exit(1)

        draft = analyzer.generator.generate(diff)
        message = draft.message
        if not no_edit:
            editor = MessageEditor(analyzer.generator, draft.classification, console)
            message = editor.run()
            if message is None:
                console.print("[yellow]No commit message written[/yellow]")
                return

        text = render(message)
        output_path = output or (path / config.output_file)
        if not committer.write_message(output_path, text):
            sys.exit(1)

        console.print("\n=== Generated Commit Message ===\n")
        console.print(text, markup=False, highlight=False, soft_wrap=True)
        console.print("===========================")

        violations = validate(text, config, breaking=draft.classification.breaking)
        committer.report_validation(violations)

        if do_commit:
            if violations:
                console.print("[red]Not committing until the message is valid[/red]")
                sys.exit(1)
            if not committer.commit(output_path, no_verify=no_verify):
                sys.exit(1)
        else:
            console.print(COMMIT_INSTRUCTIONS.format(name=escape(output_path.name)))
            if violations:
                sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
    except ScriptureError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise click.Abort()


if __name__ == "__main__":
    main()
