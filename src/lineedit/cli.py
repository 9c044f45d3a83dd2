"""CLI entry point for lineedit. Uses Click for argument parsing."""

from __future__ import annotations

import logging

import click

from lineedit.config import load_config
from lineedit.editor import Completion, LineEditor

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


class WordCompleter:
    """Completes the word before the cursor from the words entered so far."""

    def __init__(self) -> None:
        self.words: set[str] = set()

    def learn(self, line: str) -> None:
        self.words.update(line.split())

    def __call__(self, text: str, cursor: int) -> Completion | None:
        before = text[:cursor]
        token = before.split()[-1] if before and not before[-1].isspace() else ""
        if not token:
            return None

        matches = sorted(w for w in self.words if w.startswith(token) and w != token)
        if not matches:
            return None
        return Completion(token, [w[len(token) :] for w in matches])


def repl(editor: LineEditor, prompt: str) -> int:
    """Read and echo lines until end-of-input or ``exit``; return the line count."""
    completer = WordCompleter()
    editor.autocomplete = completer

    count = 0
    while True:
        line = editor.edit(prompt)
        if line.strip() == EXIT_COMMAND:
            break
        if line:
            count += 1
            completer.learn(line)
            click.echo(line)
        if editor.eof:
            break
    logger.debug("Read %d lines", count)
    return count


@click.command()
@click.option("--name", default="lineedit", show_default=True, help="History name")
@click.option(
    "--history-size",
    type=click.IntRange(min=1),
    default=None,
    help="Number of history entries to keep [default: from config, else 10]",
)
@click.option("--prompt", default="> ", show_default=True, help="Prompt to show")
@click.option("--no-history", is_flag=True, help="Keep history in memory only")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    show_default=True,
)
def main(name, history_size, prompt, no_history, log_level):
    """Interactive line editor demo: echoes each line you enter."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = load_config()
    editor = LineEditor(
        None if no_history else name,
        history_size,
        config=config,
    )
    repl(editor, prompt)


if __name__ == "__main__":
    main()
