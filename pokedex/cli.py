"""The interactive pokedex prompt."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence

from .api import ApiError
from .commands import CommandError, State, command_exit

PROMPT = "Pokedex > "


def clean_input(text: str) -> list[str]:
    """Lower-case ``text`` and split it into whitespace-separated words."""
    return text.lower().split()


def run_repl(state: State, lines: Iterable[str]) -> None:
    """Read commands from ``lines`` until they run out, then exit.

    The session always ends by raising :class:`SystemExit`, either from the
    exit command or once the input is exhausted.
    """
    source = iter(lines)
    while True:
        print(PROMPT, end="", file=state.out, flush=True)
        try:
            line = next(source)
        except StopIteration:
            break
        except OSError:
            state.code = 1
            break
        words = clean_input(line)
        if not words:
            continue
        try:
            state.registry.process(words, state)
        except (CommandError, ApiError) as exc:
            print(exc, file=state.out)

    state.arg = "EOF reached. Goodbye!"
    command_exit(state)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the pokedex prompt on standard input."""
    del argv  # the prompt takes no command-line arguments
    run_repl(State(), sys.stdin)


if __name__ == "__main__":
    main()