"""The pokedex REPL commands, the session state they share, and their registry."""

from __future__ import annotations

import random
import sys
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TextIO

from .api import ApiError, PokeClient, Pokemon

CATCH_ROLL_LIMIT = 700


class CommandError(Exception):
    """Raised when a command is unknown, badly invoked or fails."""


@dataclass(frozen=True)
class Command:
    """A named REPL command and the function that runs it."""

    name: str
    description: str
    callback: Callable[[State], None]


class CommandRegistry:
    """Commands by name, kept in the order they were registered."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self, name: str, description: str, callback: Callable[[State], None]
    ) -> Command:
        """Add a command; raise :class:`CommandError` if the name is taken."""
        if name in self._commands:
            raise CommandError("Command already exists")
        command = Command(name, description, callback)
        self._commands[name] = command
        return command

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands.values()))

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def process(self, words: Sequence[str], state: State) -> None:
        """Run the command named by ``words[0]`` with ``words[1]`` as argument.

        The state's argument is cleared again once the command has run.
        """
        if not words:
            raise CommandError("no command given")
        name = words[0]
        try:
            if len(words) > 1:
                state.arg = words[1]
            command = self._commands.get(name)
            if command is None:
                raise CommandError(f"unknown command: {name}")
            try:
                command.callback(state)
            except (CommandError, ApiError) as exc:
                raise CommandError(
                    f"error executing command '{name}': {exc}"
                ) from exc
        finally:
            state.arg = ""


@dataclass
class State:
    """Everything a REPL session carries from one command to the next."""

    pokedex: dict[str, Pokemon] = field(default_factory=dict)
    code: int = 0
    arg: str = ""
    next_page: str = ""
    prev_page: str = ""
    client: PokeClient | None = None
    registry: CommandRegistry = field(default_factory=lambda: default_registry())
    out: TextIO = field(default_factory=lambda: sys.stdout)
    rng: random.Random = field(default_factory=random.Random)

    @property
    def api(self) -> PokeClient:
        """The API client, created on first use."""
        if self.client is None:
            self.client = PokeClient()
        return self.client

    def say(self, text: str = "", end: str = "\n") -> None:
        print(text, end=end, file=self.out)


def command_exit(state: State) -> None:
    """Say goodbye and leave with the state's exit code."""
    message = state.arg or "Goodbye!"
    state.arg = message
    state.say(f"Closing the Pokedex... {message}")
    state.out.flush()
    raise SystemExit(state.code)


def command_help(state: State) -> None:
    """List every registered command with its description."""
    state.say("Welcome to the Pokedex!\nUsage:\n", end="\n")
    for command in state.registry:
        state.say(f"{command.name}: {command.description}")


def _show_page(state: State, url: str) -> None:
    try:
        page = state.api.get_location_area_page(url)
    except ApiError as exc:
        raise CommandError(f"Map command error: {exc}") from exc
    state.next_page = page.next or ""
    state.prev_page = page.previous or ""
    for result in page.results:
        state.say(result.name)


def command_map(state: State) -> None:
    """Show the next page of location areas."""
    _show_page(state, state.next_page)


def command_mapb(state: State) -> None:
    """Show the previous page of location areas."""
    if not state.prev_page:
        state.say("You're on the first page")
        return
    _show_page(state, state.prev_page)


def command_explore(state: State) -> None:
    """List the pokemon that can be met in the named location area."""
    if not state.arg:
        raise CommandError("A location name to explore is required")
    state.say(f"Exploring {state.arg}...")
    try:
        area = state.api.get_location_area(state.arg)
    except ApiError as exc:
        raise CommandError(f"Explore command error: {exc}") from exc
    state.say("Found pokemon: ")
    for pokemon in area.pokemon_encounters:
        state.say(f" - {pokemon.name}")


def command_catch(state: State) -> None:
    """Throw a pokeball; the catch succeeds more often for weaker pokemon."""
    if not state.arg:
        raise CommandError("The name of the pokemon you want to catch is required")
    try:
        pokemon = state.api.get_pokemon(state.arg)
    except ApiError as exc:
        raise CommandError(f"Catch command error: {exc}") from exc
    state.say(f"Throwing a Pokeball at {pokemon.name}...")
    skill = state.rng.randrange(CATCH_ROLL_LIMIT)
    if skill > pokemon.base_experience:
        state.say(f"{pokemon.name} was caught!")
        state.pokedex[pokemon.name] = pokemon
        state.say("You may now inspect it with the inspect command.")
    else:
        state.say(f"{pokemon.name} escaped!")


def command_inspect(state: State) -> None:
    """Describe a pokemon that has been caught."""
    if not state.arg:
        raise CommandError("The name of the pokemon you want to inspect is required")
    pokemon = state.pokedex.get(state.arg)
    if pokemon is None:
        state.say("you have not caught that pokemon")
        return
    state.say(f"Name: {pokemon.name}")
    state.say(f"Height: {pokemon.height}")
    state.say(f"Weight: {pokemon.weight}")
    state.say("Stats: ")
    for stat in pokemon.stats:
        state.say(f" -{stat.name}: {stat.base_stat}")
    state.say("Types: ")
    for kind in pokemon.types:
        state.say(f" - {kind.name}")


def command_pokedex(state: State) -> None:
    """List the pokemon caught so far."""
    state.say("Your pokedex:")
    for pokemon in state.pokedex.values():
        state.say(f" - {pokemon.name}")


def default_registry() -> CommandRegistry:
    """A registry holding all the pokedex commands."""
    registry = CommandRegistry()
    registry.register("exit", "Exit  the Pokedex", command_exit)
    registry.register("help", "Display a help message", command_help)
    registry.register("map", "Display the next batch of location areas", command_map)
    registry.register(
        "mapb", "Display the previous batch of location areas", command_mapb
    )
    registry.register("explore", "Explore a specified location area", command_explore)
    registry.register("catch", "Attempt to catch a pokemon", command_catch)
    registry.register("inspect", "Inspect a pokemon in the pokedex", command_inspect)
    registry.register("pokedex", "Show the pokemons in your pokedex", command_pokedex)
    return registry