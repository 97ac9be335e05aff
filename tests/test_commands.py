import io
import json

import pytest

from pokedex.api import FIRST_PAGE_URL, LOCATION_AREA_URL, POKEMON_URL, PokeClient
from pokedex.cache import Cache
from pokedex.commands import (
    CommandError,
    CommandRegistry,
    State,
    command_catch,
    command_exit,
    command_explore,
    command_help,
    command_inspect,
    command_map,
    command_mapb,
    command_pokedex,
    default_registry,
)

PAGE2_URL = LOCATION_AREA_URL + "?offset=20&limit=20"

FIRST_PAGE = {
    "count": 2,
    "next": PAGE2_URL,
    "previous": None,
    "results": [
        {"name": "canalave-city-area", "url": LOCATION_AREA_URL + "1/"},
        {"name": "eterna-city-area", "url": LOCATION_AREA_URL + "2/"},
    ],
}
SECOND_PAGE = {
    "count": 2,
    "next": None,
    "previous": FIRST_PAGE_URL,
    "results": [{"name": "mt-coronet-1f", "url": LOCATION_AREA_URL + "21/"}],
}
AREA = {
    "id": 1,
    "name": "canalave-city-area",
    "pokemon_encounters": [
        {"pokemon": {"name": "tentacool", "url": ""}},
        {"pokemon": {"name": "staryu", "url": ""}},
    ],
}
PIKACHU = {
    "name": "pikachu",
    "base_experience": 112,
    "height": 4,
    "weight": 60,
    "stats": [{"base_stat": 35, "effort": 0, "stat": {"name": "hp", "url": ""}}],
    "types": [{"slot": 1, "type": {"name": "electric", "url": ""}}],
}

RESPONSES = {
    FIRST_PAGE_URL: FIRST_PAGE,
    PAGE2_URL: SECOND_PAGE,
    LOCATION_AREA_URL + "canalave-city-area": AREA,
    POKEMON_URL + "pikachu": PIKACHU,
}


class FixedRoll:
    def __init__(self, value):
        self.value = value
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        return self.value


def _fetch(url):
    try:
        return json.dumps(RESPONSES[url]).encode()
    except KeyError:
        raise OSError(f"no route to {url}") from None


@pytest.fixture
def state():
    cache = Cache(60)
    st = State(client=PokeClient(cache=cache, fetch=_fetch), out=io.StringIO())
    yield st
    cache.close()


def test_register_duplicate_raises():
    registry = CommandRegistry()
    registry.register("help", "first", command_help)
    with pytest.raises(CommandError, match="Command already exists"):
        registry.register("help", "second", command_help)
    assert [c.description for c in registry] == ["first"]


def test_registry_iterates_in_registration_order():
    registry = CommandRegistry()
    registry.register("b", "bee", command_help)
    registry.register("a", "ay", command_help)
    assert [c.name for c in registry] == ["b", "a"]


def test_default_registry_holds_all_commands():
    names = [c.name for c in default_registry()]
    assert names == [
        "exit", "help", "map", "mapb", "explore", "catch", "inspect", "pokedex",
    ]


def test_process_unknown_command(state):
    with pytest.raises(CommandError, match="unknown command: foo"):
        state.registry.process(["foo"], state)


def test_process_passes_and_clears_argument(state):
    seen = []
    registry = CommandRegistry()
    registry.register("echo", "", lambda st: seen.append(st.arg))
    registry.process(["echo", "pikachu", "extra"], state)
    assert seen == ["pikachu"]
    assert state.arg == ""


def test_process_wraps_callback_errors(state):
    with pytest.raises(CommandError) as excinfo:
        state.registry.process(["explore"], state)
    assert str(excinfo.value) == (
        "error executing command 'explore': A location name to explore is required"
    )
    assert state.arg == ""


def test_process_exit_uses_argument(state):
    with pytest.raises(SystemExit) as excinfo:
        state.registry.process(["exit", "later"], state)
    assert excinfo.value.code == 0
    assert state.out.getvalue() == "Closing the Pokedex... later\n"
    assert state.arg == ""


def test_exit_default_message_and_code(state):
    state.code = 3
    with pytest.raises(SystemExit) as excinfo:
        command_exit(state)
    assert excinfo.value.code == 3
    assert state.out.getvalue() == "Closing the Pokedex... Goodbye!\n"


def test_help_lists_commands(state):
    command_help(state)
    text = state.out.getvalue()
    assert text.startswith("Welcome to the Pokedex!\nUsage:\n\n")
    assert "exit: Exit  the Pokedex\n" in text
    assert len(text.splitlines()) == 3 + len(state.registry)


def test_map_pages_forward_and_back(state):
    command_map(state)
    assert state.out.getvalue() == "canalave-city-area\neterna-city-area\n"
    assert state.next_page == PAGE2_URL
    assert state.prev_page == ""

    command_map(state)
    assert state.out.getvalue().endswith("mt-coronet-1f\n")
    assert state.next_page == ""
    assert state.prev_page == FIRST_PAGE_URL

    command_mapb(state)
    assert state.out.getvalue().endswith("canalave-city-area\neterna-city-area\n")
    assert state.next_page == PAGE2_URL
    assert state.prev_page == ""


def test_mapb_on_first_page(state):
    command_mapb(state)
    assert state.out.getvalue() == "You're on the first page\n"


def test_map_network_error(state):
    state.next_page = LOCATION_AREA_URL + "missing"
    with pytest.raises(CommandError) as excinfo:
        command_map(state)
    assert str(excinfo.value).startswith("Map command error: GET error: Network error")


def test_explore_lists_pokemon(state):
    state.arg = "canalave-city-area"
    command_explore(state)
    assert state.out.getvalue() == (
        "Exploring canalave-city-area...\nFound pokemon: \n - tentacool\n - staryu\n"
    )


def test_explore_requires_argument(state):
    with pytest.raises(CommandError, match="A location name to explore is required"):
        command_explore(state)


def test_explore_network_error(state):
    state.arg = "nowhere"
    with pytest.raises(CommandError) as excinfo:
        command_explore(state)
    assert str(excinfo.value).startswith("Explore command error: GET error")


def test_catch_success_adds_to_pokedex(state):
    state.rng = FixedRoll(699)
    state.arg = "pikachu"
    command_catch(state)
    assert state.rng.calls == [700]
    assert list(state.pokedex) == ["pikachu"]
    assert state.out.getvalue() == (
        "Throwing a Pokeball at pikachu...\npikachu was caught!\n"
        "You may now inspect it with the inspect command.\n"
    )


def test_catch_roll_equal_to_experience_escapes(state):
    state.rng = FixedRoll(112)
    state.arg = "pikachu"
    command_catch(state)
    assert state.pokedex == {}
    assert state.out.getvalue().endswith("pikachu escaped!\n")


def test_catch_requires_argument(state):
    with pytest.raises(CommandError, match="catch is required"):
        command_catch(state)


def test_catch_unknown_pokemon(state):
    state.arg = "missingno"
    with pytest.raises(CommandError) as excinfo:
        command_catch(state)
    assert str(excinfo.value).startswith("Catch command error:")


def test_inspect_not_caught(state):
    state.arg = "pikachu"
    command_inspect(state)
    assert state.out.getvalue() == "you have not caught that pokemon\n"


def test_inspect_caught_pokemon(state):
    state.rng = FixedRoll(699)
    state.arg = "pikachu"
    command_catch(state)
    state.out = io.StringIO()
    state.arg = "pikachu"
    command_inspect(state)
    assert state.out.getvalue() == (
        "Name: pikachu\nHeight: 4\nWeight: 60\nStats: \n -hp: 35\n"
        "Types: \n - electric\n"
    )


def test_inspect_requires_argument(state):
    with pytest.raises(CommandError, match="inspect is required"):
        command_inspect(state)


def test_pokedex_lists_caught(state):
    command_pokedex(state)
    assert state.out.getvalue() == "Your pokedex:\n"
    state.rng = FixedRoll(699)
    state.arg = "pikachu"
    command_catch(state)
    state.out = io.StringIO()
    command_pokedex(state)
    assert state.out.getvalue() == "Your pokedex:\n - pikachu\n"