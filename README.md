# pokedex

An interactive command-line Pokedex. Browse location areas, explore them to
see which Pokemon live there, try to catch Pokemon, and inspect the ones you
have caught. Data comes from the public PokeAPI over HTTPS, using only the
Python standard library. Raw responses are cached in memory by URL for about
five seconds.

## Installation

```
pip install .
```

## Usage

Start the prompt:

```
pokedex
```

or, equivalently, `python -m pokedex.cli`.

You get a `Pokedex > ` prompt. Input is lower-cased and split on whitespace;
the first word is the command and the second, if any, its argument. Further
words are ignored. The commands are:

| Command             | What it does                                   |
|---------------------|------------------------------------------------|
| `exit`              | Exit the Pokedex                               |
| `help`              | Display a help message listing the commands    |
| `map`               | Display the next batch of location areas       |
| `mapb`              | Display the previous batch of location areas   |
| `explore <area>`    | Explore a specified location area              |
| `catch <pokemon>`   | Attempt to catch a pokemon                     |
| `inspect <pokemon>` | Inspect a pokemon in the pokedex               |
| `pokedex`           | Show the pokemons in your pokedex              |

Some details of how they behave:

- `map` starts at the first page of 20 location areas and moves forward one
  page each time. After the last page it starts again from the first.
- `mapb` says `You're on the first page` when there is no previous page.
- `catch` rolls a random number below 700; the Pokemon is caught when the
  roll is higher than its base experience, so stronger Pokemon are harder to
  catch.
- `inspect` shows name, height, weight, base stats and types of a caught
  Pokemon, or `you have not caught that pokemon`.
- Unknown commands and failing commands print an error message and the
  prompt continues.

Closing standard input (Ctrl-D) leaves the Pokedex with the message
`Closing the Pokedex... EOF reached. Goodbye!`.

## Using it as a library

- `pokedex.api.PokeClient(cache=None, fetch=None)` fetches and parses
  resources: `get_location_area_page(url)`, `get_location_area(name)` and
  `get_pokemon(name)` return `LocationAreaPage`, `LocationArea` and `Pokemon`
  dataclasses; `get(url)` returns the raw body. Pass your own `fetch`
  callable (URL in, bytes out) to avoid the network. Failures raise
  `pokedex.api.ApiError`.
- `pokedex.cache.Cache(interval)` is a thread-safe key/value store whose
  entries are removed by a background thread once older than `interval`
  seconds. Stop the thread with `close()` or use the cache as a context
  manager.
- `pokedex.commands` holds the `State` of a session, the command functions,
  `CommandRegistry` and `default_registry()`. `State` accepts an `out`
  stream, an `rng` (`random.Random`) and a `client`.
- `pokedex.cli.run_repl(state, lines)` runs the prompt over any iterable of
  input lines. It always ends by raising `SystemExit` with `state.code`,
  either from the `exit` command or when the lines run out.
  `pokedex.cli.clean_input(text)` is the lower-case-and-split step.

## What it does not do

The pokedex lives only for the session: caught Pokemon are not saved
anywhere and are gone when the program exits. There is no offline data; every
lookup needs network access to the PokeAPI.

## Running the tests

```
pip install ".[test]"
pytest
```