"""Client for the location-area and pokemon endpoints of the Pokémon API."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .cache import Cache

LOCATION_AREA_URL = "https://pokeapi.co/api/v2/location-area/"
POKEMON_URL = "https://pokeapi.co/api/v2/pokemon/"
FIRST_PAGE_URL = LOCATION_AREA_URL + "?offset=0&limit=20"
CACHE_INTERVAL = 5.0


class ApiError(Exception):
    """Raised when data cannot be fetched or decoded."""


def _decode(data: Any) -> dict[str, Any]:
    if isinstance(data, (bytes, bytearray, str)):
        try:
            data = json.loads(data)
        except ValueError as exc:
            raise ApiError(f"Error unmarshalling data: {exc}") from exc
    return _obj(data, "document")


def _fail(what: str, expected: str, value: Any) -> ApiError:
    return ApiError(
        f"Error unmarshalling data: {what}: expected {expected}, "
        f"got {type(value).__name__}"
    )


def _obj(value: Any, what: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _fail(what, "object", value)
    return value


def _list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise _fail(what, "array", value)
    return value


def _int(value: Any, what: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise _fail(what, "integer", value)
    return value


def _str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _fail(what, "string", value)
    return value


def _optional_str(value: Any, what: str) -> str | None:
    return None if value is None else _str(value, what)


def _bool(value: Any, what: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise _fail(what, "boolean", value)
    return value


@dataclass(frozen=True)
class NamedResource:
    """A reference to another API resource by name and URL."""

    name: str = ""
    url: str = ""

    @classmethod
    def _parse(cls, value: Any, what: str) -> NamedResource:
        obj = _obj(value, what)
        return cls(
            name=_str(obj.get("name"), f"{what}.name"),
            url=_str(obj.get("url"), f"{what}.url"),
        )


@dataclass(frozen=True)
class LocationAreaPage:
    """One page of the paginated location-area listing."""

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[NamedResource] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> LocationAreaPage:
        obj = _decode(data)
        return cls(
            count=_int(obj.get("count"), "count"),
            next=_optional_str(obj.get("next"), "next"),
            previous=_optional_str(obj.get("previous"), "previous"),
            results=[
                NamedResource._parse(item, "results")
                for item in _list(obj.get("results"), "results")
            ],
        )


@dataclass(frozen=True)
class LocationArea:
    """A location area and the pokemon that can be encountered there."""

    id: int = 0
    name: str = ""
    game_index: int = 0
    location: NamedResource = field(default_factory=NamedResource)
    pokemon_encounters: list[NamedResource] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> LocationArea:
        obj = _decode(data)
        encounters = [
            NamedResource._parse(
                _obj(item, "pokemon_encounters").get("pokemon"),
                "pokemon_encounters.pokemon",
            )
            for item in _list(obj.get("pokemon_encounters"), "pokemon_encounters")
        ]
        return cls(
            id=_int(obj.get("id"), "id"),
            name=_str(obj.get("name"), "name"),
            game_index=_int(obj.get("game_index"), "game_index"),
            location=NamedResource._parse(obj.get("location"), "location"),
            pokemon_encounters=encounters,
        )


@dataclass(frozen=True)
class PokemonStat:
    """A base stat of a pokemon."""

    name: str = ""
    base_stat: int = 0
    effort: int = 0

    @classmethod
    def _parse(cls, value: Any) -> PokemonStat:
        obj = _obj(value, "stats")
        stat = NamedResource._parse(obj.get("stat"), "stats.stat")
        return cls(
            name=stat.name,
            base_stat=_int(obj.get("base_stat"), "stats.base_stat"),
            effort=_int(obj.get("effort"), "stats.effort"),
        )


@dataclass(frozen=True)
class Pokemon:
    """The parts of a pokemon record the pokedex uses."""

    id: int = 0
    name: str = ""
    base_experience: int = 0
    height: int = 0
    weight: int = 0
    is_default: bool = False
    order: int = 0
    stats: list[PokemonStat] = field(default_factory=list)
    types: list[NamedResource] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> Pokemon:
        obj = _decode(data)
        return cls(
            id=_int(obj.get("id"), "id"),
            name=_str(obj.get("name"), "name"),
            base_experience=_int(obj.get("base_experience"), "base_experience"),
            height=_int(obj.get("height"), "height"),
            weight=_int(obj.get("weight"), "weight"),
            is_default=_bool(obj.get("is_default"), "is_default"),
            order=_int(obj.get("order"), "order"),
            stats=[PokemonStat._parse(item) for item in _list(obj.get("stats"), "stats")],
            types=[
                NamedResource._parse(_obj(item, "types").get("type"), "types.type")
                for item in _list(obj.get("types"), "types")
            ],
        )


def _http_fetch(url: str) -> bytes:
    """Fetch ``url`` and return the response body, whatever the status."""
    try:
        with urllib.request.urlopen(url, timeout=30) as response:
            return response.read()
    except urllib.error.HTTPError as exc:
        with exc:
            return exc.read()


class PokeClient:
    """Fetches API resources, caching raw responses by URL."""

    def __init__(
        self,
        cache: Cache | None = None,
        fetch: Callable[[str], bytes] | None = None,
    ) -> None:
        self.cache = cache if cache is not None else Cache(CACHE_INTERVAL)
        self._fetch = fetch if fetch is not None else _http_fetch

    def get(self, url: str) -> bytes:
        """Return the body at ``url``, from the cache when present."""
        data = self.cache.get(url)
        if data is not None:
            return data
        try:
            data = self._fetch(url)
        except OSError as exc:
            raise ApiError(f"Network error: {exc}") from exc
        self.cache.add(url, data)
        return data

    def _get(self, url: str) -> bytes:
        try:
            return self.get(url)
        except ApiError as exc:
            raise ApiError(f"GET error: {exc}") from exc

    def get_location_area_page(self, url: str | None = None) -> LocationAreaPage:
        """Fetch a page of location areas; the first page when ``url`` is empty."""
        return LocationAreaPage.from_json(self._get(url or FIRST_PAGE_URL))

    def get_location_area(self, name: str) -> LocationArea:
        """Fetch a location area by name or id."""
        if not name:
            raise ApiError("No id or name specified")
        return LocationArea.from_json(self._get(LOCATION_AREA_URL + name))

    def get_pokemon(self, name: str) -> Pokemon:
        """Fetch a pokemon by name or id."""
        if not name:
            raise ApiError("No id or name specified")
        return Pokemon.from_json(self._get(POKEMON_URL + name))