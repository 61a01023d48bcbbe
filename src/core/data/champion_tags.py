"""Champion archetype tag catalog (Data Dragon ``tags``).

The bundled JSON pins one Data Dragon version so scoring rules do not drift
with a runtime network fetch. Tags are a heuristic input only; they are not
authoritative game data.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Callable, Mapping
from pathlib import Path

DEFAULT_DATA_FILE = Path(__file__).resolve().with_name("champion_tags.json")

TAG_ASSASSIN = "Assassin"
TAG_FIGHTER = "Fighter"
TAG_MAGE = "Mage"
TAG_MARKSMAN = "Marksman"
TAG_SUPPORT = "Support"
TAG_TANK = "Tank"

# Callable shape accepted by the scoring engine; swap it out in tests
TagLookup = Callable[[str | None], tuple[str, ...]]


def _normalize_name(name: str) -> str:
    return "".join(ch for ch in name if ch.isalnum()).lower()


class ChampionTagCatalog:
    """Resolve champion names to archetype tags.

    The table is loaded once per data file and never mutated afterwards.
    """

    _lock = threading.Lock()
    _cache: dict[Path, tuple[str, Mapping[str, tuple[str, ...]]]] = {}

    def __init__(self, data_file: Path | None = None) -> None:
        self._data_file = data_file or DEFAULT_DATA_FILE

    def _load(self) -> tuple[str, Mapping[str, tuple[str, ...]]]:
        cached = self.__class__._cache.get(self._data_file)
        if cached is not None:
            return cached
        with self._lock:
            cached = self.__class__._cache.get(self._data_file)
            if cached is not None:
                return cached
            if not self._data_file.exists():
                raise FileNotFoundError(f"Champion tag data file missing: {self._data_file}")
            payload = json.loads(self._data_file.read_text("utf-8"))
            table: dict[str, tuple[str, ...]] = {}
            for name, tags in (payload.get("tags") or {}).items():
                if not isinstance(tags, list):
                    continue
                table[_normalize_name(str(name))] = tuple(str(t) for t in tags)
            entry = (str(payload.get("version", "unknown")), table)
            self.__class__._cache[self._data_file] = entry
            return entry

    @property
    def version(self) -> str:
        return self._load()[0]

    def get_tags(self, champion_name: str | None) -> tuple[str, ...]:
        """Tags for a champion; unknown or missing names yield no tags."""
        if not champion_name:
            return ()
        return self._load()[1].get(_normalize_name(champion_name), ())

    def has_tag(self, champion_name: str | None, tag: str) -> bool:
        return tag in self.get_tags(champion_name)

    def __call__(self, champion_name: str | None) -> tuple[str, ...]:
        return self.get_tags(champion_name)

    @classmethod
    def _clear_cache_for_tests(cls) -> None:
        with cls._lock:
            cls._cache = {}


default_catalog = ChampionTagCatalog()


def get_champion_tags(champion_name: str | None) -> tuple[str, ...]:
    """Module-level lookup backed by the bundled catalog."""
    return default_catalog.get_tags(champion_name)
