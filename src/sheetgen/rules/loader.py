"""Rules loader: rule-table files and typed rule dataclasses.

A ruleset is four independent tables stored side by side in one directory::

    <rules_root>/stats.yaml         {"stats": ["Might", "Grace", ...]}
    <rules_root>/natures.yaml       {key: {name, hp, abilities}}
    <rules_root>/backgrounds.yaml   {key: {name, statMods, hpBonus, shreds, talent}}
    <rules_root>/talents.yaml       {key: {effect}}

Each table may be written as ``.yaml``, ``.yml`` or ``.json``; the first
file found wins.  :func:`parse_rules` accepts the same shapes already
parsed into Python objects.

Design notes:
- The returned :class:`~sheetgen.rules.types.RulesDataset` is immutable.  Its
  tables are read-only mapping proxies, so one dataset is safe to share
  between generation calls for the lifetime of the process.
- Ability entries are normalized here.  A bare string becomes
  ``Ability(name, "")``.
- Background keys are accepted in camelCase as the rule files write them (``statMods``,
  ``hpBonus``) and in snake_case.
- Dice expressions are stored unparsed.  A malformed expression is not a
  load error; it simply rolls no bonus.
- :func:`load_rules` raises :exc:`FileNotFoundError` for a missing
  directory or table and :exc:`RulesError` on schema violations.  Neither
  is caught here.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from sheetgen.rules.types import Ability, Background, Nature, RulesDataset, Talent

logger = logging.getLogger(__name__)

#: Table names, in load order.
TABLES: tuple[str, ...] = ("stats", "natures", "backgrounds", "talents")

#: File suffixes tried for each table, in priority order.
TABLE_SUFFIXES: tuple[str, ...] = (".yaml", ".yml", ".json")


class RulesError(ValueError):
    """Raised when a rule table does not match the expected schema."""


# ---------------------------------------------------------------------------
# Public loaders
# ---------------------------------------------------------------------------


def load_rules(rules_root: Path) -> RulesDataset:
    """Load and normalize all four rule tables from ``rules_root``.

    Args:
        rules_root: Directory holding the ``stats``, ``natures``,
                    ``backgrounds`` and ``talents`` tables.

    Returns:
        A fully-constructed, immutable :class:`RulesDataset`.

    Raises:
        FileNotFoundError: If ``rules_root`` or any table file is missing.
        RulesError:        On schema validation failure.
    """
    rules_root = Path(rules_root)
    if not rules_root.is_dir():
        raise FileNotFoundError(f"Rules directory not found: {rules_root}")

    payload = {table: _read_table(rules_root, table) for table in TABLES}
    rules = parse_rules(payload)
    logger.info(
        "Loaded ruleset from %s: %d stats, %d natures, %d backgrounds, %d talents",
        rules_root,
        len(rules.stats),
        len(rules.natures),
        len(rules.backgrounds),
        len(rules.talents),
    )
    return rules


def parse_rules(payload: Mapping[str, Any]) -> RulesDataset:
    """Build a :class:`RulesDataset` from already-parsed rule tables.

    Args:
        payload: Mapping with ``stats``, ``natures``, ``backgrounds`` and
                 ``talents`` entries.  ``stats`` may be the list of names
                 itself or a ``{"stats": [...]}`` mapping.  A missing
                 ``talents`` entry is treated as an empty table.

    Raises:
        RulesError: On schema validation failure.
    """
    if not isinstance(payload, Mapping):
        raise RulesError("Rules payload must be a mapping of table name to table.")

    stats = _parse_stats(payload.get("stats"))
    natures = _parse_natures(payload.get("natures"))
    backgrounds = _parse_backgrounds(payload.get("backgrounds"), stats)
    talents = _parse_talents(payload.get("talents", {}))

    return RulesDataset(
        stats=stats,
        natures=MappingProxyType(natures),
        backgrounds=MappingProxyType(backgrounds),
        talents=MappingProxyType(talents),
    )


def normalize_ability(entry: Any) -> Ability:
    """Normalize one raw ability entry.

    Both ``"Iron Will"`` and ``{"name": "Iron Will", "effect": ""}`` yield
    ``Ability(name="Iron Will", effect="")``.

    Raises:
        RulesError: If the entry is neither a string nor a mapping with a
                    string ``name``.
    """
    if isinstance(entry, str):
        return Ability(name=entry)
    if isinstance(entry, Mapping):
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise RulesError(f"Ability entry is missing a 'name': {dict(entry)!r}")
        effect = entry.get("effect")
        return Ability(name=name, effect="" if effect is None else str(effect))
    raise RulesError(f"Ability entry must be a string or a mapping, got {entry!r}.")


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _read_table(rules_root: Path, table: str) -> Any:
    """Read one table file, trying each supported suffix in turn."""
    for suffix in TABLE_SUFFIXES:
        path = rules_root / f"{table}{suffix}"
        if not path.exists():
            continue
        logger.debug("Reading rule table %s", path)
        with path.open("r", encoding="utf-8") as handle:
            if suffix == ".json":
                try:
                    return json.load(handle)
                except json.JSONDecodeError as exc:
                    raise RulesError(f"{path.name}: invalid JSON ({exc}).") from exc
            try:
                return yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise RulesError(f"{path.name}: invalid YAML ({exc}).") from exc

    candidates = ", ".join(f"{table}{suffix}" for suffix in TABLE_SUFFIXES)
    raise FileNotFoundError(f"Rule table {table!r} not found in {rules_root} (tried {candidates})")


def _parse_stats(raw: Any) -> tuple[str, ...]:
    if isinstance(raw, Mapping):
        raw = raw.get("stats")
    if not isinstance(raw, list):
        raise RulesError("stats: expected a list of stat names (or a mapping with 'stats').")

    stats: list[str] = []
    for name in raw:
        if not isinstance(name, str) or not name:
            raise RulesError(f"stats: stat names must be non-empty strings, got {name!r}.")
        if name in stats:
            raise RulesError(f"stats: duplicate stat name {name!r}.")
        stats.append(name)
    return tuple(stats)


def _parse_natures(raw: Any) -> dict[str, Nature]:
    if not isinstance(raw, Mapping):
        raise RulesError("natures: expected a mapping of nature key to nature.")

    natures: dict[str, Nature] = {}
    for key, entry in raw.items():
        if not isinstance(entry, Mapping):
            raise RulesError(f"natures.{key}: must be a mapping.")

        hp = entry.get("hp")
        if isinstance(hp, bool) or not isinstance(hp, int):
            raise RulesError(f"natures.{key}.hp: expected an integer, got {hp!r}.")
        if hp < 0:
            raise RulesError(f"natures.{key}.hp: must not be negative, got {hp}.")

        abilities_raw = entry.get("abilities") or []
        if not isinstance(abilities_raw, list):
            raise RulesError(f"natures.{key}.abilities: expected a list.")
        try:
            abilities = tuple(normalize_ability(item) for item in abilities_raw)
        except RulesError as exc:
            raise RulesError(f"natures.{key}.abilities: {exc}") from exc

        natures[str(key)] = Nature(
            name=str(entry.get("name") or key),
            hp=hp,
            abilities=abilities,
        )
    return natures


def _parse_backgrounds(raw: Any, stats: tuple[str, ...]) -> dict[str, Background]:
    if not isinstance(raw, Mapping):
        raise RulesError("backgrounds: expected a mapping of background key to background.")

    backgrounds: dict[str, Background] = {}
    for key, entry in raw.items():
        if not isinstance(entry, Mapping):
            raise RulesError(f"backgrounds.{key}: must be a mapping.")

        mods_raw = _first_present(entry, "statMods", "stat_mods") or {}
        if not isinstance(mods_raw, Mapping):
            raise RulesError(f"backgrounds.{key}.statMods: expected a mapping.")

        stat_mods: dict[str, int] = {}
        for stat, mod in mods_raw.items():
            if stat not in stats:
                # Keeps the output stat set equal to the stats table.
                logger.warning(
                    "backgrounds.%s.statMods: dropping modifier for unknown stat %r", key, stat
                )
                continue
            stat_mods[str(stat)] = _parse_stat_mod(mod, where=f"backgrounds.{key}.statMods.{stat}")

        talent = entry.get("talent")
        backgrounds[str(key)] = Background(
            name=str(entry.get("name") or key),
            stat_mods=MappingProxyType(stat_mods),
            hp_bonus=_dice_text(_first_present(entry, "hpBonus", "hp_bonus")),
            shreds=_dice_text(entry.get("shreds")),
            talent=None if talent is None else str(talent),
        )
    return backgrounds


def _parse_talents(raw: Any) -> dict[str, Talent]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise RulesError("talents: expected a mapping of talent key to talent.")

    talents: dict[str, Talent] = {}
    for key, entry in raw.items():
        if isinstance(entry, str):
            talents[str(key)] = Talent(effect=entry)
        elif isinstance(entry, Mapping):
            effect = entry.get("effect")
            talents[str(key)] = Talent(effect="" if effect is None else str(effect))
        else:
            raise RulesError(f"talents.{key}: must be a mapping or a string.")
    return talents


def _parse_stat_mod(value: Any, *, where: str) -> int:
    """Parse a stat modifier such as ``2``, ``"2"``, ``"+2"`` or ``"-1"``."""
    if isinstance(value, bool):
        raise RulesError(f"{where}: expected an integer, got {value!r}.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise RulesError(f"{where}: expected an integer, got {value!r}.")


def _dice_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _first_present(entry: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in entry:
            return entry[key]
    return None
