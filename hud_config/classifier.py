"""Partition a flat section into toggle-rooted groups and standalone fields.

Classification runs four ordered passes over the section's keys. Each pass only
sees keys that earlier passes left unclaimed, so pass order and rule order are
the only tie-breakers:

1. boolean roots (``$name`` toggles) collect children via ``ROOT_RULES`` or the
   generic ``$name_*`` / ``$hide_name`` / ``$show_name`` convention;
2. ``SYNTHETIC_RULES`` gather related keys into root-less groups;
3. ``DEBUG_RULE`` attaches debug readouts to the ``$debughud`` toggle;
4. whatever is left becomes a standalone field.

Children and standalones are sorted so the result never depends on the order in
which keys were inserted into the section.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from hud_config.document import describe_value

_LOGGER = logging.getLogger("HUDEditor.Config")


@dataclass(frozen=True)
class KeyMatcher:
    kind: str  # "prefix" or "contains"
    token: str

    def matches(self, key: str) -> bool:
        if self.kind == "prefix":
            return key.startswith(self.token)
        return self.token in key


def prefix(token: str) -> KeyMatcher:
    return KeyMatcher("prefix", token)


def contains(token: str) -> KeyMatcher:
    return KeyMatcher("contains", token)


@dataclass(frozen=True)
class RootRule:
    base: str
    matchers: Tuple[KeyMatcher, ...]

    def matches(self, key: str) -> bool:
        return any(matcher.matches(key) for matcher in self.matchers)


@dataclass(frozen=True)
class SyntheticRule:
    group_id: str
    pattern: str

    def matches(self, key: str) -> bool:
        return self.pattern in key.lower()


@dataclass(frozen=True)
class DebugRule:
    group_id: str
    root: str
    tokens: Tuple[str, ...]

    def matches(self, key: str) -> bool:
        return any(token in key for token in self.tokens)


ROOT_RULES: Tuple[RootRule, ...] = (
    RootRule(
        "coordinates",
        (
            prefix("$coordinates_"),
            contains("vanillacordinates"),
            contains("chunk_coordinates"),
            contains("nether_coordinates"),
            contains("nether_in_overworld"),
            contains("show_chunkcoordinates"),
            contains("show_nethercoordinates"),
            contains("hide_chunkcoordinates"),
            contains("hide_nethercoordinates"),
            contains("hide_vanillacordinates"),
        ),
    ),
    RootRule(
        "clockcompass",
        (
            prefix("$clockcompass_"),
            contains("compass_aux"),
            contains("clock_aux"),
            contains("recovery_compass_aux"),
            contains("show_clock_compass"),
        ),
    ),
    RootRule(
        "mobileshortcuts",
        (
            contains("f1button"),
            contains("f8button"),
            contains("hotbar_left_button"),
            contains("hotbar_right_button"),
        ),
    ),
    RootRule(
        "mainhandhud",
        (
            prefix("$mainhandhud_"),
            contains("mainhand_durability_toggle_index"),
            contains("hide_mainhandhud"),
            contains("mainhandhud_slot_opacity"),
        ),
    ),
    RootRule(
        "chunkmap",
        (
            prefix("$chunkmap_"),
            contains("hide_slime_chunks"),
            contains("chunkmap_chunk_position"),
        ),
    ),
    RootRule(
        "playerlist",
        (
            prefix("$playerlist_"),
            contains("hide_playeravatars"),
            contains("playerlist_mobile_button"),
        ),
    ),
    RootRule(
        "hotbar",
        (
            prefix("$hotbar_"),
            contains("hide_hotbar"),
            contains("hide_inventory_button"),
            contains("show_hotbar_numbers"),
            contains("hotbar_toggle_index"),
        ),
    ),
)

SYNTHETIC_RULES: Tuple[SyntheticRule, ...] = (
    SyntheticRule("bossbar", "boss"),
    SyntheticRule("scoreboard", "scoreboard"),
    SyntheticRule("crosshair", "crosshair"),
    SyntheticRule("exp_bar", "xp_bar"),
    SyntheticRule("exp_bar", "xp_percentage"),
    SyntheticRule("saturation_display", "display"),
    SyntheticRule("saturation_display", "saturation"),
    SyntheticRule("saturation_display", "nightshift"),
    SyntheticRule("text_visibility", "hide_item_name"),
    SyntheticRule("text_visibility", "hide_jukebox"),
    SyntheticRule("text_visibility", "hide_tip"),
    SyntheticRule("text_visibility", "hide_actionbar"),
)

DEBUG_RULE = DebugRule(
    group_id="debughud",
    root="$debughud",
    tokens=(
        "glacierversion",
        "version",
        "os_type",
        "graphics",
        "platform",
        "ui_type",
        "world_type",
        "world_name",
        "day_counter",
        "moon_phase",
        "gamemode",
        "xp_level",
        "item_id",
        "item_aux_id",
    ),
)


@dataclass(frozen=True)
class ConfigGroup:
    id: str
    root: str
    children: Tuple[str, ...]


@dataclass(frozen=True)
class Classification:
    groups: Dict[str, ConfigGroup] = field(default_factory=dict)
    standalones: Tuple[str, ...] = ()

    def claimed_keys(self) -> List[str]:
        keys: List[str] = []
        for group in self.groups.values():
            if group.root:
                keys.append(group.root)
            keys.extend(group.children)
        return keys


def is_root_key(key: str, value: object) -> bool:
    return key.startswith("$") and isinstance(value, bool) and "_" not in key


def _generic_rule(root: str) -> RootRule:
    base = root[1:]
    return RootRule(base, (prefix(f"{root}_"), prefix(f"$hide_{base}"), prefix(f"$show_{base}")))


def classify_section(
    section: Optional[Mapping[str, object]],
    *,
    root_rules: Iterable[RootRule] = ROOT_RULES,
    synthetic_rules: Iterable[SyntheticRule] = SYNTHETIC_RULES,
    debug_rule: Optional[DebugRule] = DEBUG_RULE,
) -> Classification:
    if not isinstance(section, Mapping):
        return Classification()
    keys = sorted(section.keys())
    rules_by_base = {rule.base: rule for rule in root_rules}
    members: Dict[str, List[str]] = {}
    roots: Dict[str, str] = {}
    claimed: Set[str] = set()

    def _claim(group_id: str, root: str, matches: List[str]) -> None:
        if group_id not in members:
            members[group_id] = []
            roots[group_id] = root
        elif root and not roots[group_id]:
            roots[group_id] = root
        bucket = members[group_id]
        for key in matches:
            if key not in bucket:
                bucket.append(key)
        claimed.update(matches)

    root_keys = [key for key in keys if is_root_key(key, section[key])]
    claimed.update(root_keys)
    for root in root_keys:
        base = root[1:]
        rule = rules_by_base.get(base) or _generic_rule(root)
        matches = [key for key in keys if key not in claimed and rule.matches(key)]
        _claim(base, root, matches)

    for synthetic in synthetic_rules:
        matches = [key for key in keys if key not in claimed and synthetic.matches(key)]
        if matches:
            _claim(synthetic.group_id, "", matches)

    if debug_rule is not None and debug_rule.root in section:
        claimed.add(debug_rule.root)
        matches = [key for key in keys if key not in claimed and debug_rule.matches(key)]
        _claim(debug_rule.group_id, debug_rule.root, matches)

    groups = {
        group_id: ConfigGroup(id=group_id, root=roots[group_id], children=tuple(sorted(children)))
        for group_id, children in members.items()
    }
    standalones = tuple(key for key in keys if key not in claimed)
    return Classification(groups=groups, standalones=standalones)


class ConfigClassifier:
    """Caches the last classification until the section's keys or value kinds change."""

    def __init__(
        self,
        *,
        root_rules: Iterable[RootRule] = ROOT_RULES,
        synthetic_rules: Iterable[SyntheticRule] = SYNTHETIC_RULES,
        debug_rule: Optional[DebugRule] = DEBUG_RULE,
    ) -> None:
        self._root_rules = tuple(root_rules)
        self._synthetic_rules = tuple(synthetic_rules)
        self._debug_rule = debug_rule
        self._fingerprint: Optional[Tuple[Tuple[str, str], ...]] = None
        self._result = Classification()

    def classify(self, section: Optional[Mapping[str, object]]) -> Classification:
        fingerprint = self._fingerprint_for(section)
        if fingerprint is not None and fingerprint == self._fingerprint:
            return self._result
        self._result = classify_section(
            section,
            root_rules=self._root_rules,
            synthetic_rules=self._synthetic_rules,
            debug_rule=self._debug_rule,
        )
        self._fingerprint = fingerprint
        _LOGGER.debug(
            "Classified section: groups=%d standalones=%d",
            len(self._result.groups),
            len(self._result.standalones),
        )
        return self._result

    @staticmethod
    def _fingerprint_for(section: Optional[Mapping[str, object]]) -> Optional[Tuple[Tuple[str, str], ...]]:
        if not isinstance(section, Mapping):
            return None
        return tuple(sorted((key, describe_value(value).value) for key, value in section.items()))
