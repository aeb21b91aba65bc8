"""Theme tables: flavor strings per content category for each dungeon type.

The four built-in themes can be extended or overridden with a JSON file whose
entries use the same camelCase keys that ``ThemeConfig.to_dict`` emits, e.g.::

    {"Sewer": {"possibleRooms": ["Cistern"], "possibleTraps": ["Gas Vent"], ...}}
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List

from .config import (
    BOSS_MONSTER,
    MAJOR_HAZARD,
    MINOR_HAZARD,
    MONSTER_MOB,
    NPC,
    SOLO_MONSTER,
    TRAP,
    TREASURE,
)


class UnknownDungeonType(ValueError):
    """Raised when a requested dungeon type has no theme table."""


@dataclass
class ThemeConfig:
    name: str
    possible_rooms: List[str] = field(default_factory=list)
    possible_traps: List[str] = field(default_factory=list)
    possible_minor_hazards: List[str] = field(default_factory=list)
    possible_solo_monsters: List[str] = field(default_factory=list)
    possible_npcs: List[str] = field(default_factory=list)
    possible_monster_mobs: List[str] = field(default_factory=list)
    possible_major_hazards: List[str] = field(default_factory=list)
    possible_treasures: List[str] = field(default_factory=list)
    possible_boss_monsters: List[str] = field(default_factory=list)

    def options_for(self, content_type: str) -> List[str]:
        """Return the flavor list backing a content category (empty for Empty)."""
        return {
            TRAP: self.possible_traps,
            MINOR_HAZARD: self.possible_minor_hazards,
            SOLO_MONSTER: self.possible_solo_monsters,
            NPC: self.possible_npcs,
            MONSTER_MOB: self.possible_monster_mobs,
            MAJOR_HAZARD: self.possible_major_hazards,
            TREASURE: self.possible_treasures,
            BOSS_MONSTER: self.possible_boss_monsters,
        }.get(content_type, [])

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "possibleRooms": list(self.possible_rooms),
            "possibleTraps": list(self.possible_traps),
            "possibleMinorHazards": list(self.possible_minor_hazards),
            "possibleSoloMonsters": list(self.possible_solo_monsters),
            "possibleNPCs": list(self.possible_npcs),
            "possibleMonsterMobs": list(self.possible_monster_mobs),
            "possibleMajorHazards": list(self.possible_major_hazards),
            "possibleTreasures": list(self.possible_treasures),
            "possibleBossMonsters": list(self.possible_boss_monsters),
        }

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, object]) -> "ThemeConfig":
        def _strings(key: str) -> List[str]:
            raw = data.get(key) or []
            if not isinstance(raw, list):
                raise ValueError(f"theme {name!r}: {key} must be a list of strings")
            return [str(v) for v in raw]

        return cls(
            name=str(data.get("name") or name),
            possible_rooms=_strings("possibleRooms"),
            possible_traps=_strings("possibleTraps"),
            possible_minor_hazards=_strings("possibleMinorHazards"),
            possible_solo_monsters=_strings("possibleSoloMonsters"),
            possible_npcs=_strings("possibleNPCs"),
            possible_monster_mobs=_strings("possibleMonsterMobs"),
            possible_major_hazards=_strings("possibleMajorHazards"),
            possible_treasures=_strings("possibleTreasures"),
            possible_boss_monsters=_strings("possibleBossMonsters"),
        )


DEFAULT_THEMES: Dict[str, ThemeConfig] = {
    "Cave": ThemeConfig(
        name="Cave",
        possible_rooms=["Cavern", "Grotto", "Tunnel", "Chamber", "Pool", "Crevasse", "Stalagmite Forest"],
        possible_traps=["Pit Trap", "Rock Fall", "Poison Gas", "Slippery Slope"],
        possible_minor_hazards=["Slippery Ground", "Low Ceiling", "Unstable Floor"],
        possible_solo_monsters=["Cave Bear", "Giant Bat", "Slime", "Troll"],
        possible_npcs=["Lost Miner", "Hermit", "Cultist", "Refugee"],
        possible_monster_mobs=["Goblins", "Kobolds", "Giant Spiders", "Bats"],
        possible_major_hazards=["Underground River", "Lava Flow", "Collapsing Ceiling"],
        possible_treasures=["Gem Vein", "Ancient Cache", "Forgotten Equipment", "Crystal Formation"],
        possible_boss_monsters=["Dragon", "Giant", "Chimera", "Elder Slime"],
    ),
    "Tomb": ThemeConfig(
        name="Tomb",
        possible_rooms=["Crypt", "Burial Chamber", "Sarcophagus Room", "Ceremonial Hall", "Treasure Vault"],
        possible_traps=["Poison Dart", "Swinging Blade", "Collapsing Floor", "Curse Tablet"],
        possible_minor_hazards=["Cobwebs", "Crumbling Stairs", "Faded Inscriptions"],
        possible_solo_monsters=["Mummy", "Skeleton Warrior", "Cursed Statue", "Ghost"],
        possible_npcs=["Archaeologist", "Tomb Robber", "Cursed Noble", "Death Priest"],
        possible_monster_mobs=["Skeletons", "Zombies", "Scarabs", "Animated Objects"],
        possible_major_hazards=["Soul-draining Mist", "Time Loop", "Magical Ward"],
        possible_treasures=["Royal Jewelry", "Ancient Artifacts", "Ceremonial Weapons", "Burial Masks"],
        possible_boss_monsters=["Lich", "Mummy Lord", "Death Knight", "Ancient Guardian"],
    ),
    "Deep Tunnels": ThemeConfig(
        name="Deep Tunnels",
        possible_rooms=["Mine Shaft", "Excavated Chamber", "Natural Cavity", "Crossroads", "Storage Room"],
        possible_traps=["Mining Explosives", "Elevator Malfunction", "Flood Trap", "Cave-in"],
        possible_minor_hazards=["Poor Air Quality", "Rickety Supports", "Narrow Passage"],
        possible_solo_monsters=["Giant Worm", "Rock Elemental", "Deep One", "Cave Fisher"],
        possible_npcs=["Lost Explorer", "Mad Miner", "Deep Cult Priest", "Escaped Slave"],
        possible_monster_mobs=["Duergar", "Troglodytes", "Hook Horrors", "Myconids"],
        possible_major_hazards=["Bottomless Chasm", "Toxic Spore Cloud", "Underground Lake"],
        possible_treasures=["Rare Minerals", "Dwarven Artifact", "Forgotten Cache", "Ancient Technology"],
        possible_boss_monsters=["Purple Worm", "Stone Titan", "Mind Flayer", "Beholder"],
    ),
    "Ruins": ThemeConfig(
        name="Ruins",
        possible_rooms=["Collapsed Hall", "Overgrown Chamber", "Broken Tower", "Former Library", "Throne Room"],
        possible_traps=["Collapsing Wall", "Hidden Pitfall", "Ancient Magic Rune", "Animated Statue"],
        possible_minor_hazards=["Crumbling Floor", "Overgrown Vegetation", "Unstable Archway"],
        possible_solo_monsters=["Gargoyle", "Animated Armor", "Phase Spider", "Wraith"],
        possible_npcs=["Historian", "Treasure Hunter", "Cultist Leader", "Trapped Spirit"],
        possible_monster_mobs=["Bandits", "Cultists", "Animated Objects", "Restless Dead"],
        possible_major_hazards=["Magical Anomaly", "Reality Warp", "Time Distortion"],
        possible_treasures=["Ancient Library", "Royal Treasury", "Magical Artifacts", "Historical Records"],
        possible_boss_monsters=["Ancient Construct", "Forgotten Deity", "Archmage Ghost", "Demonic Entity"],
    ),
}


def load_themes(path: str | None = None) -> Dict[str, ThemeConfig]:
    """Return the built-in themes merged with any defined in a JSON file."""
    themes = dict(DEFAULT_THEMES)
    if not path:
        return themes
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("themes file must contain a JSON object keyed by dungeon type")
    for key, entry in data.items():
        if not isinstance(entry, dict):
            raise ValueError(f"theme {key!r} must be a JSON object")
        themes[key] = ThemeConfig.from_dict(key, entry)
    return themes


def get_theme(dungeon_type: str, themes: Dict[str, ThemeConfig] | None = None) -> ThemeConfig:
    table = DEFAULT_THEMES if themes is None else themes
    try:
        return table[dungeon_type]
    except KeyError:
        raise UnknownDungeonType(f"unknown dungeon type: {dungeon_type!r}") from None


__all__ = ["ThemeConfig", "DEFAULT_THEMES", "UnknownDungeonType", "load_themes", "get_theme"]
