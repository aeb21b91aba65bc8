"""Markdown Dungeon Master's guide for a generated floorplan."""
from __future__ import annotations

import random
from typing import Dict, List

from ..dungeon.config import (
    BOSS_MONSTER,
    EMPTY,
    MAJOR_HAZARD,
    MINOR_HAZARD,
    MONSTER_MOB,
    NPC,
    SOLO_MONSTER,
    TRAP,
    TREASURE,
)
from ..dungeon.rooms import Room

LEGEND = (
    ("White", "Empty Room"),
    ("Light Red", TRAP),
    ("Light Orange", MINOR_HAZARD),
    ("Light Yellow", SOLO_MONSTER),
    ("Light Green", NPC),
    ("Light Blue", MONSTER_MOB),
    ("Light Purple", MAJOR_HAZARD),
    ("Gold", TREASURE),
    ("Red", BOSS_MONSTER),
)

BASE_DESCRIPTIONS: Dict[str, List[str]] = {
    "Cave": [
        "A damp cavern with stalactites hanging from the ceiling.",
        "A narrow passage that opens into a wider space.",
        "A rocky chamber with evidence of recent seismic activity.",
        "A cave with luminescent fungi providing dim light.",
    ],
    "Tomb": [
        "Ancient stone walls inscribed with forgotten symbols.",
        "A burial chamber with ornate carvings depicting the deceased's life.",
        "A dusty room with sarcophagi lining the walls.",
        "A ceremonial space with faded murals depicting ancient rites.",
    ],
    "Deep Tunnels": [
        "A mine shaft reinforced with aged wooden supports.",
        "A tunnel that shows signs of both natural formation and artificial expansion.",
        "An excavated chamber with abandoned mining equipment.",
        "A dark passage with veins of unusual minerals in the walls.",
    ],
    "Ruins": [
        "Crumbling stone walls partially reclaimed by nature.",
        "A once-grand chamber now exposed to the elements.",
        "The remains of what appears to have been an important structure.",
        "Ancient architecture that has withstood the test of time, though barely.",
    ],
}
FALLBACK_THEME = "Cave"

# {c} is the room's content, lowercased
CONTENT_SENTENCES: Dict[str, str] = {
    EMPTY: "The room appears to be empty, though careful inspection might reveal subtle details or clues.",
    TRAP: "There's a {c} here that might be triggered if adventurers aren't careful.",
    MINOR_HAZARD: "Be wary of the {c} that makes traversing this area more difficult.",
    SOLO_MONSTER: "A {c} has made this place its lair.",
    NPC: "A {c} can be found here, perhaps with information or a request.",
    MONSTER_MOB: "A group of {c} have claimed this area as their territory.",
    MAJOR_HAZARD: "The {c} presents a significant danger to anyone entering this area.",
    TREASURE: "This area contains {c} that might interest the adventurers.",
    BOSS_MONSTER: "Beware! A powerful {c} awaits those who enter here.",
}
MYSTERY_SENTENCE = "The contents of this room are mysterious."


def describe_room(room: Room, theme_name: str, rng=None) -> str:
    if rng is None:
        rng = random
    base = rng.choice(BASE_DESCRIPTIONS.get(theme_name, BASE_DESCRIPTIONS[FALLBACK_THEME]))
    template = CONTENT_SENTENCES.get(room.content_type, MYSTERY_SENTENCE)
    return f"{base} {template.format(c=room.content.lower())}"


def compose_guide(rooms: List[Room], theme_name: str, rng=None) -> str:
    """Render the guide; the room list itself is left untouched."""
    if rng is None:
        rng = random
    lines = [f"# {theme_name} Dungeon Master's Guide", "", "## Legend"]
    lines.extend(f"- {color}: {label}" for color, label in LEGEND)
    lines.extend(["", "## Room Details", ""])
    for room in sorted(rooms, key=lambda r: r.id):
        connections = ", ".join(str(c) for c in room.connections) or "none"
        lines.append(f"### Room {room.id}: {room.type}")
        lines.append(f"**Content**: {room.content_type} - {room.content}")
        lines.append(f"**Connections**: Connects to rooms {connections}")
        lines.append("")
        lines.append(f"**Suggested Description**: {describe_room(room, theme_name, rng)}")
        lines.append("")
    return "\n".join(lines) + "\n"
