"""HTTP blueprints."""

from .dungeon_api import bp_dungeon

__all__ = ["bp_dungeon"]
