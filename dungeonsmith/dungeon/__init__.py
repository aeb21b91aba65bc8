"""Public dungeon package interface."""

from .config import SIZE_TIERS, CONTENT_TYPES, GenerateOptions, SizeConfig, get_size_config
from .metrics import GenerationReport
from .pipeline import Dungeon
from .rooms import Door, PathInfo, Room
from .cells import PathCoordinate
from .themes import DEFAULT_THEMES, ThemeConfig, UnknownDungeonType, get_theme, load_themes
from .tunnels import BreadthFirstRouter, LShapedRouter, Router  # noqa: F401

__all__ = [
    "Dungeon",
    "GenerateOptions",
    "GenerationReport",
    "SizeConfig",
    "SIZE_TIERS",
    "CONTENT_TYPES",
    "get_size_config",
    "Room",
    "Door",
    "PathInfo",
    "PathCoordinate",
    "ThemeConfig",
    "DEFAULT_THEMES",
    "UnknownDungeonType",
    "get_theme",
    "load_themes",
    "Router",
    "LShapedRouter",
    "BreadthFirstRouter",
]
