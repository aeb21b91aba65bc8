"""
project: Dungeon Smith
module: dungeon_api.py
License: MIT

Floorplan generation API.

Stateless JSON endpoints: list the configured themes and size tiers, generate
a dungeon (rooms, SVG map, Markdown guide, diagnostics), or fetch just the
SVG image for a seed. Nothing is persisted between requests.
"""

from flask import Blueprint, Response, current_app, jsonify, request

from dungeonsmith.dungeon import SIZE_TIERS, Dungeon, UnknownDungeonType
from dungeonsmith.dungeon.config import DEFAULT_SIZE
from dungeonsmith.dungeon.seeds import InvalidSeed, coerce_seed
from dungeonsmith.dungeon.themes import DEFAULT_THEMES
from dungeonsmith.logging_utils import get_logger
from dungeonsmith.render import MapStyle, render_artifacts

bp_dungeon = Blueprint("dungeon", __name__)
log = get_logger("routes.dungeon")


class BadRequest(ValueError):
    """Client input rejected before generation starts."""


def _themes():
    return current_app.config.get("DUNGEONSMITH_THEMES") or DEFAULT_THEMES


def _defaults():
    cfg = current_app.config
    return cfg.get("DUNGEONSMITH_DEFAULT_TYPE", "Cave"), cfg.get("DUNGEONSMITH_DEFAULT_SIZE", DEFAULT_SIZE)


@bp_dungeon.errorhandler(UnknownDungeonType)
@bp_dungeon.errorhandler(InvalidSeed)
@bp_dungeon.errorhandler(ValueError)
def _bad_request(err):
    # BadRequest and invalid MapStyle values are plain ValueErrors
    log.info(event="api_bad_request", error=str(err))
    return jsonify({"error": str(err)}), 400


@bp_dungeon.route("/api/dungeon/themes", methods=["GET"])
def list_themes():
    themes = _themes()
    return jsonify({"themes": [t.to_dict() for t in themes.values()], "default": _defaults()[0]})


@bp_dungeon.route("/api/dungeon/sizes", methods=["GET"])
def list_sizes():
    sizes = {
        name: {
            "minRooms": tier.min_rooms,
            "maxRooms": tier.max_rooms,
            "gridSize": tier.grid_size,
            "cellSize": tier.cell_size,
        }
        for name, tier in SIZE_TIERS.items()
    }
    return jsonify({"sizes": sizes, "default": _defaults()[1]})


@bp_dungeon.route("/api/dungeon/generate", methods=["POST"])
def generate():
    """Generate a floorplan.

    Body JSON (all optional):
      { "dungeonType": <str>, "size": "Small"|"Medium"|"Large",
        "seed": <int|str|null>, "style": {<MapStyle camelCase keys>} }
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise BadRequest("request body must be a JSON object")
    default_type, default_size = _defaults()
    for key in ("dungeonType", "size"):
        if data.get(key) is not None and not isinstance(data[key], str):
            raise BadRequest(f"{key} must be a string")
    dungeon_type = data.get("dungeonType") or default_type
    size = data.get("size") or default_size
    style_data = data.get("style")
    if style_data is not None and not isinstance(style_data, dict):
        raise BadRequest("style must be an object")
    style = MapStyle.from_dict(style_data)
    seed = coerce_seed(data.get("seed"))
    dungeon = Dungeon(dungeon_type=dungeon_type, size=size, seed=seed, themes=_themes())
    svg, guide = render_artifacts(dungeon, style)
    log.debug(event="api_generate", seed=seed, type=dungeon.dungeon_type, size=dungeon.size)
    return jsonify({
        "seed": dungeon.seed,
        "dungeonType": dungeon.dungeon_type,
        "size": dungeon.size,
        "gridSize": dungeon.grid_size,
        "cellSize": dungeon.cell_size,
        "rooms": [r.to_dict() for r in dungeon.rooms],
        "svg": svg,
        "guide": guide,
        "report": dungeon.report.to_dict(),
    })


@bp_dungeon.route("/api/dungeon/svg", methods=["GET"])
def svg_image():
    default_type, default_size = _defaults()
    dungeon_type = request.args.get("dungeonType") or default_type
    size = request.args.get("size") or default_size
    seed = coerce_seed(request.args.get("seed"))
    dungeon = Dungeon(dungeon_type=dungeon_type, size=size, seed=seed, themes=_themes())
    svg, _ = render_artifacts(dungeon)
    resp = Response(svg, mimetype="image/svg+xml")
    resp.headers["X-Dungeon-Seed"] = str(dungeon.seed)
    return resp
