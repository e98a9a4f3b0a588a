"""
project: DungeonForge
module: layout_api.py
License: MIT

Layout generation API routes.

POST /api/layout generates a layout from an explicit seed and config; the GET
routes serve cached layouts for the app's default config.
"""

import hashlib
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from dungeonforge.layout import ConfigError, LayoutConfig, generate, new_seed
from dungeonforge.layout.ascii import render_layout, render_rooms

bp_layout = Blueprint("layout_api", __name__)

SEED_MAX = 2**31 - 1

# (seed, config tuple) -> LayoutResult, oldest evicted first.
_layout_cache = {}
_layout_cache_lock = threading.Lock()


def coerce_seed(payload_seed):
    """Convert a provided seed (int, digit string or free text) into a bounded int."""
    if payload_seed is None:
        return new_seed()
    if isinstance(payload_seed, bool):
        raise ValueError("seed must be an int or string")
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return new_seed()
        if s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    raise ValueError("seed must be an int or string")


def default_config() -> LayoutConfig:
    return LayoutConfig.from_mapping(current_app.config.get("LAYOUT_DEFAULTS") or {})


def get_cached_layout(seed: int, config: LayoutConfig):
    if current_app.config.get("LAYOUT_DISABLE_CACHE"):
        return generate(seed, config)
    key = (seed, tuple(sorted((k, str(v)) for k, v in config.to_dict().items())))
    with _layout_cache_lock:
        result = _layout_cache.get(key)
        if result is not None:
            return result
    result = generate(seed, config)
    cap = current_app.config.get("LAYOUT_CACHE_MAX", 8)
    with _layout_cache_lock:
        _layout_cache[key] = result
        while len(_layout_cache) > cap:
            _layout_cache.pop(next(iter(_layout_cache)))
    return result


def _config_error(exc: ConfigError):
    return jsonify({"error": "invalid config", "details": exc.errors}), 400


@bp_layout.route("/api/layout/config")
def layout_config():
    """Return the default layout configuration used by the GET routes."""
    return jsonify(default_config().to_dict())


@bp_layout.route("/api/layout", methods=["POST"])
def create_layout():
    """Generate a layout.

    Body JSON (all optional):
      { "seed": <int|str|null>, "config": {<LayoutConfig fields>}, "floor": <bool> }
    Response: LayoutResult as JSON; 400 when the seed or config is invalid.
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON object"}), 400
    try:
        seed = coerce_seed(data.get("seed"))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    try:
        config = LayoutConfig.from_mapping(data.get("config"), base=default_config())
        result = get_cached_layout(seed, config)
    except ConfigError as exc:
        return _config_error(exc)
    return jsonify(result.to_dict(include_floor=bool(data.get("floor", True))))


@bp_layout.route("/api/layout/<seed>")
def layout_for_seed(seed):
    """Layout for seed using the default config. Add ?floor=0 to omit floor tiles."""
    try:
        result = get_cached_layout(coerce_seed(seed), default_config())
    except ConfigError as exc:
        return _config_error(exc)
    include_floor = request.args.get("floor", "1") not in ("0", "false", "no")
    return jsonify(result.to_dict(include_floor=include_floor))


@bp_layout.route("/api/layout/<seed>/ascii")
def layout_ascii(seed):
    """Plain-text map; ?view=rooms draws room outlines instead of the raster."""
    try:
        result = get_cached_layout(coerce_seed(seed), default_config())
    except ConfigError as exc:
        return _config_error(exc)
    text = render_rooms(result) if request.args.get("view") == "rooms" else render_layout(result)
    return Response(text + "\n", mimetype="text/plain")
