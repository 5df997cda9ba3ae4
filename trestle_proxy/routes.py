import logging
from flask import Blueprint, current_app, request, jsonify

from .auth import get_access_token
from .errors import NotFoundError
from .listings import fetch_all_listings, fetch_listing_by_id, fetch_listings_page
from .media import fetch_media_for_key, fetch_media_for_keys
from .scheduler import run_scheduled_task
from .shaping import listing_keys, shape, shape_listing

bp = Blueprint("routes", __name__)


def _config():
    return current_app.config["PROXY"]


def _log_failure(msg: str, e: Exception):
    logging.exception("%s: %s | detail=%s", msg, e, getattr(e, "detail", None))


@bp.get("/scheduled-task")
def scheduled_task():
    run_scheduled_task()
    return "Task completed", 200


@bp.get("/api/listings")
def list_listings():
    cfg = _config()
    try:
        page = int(request.args.get("page") or "1")
    except ValueError:
        return jsonify(error="Invalid page"), 400
    if page < 1:
        return jsonify(error="Invalid page"), 400
    per_page = cfg.page_size
    want_all = cfg.allow_full_pagination and request.args.get("all") == "1"

    try:
        token = get_access_token(cfg)
        if want_all:
            listings = fetch_all_listings(cfg, token, per_page)
        else:
            listings = fetch_listings_page(cfg, token, skip=(page - 1) * per_page, top=per_page)
        media_map = fetch_media_for_keys(cfg, token, listing_keys(listings))
        result = shape(listings, media_map)
    except Exception as e:
        _log_failure("Error fetching listings", e)
        return jsonify(error="Failed to fetch listings"), 500

    if want_all:
        return jsonify(page=None, perPage=per_page, listings=result), 200
    return jsonify(page=page, perPage=per_page, listings=result), 200


@bp.get("/api/listings/<listing_id>")
def get_listing(listing_id):
    cfg = _config()
    try:
        token = get_access_token(cfg)
        listing = fetch_listing_by_id(cfg, token, listing_id)
        key = listing.get("ListingKeyNumeric")
        images = fetch_media_for_key(cfg, token, key) if key else []
        return jsonify(shape_listing(listing, images)), 200
    except NotFoundError:
        return jsonify(error="Not found"), 404
    except Exception as e:
        _log_failure("Error fetching listing by ID", e)
        return jsonify(error="Failed to fetch listing"), 500


@bp.get("/health")
def health():
    return "ok", 200
