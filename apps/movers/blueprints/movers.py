import logging

from flask import Blueprint, Response, current_app, jsonify, request

from ..errors import MissingCredentialError, UnknownRevisionError, UpstreamError
from ..revisions import REVISIONS, get_revision
from ..services.params import parse_request_params

logger = logging.getLogger(__name__)

bp = Blueprint("movers", __name__)


def run_revision(revision_id: str, args, config, session=None):
    """
    Responder. Returns (body, status, headers) for any outcome:
        200   {"data": [...]} + Cache-Control
        4xx/5xx from upstream   raw body passed through
        500   {"error", "details"}
    """
    try:
        revision = get_revision(revision_id)
    except UnknownRevisionError as e:
        return {"error": "Unknown revision", "details": str(e)}, 404, {}

    params = parse_request_params(args, default_limit=revision.default_limit)
    try:
        cards = revision.run(config, params, session=session)
    except MissingCredentialError as e:
        logger.error(f"[{revision.id}] {e}")
        return {"error": "Missing API key", "details": str(e)}, 500, {}
    except UpstreamError as e:
        # upstream status and raw body, unchanged
        logger.warning(f"[{revision.id}] {e}")
        headers = {"Content-Type": e.content_type} if e.content_type else {}
        return e.body if e.body is not None else "", e.status_code or 502, headers
    except Exception as e:
        logger.exception(f"[{revision.id}] Proxy error")
        return {"error": "Proxy failed", "details": str(e)}, 500, {}

    headers = {"Cache-Control": config.get("MOVERS_CACHE_CONTROL")
               or "s-maxage=300, stale-while-revalidate=300"}
    return {"data": [c.to_dict() for c in cards]}, 200, headers


def _respond(body, status, headers):
    if isinstance(body, dict):
        resp = jsonify(body)
        resp.status_code = status
    else:
        resp = Response(body, status=status)
    for k, v in headers.items():
        resp.headers[k] = v
    return resp


@bp.get("/api/movers")
def default_movers():
    return _respond(*run_revision(current_app.config["MOVERS_DEFAULT_REVISION"],
                                  request.args, current_app.config))


@bp.get("/api/movers/revisions")
def list_revisions():
    return jsonify({"revisions": [
        {"id": r.id, "description": r.description, "defaultLimit": r.default_limit}
        for r in REVISIONS.values()
    ]})


@bp.get("/api/movers/<revision_id>")
def revision_movers(revision_id):
    return _respond(*run_revision(revision_id, request.args, current_app.config))


@bp.get("/health")
def health():
    return jsonify({"status": "ok"})
