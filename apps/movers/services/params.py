"""
Query Builder inputs: turn incoming query-string values into RequestParameters.

Missing or empty values fall back to defaults (logical-OR coercion); there is
no validation beyond that. A `top` that is not an integer becomes the default,
a negative one becomes 0.
"""

from typing import Mapping

from .models import RequestParameters

DEFAULT_ORDER_BY = "30d"
DEFAULT_PAGE = "1"
DEFAULT_TOP = 20


def _to_int(raw, default: int) -> int:
    try:
        return max(0, int(str(raw).strip()))
    except (TypeError, ValueError):
        return default


def parse_request_params(args: Mapping, *, default_limit: int) -> RequestParameters:
    """`args` is request.args (or any mapping of query-string values)."""
    limit = str(args.get("limit") or default_limit)
    order_by = str(args.get("orderBy") or args.get("window") or DEFAULT_ORDER_BY)
    page = str(args.get("page") or DEFAULT_PAGE)
    top = _to_int(args.get("top") or DEFAULT_TOP, DEFAULT_TOP)
    return RequestParameters(limit=limit, order_by=order_by, page=page, top=top)
