from flask import request
from werkzeug.exceptions import BadRequest

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def page_args(default_limit=DEFAULT_PAGE_SIZE):
    """(page, limit) from the query string, clamped to sane bounds."""
    page = request.args.get("page", 1, type=int) or 1
    limit = request.args.get("limit", default_limit, type=int) or default_limit
    return max(page, 1), max(1, min(limit, MAX_PAGE_SIZE))


def json_body():
    """JSON body as a dict; a body that is not a JSON object is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def request_payload():
    """JSON body, or the submitted form for multipart requests."""
    if request.is_json:
        return json_body()
    return request.form.to_dict()
