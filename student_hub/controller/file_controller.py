import logging

import requests
from flask import Blueprint, current_app, jsonify, make_response, redirect, request

from student_hub.utils.cloudinary_helper import (
    FileValidationError,
    filename_from_url,
    guess_content_type,
    is_account_url,
    signed_download_url
)

logger = logging.getLogger(__name__)

file_bp = Blueprint("file", __name__, url_prefix="/api/files")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization"
}


def _with_cors(response):
    for header, value in CORS_HEADERS.items():
        response.headers[header] = value
    return response


def _checked_url():
    """Return (url, None) or (None, error response)."""
    url = request.args.get("url")
    if not url:
        return None, _with_cors(make_response(jsonify({"error": "File URL is required"}), 400))

    if not is_account_url(url, current_app.config["CLOUDINARY_CLOUD_NAME"]):
        logger.warning("Rejected proxy request for foreign URL %s", url)
        return None, _with_cors(make_response(jsonify({"error": "Invalid file URL"}), 403))

    return url, None


@file_bp.route("/view", methods=["GET", "OPTIONS"], provide_automatic_options=False)
def view_file():
    """
    Proxy a stored certificate so the browser can show it inline
    """
    if request.method == "OPTIONS":
        return _with_cors(make_response("", 204))

    url, error = _checked_url()
    if error:
        return error

    try:
        upstream = requests.get(url, timeout=current_app.config["FILE_FETCH_TIMEOUT"])
        upstream.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else 502
        logger.error("Storage returned %s for %s", status, url)
        return _with_cors(make_response(jsonify({
            "error": "Failed to fetch file from storage",
            "details": exc.response.reason if exc.response is not None else str(exc)
        }), status))
    except requests.RequestException as exc:
        logger.error("File proxy error for %s: %s", url, exc)
        return _with_cors(make_response(jsonify({
            "error": "Failed to load file",
            "details": str(exc)
        }), 500))

    filename = filename_from_url(url)
    response = make_response(upstream.content, 200)
    response.headers["Content-Type"] = upstream.headers.get("Content-Type") or guess_content_type(url)
    response.headers["Content-Disposition"] = f'inline; filename="{filename}"'
    response.headers["Cache-Control"] = "public, max-age=31536000"

    logger.info("Proxied %s (%d bytes)", filename, len(upstream.content))
    return _with_cors(response)


@file_bp.route("/download", methods=["GET", "OPTIONS"], provide_automatic_options=False)
def download_file():
    if request.method == "OPTIONS":
        return _with_cors(make_response("", 204))

    url, error = _checked_url()
    if error:
        return error

    try:
        target = signed_download_url(url)
    except FileValidationError as exc:
        return _with_cors(make_response(jsonify({"error": str(exc)}), 400))
    except Exception as exc:
        logger.exception("Could not sign download URL for %s", url)
        return _with_cors(make_response(jsonify({"error": "Failed to prepare download", "details": str(exc)}), 500))

    return _with_cors(redirect(target, code=302))
