# Run locally with: pip install -e . && workspace-viewer
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from flask import Blueprint, Flask, Response, current_app, jsonify, request

from . import __version__
from .config import HOST, get_settings
from .errors import ViewerError
from .paths import read_markdown, resolve_markdown_path
from .render import highlight_css, render_markdown
from .tree import build_tree, search_paths


logger = logging.getLogger(__name__)

bp = Blueprint("viewer", __name__)


def _json_error(message: str, status: int = 400, **extra: Any):
    payload: dict[str, Any] = {"error": message}
    payload.update(extra)
    return jsonify(payload), status


def _workspace_root() -> Path:
    return current_app.config["WORKSPACE_ROOT"]


@bp.route("/api/tree", methods=["GET"])
def api_tree():
    root = _workspace_root()
    try:
        tree = build_tree(root, root)
    except Exception as exc:
        logger.exception("Failed to build tree for %s", root)
        return _json_error(str(exc), 500)
    return jsonify(tree)


@bp.route("/api/file", methods=["GET"])
def api_file():
    file_rel = request.args.get("path", "")
    try:
        abs_path = resolve_markdown_path(_workspace_root(), file_rel)
        content = read_markdown(abs_path)
        html = render_markdown(content)
    except ViewerError as exc:
        if exc.status >= 500:
            logger.error("Failed to read %r: %s", file_rel, exc.message)
        else:
            logger.info("Rejected file request %r: %s", file_rel, exc.message)
        return _json_error(exc.message, exc.status)
    except Exception as exc:
        logger.exception("Failed to render %r", file_rel)
        return _json_error(str(exc), 500)
    return jsonify({"path": file_rel, "html": html, "raw": content})


@bp.route("/api/search", methods=["GET"])
def api_search():
    query = request.args.get("q", "")
    try:
        results = search_paths(_workspace_root(), query)
    except Exception as exc:
        logger.exception("Search for %r failed", query)
        return _json_error(str(exc), 500)
    return jsonify(results)


@bp.route("/api/meta", methods=["GET"])
def api_meta():
    return jsonify(
        {
            "workspace_root": str(_workspace_root()),
            "version": __version__,
        }
    )


@bp.route("/api/highlight.css", methods=["GET"])
def api_highlight_css():
    css = highlight_css(current_app.config["PYGMENTS_STYLE"])
    return Response(css, mimetype="text/css")


@bp.route("/health", methods=["GET"])
def healthcheck():
    root = _workspace_root()
    return jsonify(
        {
            "status": "ok",
            "workspace_root": str(root),
            "exists": root.is_dir(),
        }
    )


def create_app(workspace_root: Path | str | None = None) -> Flask:
    """Build the Flask app serving `workspace_root` (defaults to the environment)."""
    settings = get_settings()
    root = Path(workspace_root).resolve() if workspace_root is not None else settings.workspace_root

    app = Flask(__name__, static_folder=None)
    app.config.update(
        WORKSPACE_ROOT=root,
        PYGMENTS_STYLE=settings.pygments_style,
    )
    app.json.sort_keys = False

    app.register_blueprint(bp)
    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    settings = get_settings()
    app = create_app(settings.workspace_root)
    logger.info("Workspace viewer running at http://%s:%s", HOST, settings.port)
    logger.info("Serving markdown files from: %s", settings.workspace_root)
    app.run(host=HOST, port=settings.port, threaded=True)
