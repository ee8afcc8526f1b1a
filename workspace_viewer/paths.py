from __future__ import annotations

import stat
from pathlib import Path

from .errors import BadRequest, Forbidden, Internal, NotFound


MARKDOWN_SUFFIX = ".md"


def is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def resolve_markdown_path(root: Path, rel: str | None) -> Path:
    """Map a client supplied path onto a markdown file under `root`.

    The check runs on the fully resolved path, so `..` segments, absolute
    paths and symlinks pointing outside the root are all refused.
    """
    if not rel:
        raise BadRequest("path required")

    docs = root.resolve()
    try:
        path = (docs / rel).resolve()
    except ValueError as exc:
        raise BadRequest(f"invalid path: {exc}") from exc
    except (OSError, RuntimeError) as exc:
        raise Internal(str(exc)) from exc
    if not is_within(path, docs):
        raise Forbidden("forbidden")

    try:
        st = path.stat()
    except FileNotFoundError as exc:
        raise NotFound("file not found") from exc
    except OSError as exc:
        raise Internal(str(exc)) from exc
    if not stat.S_ISREG(st.st_mode) or path.suffix != MARKDOWN_SUFFIX:
        raise BadRequest("not a markdown file")
    return path


def read_markdown(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8", errors="replace")
    except FileNotFoundError as exc:
        raise NotFound("file not found") from exc
    except OSError as exc:
        raise Internal(str(exc)) from exc
