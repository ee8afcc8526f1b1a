from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent
INSTALL_ROOT = BASE_DIR.parent

DEFAULT_PORT = 3500
HOST = "0.0.0.0"
SITE_DIRS = {"site-packages", "dist-packages"}


@dataclass(frozen=True)
class Settings:
    workspace_root: Path
    port: int
    pygments_style: str


def _is_installed_copy(package_dir: Path) -> bool:
    return any(part in SITE_DIRS for part in package_dir.parts)


def _resolve_workspace_root() -> Path:
    """Resolve the served root, honoring the WORKSPACE_ROOT override.

    Without an override a source checkout serves the directory that holds the
    checkout. An installed copy lives under site-packages, where that would
    point into the interpreter's lib directory, so it serves the current
    working directory instead.
    """
    env = os.environ.get("WORKSPACE_ROOT")
    if env:
        p = Path(env)
        return (p if p.is_absolute() else Path.cwd() / p).resolve()
    if _is_installed_copy(BASE_DIR):
        return Path.cwd().resolve()
    return INSTALL_ROOT.parent.resolve()


def get_settings() -> Settings:
    return Settings(
        workspace_root=_resolve_workspace_root(),
        port=int(os.getenv("PORT", str(DEFAULT_PORT))),
        pygments_style=os.getenv("PYGMENTS_STYLE", "default"),
    )
