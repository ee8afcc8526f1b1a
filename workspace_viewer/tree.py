from __future__ import annotations

import os
from itertools import islice
from pathlib import Path
from typing import Any, Iterator

import pyuca

from .paths import MARKDOWN_SUFFIX


EXCLUDED_NAMES = {"node_modules"}
SEARCH_LIMIT = 30

_collator = pyuca.Collator()


def _is_excluded(name: str) -> bool:
    return name.startswith(".") or name in EXCLUDED_NAMES


def _is_markdown(name: str) -> bool:
    return Path(name).suffix == MARKDOWN_SUFFIX


def _name_key(name: str) -> tuple[tuple[int, ...], str]:
    # Unicode collation (DUCET), raw name as a tie-breaker.
    return _collator.sort_key(name), name


def _sorted_entries(current: Path) -> list[os.DirEntry[str]]:
    with os.scandir(current) as it:
        entries = [e for e in it if not _is_excluded(e.name)]
    return sorted(entries, key=lambda e: (not e.is_dir(follow_symlinks=False), _name_key(e.name)))


def build_tree(current: Path, base: Path) -> list[dict[str, Any]]:
    """Build the nested listing of markdown files under `current`.

    Directories without any markdown file beneath them are pruned. Paths are
    relative to `base` and use forward slashes. Filesystem errors propagate.
    """
    entries: list[dict[str, Any]] = []
    for entry in _sorted_entries(current):
        child = Path(entry.path)
        rel = child.relative_to(base).as_posix()
        if entry.is_dir(follow_symlinks=False):
            children = build_tree(child, base)
            if children:
                entries.append({"name": entry.name, "path": rel, "type": "dir", "children": children})
            continue
        if _is_markdown(entry.name):
            entries.append({"name": entry.name, "path": rel, "type": "file"})
    return entries


def iter_markdown_paths(current: Path, base: Path) -> Iterator[str]:
    """Yield root-relative paths of markdown files, depth first, in directory order."""
    with os.scandir(current) as it:
        entries = [e for e in it if not _is_excluded(e.name)]
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from iter_markdown_paths(Path(entry.path), base)
        elif _is_markdown(entry.name):
            yield Path(entry.path).relative_to(base).as_posix()


def search_paths(root: Path, query: str | None, limit: int = SEARCH_LIMIT) -> list[str]:
    needle = (query or "").strip().lower()
    if not needle:
        return []
    matches = (rel for rel in iter_markdown_paths(root, root) if needle in rel.lower())
    return list(islice(matches, limit))
