"""Tests for resolving requested files under the workspace root."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from workspace_viewer.errors import BadRequest, Forbidden, Internal, NotFound
from workspace_viewer.paths import read_markdown, resolve_markdown_path

from .conftest import write


@pytest.fixture
def root(tmp_path):
    root = tmp_path / "root"
    write(root / "a" / "b.md")
    write(root / "a" / "c.txt", "x")
    write(tmp_path / "outside.md")
    write(tmp_path / "root-evil" / "x.md")
    return root


def test_resolves_markdown_file(root) -> None:
    assert resolve_markdown_path(root, "a/b.md") == (root / "a" / "b.md").resolve()
    assert resolve_markdown_path(root, "a/../a/./b.md") == (root / "a" / "b.md").resolve()


@pytest.mark.parametrize("rel", ["", None])
def test_missing_path_is_bad_request(root, rel) -> None:
    with pytest.raises(BadRequest, match="path required"):
        resolve_markdown_path(root, rel)


@pytest.mark.parametrize(
    "rel",
    ["../outside.md", "../../etc/passwd", "a/../../outside.md", "../root-evil/x.md"],
)
def test_parent_segments_escaping_root_are_forbidden(root, rel) -> None:
    with pytest.raises(Forbidden):
        resolve_markdown_path(root, rel)


def test_absolute_path_is_forbidden(root) -> None:
    with pytest.raises(Forbidden):
        resolve_markdown_path(root, str(root.parent / "outside.md"))
    with pytest.raises(Forbidden):
        resolve_markdown_path(root, "/etc/passwd")


def test_symlink_escaping_root_is_forbidden(root) -> None:
    os.symlink(root.parent / "outside.md", root / "link.md")
    with pytest.raises(Forbidden):
        resolve_markdown_path(root, "link.md")


def test_nonexistent_file_is_not_found(root) -> None:
    with pytest.raises(NotFound, match="file not found"):
        resolve_markdown_path(root, "a/missing.md")


def test_non_markdown_file_is_bad_request(root) -> None:
    with pytest.raises(BadRequest, match="not a markdown file"):
        resolve_markdown_path(root, "a/c.txt")


def test_directory_is_bad_request(root) -> None:
    (root / "folder.md").mkdir()
    with pytest.raises(BadRequest, match="not a markdown file"):
        resolve_markdown_path(root, "folder.md")
    with pytest.raises(BadRequest):
        resolve_markdown_path(root, ".")


def test_read_markdown_keeps_exact_text(tmp_path) -> None:
    path = tmp_path / "doc.md"
    path.write_bytes("# Title\r\n\ncafé\n".encode("utf-8"))
    assert read_markdown(path) == "# Title\r\n\ncafé\n"


def test_unreadable_location_is_internal(root, monkeypatch) -> None:
    real_stat = Path.stat

    def deny(self, *args, **kwargs):
        if self.name == "b.md":
            raise PermissionError("permission denied")
        return real_stat(self, *args, **kwargs)

    monkeypatch.setattr(Path, "stat", deny)
    with pytest.raises(Internal, match="permission denied"):
        resolve_markdown_path(root, "a/b.md")


def test_read_markdown_replaces_undecodable_bytes(tmp_path) -> None:
    path = tmp_path / "doc.md"
    path.write_bytes(b"# x\n\xff\n")
    assert read_markdown(path) == "# x\n�\n"
