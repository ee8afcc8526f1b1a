from __future__ import annotations

from pathlib import Path

import pytest

from workspace_viewer import create_app


def write(path: Path, text: str = "# doc\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def workspace(tmp_path) -> Path:
    root = tmp_path / "workspace"
    write(root / "a" / "b.md", "```python\nprint(1)\n```\n")
    write(root / "a" / "c.txt", "not markdown")
    write(root / ".hidden" / "d.md")
    write(root / "node_modules" / "e.md")
    return root


@pytest.fixture
def client(workspace):
    app = create_app(workspace)
    app.config["TESTING"] = True
    return app.test_client()
