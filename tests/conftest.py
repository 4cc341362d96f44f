"""Shared pytest fixtures for propexpr tests."""

from pathlib import Path

import pytest

from propexpr.core.symbols import PropertyMap


@pytest.fixture
def foo_context() -> PropertyMap:
    """Return a symbol context holding FOO = 2."""
    return PropertyMap({"FOO": 2})


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    """Return path to a propexpr.toml with a few symbols."""
    path = tmp_path / "propexpr.toml"
    path.write_text(
        """
[symbols]
FOO = 2
ratio = 0.5
title = "Scene"
visible = true
origin = [0, 10]

[evaluator]
function_placeholder = "CALL"
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no manifest configured."""
    monkeypatch.delenv("PROPEXPR_MANIFEST", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
