"""Tests for project metadata."""

import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_readme_is_user_documentation() -> None:
    with (ROOT / "pyproject.toml").open("rb") as f:
        project = tomllib.load(f)["project"]
    assert project["readme"] == "README.md"
    assert (ROOT / project["readme"]).read_text(encoding="utf-8").startswith("# obsidized")
