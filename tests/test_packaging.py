"""Tests for the installed layout of the client page."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest

PROJECT_ROOT = Path(__file__).parent.parent


def test_client_page_lives_in_static_package():
    import main
    import static

    assert main.STATIC_DIR.resolve() == Path(static.__file__).parent.resolve()
    assert (main.STATIC_DIR / "index.html").is_file()


def test_client_page_declared_as_package_data():
    tomllib = pytest.importorskip("tomllib")

    with open(PROJECT_ROOT / "pyproject.toml", "rb") as f:
        setuptools_config = tomllib.load(f)["tool"]["setuptools"]

    assert "static" in setuptools_config["packages"]
    assert "index.html" in setuptools_config["package-data"]["static"]
