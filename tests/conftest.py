"""
Pytest configuration and fixtures for i18n-keysync tests.
"""

import json
import tempfile
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

from keysync.config.settings import Settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """Write a JSON document, creating parent directories."""
    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def read_json() -> Callable[[Path], Any]:
    def _read(path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))
    return _read


@pytest.fixture
def source_dir(temp_dir: Path, write_json) -> Path:
    """Source tree with two translation sources in default language."""
    source = temp_dir / "locales"
    write_json(source / "common.json", {
        "buttons": {"cancel": "Cancel", "save": "Save"},
        "title": "Welcome",
    })
    write_json(source / "pages" / "home.json", {"hero": {"headline": "Hello"}})
    return source


@pytest.fixture
def test_config(temp_dir: Path, source_dir: Path) -> Settings:
    """Create test configuration."""
    return Settings(
        source=source_dir,
        output=temp_dir / "translations",
        languages=["en", "fr"],
        default_language="en",
    )
