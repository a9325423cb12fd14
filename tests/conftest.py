"""Shared pytest fixtures for the aapi test suite.

Provides reusable fixtures for:
- Temporary project directories
- Sample JSON documents (users, products, heterogeneous exports)
- Sample files written to disk for the import command
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary target project for generated files (auto-cleanup)."""
    project_dir = tmp_path / "api-project"
    project_dir.mkdir()
    yield project_dir


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

@pytest.fixture
def user_samples() -> list[dict[str, Any]]:
    """Three users; ``age`` is missing from the last one."""
    return [
        {"username": "a", "age": 1},
        {"username": "b", "age": 2},
        {"username": "c"},
    ]


@pytest.fixture
def product_samples() -> list[dict[str, Any]]:
    """Products exported from MongoDB, covering every inferred kind."""
    return [
        {
            "_id": "65a1f0c2e4b0a1b2c3d4e5f6",
            "__v": 0,
            "name": "Keyboard",
            "price": 49.99,
            "stock": 12,
            "active": True,
            "tags": ["hardware", "input"],
            "releasedAt": "2024-01-15T00:00:00Z",
            "vendor": "507f1f77bcf86cd799439011",
            "dimensions": {"w": 44, "h": 3},
            "notes": None,
        },
        {
            "_id": "65a1f0c2e4b0a1b2c3d4e5f7",
            "__v": 0,
            "name": "Mouse",
            "price": 19.5,
            "stock": 40,
            "active": False,
            "tags": [],
            "releasedAt": "2023-06-01",
            "vendor": "507f1f77bcf86cd799439012",
        },
    ]


@pytest.fixture
def sample_file(tmp_path: Path, user_samples: list[dict[str, Any]]) -> Path:
    """A ``users.json`` file holding :func:`user_samples`."""
    path = tmp_path / "users.json"
    path.write_text(json.dumps(user_samples), encoding="utf-8")
    return path


@pytest.fixture
def write_json(tmp_path: Path):
    """Factory fixture: ``write_json(name, data)`` -> path of a JSON file."""

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
