"""Shared fixtures for loading recorded GitHub API responses."""

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture
def failures_response() -> dict:
    return load_fixture("workflow-runs-failures.json")


@pytest.fixture
def empty_response() -> dict:
    return load_fixture("workflow-runs-empty.json")
