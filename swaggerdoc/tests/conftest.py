"""Test configuration helpers to ensure package imports work from the repository root."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
REPO_ROOT = ROOT.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def apis_dir() -> Path:
    return FIXTURES / "apis"


@pytest.fixture
def ui_dir() -> Path:
    return FIXTURES / "ui"
