"""Global pytest fixtures and default marks for ESCAPER."""

from __future__ import annotations

from pathlib import Path

import pytest

from escaper import Escaper

# pylint: disable=unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()

# Top-level test folder -> mark applied to every item collected below it.
FOLDER_MARKERS = {"unit": "unit", "e2e": "e2e"}

ESCAPER_ENVVARS = (
    "ESCAPER_ENCODING",
    "ESCAPER_LOG_PATH",
    "ESCAPER_LOGGER_LEVEL",
    "ESCAPER_FLIGHT_RECORDER",
    "ESCAPER_FORCE_FLUSH_FLIGHT_RECORDER",
    "ESCAPER_FLIGHT_RECORDER_CAPACITY",
)


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark items with the name of the test folder they live in."""
    for item in items:
        try:
            folder = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        marker_name = FOLDER_MARKERS.get(folder)
        if marker_name is None:
            continue
        if not any(marker.name == marker_name for marker in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, marker_name))


@pytest.fixture
def escaper() -> Escaper:
    """A UTF-8 escaper, constructed the way most callers will."""
    return Escaper("UTF-8")


@pytest.fixture(autouse=True)
def _clean_escaper_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's ESCAPER_* environment from leaking into tests."""
    for name in ESCAPER_ENVVARS:
        monkeypatch.delenv(name, raising=False)
