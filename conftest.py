"""Root conftest.py for the scopekit monorepo.

Puts every package's ``src`` directory on ``sys.path`` so the suite runs from
a plain checkout, registers the custom markers, and marks tests that rely on
mocks or fake transports with ``uses_mock``.
"""

from __future__ import annotations

import ast
import inspect
import sys
import textwrap
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.nodes import Item


PROJECT_ROOT = Path(__file__).parent
for pkg_dir in sorted(PROJECT_ROOT.glob("scopekit-*/src")):
    if str(pkg_dir) not in sys.path:
        sys.path.insert(0, str(pkg_dir))

# Names whose call or use marks a test as mock-based
_MOCK_NAMES = frozenset({
    "MagicMock",
    "Mock",
    "patch",
    "create_autospec",
    "PropertyMock",
    "mocker",
    "FakeTransport",
    "FailingTransport",
    "SlowTransport",
})


def pytest_configure(config: Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "uses_mock: Test uses mocks or fake transports (auto-detected or manually marked)",
    )
    config.addinivalue_line(
        "markers",
        "integration: Integration test requiring a real DSO2C10",
    )


def _source_uses_mock(source: str) -> bool:
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return False
    for node in ast.walk(tree):
        if isinstance(node, ast.Name) and node.id in _MOCK_NAMES:
            return True
        if isinstance(node, ast.Attribute) and node.attr in _MOCK_NAMES:
            return True
        if isinstance(node, ast.arg) and ("mock" in node.arg.lower() or node.arg == "mocker"):
            return True
    return False


def _item_uses_mock(item: Item) -> bool:
    """Check whether a collected test relies on mocking."""
    name = item.name.lower()
    if "mock" in name or "fake" in name:
        return True

    obj = getattr(item, "obj", None)
    if obj is None:
        return False
    try:
        source = inspect.getsource(obj)
    except (OSError, TypeError):
        return False
    return _source_uses_mock(textwrap.dedent(source))


def pytest_collection_modifyitems(config: Config, items: list[Item]) -> None:
    """Auto-mark tests that use mocking."""
    for item in items:
        if item.get_closest_marker("uses_mock") is None and _item_uses_mock(item):
            item.add_marker(pytest.mark.uses_mock)


def pytest_report_header(config: Config) -> list[str]:
    """Add suite and coverage info to the pytest header."""
    lines = ["scopekit monorepo test suite"]
    if getattr(config.option, "cov_source", None):
        lines.append("Coverage: enabled with mock detection")
    return lines
