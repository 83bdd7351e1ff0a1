"""Pytest configuration and shared fixtures."""

import pytest

# The chronoface testing plugin is registered via a ``pytest11`` entry
# point (pyproject.toml) for external consumers.  In our own test
# suite we disable it (``-p no:chronoface``) and load it explicitly
# here instead, so the chronoface import chain happens after
# ``pytest-cov`` has started tracing.
pytest_plugins = ["chronoface.testing._plugin"]


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (full app lifecycle)"
    )
