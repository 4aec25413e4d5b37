"""Pytest configuration and shared fixtures for the docreflow test suite."""

import os
from typing import Sequence

import pytest

from docreflow.layout import FontRole
from docreflow.options.layout import PageGeometry

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=50)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )
    settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


class OneLineMeasurer:
    """Word-wrap stand-in that never wraps: every string is a single line."""

    def __init__(self):
        self.calls = []

    def __call__(self, text: str, max_width: float, font: FontRole) -> Sequence[str]:
        self.calls.append((text, max_width, font))
        return [text]


class CharWidthMeasurer:
    """Word-wrap stand-in where every character is one unit wide."""

    def __call__(self, text: str, max_width: float, font: FontRole) -> Sequence[str]:
        width = max(int(max_width), 1)
        lines, current = [], ""
        for word in text.split():
            candidate = f"{current} {word}" if current else word
            if len(candidate) <= width or not current:
                current = candidate
            else:
                lines.append(current)
                current = word
        if current:
            lines.append(current)
        return lines


@pytest.fixture
def one_line_measurer() -> OneLineMeasurer:
    return OneLineMeasurer()


@pytest.fixture
def char_width_measurer() -> CharWidthMeasurer:
    return CharWidthMeasurer()


@pytest.fixture
def small_geometry() -> PageGeometry:
    """A page that fits only a handful of lines."""
    return PageGeometry(width=100.0, height=80.0, margin=10.0)


@pytest.fixture(autouse=True)
def _clear_docreflow_env(monkeypatch):
    """Keep DOCREFLOW_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("DOCREFLOW_"):
            monkeypatch.delenv(key, raising=False)
