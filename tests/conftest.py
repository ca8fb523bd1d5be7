"""Shared test fixtures for termwalk.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest

from termwalk.terms import TermRegistry


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "termwalk"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def registry() -> TermRegistry:
    """Return a fresh registry with the built-in adapters only.

    Tests that register their own adapters use this instead of the
    process-wide ``default_registry`` so registrations do not leak.
    """
    return TermRegistry("test")
