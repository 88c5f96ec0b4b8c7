"""Shared test fixtures."""

import os
import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from resgraph import CompilerSettings, GraphSession, ResourceGraphBuilder, TypeTagRegistry
from resgraph.builder import Declarations


@pytest.fixture(autouse=True, scope="session")
def clean_env():
    """Keep RESGRAPH_* variables from the developer's shell out of tests."""
    with pytest.MonkeyPatch.context() as mp:
        for name in list(os.environ):
            if name.startswith("RESGRAPH_"):
                mp.delenv(name)
        yield


@pytest.fixture
def settings():
    """Default compiler settings, independent of any .env file."""
    return CompilerSettings(_env_file=None)


@pytest.fixture
def registry():
    """Fresh TypeTagRegistry."""
    return TypeTagRegistry()


@pytest.fixture
def builder():
    """Fresh builder with its own arena and registry."""
    return ResourceGraphBuilder()


@pytest.fixture
def mcm(builder):
    """Declaration entry points bound to the builder fixture."""
    return Declarations(builder)


@pytest.fixture
def session(settings):
    """Fresh declaration pass."""
    return GraphSession(settings)
