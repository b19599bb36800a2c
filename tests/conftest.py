"""
Shared pytest fixtures for rashader tests.

Provides FakeLibrary, an in-memory LibraryHandle whose "exported symbols" are
plain Python callables, so every load outcome can be produced without a real
librashader build.
"""

import sys
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rashader.capabilities import Capability, CapabilitySet
from rashader.library import LibraryHandle
from rashader.types import CURRENT_ABI


# =============================================================================
# Fake library infrastructure
# =============================================================================

class FakeLibrary(LibraryHandle):
    """LibraryHandle that resolves capabilities from a dict of callables."""

    def __init__(self, name: str = "librashader.so",
                 symbols: Optional[Dict[str, Callable]] = None):
        self.name = name
        self.symbols = dict(symbols or {})
        self.resolved = []

    def resolve(self, capability: Capability) -> Optional[Callable]:
        self.resolved.append(capability.name)
        return self.symbols.get(capability.symbol)


def make_native(name: str) -> Callable:
    """Stand-in native function that records its calls and returns a marker."""
    calls = []

    def native(*args):
        calls.append(args)
        return f"native:{name}"

    native.calls = calls
    native.__name__ = f"libra_{name}"
    return native


def full_exports(capabilities: CapabilitySet, abi: int = CURRENT_ABI, api: int = 0,
                 omit: Iterable[str] = ()) -> Dict[str, Callable]:
    """Symbols for a library exporting every capability except `omit`."""
    omit = set(omit)
    symbols = {}
    for capability in capabilities:
        if capability.name in omit:
            continue
        if capability.name == 'instance_abi_version':
            symbols[capability.symbol] = lambda: abi
        elif capability.name == 'instance_api_version':
            symbols[capability.symbol] = lambda: api
        else:
            symbols[capability.symbol] = make_native(capability.name)
    return symbols


class Opener:
    """Opener returning a fixed library (or None) and recording requested names."""

    def __init__(self, library: Optional[LibraryHandle]):
        self.library = library
        self.requested = []

    def __call__(self, name: str) -> Optional[LibraryHandle]:
        self.requested.append(name)
        return self.library


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def capabilities():
    """Capability set with every runtime group, as on Windows."""
    return CapabilitySet(['opengl', 'vulkan', 'd3d11', 'd3d12'], system='Windows')


@pytest.fixture
def missing_opener():
    """Opener for a library that is not installed."""
    return Opener(None)


@pytest.fixture
def full_library(capabilities):
    """Library exporting every capability with a matching ABI."""
    return FakeLibrary(symbols=full_exports(capabilities))


@pytest.fixture
def wrong_abi_library(capabilities):
    """Library exporting every capability but reporting ABI 2."""
    return FakeLibrary(symbols=full_exports(capabilities, abi=2, api=3))


@pytest.fixture
def empty_library():
    """Library that opens but exports nothing."""
    return FakeLibrary(symbols={})
