"""
Dynamic library handles.

LibraryHandle is the interface the loader resolves capabilities through.
CtypesLibrary implements it with ctypes.CDLL and the platform's default
shared-library search. Failing to open a library is an expected outcome and
is reported as None, never as an exception.
"""

import os
import platform
from abc import ABC, abstractmethod
from ctypes import CDLL
from typing import Callable, Optional

from .capabilities import Capability

# Library file names looked up through the platform's default search path
LIBRARY_NAMES = {
    'Linux': 'librashader.so',
    'Windows': 'librashader.dll',
    'Darwin': 'librashader.dylib',
}


def default_library_name(system: Optional[str] = None) -> Optional[str]:
    """
    Get the librashader file name for a platform.

    Args:
        system: Platform name as returned by platform.system() (default: current)

    Returns:
        Library file name, or None if the platform is not supported
    """
    return LIBRARY_NAMES.get(system or platform.system())


class LibraryHandle(ABC):
    """An opened shared library that capabilities can be resolved against."""

    name: str

    @abstractmethod
    def resolve(self, capability: Capability) -> Optional[Callable]:
        """
        Resolve a capability's exported symbol.

        Args:
            capability: Capability to resolve

        Returns:
            Callable bound to the native symbol, or None if it is not exported
        """
        pass


class CtypesLibrary(LibraryHandle):
    """
    LibraryHandle backed by ctypes.CDLL.

    Resolved functions get the capability's restype and argtypes applied, so
    they can be called with plain Python values and ctypes objects.
    """

    def __init__(self, name: str, dll: CDLL):
        self.name = name
        self.dll = dll

    @classmethod
    def open(cls, name: str) -> Optional['CtypesLibrary']:
        """
        Open a shared library by name.

        Args:
            name: Library file name, searched for the way the platform does

        Returns:
            CtypesLibrary, or None if the library could not be opened
        """
        kwargs = {}
        if hasattr(os, 'RTLD_LAZY'):
            kwargs['mode'] = os.RTLD_LAZY

        try:
            dll = CDLL(name, **kwargs)
        except (OSError, TypeError, ValueError):
            # OSError: not installed or not loadable. TypeError/ValueError:
            # a name dlopen can't take (not a string, embedded NUL)
            return None

        return cls(name, dll)

    def resolve(self, capability: Capability) -> Optional[Callable]:
        try:
            # Indexing returns a fresh function object, unlike attribute access
            function = self.dll[capability.symbol]
        except AttributeError:
            return None

        function.restype = capability.restype
        function.argtypes = list(capability.argtypes)
        return function

    def __repr__(self):
        return f"CtypesLibrary({self.name!r})"
