"""
rashader - librashader capability loader
=========================================

Loads the optional librashader shared library at run time and exposes its
functions through a capability table that is always fully populated.
Anything the library doesn't provide (or everything, if it isn't installed
or its ABI doesn't match) falls back to a harmless no-op.

Main entry points:
- load_instance: Load librashader into a CapabilityTable
- default_table: Table with every capability bound to its no-op

Submodules:
- rashader.capabilities: Capability catalog and capability sets
- rashader.types: ctypes declarations of the C interface
- rashader.library: Dynamic library handles (ctypes)
- rashader.config: YAML loader configuration
- rashader.presets: Shader preset helpers
- rashader.gl: OpenGL helpers (PyOpenGL loader, MVP matrices)
"""

from .capabilities import Capability, CapabilitySet
from .config import LoaderConfig, load_config
from .defaults import default_table
from .errors import ConfigError, ErrorCode, LibrashaderError, UnknownCapabilityError, check_error
from .library import CtypesLibrary, LibraryHandle, default_library_name
from .loader import load_instance
from .table import Bound, CapabilityTable, Default, LoadState
from .types import CURRENT_ABI, CURRENT_API

__all__ = [
    'load_instance',
    'default_table',
    'Capability',
    'CapabilitySet',
    'CapabilityTable',
    'Bound',
    'Default',
    'LoadState',
    'LibraryHandle',
    'CtypesLibrary',
    'default_library_name',
    'LoaderConfig',
    'load_config',
    'ErrorCode',
    'LibrashaderError',
    'UnknownCapabilityError',
    'ConfigError',
    'check_error',
    'CURRENT_ABI',
    'CURRENT_API',
]
