"""
Capability loader.

Builds a CapabilityTable from the librashader shared library:

1. start from the default table
2. open the library; if that fails, return the defaults
3. resolve the bootstrap capabilities (ABI and API version queries)
4. if the reported ABI is not CURRENT_ABI, stop with only those bound
5. resolve every other capability, each one independently
6. mark the table fully loaded

The bootstrap capabilities are resolved before the ABI check and everything
else only after it passes. A library that can't be opened, one that exports
nothing, and one that reports the wrong ABI all end with the same default
optional capabilities.

Nothing in here raises for a missing library, a mismatched ABI or a missing
symbol.
"""

from ctypes import ArgumentError
from typing import Callable, Dict, Iterable, List, Optional

from .capabilities import Capability, CapabilitySet
from .config import LoaderConfig
from .defaults import default_table
from .library import CtypesLibrary, LibraryHandle, default_library_name
from .table import Binding, Bound, CapabilityTable, LoadState
from .types import CURRENT_ABI

# Opens a library by name, returning None on failure
Opener = Callable[[str], Optional[LibraryHandle]]


def _log(verbose: bool, message: str):
    if verbose:
        print(f"rashader: {message}")


def _bind(handle: LibraryHandle, capabilities: Iterable[Capability],
          slots: Dict[str, Binding]) -> List[str]:
    """
    Resolve capabilities against a library handle into slots.

    Returns:
        Names of the capabilities the library does not export. Their slots
        keep whatever they held before.
    """
    missing = []
    for capability in capabilities:
        function = handle.resolve(capability)
        if function is None:
            missing.append(capability.name)
            continue
        slots[capability.name] = Bound(capability, function)
    return missing


def _query_abi(slots: Dict[str, Binding]) -> Optional[int]:
    try:
        return slots['instance_abi_version']()
    except (OSError, ArgumentError, TypeError, ValueError):
        # A query that can't be called is as good as an incompatible library
        return None


def load_instance(library_name: Optional[str] = None, *,
                  capabilities: Optional[CapabilitySet] = None,
                  opener: Optional[Opener] = None,
                  config: Optional[LoaderConfig] = None,
                  verbose: Optional[bool] = None) -> CapabilityTable:
    """
    Load librashader and build a capability table.

    Args:
        library_name: Library to open (default: config.library, then the
            platform's default librashader file name)
        capabilities: Capability set to cover (default: config.capabilities,
            then CapabilitySet())
        opener: Function opening a library by name (default: CtypesLibrary.open)
        config: LoaderConfig supplying defaults for the arguments above
        verbose: Print load diagnostics (default: config.verbose, then False)

    Returns:
        CapabilityTable with every slot populated. Never raises for a
        missing library, an incompatible ABI or missing symbols; check
        table.fully_loaded or table.state to tell the outcomes apart.
    """
    if config is not None:
        library_name = library_name or config.library
        if capabilities is None:
            capabilities = config.capabilities
        if verbose is None:
            verbose = config.verbose
    if capabilities is None:
        capabilities = CapabilitySet()
    opener = opener or CtypesLibrary.open
    verbose = bool(verbose)

    defaults = default_table(capabilities)
    slots: Dict[str, Binding] = {name: defaults[name] for name in defaults}

    name = library_name or default_library_name()
    if name is None:
        _log(verbose, "no librashader library name for this platform, using defaults")
        return CapabilityTable(capabilities, slots, fully_loaded=False,
                               state=LoadState.HANDLE_OPEN_FAILED)

    _log(verbose, f"opening {name}")
    handle = opener(name)
    if handle is None:
        _log(verbose, f"could not open {name}, using defaults")
        return CapabilityTable(capabilities, slots, fully_loaded=False,
                               state=LoadState.HANDLE_OPEN_FAILED)

    for missing in _bind(handle, capabilities.bootstrap, slots):
        _log(verbose, f"{name} does not export {missing}")

    abi = _query_abi(slots)
    if abi != CURRENT_ABI:
        _log(verbose, f"{name} reports ABI version {abi}, expected {CURRENT_ABI}")
        return CapabilityTable(capabilities, slots, fully_loaded=False,
                               state=LoadState.ABI_MISMATCH, library=handle)

    for missing in _bind(handle, capabilities.optional, slots):
        _log(verbose, f"{name} does not export {missing}, using no-op")

    table = CapabilityTable(capabilities, slots, fully_loaded=True,
                            state=LoadState.FULLY_LOADED, library=handle)
    _log(verbose, f"loaded {name}: {table!r}")
    return table
