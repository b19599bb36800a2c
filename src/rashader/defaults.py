"""
Default capability table.

Every slot is bound to a no-op that honours the capability's contract for
"not available": version queries report 0, create operations clear their
output handle and report no error, everything else reports no error. The
error capabilities behave as if they were handed a null error.
"""

from ctypes import c_void_p
from typing import Callable, Optional

from . import types as t
from .capabilities import (
    NOOP_CREATE,
    NOOP_ERRNO,
    NOOP_ERROR,
    NOOP_STATUS,
    NOOP_VERSION,
    Capability,
    CapabilitySet,
)
from .table import CapabilityTable, Default, LoadState


def clear_handle(out) -> None:
    """
    Set an output handle to NULL.

    Accepts what a caller would pass to the native function: the result of
    ctypes.byref(), a ctypes pointer, or the handle itself. None and NULL
    pointers are ignored.
    """
    if out is None:
        return
    if isinstance(out, c_void_p):
        out.value = None
        return

    # byref() objects expose the referenced instance as _obj
    target = getattr(out, '_obj', None)
    if target is None:
        try:
            target = out.contents
        except (AttributeError, ValueError):
            # Not a pointer, or a NULL pointer
            return
    target.value = None


def _version_noop(*args):
    return 0


def _error_noop(*args):
    return None


def _errno_noop(*args):
    return t.LIBRA_ERRNO_UNKNOWN_ERROR


def _status_noop(*args):
    return 1


def _create_noop(out_index: int) -> Callable:
    def noop(*args):
        if len(args) > out_index:
            clear_handle(args[out_index])
        return None
    return noop


_SIMPLE_NOOPS = {
    NOOP_VERSION: _version_noop,
    NOOP_ERROR: _error_noop,
    NOOP_ERRNO: _errno_noop,
    NOOP_STATUS: _status_noop,
}


def noop_for(capability: Capability) -> Callable:
    """Return the no-op implementation for a capability."""
    if capability.noop == NOOP_CREATE:
        return _create_noop(capability.out_index)
    return _SIMPLE_NOOPS[capability.noop]


def default_table(capabilities: Optional[CapabilitySet] = None) -> CapabilityTable:
    """
    Build a table with every slot bound to its no-op.

    Args:
        capabilities: Capability set to cover (default: CapabilitySet())

    Returns:
        CapabilityTable with fully_loaded False
    """
    if capabilities is None:
        capabilities = CapabilitySet()
    slots = {c.name: Default(c, noop_for(c)) for c in capabilities}
    return CapabilityTable(capabilities, slots, fully_loaded=False, state=LoadState.DEFAULTS)
