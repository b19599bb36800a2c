"""
Capability table.

A CapabilityTable maps every capability of a CapabilitySet to exactly one
binding: either Bound (resolved from the native library) or Default (the
no-op stand-in). Tables are built in one go and cannot be modified, so they
can be shared between threads without locking.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Union

from .capabilities import Capability, CapabilitySet
from .errors import UnknownCapabilityError


class LoadState(Enum):
    """Terminal state the loader reached when building a table."""
    DEFAULTS = 'defaults'                       # built without a load attempt
    HANDLE_OPEN_FAILED = 'handle_open_failed'
    ABI_MISMATCH = 'abi_mismatch'
    FULLY_LOADED = 'fully_loaded'


@dataclass(frozen=True)
class Bound:
    """Slot bound to the native library's implementation."""
    capability: Capability
    function: Callable

    is_default = False

    def __call__(self, *args):
        return self.function(*args)


@dataclass(frozen=True)
class Default:
    """Slot bound to the no-op implementation."""
    capability: Capability
    function: Callable

    is_default = True

    def __call__(self, *args):
        return self.function(*args)


Binding = Union[Bound, Default]


class CapabilityTable:
    """
    Fully populated, immutable table of capabilities.

    Capabilities are called as attributes::

        table = load_instance()
        preset = libra_shader_preset_t()
        err = table.preset_create(b"crt.slangp", byref(preset))

    Attributes:
        fully_loaded: True when the optional capabilities were resolved
            against an ABI-compatible library. Diagnostic only.
        state: LoadState the loader finished in
        capabilities: CapabilitySet this table covers
        library: Library handle the bound slots came from (None if none opened)
    """

    __slots__ = ('_slots', 'capabilities', 'fully_loaded', 'state', 'library')

    def __init__(self, capabilities: CapabilitySet, slots: Mapping[str, Binding],
                 fully_loaded: bool = False, state: LoadState = LoadState.DEFAULTS,
                 library: Optional[Any] = None):
        missing = [name for name in capabilities.names() if name not in slots]
        if missing:
            raise ValueError(f"Capability table is missing slots: {', '.join(missing)}")
        extra = [name for name in slots if name not in capabilities]
        if extra:
            raise ValueError(f"Capability table has unknown slots: {', '.join(extra)}")

        ordered = {name: slots[name] for name in capabilities.names()}
        object.__setattr__(self, '_slots', MappingProxyType(ordered))
        object.__setattr__(self, 'capabilities', capabilities)
        object.__setattr__(self, 'fully_loaded', bool(fully_loaded))
        object.__setattr__(self, 'state', state)
        object.__setattr__(self, 'library', library)

    def __setattr__(self, name, value):
        raise AttributeError("CapabilityTable is immutable")

    def __delattr__(self, name):
        raise AttributeError("CapabilityTable is immutable")

    def __getattr__(self, name: str) -> Binding:
        # Only reached for names that are not regular attributes
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self._slots[name]
        except KeyError:
            raise AttributeError(f"No capability named '{name}'") from None

    def __getitem__(self, name: str) -> Binding:
        try:
            return self._slots[name]
        except KeyError:
            raise UnknownCapabilityError(name) from None

    def __contains__(self, name) -> bool:
        return name in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self):
        bound = sum(1 for b in self._slots.values() if not b.is_default)
        return (f"CapabilityTable(state={self.state.value}, fully_loaded={self.fully_loaded}, "
                f"bound={bound}/{len(self)})")

    def is_bound(self, name: str) -> bool:
        """True if the slot is bound to the native implementation."""
        return not self[name].is_default

    def status(self) -> Dict[str, str]:
        """Map of capability name to 'bound' or 'default'."""
        return {name: ('default' if b.is_default else 'bound')
                for name, b in self._slots.items()}

    def abi_version(self) -> int:
        return self.instance_abi_version()

    def api_version(self) -> int:
        return self.instance_api_version()
