"""
Shader preset helpers built on the capability table.

Thin wrappers that turn returned error objects into LibrashaderError and
native parameter lists into Python objects. On a table where the preset
capabilities are defaults they return empty results instead of failing.
"""

import os
from ctypes import byref
from dataclasses import dataclass
from typing import List, Union

from .errors import check_error
from .types import PresetParamList, libra_shader_preset_t


@dataclass
class PresetParameter:
    """A runtime parameter declared by a shader preset."""
    name: str
    description: str
    initial: float
    minimum: float
    maximum: float
    step: float

    @classmethod
    def from_struct(cls, param) -> 'PresetParameter':
        return cls(
            name=(param.name or b"").decode('utf-8', errors='replace'),
            description=(param.description or b"").decode('utf-8', errors='replace'),
            initial=param.initial,
            minimum=param.minimum,
            maximum=param.maximum,
            step=param.step,
        )


def create_preset(table, path: Union[str, os.PathLike]) -> libra_shader_preset_t:
    """
    Load a shader preset from a file.

    Args:
        table: CapabilityTable to call through
        path: Path to the preset file

    Returns:
        Preset handle. Its value is None when preset_create is a default.

    Raises:
        LibrashaderError: The native library failed to load the preset
    """
    preset = libra_shader_preset_t()
    check_error(table, table.preset_create(os.fsencode(path), byref(preset)))
    return preset


def runtime_params(table, preset: libra_shader_preset_t) -> List[PresetParameter]:
    """
    Get the runtime parameters declared by a preset.

    The native parameter list is copied and freed before returning.

    Args:
        table: CapabilityTable to call through
        preset: Preset handle from create_preset

    Returns:
        List of PresetParameter (empty if the capability is a default)
    """
    params = PresetParamList()
    check_error(table, table.preset_get_runtime_params(byref(preset), byref(params)))
    try:
        result = [PresetParameter.from_struct(params.parameters[i])
                  for i in range(params.length)]
    finally:
        check_error(table, table.preset_free_runtime_params(params))
    return result
