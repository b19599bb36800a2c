"""
Capability catalog.

Every operation librashader exports is described here once: its name, the
family it belongs to, its C prototype and the kind of no-op that stands in
for it when the library does not provide it. Which runtime families are part
of a build is decided by CapabilitySet, never by the loader.
"""

import platform
from ctypes import POINTER, c_char_p, c_float, c_int32, c_size_t, c_uint32, c_void_p
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from . import types as t
from .errors import ConfigError, UnknownCapabilityError

SYMBOL_PREFIX = 'libra_'

# Groups that are always part of a capability set
CORE_GROUPS = ('core', 'preset', 'error')

# Runtime groups that can be switched on by configuration
RUNTIME_GROUPS = ('opengl', 'vulkan', 'd3d11', 'd3d12')
DEFAULT_RUNTIMES = ('opengl', 'vulkan')
WINDOWS_ONLY_RUNTIMES = ('d3d11', 'd3d12')

# No-op kinds, see rashader.defaults
NOOP_VERSION = 'version'  # returns 0
NOOP_CREATE = 'create'    # clears the output handle, returns no error
NOOP_ERROR = 'error'      # returns no error
NOOP_ERRNO = 'errno'      # returns LIBRA_ERRNO_UNKNOWN_ERROR
NOOP_STATUS = 'status'    # returns 1, the "null error" status


@dataclass(frozen=True)
class Capability:
    """A single named operation with a fixed signature."""

    name: str
    group: str
    restype: object
    argtypes: Tuple[object, ...]
    noop: str = NOOP_ERROR
    # Index of the output handle argument, for NOOP_CREATE
    out_index: Optional[int] = None

    @property
    def symbol(self) -> str:
        """Exported symbol name in the native library."""
        return SYMBOL_PREFIX + self.name

    @property
    def bootstrap(self) -> bool:
        return self.group == 'core'


def _p(ctype):
    return POINTER(ctype)


_CORE = (
    Capability('instance_abi_version', 'core', t.ABI_VERSION, (), NOOP_VERSION),
    Capability('instance_api_version', 'core', t.API_VERSION, (), NOOP_VERSION),
)

_PRESET = (
    Capability('preset_create', 'preset', t.libra_error_t,
               (c_char_p, _p(t.libra_shader_preset_t)), NOOP_CREATE, out_index=1),
    Capability('preset_free', 'preset', t.libra_error_t,
               (_p(t.libra_shader_preset_t),)),
    Capability('preset_set_param', 'preset', t.libra_error_t,
               (_p(t.libra_shader_preset_t), c_char_p, c_float)),
    Capability('preset_get_param', 'preset', t.libra_error_t,
               (_p(t.libra_shader_preset_t), c_char_p, _p(c_float))),
    Capability('preset_print', 'preset', t.libra_error_t,
               (_p(t.libra_shader_preset_t),)),
    Capability('preset_get_runtime_params', 'preset', t.libra_error_t,
               (_p(t.libra_shader_preset_t), _p(t.PresetParamList))),
    Capability('preset_free_runtime_params', 'preset', t.libra_error_t,
               (t.PresetParamList,)),
)

_ERROR = (
    Capability('error_errno', 'error', t.LIBRA_ERRNO, (t.libra_error_t,), NOOP_ERRNO),
    Capability('error_print', 'error', c_int32, (t.libra_error_t,), NOOP_STATUS),
    Capability('error_free', 'error', c_int32, (_p(t.libra_error_t),), NOOP_STATUS),
    Capability('error_write', 'error', c_int32,
               (t.libra_error_t, _p(c_char_p)), NOOP_STATUS),
    Capability('error_free_string', 'error', c_int32, (_p(c_char_p),), NOOP_STATUS),
)


def _filter_chain_group(prefix: str, group: str, chain_t, create_args, deferred_args,
                        frame_args) -> Tuple[Capability, ...]:
    """
    Build the eight filter chain operations shared by every runtime.

    Args:
        prefix: Capability name prefix ('vk', 'd3d11', ...)
        group: Group name the operations belong to
        chain_t: Opaque filter chain handle type
        create_args: Arguments of <prefix>_filter_chain_create
        deferred_args: Arguments of <prefix>_filter_chain_create_deferred, or None
        frame_args: Arguments of <prefix>_filter_chain_frame
    """
    chain = _p(chain_t)
    ops = [
        Capability(f'{prefix}_filter_chain_create', group, t.libra_error_t,
                   create_args, NOOP_CREATE, out_index=len(create_args) - 1),
    ]
    if deferred_args is not None:
        ops.append(Capability(f'{prefix}_filter_chain_create_deferred', group,
                              t.libra_error_t, deferred_args, NOOP_CREATE,
                              out_index=len(deferred_args) - 1))
    ops.extend([
        Capability(f'{prefix}_filter_chain_frame', group, t.libra_error_t, frame_args),
        Capability(f'{prefix}_filter_chain_free', group, t.libra_error_t, (chain,)),
        Capability(f'{prefix}_filter_chain_get_param', group, t.libra_error_t,
                   (chain, c_char_p, _p(c_float))),
        Capability(f'{prefix}_filter_chain_set_param', group, t.libra_error_t,
                   (chain, c_char_p, c_float)),
        Capability(f'{prefix}_filter_chain_get_active_pass_count', group,
                   t.libra_error_t, (chain, _p(c_uint32))),
        Capability(f'{prefix}_filter_chain_set_active_pass_count', group,
                   t.libra_error_t, (chain, c_uint32)),
    ])
    return tuple(ops)


_PRESET_P = _p(t.libra_shader_preset_t)
_MVP = _p(c_float)

_OPENGL = (
    Capability('gl_init_context', 'opengl', t.libra_error_t, (t.GL_LOADER,)),
) + _filter_chain_group(
    'gl', 'opengl', t.libra_gl_filter_chain_t,
    create_args=(_PRESET_P, _p(t.FilterChainGLOptions), _p(t.libra_gl_filter_chain_t)),
    deferred_args=None,
    frame_args=(_p(t.libra_gl_filter_chain_t), c_size_t, t.SourceImageGL, t.Viewport,
                t.OutputFramebufferGL, _MVP, _p(t.FrameGLOptions)),
)

_VULKAN = _filter_chain_group(
    'vk', 'vulkan', t.libra_vk_filter_chain_t,
    create_args=(_PRESET_P, t.DeviceVK, _p(t.FilterChainVKOptions),
                 _p(t.libra_vk_filter_chain_t)),
    deferred_args=(_PRESET_P, t.DeviceVK, t.VkCommandBuffer,
                   _p(t.FilterChainVKOptions), _p(t.libra_vk_filter_chain_t)),
    frame_args=(_p(t.libra_vk_filter_chain_t), t.VkCommandBuffer, c_size_t,
                t.SourceImageVK, t.Viewport, t.OutputImageVK, _MVP,
                _p(t.FrameVKOptions)),
)

_D3D11 = _filter_chain_group(
    'd3d11', 'd3d11', t.libra_d3d11_filter_chain_t,
    create_args=(_PRESET_P, c_void_p, _p(t.FilterChainD3D11Options),
                 _p(t.libra_d3d11_filter_chain_t)),
    deferred_args=(_PRESET_P, c_void_p, c_void_p, _p(t.FilterChainD3D11Options),
                   _p(t.libra_d3d11_filter_chain_t)),
    frame_args=(_p(t.libra_d3d11_filter_chain_t), c_void_p, c_size_t,
                t.SourceImageD3D11, t.Viewport, c_void_p, _MVP,
                _p(t.FrameD3D11Options)),
)

_D3D12 = _filter_chain_group(
    'd3d12', 'd3d12', t.libra_d3d12_filter_chain_t,
    create_args=(_PRESET_P, c_void_p, _p(t.FilterChainD3D12Options),
                 _p(t.libra_d3d12_filter_chain_t)),
    deferred_args=(_PRESET_P, c_void_p, c_void_p, _p(t.FilterChainD3D12Options),
                   _p(t.libra_d3d12_filter_chain_t)),
    frame_args=(_p(t.libra_d3d12_filter_chain_t), c_void_p, c_size_t,
                t.SourceImageD3D12, t.Viewport, t.OutputImageD3D12, _MVP,
                _p(t.FrameD3D12Options)),
)

GROUPS: Dict[str, Tuple[Capability, ...]] = {
    'core': _CORE,
    'preset': _PRESET,
    'error': _ERROR,
    'opengl': _OPENGL,
    'vulkan': _VULKAN,
    'd3d11': _D3D11,
    'd3d12': _D3D12,
}


class CapabilitySet:
    """
    Ordered, immutable set of capabilities included in a build.

    The core, preset and error groups are always present. Direct3D groups are
    dropped on platforms other than Windows.
    """

    def __init__(self, runtimes: Iterable[str] = DEFAULT_RUNTIMES,
                 system: Optional[str] = None):
        """
        Args:
            runtimes: Runtime groups to include ('opengl', 'vulkan', 'd3d11', 'd3d12')
            system: Platform name as returned by platform.system() (default: current)
        """
        system = system or platform.system()
        runtimes = tuple(runtimes)

        for runtime in runtimes:
            if runtime not in RUNTIME_GROUPS:
                raise ConfigError(
                    f"Unknown runtime '{runtime}'. Must be one of: {', '.join(RUNTIME_GROUPS)}"
                )

        groups = list(CORE_GROUPS)
        # Keep catalog order regardless of the order runtimes were listed in
        for runtime in RUNTIME_GROUPS:
            if runtime not in runtimes:
                continue
            if runtime in WINDOWS_ONLY_RUNTIMES and system != 'Windows':
                continue
            groups.append(runtime)

        self.groups: Tuple[str, ...] = tuple(groups)
        self._capabilities: Dict[str, Capability] = {}
        for group in self.groups:
            for capability in GROUPS[group]:
                self._capabilities[capability.name] = capability

    def __iter__(self) -> Iterator[Capability]:
        return iter(self._capabilities.values())

    def __len__(self) -> int:
        return len(self._capabilities)

    def __contains__(self, name) -> bool:
        return name in self._capabilities

    def __getitem__(self, name: str) -> Capability:
        try:
            return self._capabilities[name]
        except KeyError:
            raise UnknownCapabilityError(name) from None

    def __repr__(self):
        return f"CapabilitySet(groups={list(self.groups)}, capabilities={len(self)})"

    def names(self) -> Tuple[str, ...]:
        return tuple(self._capabilities)

    @property
    def bootstrap(self) -> Tuple[Capability, ...]:
        """Capabilities resolved before the ABI check."""
        return tuple(c for c in self if c.bootstrap)

    @property
    def optional(self) -> Tuple[Capability, ...]:
        """Capabilities only resolved once the ABI check passed."""
        return tuple(c for c in self if not c.bootstrap)
