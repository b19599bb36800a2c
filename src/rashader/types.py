"""
C data shapes for the librashader interface.

ctypes declarations of the opaque handles, parameter structs and per-runtime
option structs passed through the capability table. These carry no logic;
the loader treats every GPU resource as an opaque value.
"""

from ctypes import (
    CFUNCTYPE,
    POINTER,
    Structure,
    c_bool,
    c_char_p,
    c_float,
    c_int32,
    c_size_t,
    c_uint16,
    c_uint32,
    c_uint64,
    c_void_p,
)

# Only a library reporting exactly this ABI gets its optional capabilities bound
CURRENT_ABI = 1
# Informational only, never gated
CURRENT_API = 0

# LIBRA_ERRNO values
LIBRA_ERRNO_UNKNOWN_ERROR = 0
LIBRA_ERRNO_INVALID_PARAMETER = 1
LIBRA_ERRNO_INVALID_STRING = 2
LIBRA_ERRNO_PRESET_ERROR = 3
LIBRA_ERRNO_PREPROCESS_ERROR = 4
LIBRA_ERRNO_SHADER_PARAMETER_ERROR = 5
LIBRA_ERRNO_REFLECT_ERROR = 6
LIBRA_ERRNO_RUNTIME_ERROR = 7

LIBRA_ERRNO = c_int32
ABI_VERSION = c_size_t
API_VERSION = c_size_t

# Opaque handles
libra_error_t = c_void_p
libra_shader_preset_t = c_void_p
libra_gl_filter_chain_t = c_void_p
libra_vk_filter_chain_t = c_void_p
libra_d3d11_filter_chain_t = c_void_p
libra_d3d12_filter_chain_t = c_void_p

# Graphics API handles, opaque to us
VkFormat = c_int32
VkImage = c_uint64
VkPhysicalDevice = c_void_p
VkInstance = c_void_p
VkDevice = c_void_p
VkCommandBuffer = c_void_p
PFN_vkGetInstanceProcAddr = c_void_p
DXGI_FORMAT = c_int32

# const void *(*)(const char *)
GL_LOADER = CFUNCTYPE(c_void_p, c_char_p)


class PresetParam(Structure):
    """A runtime parameter declared by a shader preset."""
    _fields_ = [
        ('name', c_char_p),
        ('description', c_char_p),
        ('initial', c_float),
        ('minimum', c_float),
        ('maximum', c_float),
        ('step', c_float),
    ]


class PresetParamList(Structure):
    """
    List of preset parameters owned by the native library.

    Must be freed exactly once with preset_free_runtime_params and never
    mutated; `_internal_alloc` in particular belongs to the library.
    """
    _fields_ = [
        ('parameters', POINTER(PresetParam)),
        ('length', c_uint64),
        ('_internal_alloc', c_uint64),
    ]


class Viewport(Structure):
    _fields_ = [
        ('x', c_float),
        ('y', c_float),
        ('width', c_uint32),
        ('height', c_uint32),
    ]


# OpenGL

class FilterChainGLOptions(Structure):
    _fields_ = [
        ('version', API_VERSION),
        ('glsl_version', c_uint16),
        ('use_dsa', c_bool),
        ('force_no_mipmaps', c_bool),
        ('disable_cache', c_bool),
    ]


class SourceImageGL(Structure):
    _fields_ = [
        ('handle', c_uint32),
        ('format', c_uint32),
        ('width', c_uint32),
        ('height', c_uint32),
    ]


class OutputFramebufferGL(Structure):
    _fields_ = [
        ('fbo', c_uint32),
        ('texture', c_uint32),
        ('format', c_uint32),
    ]


class FrameGLOptions(Structure):
    _fields_ = [
        ('version', API_VERSION),
        ('clear_history', c_bool),
        ('frame_direction', c_int32),
    ]


# Vulkan

class DeviceVK(Structure):
    _fields_ = [
        ('physical_device', VkPhysicalDevice),
        ('instance', VkInstance),
        ('device', VkDevice),
        ('entry', PFN_vkGetInstanceProcAddr),
    ]


class FilterChainVKOptions(Structure):
    _fields_ = [
        ('version', c_size_t),
        # Zero means the library default of three
        ('frames_in_flight', c_uint32),
        ('force_no_mipmaps', c_bool),
        ('use_render_pass', c_bool),
        ('disable_cache', c_bool),
    ]


class SourceImageVK(Structure):
    _fields_ = [
        ('handle', VkImage),
        ('format', VkFormat),
        ('width', c_uint32),
        ('height', c_uint32),
    ]


class OutputImageVK(Structure):
    _fields_ = [
        ('handle', VkImage),
        ('format', VkFormat),
    ]


class FrameVKOptions(Structure):
    _fields_ = [
        ('version', c_size_t),
        ('clear_history', c_bool),
        ('frame_direction', c_int32),
    ]


# Direct3D 11

class FilterChainD3D11Options(Structure):
    _fields_ = [
        ('version', API_VERSION),
        ('force_no_mipmaps', c_bool),
        ('disable_cache', c_bool),
    ]


class SourceImageD3D11(Structure):
    _fields_ = [
        ('handle', c_void_p),  # ID3D11ShaderResourceView *
        ('width', c_uint32),
        ('height', c_uint32),
    ]


class FrameD3D11Options(Structure):
    _fields_ = [
        ('version', API_VERSION),
        ('clear_history', c_bool),
        ('frame_direction', c_int32),
    ]


# Direct3D 12

class CPUDescriptorHandle(Structure):
    _fields_ = [('ptr', c_size_t)]


class FilterChainD3D12Options(Structure):
    _fields_ = [
        ('version', API_VERSION),
        ('force_hlsl_pipeline', c_bool),
        ('force_no_mipmaps', c_bool),
        ('disable_cache', c_bool),
    ]


class SourceImageD3D12(Structure):
    _fields_ = [
        ('resource', c_void_p),  # ID3D12Resource *
        ('descriptor', CPUDescriptorHandle),
        ('format', DXGI_FORMAT),
        ('width', c_uint32),
        ('height', c_uint32),
    ]


class OutputImageD3D12(Structure):
    _fields_ = [
        ('descriptor', CPUDescriptorHandle),
        ('format', DXGI_FORMAT),
    ]


class FrameD3D12Options(Structure):
    _fields_ = [
        ('version', API_VERSION),
        ('clear_history', c_bool),
        ('frame_direction', c_int32),
    ]
