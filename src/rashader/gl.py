"""
OpenGL helpers for calling the filter chain capabilities.

- gl_proc_loader(): GL function loader for gl_init_context, using PyOpenGL
- default_mvp(): the orthographic MVP the runtimes use when none is given
- mvp_array(): convert a 4x4 matrix into the `const float *mvp` argument
"""

from ctypes import c_float, c_void_p, cast

import numpy as np

from .types import GL_LOADER


def gl_proc_loader():
    """
    Create a GL function loader backed by PyOpenGL.

    The returned callback must be kept alive for as long as the native
    library may call it, i.e. as long as any GL filter chain exists.

    Returns:
        GL_LOADER ctypes callback
    """
    from OpenGL.platform import PLATFORM

    def load(name: bytes):
        address = PLATFORM.getExtensionProcedure(name)
        if not address:
            return None
        return cast(address, c_void_p).value

    return GL_LOADER(load)


def default_mvp() -> np.ndarray:
    """
    Orthographic projection mapping the unit square onto clip space.

    Returns:
        4x4 float32 matrix (row-major, as numpy stores it)
    """
    return np.array([
        [2.0, 0.0, 0.0, -1.0],
        [0.0, 2.0, 0.0, -1.0],
        [0.0, 0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ], dtype=np.float32)


def mvp_array(matrix: np.ndarray):
    """
    Convert a 4x4 matrix to the 16 column-major floats the runtimes expect.

    Args:
        matrix: 4x4 matrix

    Returns:
        ctypes array of 16 c_float, usable wherever `const float *mvp` is taken
    """
    matrix = np.asarray(matrix, dtype=np.float32)
    if matrix.shape != (4, 4):
        raise ValueError(f"MVP must be a 4x4 matrix, got shape {matrix.shape}")

    values = matrix.flatten(order='F')
    return (c_float * 16)(*values.tolist())
