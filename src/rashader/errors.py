"""
Exception types and error translation.

The loader itself never raises for a missing library, an incompatible ABI or
a missing symbol. These exceptions are for host code: bad configuration,
lookups of capabilities that are not part of a build, and errors returned by
the native library.
"""

from ctypes import byref, c_char_p
from enum import IntEnum

from . import types as t


class ErrorCode(IntEnum):
    """Error codes reported by error_errno."""
    UNKNOWN_ERROR = t.LIBRA_ERRNO_UNKNOWN_ERROR
    INVALID_PARAMETER = t.LIBRA_ERRNO_INVALID_PARAMETER
    INVALID_STRING = t.LIBRA_ERRNO_INVALID_STRING
    PRESET_ERROR = t.LIBRA_ERRNO_PRESET_ERROR
    PREPROCESS_ERROR = t.LIBRA_ERRNO_PREPROCESS_ERROR
    SHADER_PARAMETER_ERROR = t.LIBRA_ERRNO_SHADER_PARAMETER_ERROR
    REFLECT_ERROR = t.LIBRA_ERRNO_REFLECT_ERROR
    RUNTIME_ERROR = t.LIBRA_ERRNO_RUNTIME_ERROR


class LibrashaderError(Exception):
    """An error object returned by a native librashader call."""

    def __init__(self, code: ErrorCode, message: str = ""):
        self.code = code
        self.message = message
        super().__init__(f"{code.name}: {message}" if message else code.name)


class UnknownCapabilityError(KeyError):
    """Lookup of a capability name that is not part of the capability set."""

    def __str__(self):
        return f"Unknown capability: {self.args[0]!r}"


class ConfigError(ValueError):
    """Invalid loader configuration."""


def check_error(table, error) -> None:
    """
    Raise LibrashaderError if a native call returned an error.

    Reads the code and message through the table's error capabilities, then
    frees the error object. A null error (None or 0) returns silently, which
    is also what every default capability returns.

    Args:
        table: CapabilityTable the failing call was made through
        error: libra_error_t returned by the call
    """
    if isinstance(error, t.libra_error_t):
        error = error.value
    if not error:
        return

    raw_code = table.error_errno(error)
    try:
        code = ErrorCode(raw_code)
    except ValueError:
        code = ErrorCode.UNKNOWN_ERROR

    message = ""
    text = c_char_p()
    if table.error_write(error, byref(text)) == 0:
        if text.value is not None:
            message = text.value.decode('utf-8', errors='replace')
        table.error_free_string(byref(text))

    handle = t.libra_error_t(error)
    table.error_free(byref(handle))

    raise LibrashaderError(code, message)
