"""Tests for native error translation."""

from types import SimpleNamespace

import pytest

from rashader.defaults import default_table
from rashader.errors import ErrorCode, LibrashaderError, check_error
from rashader.types import libra_error_t


class FakeErrorLibrary:
    """Error capabilities of a library holding a single live error object."""

    def __init__(self, code: int, message: bytes = b"", writable: bool = True):
        self.code = code
        self.message = message
        self.writable = writable
        self.freed = []
        self.strings_freed = 0

    def table(self):
        return SimpleNamespace(
            error_errno=self.errno,
            error_write=self.write,
            error_free_string=self.free_string,
            error_free=self.free,
        )

    def errno(self, error):
        return self.code

    def write(self, error, out):
        if not self.writable:
            return 1
        out._obj.value = self.message
        return 0

    def free_string(self, out):
        self.strings_freed += 1
        out._obj.value = None
        return 0

    def free(self, error):
        self.freed.append(error._obj.value)
        error._obj.value = None
        return 0


def test_null_error_returns_silently():
    table = default_table()
    check_error(table, None)
    check_error(table, 0)
    check_error(table, libra_error_t())


def test_default_table_never_raises():
    table = default_table()
    check_error(table, table.preset_create(b"missing.slangp", None))


def test_error_raised_with_code_and_message():
    library = FakeErrorLibrary(ErrorCode.PRESET_ERROR, b"could not parse crt.slangp")

    with pytest.raises(LibrashaderError) as exc_info:
        check_error(library.table(), 0xE770)

    assert exc_info.value.code is ErrorCode.PRESET_ERROR
    assert exc_info.value.message == "could not parse crt.slangp"
    assert "PRESET_ERROR" in str(exc_info.value)


def test_error_object_and_string_are_freed():
    library = FakeErrorLibrary(ErrorCode.RUNTIME_ERROR, b"boom")

    with pytest.raises(LibrashaderError):
        check_error(library.table(), libra_error_t(0xE770))

    assert library.freed == [0xE770]
    assert library.strings_freed == 1


def test_unwritable_message():
    library = FakeErrorLibrary(ErrorCode.REFLECT_ERROR, writable=False)

    with pytest.raises(LibrashaderError) as exc_info:
        check_error(library.table(), 0xE770)

    assert exc_info.value.message == ""
    assert library.strings_freed == 0


def test_unknown_error_code():
    library = FakeErrorLibrary(42, b"new error kind")

    with pytest.raises(LibrashaderError) as exc_info:
        check_error(library.table(), 0xE770)

    assert exc_info.value.code is ErrorCode.UNKNOWN_ERROR
