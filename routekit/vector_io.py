"""Binary storage of flat numeric sequences.

Values are stored back to back, little-endian, with the fixed size of their
``struct`` type code (``"I"`` 4 bytes, ``"Q"`` 8 bytes, ``"f"`` 4 bytes, ...).
"""

from __future__ import annotations

import os
import struct
from collections.abc import Sequence
from typing import BinaryIO

__all__ = [
    "save_vector",
    "load_vector",
    "save_value",
    "load_value",
    "write_value",
    "read_value",
    "write_vector",
    "read_vector",
]

_TYPECODES = frozenset("bBhHiIlLqQefd?")

PathLike = str | os.PathLike[str]


def _element(typecode: str) -> struct.Struct:
    if not isinstance(typecode, str) or len(typecode) != 1 or typecode not in _TYPECODES:
        raise ValueError(f"unsupported type code {typecode!r}")
    return struct.Struct("<" + typecode)


def _pack(values: Sequence[object], typecode: str) -> bytes:
    _element(typecode)
    try:
        return struct.pack(f"<{len(values)}{typecode}", *values)
    except struct.error as error:
        raise ValueError(str(error)) from error


def _unpack(data: bytes, typecode: str) -> list:
    return [value for (value,) in _element(typecode).iter_unpack(data)]


def save_vector(file_name: PathLike, values: Sequence[object], typecode: str) -> None:
    """Write ``values`` to a file, replacing its content."""
    data = _pack(values, typecode)
    with open(file_name, "wb") as out:
        out.write(data)


def load_vector(file_name: PathLike, typecode: str) -> list:
    """Read a whole file as a sequence of values of the given type."""
    element = _element(typecode)
    with open(file_name, "rb") as f:
        data = f.read()
    if len(data) % element.size:
        raise ValueError(
            f'File "{os.fspath(file_name)}" can not be a vector of the requested type '
            "because its size is no multiple of the element type's size."
        )
    return _unpack(data, typecode)


def save_value(file_name: PathLike, value: object, typecode: str) -> None:
    """Write a single value to a file."""
    save_vector(file_name, [value], typecode)


def load_value(file_name: PathLike, typecode: str) -> object:
    """Read a file that holds exactly one value."""
    values = load_vector(file_name, typecode)
    if not values:
        raise ValueError(f"{os.fspath(file_name)} is empty")
    if len(values) > 1:
        raise ValueError(f"{os.fspath(file_name)} contains more than one element")
    return values[0]


def write_value(out: BinaryIO, value: object, typecode: str) -> None:
    """Write one value to a binary stream."""
    out.write(_pack([value], typecode))


def read_value(stream: BinaryIO, typecode: str) -> object:
    """Read one value from a binary stream; raise EOFError if the stream ends early."""
    element = _element(typecode)
    data = stream.read(element.size)
    if len(data) != element.size:
        raise EOFError("Could not read value from file")
    return element.unpack(data)[0]


def write_vector(out: BinaryIO, values: Sequence[object], typecode: str) -> None:
    """Write ``values`` to a binary stream."""
    out.write(_pack(values, typecode))


def read_vector(stream: BinaryIO, size: int, typecode: str) -> list:
    """Read ``size`` values from a binary stream; raise EOFError if the stream ends early."""
    element = _element(typecode)
    byte_count = element.size * size
    data = stream.read(byte_count)
    if len(data) != byte_count:
        raise EOFError("Could not read vector data")
    return _unpack(data, typecode)