"""Structural parser for JVM class files.

Only the layout is checked: constant pool, header, member tables and attribute
framing. Bytecode is not verified.
"""

import struct
from typing import Any

from class_verifier.class_file_info import ClassFileInfo
from class_verifier.modified_utf8 import decode_modified_utf8

MAGIC = 0xCAFEBABE
MIN_MAJOR_VERSION = 45
DEFAULT_MAX_MAJOR_VERSION = 69

ACC_FINAL = 0x0010
ACC_INTERFACE = 0x0200
ACC_ABSTRACT = 0x0400
ACC_MODULE = 0x8000

TAG_UTF8 = 1
TAG_INTEGER = 3
TAG_FLOAT = 4
TAG_LONG = 5
TAG_DOUBLE = 6
TAG_CLASS = 7
TAG_STRING = 8
TAG_FIELDREF = 9
TAG_METHODREF = 10
TAG_INTERFACE_METHODREF = 11
TAG_NAME_AND_TYPE = 12
TAG_METHOD_HANDLE = 15
TAG_METHOD_TYPE = 16
TAG_DYNAMIC = 17
TAG_INVOKE_DYNAMIC = 18
TAG_MODULE = 19
TAG_PACKAGE = 20

# Lowest major version in which each newer tag is legal
TAG_MIN_MAJOR = {
    TAG_METHOD_HANDLE: 51,
    TAG_METHOD_TYPE: 51,
    TAG_INVOKE_DYNAMIC: 51,
    TAG_MODULE: 53,
    TAG_PACKAGE: 53,
    TAG_DYNAMIC: 55,
}

MAX_REFERENCE_KIND = 9

MEMBER_REF_TAGS = {TAG_FIELDREF, TAG_METHODREF, TAG_INTERFACE_METHODREF}

ConstantPool = list[tuple[int, Any] | None]


class ClassFormatError(ValueError):
    """The bytes are not a structurally valid class file."""


class _Reader:
    """Big-endian cursor over a byte buffer that fails on truncation."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def _unpack(self, fmt: str, size: int) -> int:
        if self.offset + size > len(self.data):
            msg = f"truncated class file at offset {self.offset}"
            raise ClassFormatError(msg)
        (value,) = struct.unpack_from(fmt, self.data, self.offset)
        self.offset += size
        return value

    def u1(self) -> int:
        return self._unpack(">B", 1)

    def u2(self) -> int:
        return self._unpack(">H", 2)

    def u4(self) -> int:
        return self._unpack(">I", 4)

    def take(self, size: int) -> bytes:
        if self.offset + size > len(self.data):
            msg = f"truncated class file at offset {self.offset}"
            raise ClassFormatError(msg)
        chunk = self.data[self.offset : self.offset + size]
        self.offset += size
        return chunk

    def at_end(self) -> bool:
        return self.offset == len(self.data)


def _read_constant_pool(reader: _Reader, major: int) -> ConstantPool:
    """Read the constant pool; index 0 and the slot after each long/double are None."""
    count = reader.u2()
    if count == 0:
        msg = "constant pool count must be at least 1"
        raise ClassFormatError(msg)
    pool: ConstantPool = [None] * count
    index = 1
    while index < count:
        tag = reader.u1()
        if major < TAG_MIN_MAJOR.get(tag, 0):
            msg = f"constant pool tag {tag} at #{index} not allowed in version {major}"
            raise ClassFormatError(msg)
        if tag == TAG_UTF8:
            length = reader.u2()
            try:
                value: Any = decode_modified_utf8(reader.take(length))
            except ValueError as exc:
                msg = f"illegal UTF8 string in constant pool #{index}: {exc}"
                raise ClassFormatError(msg) from exc
        elif tag in (TAG_INTEGER, TAG_FLOAT):
            value = reader.u4()
        elif tag in (TAG_LONG, TAG_DOUBLE):
            value = (reader.u4() << 32) | reader.u4()
        elif tag in (TAG_CLASS, TAG_STRING, TAG_METHOD_TYPE, TAG_MODULE, TAG_PACKAGE):
            value = reader.u2()
        elif tag in MEMBER_REF_TAGS or tag in (
            TAG_NAME_AND_TYPE,
            TAG_DYNAMIC,
            TAG_INVOKE_DYNAMIC,
        ):
            value = (reader.u2(), reader.u2())
        elif tag == TAG_METHOD_HANDLE:
            value = (reader.u1(), reader.u2())
        else:
            msg = f"unknown constant pool tag {tag} at #{index}"
            raise ClassFormatError(msg)

        pool[index] = (tag, value)
        index += 2 if tag in (TAG_LONG, TAG_DOUBLE) else 1
        if index > count:
            msg = "long or double constant overruns the constant pool"
            raise ClassFormatError(msg)
    return pool


def _entry(pool: ConstantPool, index: int, *tags: int) -> Any:
    """Return the value of pool entry index, checking its tag."""
    entry = pool[index] if 0 < index < len(pool) else None
    if entry is None or entry[0] not in tags:
        expected = "/".join(str(t) for t in tags)
        msg = f"invalid constant pool index {index}, expected tag {expected}"
        raise ClassFormatError(msg)
    return entry[1]


def _check_pool_references(pool: ConstantPool) -> None:
    """Check that entries referring to other entries point at the right kinds."""
    for entry in pool:
        if entry is None:
            continue
        tag, value = entry
        if tag in (TAG_CLASS, TAG_STRING, TAG_METHOD_TYPE, TAG_MODULE, TAG_PACKAGE):
            _entry(pool, value, TAG_UTF8)
        elif tag in MEMBER_REF_TAGS:
            _entry(pool, value[0], TAG_CLASS)
            _entry(pool, value[1], TAG_NAME_AND_TYPE)
        elif tag == TAG_NAME_AND_TYPE:
            _entry(pool, value[0], TAG_UTF8)
            _entry(pool, value[1], TAG_UTF8)
        elif tag in (TAG_DYNAMIC, TAG_INVOKE_DYNAMIC):
            _entry(pool, value[1], TAG_NAME_AND_TYPE)
        elif tag == TAG_METHOD_HANDLE:
            kind, ref = value
            if not 1 <= kind <= MAX_REFERENCE_KIND:
                msg = f"invalid method handle kind {kind}"
                raise ClassFormatError(msg)
            _entry(pool, ref, *MEMBER_REF_TAGS)


def _class_name(pool: ConstantPool, index: int) -> str:
    """Return the dotted binary name of the Class entry at index."""
    name_index = _entry(pool, index, TAG_CLASS)
    return str(_entry(pool, name_index, TAG_UTF8)).replace("/", ".")


def _skip_attributes(reader: _Reader, pool: ConstantPool) -> None:
    for _ in range(reader.u2()):
        _entry(pool, reader.u2(), TAG_UTF8)
        reader.take(reader.u4())


def _skip_members(reader: _Reader, pool: ConstantPool) -> int:
    """Skip a field or method table and return its length."""
    count = reader.u2()
    for _ in range(count):
        reader.u2()  # access flags
        _entry(pool, reader.u2(), TAG_UTF8)
        _entry(pool, reader.u2(), TAG_UTF8)
        _skip_attributes(reader, pool)
    return count


def parse_class_file(
    data: bytes, *, max_major_version: int = DEFAULT_MAX_MAJOR_VERSION
) -> ClassFileInfo:
    """Parse a class file, raising ClassFormatError if its structure is invalid."""
    reader = _Reader(data)

    magic = reader.u4()
    if magic != MAGIC:
        msg = f"incompatible magic value 0x{magic:08x}"
        raise ClassFormatError(msg)

    minor = reader.u2()
    major = reader.u2()
    if not MIN_MAJOR_VERSION <= major <= max_major_version:
        msg = f"unsupported class file version {major}.{minor}"
        raise ClassFormatError(msg)

    pool = _read_constant_pool(reader, major)
    _check_pool_references(pool)

    access_flags = reader.u2()
    if access_flags & ACC_INTERFACE and (
        access_flags & ACC_FINAL or not access_flags & ACC_ABSTRACT
    ):
        msg = f"illegal class modifiers 0x{access_flags:04x}"
        raise ClassFormatError(msg)

    this_class = _class_name(pool, reader.u2())

    super_index = reader.u2()
    if super_index == 0:
        if this_class != "java.lang.Object" and not access_flags & ACC_MODULE:
            msg = f"{this_class} has no superclass"
            raise ClassFormatError(msg)
        super_class = None
    else:
        super_class = _class_name(pool, super_index)

    interfaces = tuple(_class_name(pool, reader.u2()) for _ in range(reader.u2()))

    field_count = _skip_members(reader, pool)
    method_count = _skip_members(reader, pool)
    _skip_attributes(reader, pool)

    if not reader.at_end():
        msg = f"extra bytes at the end of class file {this_class}"
        raise ClassFormatError(msg)

    return ClassFileInfo(
        major_version=major,
        minor_version=minor,
        access_flags=access_flags,
        this_class=this_class,
        super_class=super_class,
        interfaces=interfaces,
        field_count=field_count,
        method_count=method_count,
    )
