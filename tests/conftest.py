"""Shared fixtures for building class files on disk."""

import struct
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

ACC_PUBLIC = 0x0001
ACC_SUPER = 0x0020
ACC_INTERFACE_ABSTRACT = 0x0601


def build_class(
    name: str,
    super_name: str | None = "java.lang.Object",
    interfaces: Sequence[str] = (),
    *,
    major: int = 52,
    access: int = ACC_PUBLIC | ACC_SUPER,
    with_method: bool = True,
) -> bytes:
    """Assemble a minimal but well-formed class file."""
    pool: list[bytes] = []

    def utf8(s: str) -> int:
        raw = s.encode("utf-8")
        pool.append(b"\x01" + struct.pack(">H", len(raw)) + raw)
        return len(pool)

    def cls(s: str) -> int:
        name_index = utf8(s.replace(".", "/"))
        pool.append(b"\x07" + struct.pack(">H", name_index))
        return len(pool)

    this_index = cls(name)
    super_index = cls(super_name) if super_name else 0
    interface_indexes = [cls(i) for i in interfaces]

    if with_method:
        init_name = utf8("<init>")
        init_desc = utf8("()V")
        code_name = utf8("Code")
        # max_stack, max_locals, code_length, return, no handlers, no attributes
        code = struct.pack(">HHIBHH", 1, 1, 1, 0xB1, 0, 0)
        methods = struct.pack(
            ">HHHHHHI", 1, ACC_PUBLIC, init_name, init_desc, 1, code_name, len(code)
        )
        methods += code
    else:
        methods = struct.pack(">H", 0)

    out = struct.pack(">IHHH", 0xCAFEBABE, 0, major, len(pool) + 1)
    out += b"".join(pool)
    out += struct.pack(">HHH", access, this_index, super_index)
    out += struct.pack(">H", len(interface_indexes))
    out += b"".join(struct.pack(">H", i) for i in interface_indexes)
    out += struct.pack(">H", 0)  # fields
    out += methods
    out += struct.pack(">H", 0)  # attributes
    return out


def write_artifact(root: Path, name: str, data: bytes) -> Path:
    """Write data at the path a dotted class name maps to under root."""
    path = root.joinpath(*name.split(".")).with_suffix(".class")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def class_bytes() -> Callable[..., bytes]:
    """Return the class file builder."""
    return build_class


@pytest.fixture
def write_class() -> Callable[..., Path]:
    """Return a helper that writes a well-formed class under a root."""

    def _write(root: Path, name: str, *args: object, **kwargs: object) -> Path:
        return write_artifact(root, name, build_class(name, *args, **kwargs))

    return _write


@pytest.fixture
def write_bytes() -> Callable[[Path, str, bytes], Path]:
    """Return a helper that writes arbitrary bytes as a class under a root."""
    return write_artifact
