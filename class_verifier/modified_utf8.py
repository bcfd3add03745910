"""Decoder for the modified UTF-8 encoding used by class-file constants."""


def decode_modified_utf8(data: bytes) -> str:
    """Decode modified UTF-8, raising ValueError on malformed input.

    Differs from standard UTF-8: NUL is encoded as two bytes, there are no
    four-byte forms, and supplementary characters appear as surrogate pairs.
    """
    units: list[int] = []
    i = 0
    n = len(data)
    while i < n:
        b = data[i]
        if b == 0 or b >= 0xF0:
            msg = f"illegal byte 0x{b:02x} at offset {i}"
            raise ValueError(msg)
        if b < 0x80:
            units.append(b)
            i += 1
        elif b >> 5 == 0b110:
            if i + 1 >= n or data[i + 1] >> 6 != 0b10:
                msg = f"truncated two-byte sequence at offset {i}"
                raise ValueError(msg)
            units.append(((b & 0x1F) << 6) | (data[i + 1] & 0x3F))
            i += 2
        elif b >> 4 == 0b1110:
            if i + 2 >= n or data[i + 1] >> 6 != 0b10 or data[i + 2] >> 6 != 0b10:
                msg = f"truncated three-byte sequence at offset {i}"
                raise ValueError(msg)
            units.append(
                ((b & 0x0F) << 12) | ((data[i + 1] & 0x3F) << 6) | (data[i + 2] & 0x3F)
            )
            i += 3
        else:
            msg = f"unexpected continuation byte 0x{b:02x} at offset {i}"
            raise ValueError(msg)

    raw = b"".join(u.to_bytes(2, "little") for u in units)
    # Lone surrogates are legal in class files
    return raw.decode("utf-16-le", errors="surrogatepass")
