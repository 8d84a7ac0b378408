"""Big- and little-endian integer packing helpers for fixed-width fields."""

RECOMMENDED_BUFIO_SIZE = 64 * 1024


def _get(data, size, order="big", signed=False):
    if len(data) < size:
        raise IndexError(f"need {size} bytes, got {len(data)}")
    return int.from_bytes(bytes(data[:size]), order, signed=signed)


def _put(buf, value, size, offset, order="big"):
    if offset < 0 or offset + size > len(buf):
        raise IndexError(
            f"cannot write {size} bytes at offset {offset} into {len(buf)} bytes"
        )
    mask = (1 << (8 * size)) - 1
    buf[offset:offset + size] = (value & mask).to_bytes(size, order)


def u8(data):
    """Read an unsigned 8-bit integer."""
    return _get(data, 1)


def u16be(data):
    """Read an unsigned big-endian 16-bit integer."""
    return _get(data, 2)


def i16be(data):
    """Read a signed big-endian 16-bit integer."""
    return _get(data, 2, signed=True)


def i24be(data):
    """Read a signed big-endian 24-bit integer."""
    return _get(data, 3, signed=True)


def u24be(data):
    """Read an unsigned big-endian 24-bit integer."""
    return _get(data, 3)


def i32be(data):
    """Read a signed big-endian 32-bit integer."""
    return _get(data, 4, signed=True)


def u32le(data):
    """Read an unsigned little-endian 32-bit integer."""
    return _get(data, 4, order="little")


def u32be(data):
    """Read an unsigned big-endian 32-bit integer."""
    return _get(data, 4)


def u40be(data):
    """Read an unsigned big-endian 40-bit integer."""
    return _get(data, 5)


def u64be(data):
    """Read an unsigned big-endian 64-bit integer."""
    return _get(data, 8)


def i64be(data):
    """Read a signed big-endian 64-bit integer."""
    return _get(data, 8, signed=True)


def put_u8(buf, value, offset=0):
    """Store the low 8 bits of value at offset."""
    _put(buf, value, 1, offset)


def put_i16be(buf, value, offset=0):
    """Store value as a big-endian 16-bit field at offset."""
    _put(buf, value, 2, offset)


def put_u16be(buf, value, offset=0):
    """Store value as a big-endian 16-bit field at offset."""
    _put(buf, value, 2, offset)


def put_i24be(buf, value, offset=0):
    """Store value as a big-endian 24-bit field at offset."""
    _put(buf, value, 3, offset)


def put_u24be(buf, value, offset=0):
    """Store value as a big-endian 24-bit field at offset."""
    _put(buf, value, 3, offset)


def put_i32be(buf, value, offset=0):
    """Store value as a big-endian 32-bit field at offset."""
    _put(buf, value, 4, offset)


def put_u32be(buf, value, offset=0):
    """Store value as a big-endian 32-bit field at offset."""
    _put(buf, value, 4, offset)


def put_u32le(buf, value, offset=0):
    """Store value as a little-endian 32-bit field at offset."""
    _put(buf, value, 4, offset, order="little")


def put_u40be(buf, value, offset=0):
    """Store value as a big-endian 40-bit field at offset."""
    _put(buf, value, 5, offset)


def put_u48be(buf, value, offset=0):
    """Store value as a big-endian 48-bit field at offset."""
    _put(buf, value, 6, offset)


def put_u64be(buf, value, offset=0):
    """Store value as a big-endian 64-bit field at offset."""
    _put(buf, value, 8, offset)


def put_i64be(buf, value, offset=0):
    """Store value as a big-endian 64-bit field at offset."""
    _put(buf, value, 8, offset)