"""Deterministic identifier hashing for reproducible scenario buckets"""

INT32_MIN = -(2**31)
_UINT32_MASK = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    """Truncate to the low 32 bits and reinterpret as two's-complement signed"""
    value &= _UINT32_MASK
    return value - 2**32 if value & 0x80000000 else value


def _utf16_code_units(s: str) -> list[int]:
    raw = s.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(raw[i:i + 2], "little") for i in range(0, len(raw), 2)]


def string_hash(s: str) -> int:
    """
    Rolling polynomial hash (h = h*31 + c) folded to a signed 32-bit integer.

    Iterates UTF-16 code units so characters outside the BMP contribute their
    surrogate pair, and an unpaired surrogate contributes its own code, which
    keeps results identical to other 32-bit implementations of the same hash.

    Example:
        string_hash("abc") == 96354
        string_hash("polygenelubricants") == -2147483648
    """
    h = 0
    for code_unit in _utf16_code_units(s):
        h = _to_int32((h << 5) - h + code_unit)
    return h


def bucket_for(s: str, size: int) -> int:
    """
    Map an identifier onto [0, size).

    abs(INT32_MIN) is taken as the unsigned magnitude 2**31, so every hash
    maps to a valid bucket.
    """
    if size <= 0:
        raise ValueError("bucket count must be positive")
    return abs(string_hash(s)) % size
