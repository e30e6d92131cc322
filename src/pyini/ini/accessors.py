# -*- encoding: utf-8 -*-
# @File   : accessors.py
# @Time   : 2024/10/12 21:40:18
# @Author : pyini contributors

"""String to typed value conversions for INI entries.

Every getter answers a `(value, ok)` tuple and never raises:
`ok` is `False` when the entry does not exist or does not parse,
and `value` is then the zero value of the requested type.
"""

import math
import struct
from decimal import Decimal
from re import compile as regex

_INT = regex(r'[+-]?[0-9]+')
_UINT = regex(r'[0-9]+')

# the machine-width getters are 64 bit wide.
NATIVE_BITS = 64


def to_bool(value: str) -> tuple[bool, bool]:
    # only the first char counts, so "No", "false", "Yes", "True" all work.
    match value[:1]:
        case '0' | 'f' | 'F' | 'n' | 'N':
            return False, True
        case '1' | 't' | 'T' | 'y' | 'Y' | 'j' | 'J' | 'o' | 'O':
            # True, Yes, Ja (German), Oui (French)
            return True, True
    # empty values fall through here as well.
    return False, False


def to_int(value: str, bits: int = NATIVE_BITS) -> tuple[int, bool]:
    if not _INT.fullmatch(value):
        return 0, False
    try:
        ret = int(value)
    except ValueError:  # more digits than `int()` accepts
        return 0, False
    if not -(1 << (bits - 1)) <= ret < (1 << (bits - 1)):
        return 0, False
    return ret, True


def to_uint(value: str, bits: int = NATIVE_BITS) -> tuple[int, bool]:
    if not _UINT.fullmatch(value):
        return 0, False
    try:
        ret = int(value)
    except ValueError:
        return 0, False
    if ret >= 1 << bits:
        return 0, False
    return ret, True


def to_float(value: str, single: bool = False) -> tuple[float, bool]:
    """Parse a decimal (or exponential) float.

    `NaN` is refused, so is any finite text too large for the target
    width. Spelled out infinities (`inf`, `-Infinity`) are accepted.
    """
    if '_' in value:
        return 0.0, False
    try:
        ret = float(value)
    except ValueError:
        return 0.0, False
    if ret != ret:
        return 0.0, False
    if math.isinf(ret) and 'inf' not in value.lower():
        return 0.0, False
    if single:
        narrowed = struct.unpack('f', struct.pack('f', ret))[0]
        # finite doubles past the float32 range pack to inf.
        if math.isinf(narrowed) and not math.isinf(ret):
            return 0.0, False
        ret = narrowed
    return ret, True


def fmt_bool(value: bool) -> str:
    return 'true' if value else 'false'


def fmt_float(value: float) -> str:
    """Shortest repr in positional notation: `1e-07` -> `0.0000001`."""
    return format(Decimal(repr(float(value))), 'f')


def fmt_int(value: int) -> str:
    return '%d' % value


def fmt_uint(value: int) -> str:
    if value < 0:
        raise ValueError(f'unsigned value expected, got {value}')
    return '%d' % value


class TypedAccess:
    """Mixin for anything that can look up a raw INI string.

    Subclasses implement `_raw()`, answering `None` for missing entries;
    the locating arguments (none, key, or section and key) are passed
    through untouched.
    """

    def _raw(self, *where: str) -> str | None:
        raise NotImplementedError

    def as_bool(self, *where: str) -> tuple[bool, bool]:
        """`0 f F n N` mean `False`, `1 t T y Y j J o O` mean `True`.

        Anything else, the empty string included, is not a boolean.
        """
        if (val := self._raw(*where)) is None:
            return False, False
        return to_bool(val)

    def as_string(self, *where: str) -> tuple[str, bool]:
        if (val := self._raw(*where)) is None:
            return '', False
        return val, True

    def _as_int(self, where: tuple[str, ...], bits: int) -> tuple[int, bool]:
        if (val := self._raw(*where)) is None:
            return 0, False
        return to_int(val, bits)

    def _as_uint(self, where: tuple[str, ...], bits: int) -> tuple[int, bool]:
        if (val := self._raw(*where)) is None:
            return 0, False
        return to_uint(val, bits)

    def _as_float(
        self, where: tuple[str, ...], single: bool
    ) -> tuple[float, bool]:
        if (val := self._raw(*where)) is None:
            return 0.0, False
        return to_float(val, single)

    def as_int(self, *where: str) -> tuple[int, bool]:
        return self._as_int(where, NATIVE_BITS)

    def as_int8(self, *where: str) -> tuple[int, bool]:
        return self._as_int(where, 8)

    def as_int16(self, *where: str) -> tuple[int, bool]:
        return self._as_int(where, 16)

    def as_int32(self, *where: str) -> tuple[int, bool]:
        return self._as_int(where, 32)

    def as_int64(self, *where: str) -> tuple[int, bool]:
        return self._as_int(where, 64)

    def as_uint(self, *where: str) -> tuple[int, bool]:
        return self._as_uint(where, NATIVE_BITS)

    def as_uint8(self, *where: str) -> tuple[int, bool]:
        return self._as_uint(where, 8)

    def as_uint16(self, *where: str) -> tuple[int, bool]:
        return self._as_uint(where, 16)

    def as_uint32(self, *where: str) -> tuple[int, bool]:
        return self._as_uint(where, 32)

    def as_uint64(self, *where: str) -> tuple[int, bool]:
        return self._as_uint(where, 64)

    def as_float32(self, *where: str) -> tuple[float, bool]:
        return self._as_float(where, True)

    def as_float64(self, *where: str) -> tuple[float, bool]:
        return self._as_float(where, False)
