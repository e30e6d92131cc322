# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : pyini contributors

"""
Basically a flat INI structure:
named sections, each an ordered list of unique string key-value pairs.

Pairs found before any `[section]` header, or added with an empty
section name, live in the *default section* (`DEF_SECTION` unless told
otherwise). The empty name is never stored as is.
"""

from collections.abc import Iterable, MutableMapping
from dataclasses import dataclass
from threading import RLock
from typing import Callable, Iterator, Mapping, Protocol
from warnings import warn

from .accessors import (
    TypedAccess,
    fmt_bool,
    fmt_float,
    fmt_int,
    fmt_uint
)

DEF_SECTION = 'Default'


class SectionOrderError(Exception):
    """The section map and the section order list went out of sync.

    This is a bug in `IniSectionList`, not a problem with the INI data.
    """
    pass


class SectionWalker(Protocol):
    def walk(self, key: str, value: str) -> None: ...


class IniWalker(Protocol):
    def walk(self, section: str, key: str, value: str) -> None: ...


def render_value(value: str) -> str:
    """Quote `value` if reading it back would alter it.

    That is: an outer pair of matching quotes (which the parser strips),
    or a trailing backslash (which the parser takes as continuation).
    """
    if value.endswith('\\') or (
        len(value) > 1 and value[0] == value[-1] and value[0] in '\'"'
    ):
        quote = "'" if value[0] == '"' else '"'
        return f'{quote}{value}{quote}'
    return value


@dataclass
class IniKeyVal(TypedAccess):
    key: str
    value: str = ''

    def _raw(self, *where: str) -> str | None:
        return self.value

    def update_value(self, value: str) -> bool:
        # an empty value is still a value.
        self.value = value.strip()
        return True

    def __str__(self) -> str:
        if not self.value:
            return f'{self.key} ='
        return f'{self.key} = {render_value(self.value)}'


class IniSection(TypedAccess, MutableMapping[str, str]):
    """One INI section: `str: str` pairs kept in insertion order.

    Keys and values are whitespace-trimmed when stored.
    The `add_*`, `update_*` and `remove_*` methods report success
    as `bool` and do not raise; plain `dict` access keeps raising
    `KeyError` as usual.
    """

    def __init__(
        self,
        pairs: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        *, lock: 'RLock | None' = None
    ) -> None:
        # sections owned by an `IniSectionList` share its lock.
        self._lock = RLock() if lock is None else lock
        self.__raw: dict[str, str] = {}
        if pairs:
            self.update(pairs)

    def __getitem__(self, key: str) -> str:
        with self._lock:
            return self.__raw[key.strip()]

    def __setitem__(self, key: str, value: str) -> None:
        if not self.add_key(key, value):
            raise ValueError('INI keys must not be empty.')

    def __delitem__(self, key: str) -> None:
        with self._lock:
            del self.__raw[key.strip()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has_key(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self.__raw))

    def __str__(self) -> str:
        return ''.join(f'{i}\n' for i in self.key_vals())

    def __repr__(self) -> str:
        return f'IniSection({self.__raw!r})'

    def _raw(self, *where: str) -> str | None:
        key, = where
        with self._lock:
            return self.__raw.get(key.strip())

    def _pairs(self) -> list[tuple[str, str]]:
        with self._lock:
            return list(self.__raw.items())

    def add_key(self, key: str, value: str) -> bool:
        """Insert or update `key`. Only an empty key is refused."""
        if not (key := key.strip()):
            return False
        with self._lock:
            self.__raw[key] = value.strip()
        return True

    def update_key(self, key: str, value: str) -> bool:
        return self.add_key(key, value)

    def update_key_bool(self, key: str, value: bool) -> bool:
        return self.add_key(key, fmt_bool(value))

    def update_key_float(self, key: str, value: float) -> bool:
        return self.add_key(key, fmt_float(value))

    def update_key_int(self, key: str, value: int) -> bool:
        return self.add_key(key, fmt_int(value))

    def update_key_uint(self, key: str, value: int) -> bool:
        return self.add_key(key, fmt_uint(value))

    def update_key_str(self, key: str, value: str) -> bool:
        return self.add_key(key, value)

    def has_key(self, key: str) -> bool:
        if not (key := key.strip()):
            return False
        with self._lock:
            return key in self.__raw

    def remove_key(self, key: str) -> bool:
        # a missing key counts as removed.
        with self._lock:
            self.__raw.pop(key.strip(), None)
        return True

    def key_vals(self) -> list[IniKeyVal]:
        """Detached copies of all pairs, in section order."""
        return [IniKeyVal(k, v) for k, v in self._pairs()]

    def sort(self) -> 'IniSection':
        """Reorder the pairs by key."""
        with self._lock:
            self.__raw = dict(sorted(self.__raw.items()))
        return self

    def clear(self) -> 'IniSection':
        with self._lock:
            self.__raw = {}
        return self

    def copy(self) -> 'IniSection':
        return IniSection(self._pairs())

    def merge(self, other: 'IniSection | None') -> 'IniSection':
        """Add the pairs of `other`, overwriting the keys both share."""
        if other is None:
            return self
        pairs = other._pairs()
        with self._lock:
            for k, v in pairs:
                self.add_key(k, v)
        return self

    def compare_to(self, other: 'IniSection | None') -> bool:
        """Same pairs, regardless of their order."""
        if other is None:
            return False
        return dict(self._pairs()) == dict(other._pairs())

    def walk(self, func: Callable[[str, str], None]) -> None:
        for k, v in self._pairs():
            func(k, v)

    def walker(self, walker: SectionWalker) -> None:
        self.walk(walker.walk)


class IniSectionList(TypedAccess, MutableMapping[str, IniSection]):
    """INI document. Supports the following form:

        ```ini
        ; whole-line comments only, `#` works as well.
        key = val

        [section]
        key233 = val666
        long = first half \\
            second half
        quoted = "outer quotes get stripped"
        ```

    `key = val` above lands in the default section.

    The order sections were first added in is kept in `sec_order`,
    which also drives iteration and serialization.
    """

    def __init__(
        self, default_section: str = DEF_SECTION, filename: str = ''
    ) -> None:
        self._lock = RLock()
        self.__defsect = default_section or DEF_SECTION
        self.__fn = filename.strip()
        self.__raw: dict[str, IniSection] = {}
        self.__order: list[str] = []

    def _name(self, section: str) -> str:
        return section if section else self.__defsect

    @property
    def default_section(self) -> str:
        return self.__defsect

    @property
    def filename(self) -> str:
        return self.__fn

    def set_filename(self, filename: str) -> 'IniSectionList':
        self.__fn = filename.strip()
        return self

    @property
    def sec_order(self) -> list[str]:
        """A copy, see `sections()`."""
        return self.sections()[0]

    def __getitem__(self, section: str) -> IniSection:
        with self._lock:
            return self.__raw[self._name(section)]

    def __setitem__(
        self, section: str, value: IniSection | Mapping[str, str]
    ) -> None:
        section = self._name(section)
        # never keep a ref to external dicts, nor to another list's lock.
        data = IniSection(
            value._pairs() if isinstance(value, IniSection) else value,
            lock=self._lock)
        with self._lock:
            if section in self.__raw:
                warn(f'[{section}] already exists and gets replaced.')
            else:
                self.__order.append(section)
            self.__raw[section] = data

    def __delitem__(self, section: str) -> None:
        with self._lock:
            if (section := self._name(section)) not in self.__raw:
                raise KeyError(section)
            self.__drop(section)

    def __contains__(self, section: object) -> bool:
        return isinstance(section, str) and self.has_section(section)

    def __len__(self) -> int:
        with self._lock:
            return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.sections()[0])

    def __str__(self) -> str:
        with self._lock:
            return ''.join(
                f'\n[{i}]\n{self.__raw[i]}' for i in self.__order)

    def __repr__(self) -> str:
        return '<IniSectionList %r { .cnt = %d }>' % (self.__fn, len(self))

    def __drop(self, section: str) -> None:
        """Remove map entry and order slot together, or neither."""
        try:
            idx = self.__order.index(section)
        except ValueError:
            raise SectionOrderError(
                f'[{section}] is stored but missing in the section order.'
            ) from None
        if section not in self.__raw:
            raise SectionOrderError(
                f'[{section}] is ordered but not stored.')
        del self.__order[idx]
        del self.__raw[section]

    def _raw(self, *where: str) -> str | None:
        section, key = where
        with self._lock:
            if (sect := self.__raw.get(self._name(section))) is None:
                return None
            return sect._raw(key)

    def _pairs(self) -> list[tuple[str, str, str]]:
        with self._lock:
            return [
                (name, k, v)
                for name in self.__order
                for k, v in self.__raw[name]._pairs()
            ]

    def add_section_key(self, section: str, key: str, value: str) -> bool:
        """Add (or update) `key` in `section`, creating the section on demand.

        Fails only if `key` is empty, in which case nothing is created.
        """
        if not key.strip():
            return False
        section = self._name(section)
        with self._lock:
            if section not in self.__raw:
                self.__raw[section] = IniSection(lock=self._lock)
                self.__order.append(section)
            return self.__raw[section].add_key(key, value)

    def get_section(self, section: str) -> IniSection:
        """The live section, or a new empty (unattached) one."""
        with self._lock:
            ret = self.__raw.get(self._name(section))
        return IniSection() if ret is None else ret

    def has_section(self, section: str) -> bool:
        with self._lock:
            return self._name(section) in self.__raw

    def has_section_key(self, section: str, key: str) -> bool:
        if not key.strip():
            return False
        with self._lock:
            if (sect := self.__raw.get(self._name(section))) is None:
                return False
            return sect.has_key(key)

    def remove_section(self, section: str) -> bool:
        """Delete `section`. Removing a missing section succeeds, too."""
        section = self._name(section)
        with self._lock:
            if section in self.__raw or section in self.__order:
                self.__drop(section)
        return True

    def remove_section_key(self, section: str, key: str) -> bool:
        with self._lock:
            if (sect := self.__raw.get(self._name(section))) is None:
                return True
            return sect.remove_key(key)

    def _update_sect_key(self, section: str, key: str, value: str) -> bool:
        return self.add_section_key(section, key, value)

    def update_sect_key_bool(
        self, section: str, key: str, value: bool
    ) -> bool:
        return self._update_sect_key(section, key, fmt_bool(value))

    def update_sect_key_float(
        self, section: str, key: str, value: float
    ) -> bool:
        return self._update_sect_key(section, key, fmt_float(value))

    def update_sect_key_int(self, section: str, key: str, value: int) -> bool:
        return self._update_sect_key(section, key, fmt_int(value))

    def update_sect_key_uint(
        self, section: str, key: str, value: int
    ) -> bool:
        return self._update_sect_key(section, key, fmt_uint(value))

    def update_sect_key_str(self, section: str, key: str, value: str) -> bool:
        return self._update_sect_key(section, key, value)

    def sections(self) -> tuple[list[str], int]:
        """Section names in order, and how many there are.

        The list is a copy; changing it does not touch this instance.
        """
        with self._lock:
            ret = self.__order.copy()
        return ret, len(ret)

    def merge(self, other: 'IniSectionList | None') -> 'IniSectionList':
        """Copy every pair of `other` into this list.

        Shared keys take the value of `other`, sections and keys only
        `other` has are added.
        """
        if other is None:
            return self
        pairs = other._pairs()
        with self._lock:
            for section, k, v in pairs:
                self.add_section_key(section, k, v)
        return self

    def compare_to(self, other: 'IniSectionList | None') -> bool:
        """Same sections holding the same pairs, order aside."""
        if other is None:
            return False
        mine, theirs = self._pairs(), other._pairs()
        return (
            set(self.sections()[0]) == set(other.sections()[0])
            and set(mine) == set(theirs)
        )

    def sort(self) -> 'IniSectionList':
        """Sort the pairs of each section by key; `sec_order` stays."""
        with self._lock:
            for i in self.__raw.values():
                i.sort()
        return self

    def clear(self) -> 'IniSectionList':
        """Drop all sections. Default section name and filename stay."""
        with self._lock:
            for i in self.__raw.values():
                i.clear()
            self.__raw = {}
            self.__order = []
        return self

    def walk(self, func: Callable[[str, str, str], None]) -> None:
        for section, k, v in self._pairs():
            func(section, k, v)

    def walker(self, walker: IniWalker) -> None:
        self.walk(walker.walk)

    def store(self, filename: str | None = None) -> int:
        """Write to `filename` (or `self.filename`); answers bytes written.

        `OSError`s are not handled here.
        """
        from .parser import IniParser  # parser imports this module
        return IniParser(filename or self.__fn).write(self)
