# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/10 01:04:45
# @Author : pyini contributors

"""Reads INI text into an `IniSectionList` and writes it back.

The parser never fails on a malformed *line*; lines that are neither
a `[section]` header nor a `key = value` pair get dropped.
Only I/O errors (`OSError`, undecodable bytes) reach the caller.

Round trips keep sections, keys and values, but not comments or layout.
"""

import logging
from collections.abc import Iterable
from codecs import getincrementalencoder
from io import StringIO, TextIOBase
from re import compile as regex
from typing import Iterator

import chardet

from ..abstract import FileHandler
from .model import DEF_SECTION, IniSectionList

# [section]
_SECTION = regex(r'^\[\s*([^\]]*?)\s*]$')
# key = val
_KEYVAL = regex(r'^([^=]+?)\s*=\s*(.*)$')
# ' " quoted " '
_QUOTED = regex(r'^\s*([\'"])\s*(.*?)\s*([\'"])\s*$')


def remove_quotes(text: str) -> str:
    """Strip one pair of *matching* outer quotes, and the blanks inside.

    `'x'` and `"x"` give `x`, while `"x'` stays as it is.
    """
    ret = text.strip()
    if (m := _QUOTED.match(ret)) is not None and m[1] == m[3]:
        return m[2]
    return ret


class LineReader:
    """Turns raw text lines into logical lines.

    - lines get trimmed, empty and comment (`;`, `#`) lines skipped;
    - a line ending with `\\` continues on the next one; the parts are
    joined by one blank;
    - an empty or comment line ends a pending continuation.

    `nread` counts the bytes consumed so far: each line encoded in
    `codec` (the codec the text was decoded from), plus one terminator.
    """

    def __init__(
        self, buf: TextIOBase | Iterable[str], codec: str = 'utf-8'
    ) -> None:
        self._buf = buf
        self._codec = codec
        self.nread = 0

    def __iter__(self) -> Iterator[str]:
        pending = ''
        # incremental, so a BOM is counted once only.
        encoder = getincrementalencoder(self._codec)('replace')
        for raw in self._buf:
            raw = raw.rstrip('\r\n')
            self.nread += len(encoder.encode(raw)) + 1

            line = raw.strip()
            if not line or line[0] in ';#':
                if pending:
                    yield pending.strip()
                    pending = ''
                continue
            if line[-1] == '\\':
                line = line[:-1]
                pending += line if line.endswith(' ') else line + ' '
                continue
            if pending:
                line, pending = pending + line, ''
            yield line
        # input ended while continuing.
        if pending:
            yield pending.strip()


class IniParser(FileHandler[IniSectionList]):
    def __init__(
        self, filename: str, encoding: str | None = None,
        default_section: str = DEF_SECTION
    ) -> None:
        super().__init__(filename, encoding)
        self._defsect = default_section

    @staticmethod
    def readstream(
        buf: TextIOBase | Iterable[str], ins: IniSectionList | None = None,
        codec: str = 'utf-8'
    ) -> tuple[IniSectionList, int]:
        """Parse a decoded text stream into `ins` (or a new list).

        Answers the list and the number of bytes consumed, counted in
        `codec`.
        Call `self.read()` instead if there is a file to read.
        """
        if ins is None:
            ins = IniSectionList()
        this_sect = ins.default_section
        reader = LineReader(buf, codec)
        for line in reader:
            if (m := _SECTION.match(line)) is not None:
                this_sect = m[1].strip()
            elif (m := _KEYVAL.match(line)) is not None:
                ins.add_section_key(
                    this_sect, m[1].strip(), remove_quotes(m[2]))
            else:
                logging.debug(f'Dropping unrecognised INI line: {line!r}')
        return ins, reader.nread

    @staticmethod
    def _decode_file(filename: str) -> tuple[StringIO, str]:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if not codec['encoding'] or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            return StringIO(raw.decode(codec['encoding'])), codec['encoding']
        except UnicodeDecodeError:
            return StringIO(raw.decode('gbk')), 'gbk'

    def read(self) -> IniSectionList:
        """Read the file this parser was created for."""
        ret = IniSectionList(self._defsect, self._fn)
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                _, self.nread = self.readstream(fp, ret, fp.encoding)
        except UnicodeDecodeError:
            logging.info(f'{self._fn} is not {self._codec or "locale"} '
                         'encoded, guessing.')
            ret.clear()
            buf, codec = self._decode_file(self._fn)
            _, self.nread = self.readstream(buf, ret, codec)
        logging.debug(f'{self.nread} bytes read from {self._fn}.')
        return ret

    def write(self, instance: IniSectionList) -> int:
        """Save `instance` to the file, answering the bytes written.

        Comments of a previously read file are *not* kept.
        """
        data = str(instance).encode(self._codec or 'utf-8')
        with open(self._fn, 'wb') as fp:
            return fp.write(data)

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def load(
    filename: str, encoding: str | None = None,
    default_section: str = DEF_SECTION
) -> IniSectionList:
    """Read `filename`, raising whatever `open()` raises."""
    return IniParser(filename, encoding, default_section).read()


def loads(text: str, default_section: str = DEF_SECTION) -> IniSectionList:
    return IniParser.readstream(
        StringIO(text), IniSectionList(default_section))[0]
