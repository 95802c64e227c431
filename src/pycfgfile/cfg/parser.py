# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/13 01:40:52
# @Author : Chloride

"""Config text reader & writer.

The format looks like:

    ```ini
    global = "outside any section"

    [section]
    key = value
    quoted = 'text'
    trailing = 1  ; NOT a comment, this is part of the value.
    array = {1, 2, "three"}
    // a comment
    # also a comment
    :: and this
    ; and this
    /* block comments,
       may span over lines. */
    ```

Only line-PREFIX comments are recognized, after trimming the line.
Writing does NOT preserve comments, blank lines or formatting.
"""

import logging
from codecs import lookup
from enum import Enum
from io import StringIO, TextIOBase
from typing import Iterable

import chardet

from .model import ConfigMap, GLOBAL_SECTION
from ..abstract import FileHandler
from ..strutil import get_lines, trim_quotes

__all__ = [
    'CommentType', 'get_comment_type', 'strip_comments', 'is_section',
    'LineParser', 'ConfigTextHandler'
]

BLOCK_COMMENT_START = '/*'
BLOCK_COMMENT_END = '*/'
UTF8_BOM = '\ufeff'
# checked in this order against the start of a line.
COMMENT_PREFIXES = (
    (BLOCK_COMMENT_START, 'START'),
    ('//', 'SINGLE'),
    ('#', 'SINGLE'),
    ('::', 'SINGLE'),
    (';', 'SINGLE'),
)


class CommentType(Enum):
    NONE = 0
    SINGLE = 1  # rest of the line
    START = 2   # enters block comment
    END = 3     # leaves block comment


def get_comment_type(line: str, check_end: bool = False) -> CommentType:
    """Classify a (trimmed) line.

    `check_end` should be set while inside a block comment,
    then any line containing `*/` ends it, whatever it starts with.
    """
    if check_end and BLOCK_COMMENT_END in line:
        return CommentType.END

    ret = CommentType.NONE
    for prefix, kind in COMMENT_PREFIXES:
        if line.startswith(prefix):
            ret = CommentType[kind]
            break

    # `/* like this */` on a single line.
    if (not check_end and ret is CommentType.START
            and BLOCK_COMMENT_END in line):
        ret = CommentType.SINGLE
    return ret


def strip_comments(
    line: str, check_end: bool = False
) -> tuple[str, CommentType]:
    kind = get_comment_type(line, check_end)
    return ('' if kind is CommentType.SINGLE else line), kind


def is_section(line: str) -> bool:
    return len(line) >= 2 and line[0] == '[' and line[-1] == ']'


class LineParser:
    """Feeds lines into a `ConfigMap`, one pass, keeping the state of
    block comments and the current section across lines."""

    def __init__(self, cfg_map: ConfigMap, warnings: bool = False) -> None:
        self.cfg_map = cfg_map
        self.warnings = warnings
        self.inside_block_comment = False
        self.current_section = GLOBAL_SECTION

    def feed(self, line: str) -> None:
        line, kind = strip_comments(line.strip(), self.inside_block_comment)

        if kind is CommentType.START:
            self.inside_block_comment = True

        if not self.inside_block_comment and line:
            if is_section(line):
                self.parse_section_line(line)
            else:
                self.parse_option_line(line)

        if kind is CommentType.END:
            self.inside_block_comment = False

    def parse(self, lines: Iterable[str]) -> ConfigMap:
        for i in lines:
            self.feed(i)
        return self.cfg_map

    def parse_section_line(self, line: str) -> None:
        self.current_section = line[1:-1]
        self.cfg_map.section(self.current_section)

    def parse_option_line(self, line: str) -> None:
        # no "=", or nothing before it: just skip.
        if (eq := line.find('=')) < 1:
            return
        name = line[:eq].strip()
        value, quoted = trim_quotes(line[eq + 1:].strip())

        option = self.cfg_map.get_or_create(name, self.current_section)
        accepted = option.set_string(value)
        if quoted:
            option.set_quotes(True)
        if self.warnings and not accepted:
            logging.warning(
                f'Option "{name}" was out of range. '
                f'Using default value: {option.to_string_with_quotes()}')


class ConfigTextHandler(FileHandler[ConfigMap]):
    def __init__(
        self, filename: str,
        encoding: str | None = None,
        warnings: bool = False
    ) -> None:
        super().__init__(filename)
        self._codec = encoding
        self.warnings = warnings

    @property
    def encoding(self) -> str | None:
        """The codec in use, or the one guessed by the last `read()`."""
        return self._codec

    @staticmethod
    def readstream(
        buf: TextIOBase,
        cfg_map: ConfigMap | None = None,
        warnings: bool = False
    ) -> ConfigMap:
        """Read a decoded text stream.

        Lines are parsed into `cfg_map` if given (so defaults seeded there
        get overridden), otherwise into a new `ConfigMap`.
        """
        if cfg_map is None:
            cfg_map = ConfigMap()
        parser = LineParser(cfg_map, warnings)
        while i := buf.readline():
            parser.feed(i.rstrip('\r\n'))
        return cfg_map

    @staticmethod
    def loads(
        text: str,
        cfg_map: ConfigMap | None = None,
        warnings: bool = False
    ) -> ConfigMap:
        if cfg_map is None:
            cfg_map = ConfigMap()
        # utf-8 BOM survives a plain "utf-8" decode.
        text = text.removeprefix(UTF8_BOM)
        return LineParser(cfg_map, warnings).parse(get_lines(text))

    def _decode_file(self) -> str:
        """Decode with a guessed codec, which is kept for writing back."""
        with open(self._fn, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
            self._codec = codec['encoding']
        except UnicodeDecodeError:
            buf = raw.decode('gbk', errors='replace')
            self._codec = 'gbk'
        return buf

    def read_into(self, cfg_map: ConfigMap) -> ConfigMap:
        """Read the file into an existing map.

        CAUTION:
            May raise `OSError`.
        """
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                text = fp.read()
        except UnicodeDecodeError:
            text = self._decode_file()
        return self.loads(text, cfg_map, self.warnings)

    def read(self) -> ConfigMap:
        return self.read_into(ConfigMap())

    @staticmethod
    def dumps(cfg_map: ConfigMap) -> str:
        buf = StringIO()
        for sect, data in cfg_map.items():
            if sect:
                buf.write(f'[{sect}]\n')
            for key, val in data.items():
                buf.write(f'{key} = {val.to_string_with_quotes()}\n')
            buf.write('\n')
        ret = buf.getvalue()
        # strip the extra new line at the end.
        return ret[:-1] if ret.endswith('\n') else ret

    def write(self, instance: ConfigMap) -> None:
        """Save as a config text file, replacing its whole content.

        CAUTION:
            May raise `OSError`, or `LookupError` for an unknown codec.
        """
        codec = self._codec or 'utf-8'
        # `open(..., 'w')` truncates BEFORE checking the codec.
        lookup(codec)
        with open(self._fn, 'w', encoding=codec) as fp:
            fp.write(self.dumps(instance))

    def __str__(self) -> str:
        return "Config file: " + super().__str__() + f"({self._codec})"
