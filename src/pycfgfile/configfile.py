# -*- encoding: utf-8 -*-
# @File   : configfile.py
# @Time   : 2026/10/14 00:27:03
# @Author : Chloride

"""Reading / writing config files, the high level way.

    ```python
    with ConfigFile('app.cfg', flags=Flags.AUTOSAVE) as cfg:
        cfg.use_section('General')
        cfg.get_or_create('count').set_int(5)
    # written back to app.cfg here.
    ```

Nothing here raises on I/O failures (nor on unknown encodings):
loading and saving just return `False`, and `bool(cfg)` tells
whether the last one went well.
"""

import logging
from enum import IntFlag
from io import TextIOBase
from typing import Any, Iterator, Mapping

from .arrays import join_array_string, split_array_string
from .cfg.model import ConfigMap, ConfigSection, GLOBAL_SECTION
from .cfg.parser import ConfigTextHandler
from .option import Option

__all__ = ['ConfigFile', 'Flags']


class Flags(IntFlag):
    NONE = 0
    WARNINGS = 1  # report options out of range
    ERRORS = 2    # report failures loading / saving files
    AUTOSAVE = 4  # write back to the last loaded file on `close()`
    ALL = 7


class ConfigFile:
    def __init__(
        self,
        filename: str | None = None,
        defaults: Mapping[str, Mapping[str, Any]] | None = None,
        flags: Flags = Flags.NONE,
        encoding: str | None = None
    ) -> None:
        self._options = ConfigMap()
        self._filename = ''
        self._section = GLOBAL_SECTION
        self._flags = Flags(flags)
        self._codec = encoding
        self._io_ok = False

        if defaults:
            self.set_default_options(defaults)
        if filename is not None:
            self.load_from_file(filename)

    # --- loading / saving ---

    def load_from_file(self, filename: str) -> bool:
        """Parse a file over the current options.

        The filename is remembered even on failure,
        so that `write_to_file()` targets it later.
        """
        self._filename = filename
        handler = ConfigTextHandler(
            filename, self._codec, Flags.WARNINGS in self._flags)
        try:
            handler.read_into(self._options)
            # keep a guessed legacy codec, so saving won't convert the file.
            self._codec = handler.encoding
            self._io_ok = True
        except (OSError, LookupError) as e:
            self._io_ok = False
            if self._flags & (Flags.WARNINGS | Flags.ERRORS):
                logging.error(f'Error loading "{filename}"\n  {e}')
        return self._io_ok

    def load_from_string(self, text: str) -> None:
        ConfigTextHandler.loads(
            text, self._options, Flags.WARNINGS in self._flags)

    def write_to_file(self, filename: str | None = None) -> bool:
        """Save to `filename`, or the last loaded file if not given."""
        if not filename:
            filename = self._filename
        if not filename:
            self._io_ok = False
            return False
        try:
            ConfigTextHandler(filename, self._codec).write(self._options)
            self._io_ok = True
        except (OSError, LookupError) as e:
            self._io_ok = False
            if Flags.ERRORS in self._flags:
                logging.error(f'Error saving "{filename}"\n  {e}')
        return self._io_ok

    def write_to_string(self, buf: TextIOBase) -> None:
        """Append the same content `write_to_file()` would save to `buf`."""
        buf.write(self.build_string())

    def build_string(self) -> str:
        return ConfigTextHandler.dumps(self._options)

    def __bool__(self) -> bool:
        return self._io_ok

    @property
    def filename(self) -> str:
        return self._filename

    # --- settings ---

    @property
    def flags(self) -> Flags:
        return self._flags

    def set_flag(self, flag: Flags, state: bool = True) -> None:
        if state:
            self._flags |= flag
        else:
            self._flags &= ~flag

    def set_flags(self, flags: Flags = Flags.NONE) -> None:
        self._flags = Flags(flags)

    # --- options ---

    def get_or_create(self, name: str, section: str | None = None) -> Option:
        """Get an option by reference.

        NOTE: this DOES create the section and the option if missing.
        `section=None` means the current one, see `use_section()`.
        """
        return self._options.get_or_create(name, self._pick(section))

    def option_exists(self, name: str, section: str | None = None) -> bool:
        return self._options.option_exists(name, self._pick(section))

    def set_default_options(
        self, defaults: Mapping[str, Mapping[str, Any]]
    ) -> None:
        self._options.set_defaults(defaults)

    def __iter__(self) -> Iterator[tuple[str, ConfigSection]]:
        return iter(self._options.items())

    @property
    def options(self) -> ConfigMap:
        return self._options

    # --- sections ---

    def use_section(self, section: str = GLOBAL_SECTION) -> None:
        self._section = section

    @property
    def current_section(self) -> str:
        return self._section

    def get_section(self, section: str | None = None) -> ConfigSection:
        """NOTE: creates the section if missing."""
        return self._options.section(self._pick(section))

    def section_exists(self, section: str | None = None) -> bool:
        return self._options.section_exists(self._pick(section))

    def erase_option(self, name: str, section: str | None = None) -> bool:
        return self._options.erase_option(name, self._pick(section))

    def erase_section(self, section: str | None = None) -> bool:
        return self._options.erase_section(self._pick(section))

    def clear(self) -> None:
        """Drop all sections, keeping the filename and current section."""
        self._options.clear()

    def _pick(self, section: str | None) -> str:
        return self._section if section is None else section

    # --- flat array strings ---

    split_array_string = staticmethod(split_array_string)
    join_array_string = staticmethod(join_array_string)

    # --- autosave ---

    def close(self) -> bool:
        """Write back to the last loaded file if `Flags.AUTOSAVE` is set."""
        if Flags.AUTOSAVE in self._flags:
            return self.write_to_file()
        return True

    def __enter__(self) -> 'ConfigFile':
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return '<ConfigFile %r { .sections = %d }>' % (
            self._filename, len(self._options))
