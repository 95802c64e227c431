# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/13 01:12:26
# @Author : Chloride

"""
In-memory config structure: sections of options, both kept in first
insertion order so that writing back is deterministic.

`''` (empty string) names the global section, i.e. the options
before any `[section]` header.
"""

from collections.abc import MutableMapping
from typing import Any, Iterator, Mapping

from ..option import Option

__all__ = ['ConfigSection', 'ConfigMap']

GLOBAL_SECTION = ''


def _to_option(value: Any) -> Option:
    if isinstance(value, Option):
        return value.copy()
    ret = Option()
    if isinstance(value, (list, tuple)):
        for i in value:
            ret.append(_to_option(i))
    else:
        ret.assign(value)
    return ret


class ConfigSection(MutableMapping[str, Option]):
    """... is a dict of options.

    Assigning a non-`Option` value wraps it into a fresh `Option`,
    so `section['key'] = 5` works as expected.
    """
    def __init__(self, pairs_to_import: Mapping[str, Any] | None = None):
        self.__raw: dict[str, Option] = {}
        if pairs_to_import:
            self.update(pairs_to_import)

    def __getitem__(self, key: str) -> Option:
        return self.__raw[key]

    def __setitem__(self, key: str, value: Option | Any) -> None:
        self.__raw[key] = (
            value if isinstance(value, Option) else _to_option(value))

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return repr(self.__raw)

    def get_or_create(self, name: str) -> Option:
        """NOTE: creates an empty option as a side effect if missing."""
        if name not in self.__raw:
            self.__raw[name] = Option()
        return self.__raw[name]

    def set_defaults(self, pairs: Mapping[str, Any]) -> None:
        """Add missing options only, existing ones are kept as is."""
        for k, v in pairs.items():
            if k not in self.__raw:
                self.__raw[k] = _to_option(v)

    def to_dict(self) -> dict[str, Any]:
        return {k: v.to_python() for k, v in self.__raw.items()}


class ConfigMap(MutableMapping[str, ConfigSection]):
    """... is simply a group of `ConfigSection`,
    representing a whole config file.

    Reading with `[]` never creates anything (and raises `KeyError`),
    while `section()` and `get_or_create()` DO create
    the missing section / option.
    """
    def __init__(
        self, defaults: Mapping[str, Mapping[str, Any]] | None = None
    ) -> None:
        self.__raw: dict[str, ConfigSection] = {}
        if defaults:
            self.set_defaults(defaults)

    def __getitem__(self, key: str) -> ConfigSection:
        return self.__raw[key]

    def __setitem__(
        self, key: str, value: ConfigSection | Mapping[str, Any]
    ) -> None:
        # shouldn't keep ptr to external dict.
        self.__raw[key] = ConfigSection(
            {k: _to_option(v) for k, v in value.items()})

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__raw

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return '<ConfigMap { .sections = %d }>' % len(self.__raw)

    def section(self, name: str = GLOBAL_SECTION) -> ConfigSection:
        """Get a section, creating it if missing."""
        if name not in self.__raw:
            self.__raw[name] = ConfigSection()
        return self.__raw[name]

    def get_or_create(
        self, name: str, section: str = GLOBAL_SECTION
    ) -> Option:
        """Get an option by reference, creating the section and
        the (empty) option if either is missing."""
        return self.section(section).get_or_create(name)

    def option_exists(self, name: str, section: str = GLOBAL_SECTION) -> bool:
        return section in self.__raw and name in self.__raw[section]

    def section_exists(self, section: str = GLOBAL_SECTION) -> bool:
        return section in self.__raw

    def erase_option(self, name: str, section: str = GLOBAL_SECTION) -> bool:
        if not self.option_exists(name, section):
            return False
        del self.__raw[section][name]
        return True

    def erase_section(self, section: str = GLOBAL_SECTION) -> bool:
        if section not in self.__raw:
            return False
        del self.__raw[section]
        return True

    def clear(self) -> None:
        self.__raw.clear()

    def set_defaults(
        self, defaults: 'ConfigMap | Mapping[str, Mapping[str, Any]]'
    ) -> None:
        """Merge fallback values in, without overwriting existing options.

        Options are copied, so later changes won't leak back to `defaults`.
        """
        for sect, pairs in defaults.items():
            self.section(sect).set_defaults(pairs)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Plain nested dicts with typed values, e.g. for YAML dumping."""
        return {k: v.to_dict() for k, v in self.__raw.items()}
