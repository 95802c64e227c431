# -*- encoding: utf-8 -*-
# @File   : yamlio.py
# @Time   : 2026/10/14 23:08:19
# @Author : Chloride

"""Export / import a `ConfigMap` as YAML.

    ```yaml
    global_key: 1       # top level scalars -> global section ''
    General:
      name: Alice
      ratio: 0.5
      enabled: true
      sizes: [1, 2, 3]  # -> option array (children)
    ```

Nested mappings inside a section would mean nested sections,
which the text format can't express, so they're rejected.
"""

from typing import Any

import yaml

from .model import ConfigMap, GLOBAL_SECTION
from ..abstract import FileHandler
from ..option import Option

__all__ = ['ConfigYamlHandler', 'InvalidConfigDocument']


class InvalidConfigDocument(Exception):
    """To record errors when reading YAML config documents."""
    pass


class ConfigYamlHandler(FileHandler[ConfigMap]):
    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def __fill(opt: Option, value: Any, where: str) -> None:
        if isinstance(value, dict):
            raise InvalidConfigDocument(
                f'{where}: nested sections are not supported.')
        if isinstance(value, list):
            for i in value:
                ConfigYamlHandler.__fill(opt.append(), i, where)
        elif value is None:
            opt.set_string('')
        elif isinstance(value, (str, int, float)):
            opt.assign(value)  # bool goes within int.
        else:
            # dates and the like, just keep their text.
            opt.set_string(str(value))

    @staticmethod
    def from_dict(
        src: dict[str, Any], cfg_map: ConfigMap | None = None
    ) -> ConfigMap:
        if cfg_map is None:
            cfg_map = ConfigMap()
        for k, v in src.items():
            k = str(k)
            if isinstance(v, dict):
                sect = cfg_map.section(k)
                for name, val in v.items():
                    ConfigYamlHandler.__fill(
                        sect.get_or_create(str(name)), val, f'[{k}] {name}')
            else:
                ConfigYamlHandler.__fill(
                    cfg_map.get_or_create(k, GLOBAL_SECTION), v, k)
        return cfg_map

    @staticmethod
    def to_dict(cfg_map: ConfigMap) -> dict[str, Any]:
        ret = cfg_map.to_dict()
        # lift global options to the top level.
        return ret.pop(GLOBAL_SECTION, {}) | ret

    def read(self) -> ConfigMap:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            src = yaml.safe_load(fp)
        if src is None:
            return ConfigMap()
        if not isinstance(src, dict):
            raise InvalidConfigDocument(
                f'{self._fn}: top level of a config document '
                'should be a mapping.')
        return self.from_dict(src)

    def write(self, instance: ConfigMap) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(
                self.to_dict(instance), fp,
                allow_unicode=True, sort_keys=False)
