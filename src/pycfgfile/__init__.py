# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/12 20:01:52
# @Author : Chloride

import logging

from .option import Option, RangeType, ValueKind, make_option
from .arrays import split_array_string, join_array_string
from .cfg import (
    ConfigSection, ConfigMap, ConfigTextHandler,
    ConfigYamlHandler, InvalidConfigDocument
)
from .configfile import ConfigFile, Flags

__all__ = [
    'Option', 'RangeType', 'ValueKind', 'make_option',
    'split_array_string', 'join_array_string',
    'ConfigSection', 'ConfigMap', 'ConfigTextHandler',
    'ConfigYamlHandler', 'InvalidConfigDocument',
    'ConfigFile', 'Flags'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
