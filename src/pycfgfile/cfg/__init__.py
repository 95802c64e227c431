# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/13 01:16:53
# @Author : Chloride

from .model import ConfigSection, ConfigMap
from .parser import (
    CommentType,
    LineParser,
    ConfigTextHandler
)
from .yamlio import ConfigYamlHandler, InvalidConfigDocument
