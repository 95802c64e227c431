# -*- encoding: utf-8 -*-
# @File   : arrays.py
# @Time   : 2026/10/13 00:41:07
# @Author : Chloride

"""Flat array strings, like `{"1", "2", test}` in a single option value.

Pure text transforms: elements are never type-checked.
Note this is NOT what `Option.build_array_string()` emits,
those nested `{\\n\\t...}` blocks won't decode here.
"""

from typing import Iterable

from .strutil import trim_quotes

__all__ = ['split_array_string', 'join_array_string']


def split_array_string(text: str) -> list[str]:
    """Decode `{a, b, c}` into `['a', 'b', 'c']`.

    Outer braces are optional. Each element gets its whitespace
    and one layer of quotes trimmed.
    """
    if len(text) >= 2 and text[0] == '{' and text[-1] == '}':
        text = text[1:-1]
    if not text:
        return []
    return [trim_quotes(i.strip())[0] for i in text.split(',')]


def join_array_string(items: Iterable[str]) -> str:
    return '{' + ','.join(items) + '}'
