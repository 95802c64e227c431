# -*- encoding: utf-8 -*-
# @File   : option.py
# @Time   : 2026/10/12 22:15:40
# @Author : Chloride

"""A config option, keeping string / int / float / bool views at once.

Every successful assignment computes all of those views in one go,
so the `to_*()` getters are plain reads and never re-parse anything.

An option may also carry an array of child options (see `append()`).
That array is NOT synchronized with the option's own value,
they're two independent facets of one cell.
"""

import math
from enum import Enum
from re import compile as regex
from typing import Iterator, Optional, TypeVar, Union

from .strutil import is_bool, str_to_bool

__all__ = ['Option', 'RangeType', 'ValueKind', 'make_option']

# what `istream >> double` accepts, but the WHOLE string must match.
_NUMBER = regex(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_INTEGER = regex(r'[+-]?\d+')

Scalar = Union[str, int, float, bool]

N = TypeVar('N')


class RangeType(int, Enum):
    NONE = 0
    MIN = 1
    MIN_MAX = 2


class ValueKind(int, Enum):
    """How the last successful assignment got interpreted."""
    STRING = 0
    INTEGER = 1
    DECIMAL = 2
    BOOLEAN = 3


def _parse_number(text: str) -> Optional[float]:
    if not _NUMBER.fullmatch(text):
        return None
    value = float(text)
    # "1e999" overflows, treat it as a plain string.
    return value if math.isfinite(value) else None


class Option:
    def __init__(self, data: Scalar | None = None) -> None:
        self._text = ''
        self._integer = 0
        self._decimal = 0.0
        self._boolean = False
        self._quotes = False
        self._kind = ValueKind.STRING

        self._range = RangeType.NONE
        self._min = 0.0
        self._max = 0.0

        # only allocated on the first `append()`.
        self._children: list['Option'] | None = None

        if data is not None:
            self.assign(data)

    def reset(self) -> None:
        """Sets all values to 0, and drops quotes, range and array."""
        self._quotes = False
        self._range = RangeType.NONE
        self._children = None
        self.set_int(0)

    # --- setting ---

    def assign(self, data: 'Scalar | Option') -> bool:
        """Set from any supported type. Returns `False` if out of range."""
        if isinstance(data, Option):
            self.copy_from(data)
            return True
        # bool before int, since bool IS an int.
        if isinstance(data, bool):
            return self.set_bool(data)
        if isinstance(data, int):
            return self.set_int(data)
        if isinstance(data, float):
            return self.set_float(data)
        if isinstance(data, str):
            return self.set_string(data)
        raise TypeError(
            f'unsupported option value type: {type(data).__name__}')

    def set_string(self, text: str) -> bool:
        number = _parse_number(text)
        candidate = 0.0 if number is None else number
        if not self.in_range(candidate):
            return False

        self._decimal = candidate
        self._integer = math.trunc(candidate)
        if number is not None:
            self._quotes = False
            self._boolean = candidate != 0
            self._kind = (ValueKind.INTEGER if _INTEGER.fullmatch(text)
                          else ValueKind.DECIMAL)
        else:
            self._quotes = True
            self._boolean = str_to_bool(text)
            self._kind = (ValueKind.BOOLEAN if is_bool(text)
                          else ValueKind.STRING)
        self._text = text
        return True

    def set_int(self, data: int) -> bool:
        if not self.in_range(float(data)):
            return False
        self._integer = data
        self._decimal = float(data)
        self._boolean = data != 0
        self._text = str(data)
        self._quotes = False
        self._kind = ValueKind.INTEGER
        return True

    def set_float(self, data: float) -> bool:
        if not math.isfinite(data) or not self.in_range(data):
            return False
        self._integer = math.trunc(data)
        self._decimal = data
        self._boolean = data != 0
        # repr is the shortest text that reads back to the same float.
        self._text = repr(data)
        self._quotes = False
        self._kind = ValueKind.DECIMAL
        return True

    def set_bool(self, data: bool) -> bool:
        if not self.in_range(float(data)):
            return False
        self._integer = int(data)
        self._decimal = float(data)
        self._boolean = data
        self._text = 'true' if data else 'false'
        # same as `set_string('true')`, so it reads back the same.
        self._quotes = True
        self._kind = ValueKind.BOOLEAN
        return True

    def copy_from(self, other: 'Option') -> None:
        """Copy everything, including the range and a deep copy of the array."""
        self._text = other._text
        self._integer = other._integer
        self._decimal = other._decimal
        self._boolean = other._boolean
        self._quotes = other._quotes
        self._kind = other._kind
        self._range = other._range
        self._min = other._min
        self._max = other._max
        self._children = (
            None if other._children is None
            else [i.copy() for i in other._children])

    def copy(self) -> 'Option':
        ret = Option()
        ret.copy_from(self)
        return ret

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> 'Option':
        return self.copy()

    # --- getting ---

    @property
    def kind(self) -> ValueKind:
        return self._kind

    def to_string(self) -> str:
        return self._text

    def to_string_with_quotes(self) -> str:
        """The text, re-quoted if it originally had quotes."""
        return f'"{self._text}"' if self._quotes else self._text

    def to_int(self) -> int:
        return self._integer

    # python ints don't overflow, kept for symmetry.
    to_long = to_int

    def to_float(self) -> float:
        return self._decimal

    to_double = to_float

    def to_bool(self) -> bool:
        return self._boolean

    def to_char(self) -> str:
        """The integer value as a single (8-bit wrapped) character."""
        return chr(self._integer % 256)

    def to(self, type_: type[N]) -> N:
        """Cast the decimal value, e.g. `opt.to(int)`."""
        return type_(self._decimal)

    def to_python(self) -> Scalar | list:
        """Typed python value; arrays become (nested) lists."""
        if self._children is not None:
            return [i.to_python() for i in self._children]
        match self._kind:
            case ValueKind.INTEGER:
                return self._integer
            case ValueKind.DECIMAL:
                return self._decimal
            case ValueKind.BOOLEAN:
                return self._boolean
            case _:
                return self._text

    def set_quotes(self, setting: bool) -> None:
        self._quotes = setting

    def has_quotes(self) -> bool:
        return self._quotes

    # --- range ---

    def set_range(self, minimum: float, maximum: float | None = None) -> None:
        """Restrict future assignments; the current value isn't re-checked."""
        self._min = minimum
        if maximum is None:
            self._range = RangeType.MIN
        else:
            self._max = maximum
            self._range = RangeType.MIN_MAX

    def remove_range(self) -> None:
        self._range = RangeType.NONE

    @property
    def range(self) -> tuple[RangeType, float, float]:
        return self._range, self._min, self._max

    def in_range(self, num: float) -> bool:
        match self._range:
            case RangeType.MIN:
                return num >= self._min
            case RangeType.MIN_MAX:
                return self._min <= num <= self._max
            case _:
                return True

    # --- array ---

    def append(self, value: 'Scalar | Option | None' = None) -> 'Option':
        """Push a new element, returning it for further modification.

        A scalar `value` is assigned into the new element,
        ignoring the result since a fresh element has no range.
        """
        if self._children is None:
            self._children = []
        elem = Option()
        if value is not None:
            elem.assign(value)
        self._children.append(elem)
        return elem

    def pop(self) -> None:
        if self._children:
            self._children.pop()

    def element(self, pos: int) -> 'Option':
        if self._children is None:
            raise IndexError(f'option has no array element {pos}')
        return self._children[pos]

    __getitem__ = element

    def back(self) -> 'Option':
        return self.element(-1)

    def size(self) -> int:
        return 0 if self._children is None else len(self._children)

    def is_array(self) -> bool:
        return self._children is not None

    def clear(self) -> None:
        """Drop the whole array (the option's own value stays)."""
        self._children = None

    def __iter__(self) -> Iterator['Option']:
        return iter(self._children or ())

    def build_array_string(self, indent: str = '') -> str:
        """Render the array, recursively, as tab indented `{...}` blocks.

        An option without array elements renders its quoted value.
        """
        if self._children is None:
            return self.to_string_with_quotes()
        next_indent = indent + '\t'
        body = ',\n'.join(
            next_indent + i.build_array_string(next_indent)
            for i in self._children)
        return '{\n' + body + '\n' + indent + '}'

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return '<Option %r { .kind = %s, .size = %d }>' % (
            self.to_string_with_quotes(), self._kind.name, self.size())


def make_option(
    data: Scalar,
    minimum: float | None = None,
    maximum: float | None = None
) -> Option:
    """Build an option, assigning `data` BEFORE applying the range."""
    ret = Option(data)
    if minimum is not None:
        ret.set_range(minimum, maximum)
    return ret
