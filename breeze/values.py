# breeze — lightweight text templating engine
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Typed template values.

Every variable bound in a :class:`~breeze.context.TemplateContext` is a
:class:`TemplateValue`: a kind tag plus the Python payload.  The kinds
mirror fixed-width native types so output matches what a C caller would
see (32-bit floats keep their single-precision rounding, integers are
range-checked).

Usage::

    from breeze.values import TemplateValue, ValueKind

    age = TemplateValue.int32(30)
    fruits = TemplateValue.array(["apple", "banana"], ValueKind.STRING)
"""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1
UINT32_MAX = 2**32 - 1


class ValueKind(Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"
    LONG = "long"
    UINT = "uint"
    ARRAY = "array"


def _check_int(value: Any, low: int, high: int, kind: ValueKind) -> int:
    if not isinstance(value, int):
        raise ValueError(f"{kind.value} value must be an integer, got {type(value).__name__}")
    if not low <= value <= high:
        raise ValueError(f"{kind.value} value {value} out of range [{low}, {high}]")
    return int(value)


def _to_float32(value: Any) -> float:
    wide = float(value)
    try:
        narrowed = struct.unpack("f", struct.pack("f", wide))[0]
    except OverflowError as exc:
        raise ValueError(f"float value {value!r} out of single-precision range") from exc
    # Some interpreters round overflowing values to inf instead of raising.
    if math.isinf(narrowed) and not math.isinf(wide):
        raise ValueError(f"float value {value!r} out of single-precision range")
    return narrowed


def _coerce(kind: ValueKind, data: Any) -> Any:
    """Validate *data* for *kind* and return the stored payload."""
    if kind is ValueKind.STRING:
        if data is not None and not isinstance(data, str):
            raise ValueError(f"string value must be str or None, got {type(data).__name__}")
        return data
    if kind is ValueKind.INT:
        return _check_int(data, INT32_MIN, INT32_MAX, kind)
    if kind is ValueKind.LONG:
        return _check_int(data, INT64_MIN, INT64_MAX, kind)
    if kind is ValueKind.UINT:
        return _check_int(data, 0, UINT32_MAX, kind)
    if kind is ValueKind.FLOAT:
        return _to_float32(data)
    if kind is ValueKind.DOUBLE:
        return float(data)
    if kind is ValueKind.BOOL:
        return bool(data)
    if not isinstance(data, TemplateArray):
        raise ValueError(f"array value must be a TemplateArray, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class TemplateArray:
    """Homogeneous sequence of items sharing one declared kind.

    The sequence is borrowed, not copied: changes the caller makes to
    *items* are visible to later renders.
    """

    items: Sequence[Any]
    item_kind: ValueKind

    @property
    def count(self) -> int:
        return len(self.items)

    def item(self, index: int) -> TemplateValue:
        """Return the element at *index* as a :class:`TemplateValue`."""
        raw = self.items[index]
        if isinstance(raw, TemplateValue):
            if raw.kind is not self.item_kind:
                raise ValueError(
                    f"array item {index} is {raw.kind.value}, "
                    f"expected {self.item_kind.value}"
                )
            return raw
        return TemplateValue(self.item_kind, raw)


@dataclass(frozen=True, init=False)
class TemplateValue:
    """A tagged template value."""

    kind: ValueKind
    data: Any

    def __init__(self, kind: ValueKind, data: Any) -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "data", _coerce(kind, data))

    # --- Constructors -------------------------------------------------------

    @classmethod
    def string(cls, value: str | None) -> TemplateValue:
        return cls(ValueKind.STRING, value)

    @classmethod
    def int32(cls, value: int) -> TemplateValue:
        return cls(ValueKind.INT, value)

    @classmethod
    def uint32(cls, value: int) -> TemplateValue:
        return cls(ValueKind.UINT, value)

    @classmethod
    def long(cls, value: int) -> TemplateValue:
        return cls(ValueKind.LONG, value)

    @classmethod
    def float32(cls, value: float) -> TemplateValue:
        return cls(ValueKind.FLOAT, value)

    @classmethod
    def double(cls, value: float) -> TemplateValue:
        return cls(ValueKind.DOUBLE, value)

    @classmethod
    def boolean(cls, value: bool) -> TemplateValue:
        return cls(ValueKind.BOOL, value)

    @classmethod
    def array(cls, items: Sequence[Any], item_kind: ValueKind) -> TemplateValue:
        return cls(ValueKind.ARRAY, TemplateArray(items, item_kind))

    # --- Conversions --------------------------------------------------------

    def to_text(self) -> str:
        return value_to_text(self)

    def is_truthy(self) -> bool:
        return is_truthy(self)


def value_to_text(value: TemplateValue) -> str:
    """Render *value* the way it appears in template output.

    Floats and doubles use exactly four fractional digits (``%.4f``,
    correctly rounded, ties to even).  Arrays render as a size
    placeholder; they are meant to be iterated, not interpolated.
    """
    kind = value.kind
    if kind is ValueKind.STRING:
        return value.data if value.data is not None else ""
    if kind in (ValueKind.INT, ValueKind.LONG, ValueKind.UINT):
        return "%d" % value.data
    if kind in (ValueKind.FLOAT, ValueKind.DOUBLE):
        return "%.4f" % value.data
    if kind is ValueKind.BOOL:
        return "true" if value.data else "false"
    return f"[array of size {value.data.count}]"


def is_truthy(value: TemplateValue) -> bool:
    """Boolean interpretation of *value* used by ``{% if %}``."""
    kind = value.kind
    if kind is ValueKind.BOOL:
        return value.data
    if kind is ValueKind.STRING:
        return bool(value.data)
    if kind is ValueKind.ARRAY:
        return value.data.count > 0
    return value.data != 0


def _infer_kind(value: Any) -> ValueKind:
    if isinstance(value, TemplateValue):
        return value.kind
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return ValueKind.INT
        return ValueKind.LONG
    if isinstance(value, float):
        return ValueKind.DOUBLE
    if value is None or isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    raise ValueError(f"Cannot convert {type(value).__name__} to a template value")


def to_template_value(value: Any) -> TemplateValue:
    """Convert a plain Python value into a :class:`TemplateValue`.

    ``bool`` maps to BOOL, ``int`` to INT (or LONG beyond 32 bits),
    ``float`` to DOUBLE, ``str``/``None`` to STRING.  Lists and tuples
    become arrays whose items must share one kind (INT and LONG items
    together widen to LONG); an empty sequence is an array of strings.
    """
    if isinstance(value, TemplateValue):
        return value
    kind = _infer_kind(value)
    if kind is not ValueKind.ARRAY:
        return TemplateValue(kind, value)

    kinds = {_infer_kind(item) for item in value}
    if kinds == {ValueKind.INT, ValueKind.LONG}:
        kinds = {ValueKind.LONG}
    if len(kinds) > 1:
        names = sorted(k.value for k in kinds)
        raise ValueError(f"Array items must share one kind, got {names}")
    item_kind = kinds.pop() if kinds else ValueKind.STRING
    if item_kind is ValueKind.ARRAY:
        items = [to_template_value(item) for item in value]
        return TemplateValue.array(items, ValueKind.ARRAY)
    return TemplateValue.array(value, item_kind)
