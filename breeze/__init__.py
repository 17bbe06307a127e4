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

"""Minimal text templating: variables, loops, conditionals, comments.

Usage::

    from breeze import render

    text = render(
        "{% for fruit in fruits %}{{ fruit }}, {% endfor %}",
        fruits=["apple", "banana", "cherry"],
    )

Typed values can be bound explicitly::

    from breeze import TemplateContext, TemplateValue, TemplateVar, render

    ctx = TemplateContext([
        TemplateVar("temperature", TemplateValue.float32(36.6)),
        TemplateVar("visits", TemplateValue.uint32(4294967295)),
    ])
    render("{{ temperature }} / {{ visits }}", ctx)
"""

from breeze.config import RenderOptions
from breeze.context import TemplateContext, TemplateVar
from breeze.engine import render
from breeze.errors import ErrorKind, TemplateError, TemplateNotFound
from breeze.loader import TemplateLoader
from breeze.values import (
    TemplateArray,
    TemplateValue,
    ValueKind,
    is_truthy,
    to_template_value,
    value_to_text,
)

__all__ = [
    "ErrorKind",
    "RenderOptions",
    "TemplateArray",
    "TemplateContext",
    "TemplateError",
    "TemplateLoader",
    "TemplateNotFound",
    "TemplateValue",
    "TemplateVar",
    "ValueKind",
    "is_truthy",
    "render",
    "to_template_value",
    "value_to_text",
]
