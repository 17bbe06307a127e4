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

"""Variable context passed to the renderer.

A context is an ordered list of name/value bindings.  Lookup is linear
and returns the first match, so a duplicated name shadows nothing: the
earliest binding always wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from breeze.values import TemplateValue, to_template_value


@dataclass(frozen=True)
class TemplateVar:
    """A single name → value binding."""

    name: str
    value: TemplateValue


class TemplateContext:
    """Ordered collection of :class:`TemplateVar` bindings."""

    def __init__(self, variables: Iterable[TemplateVar] = ()) -> None:
        self._vars: list[TemplateVar] = list(variables)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> TemplateContext:
        """Build a context from plain Python values, inferring kinds."""
        return cls(
            TemplateVar(name, to_template_value(value))
            for name, value in mapping.items()
        )

    def add(self, name: str, value: Any) -> None:
        """Append a binding.  Plain Python values are converted."""
        self._vars.append(TemplateVar(name, to_template_value(value)))

    def get(self, name: str) -> TemplateValue | None:
        """Return the first value bound to *name*, or ``None``."""
        for var in self._vars:
            if var.name == name:
                return var.value
        return None

    def __contains__(self, name: object) -> bool:
        return any(var.name == name for var in self._vars)

    def __iter__(self) -> Iterator[TemplateVar]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        names = ", ".join(var.name for var in self._vars)
        return f"TemplateContext([{names}])"
