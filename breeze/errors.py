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

"""Error types raised while loading and rendering templates."""

from __future__ import annotations

from enum import Enum

MAX_MESSAGE_LENGTH = 255


class ErrorKind(Enum):
    PARSE = "parse"      # malformed tags, overlong tokens
    SYNTAX = "syntax"    # bad directive grammar, unbalanced blocks
    RENDER = "render"    # missing variable, wrong type
    MEMORY = "memory"    # allocation failure


class TemplateError(Exception):
    """Fatal error raised by :func:`breeze.render`.

    Attributes:
        kind: Error category.
        message: Human-readable description, at most 255 characters.
        line: 1-based line in the template source where the error occurred.
    """

    def __init__(self, kind: ErrorKind, message: str, line: int = 1) -> None:
        self.kind = kind
        self.message = message[:MAX_MESSAGE_LENGTH]
        self.line = line
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"TemplateError(kind={self.kind.value!r}, "
            f"message={self.message!r}, line={self.line})"
        )


class TemplateNotFound(LookupError):
    """Raised by :class:`~breeze.loader.TemplateLoader` for unknown names."""


def line_number(text: str, position: int) -> int:
    """Return the 1-based line of *position* by counting preceding newlines."""
    return text.count("\n", 0, max(position, 0)) + 1
