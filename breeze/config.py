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

"""Renderer configuration.

Options are plain constructor arguments; :meth:`RenderOptions.from_env`
fills anything not passed explicitly from ``BREEZE_*`` environment
variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MAX_TOKEN_LENGTH = 127
MAX_TOKEN_LENGTH_ENV_VAR = "BREEZE_MAX_TOKEN_LENGTH"
TEMPLATE_DIR_ENV_VAR = "BREEZE_TEMPLATE_DIR"


@dataclass(frozen=True)
class RenderOptions:
    """Tunable limits for a render call.

    Attributes:
        max_token_length: Longest raw text allowed between ``{{ }}`` or
            ``{% %}`` delimiters (surrounding whitespace included).
            Longer tags are a parse error, never truncated.
    """

    max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH

    def __post_init__(self) -> None:
        if self.max_token_length < 1:
            raise ValueError(
                f"max_token_length must be positive, got {self.max_token_length}"
            )

    @classmethod
    def from_env(cls, max_token_length: int | None = None) -> RenderOptions:
        resolved = max_token_length
        if resolved is None:
            raw = os.environ.get(MAX_TOKEN_LENGTH_ENV_VAR)
            if raw:
                try:
                    resolved = int(raw)
                except ValueError as exc:
                    raise ValueError(
                        f"{MAX_TOKEN_LENGTH_ENV_VAR} must be an integer, got {raw!r}"
                    ) from exc
        if resolved is None:
            resolved = DEFAULT_MAX_TOKEN_LENGTH
        return cls(max_token_length=resolved)
