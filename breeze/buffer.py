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

"""Append-only output accumulator for the renderer."""

from __future__ import annotations


class OutputBuffer:
    """Growable text sink.

    Besides appending, the renderer needs to drop whatever has been
    written on the current output line when a standalone directive is
    found, so the buffer tracks where the last line begins.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._size = 0
        self._line_start = 0

    def __len__(self) -> int:
        return self._size

    @property
    def line_start(self) -> int:
        """Offset just past the last newline written (0 if none)."""
        return self._line_start

    def append(self, text: str) -> None:
        if not text:
            return
        newline = text.rfind("\n")
        if newline != -1:
            self._line_start = self._size + newline + 1
        self._parts.append(text)
        self._size += len(text)

    def truncate(self, size: int) -> None:
        """Discard everything after the first *size* characters."""
        if size >= self._size:
            return
        excess = self._size - size
        while excess > 0:
            last = self._parts.pop()
            if len(last) > excess:
                self._parts.append(last[: len(last) - excess])
                excess = 0
            else:
                excess -= len(last)
        self._size = size
        if self._line_start > size:
            text = self.getvalue()
            self._line_start = text.rfind("\n") + 1

    def truncate_line(self) -> None:
        """Remove any text written since the last newline."""
        self.truncate(self._line_start)

    def getvalue(self) -> str:
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""
