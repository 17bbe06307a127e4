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

"""Loop and conditional frame stacks.

The renderer keeps nested ``for`` and ``if`` state on two independent
stacks instead of recursing.  Both stacks are context managers that
drop their frames on exit, so a render call releases its state on every
return path::

    with LoopStack() as loops, ConditionalStack() as conditions:
        ...
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from breeze.values import TemplateArray, TemplateValue

FrameT = TypeVar("FrameT")


@dataclass
class LoopFrame:
    """State of one active ``{% for %}`` loop.

    Attributes:
        array: The array being iterated.
        index: Zero-based index of the current item.
        item_name: Name the loop binds each item to.
        body_start: Template offset of the first character of the body.
    """

    array: TemplateArray
    index: int
    item_name: str
    body_start: int

    def current(self) -> TemplateValue:
        return self.array.item(self.index)


@dataclass
class ConditionalFrame:
    """State of one active ``{% if %}`` block."""

    condition_met: bool
    in_else_branch: bool = False
    position: int = 0

    @property
    def suppressed(self) -> bool:
        """True while scanning the arm that was not selected."""
        return self.condition_met == self.in_else_branch


class _FrameStack(Generic[FrameT]):
    def __init__(self) -> None:
        self._frames: list[FrameT] = []

    def __enter__(self) -> _FrameStack[FrameT]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.clear()

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[FrameT]:
        """Iterate frames innermost first."""
        return reversed(self._frames)

    @property
    def depth(self) -> int:
        return len(self._frames)

    def pop(self) -> FrameT | None:
        return self._frames.pop() if self._frames else None

    def top(self) -> FrameT | None:
        return self._frames[-1] if self._frames else None

    def clear(self) -> None:
        self._frames.clear()


class LoopStack(_FrameStack[LoopFrame]):
    def push(self, array: TemplateArray, item_name: str, body_start: int) -> LoopFrame:
        frame = LoopFrame(array=array, index=0, item_name=item_name, body_start=body_start)
        self._frames.append(frame)
        return frame

    def lookup(self, name: str) -> TemplateValue | None:
        """Return the current item of the innermost loop binding *name*."""
        for frame in self:
            if frame.item_name == name:
                return frame.current()
        return None


class ConditionalStack(_FrameStack[ConditionalFrame]):
    def push(self, condition_met: bool, position: int) -> ConditionalFrame:
        frame = ConditionalFrame(condition_met=condition_met, position=position)
        self._frames.append(frame)
        return frame

    @property
    def suppressed(self) -> bool:
        """Whether output is withheld, judged by the innermost frame only."""
        frame = self.top()
        return frame is not None and frame.suppressed
