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

"""Single-pass template renderer.

The renderer walks the template text once with a cursor.  Loops are
replayed by moving the cursor back to the start of the loop body, and
branches that are not taken are skipped by moving it forward to the
matching ``else``/``endif``.  Nesting state lives on two explicit
stacks (see :mod:`breeze.stacks`).

Supported syntax:

* ``{{ name }}`` – variable interpolation
* ``{% for item in items %}`` … ``{% endfor %}``
* ``{% if name %}`` … [``{% else %}`` …] ``{% endif %}``
* ``<!-- comment -->`` – removed from the output

A directive that is alone on its line (apart from whitespace) consumes
the whole line, newline included, so block tags can be indented like
the markup around them without leaving blank lines behind.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from breeze.buffer import OutputBuffer
from breeze.config import RenderOptions
from breeze.context import TemplateContext
from breeze.errors import ErrorKind, TemplateError, line_number
from breeze.stacks import ConditionalStack, LoopStack
from breeze.values import TemplateValue, ValueKind, is_truthy, value_to_text

logger = logging.getLogger(__name__)

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
VAR_OPEN = "{{"
VAR_CLOSE = "}}"
TAG_OPEN = "{%"
TAG_CLOSE = "%}"

# Anything that is not plain text starts with one of these.
_MARKER_RE = re.compile(r"<!--|-->|\{\{|\{%")
_BLOCK_RE = re.compile(r"<!--|\{%")

# ASCII whitespace only, like C isspace() in the "C" locale.
WHITESPACE = " \t\n\r\f\v"
_WORD_SEP_RE = re.compile(r"[ \t\n\r\f\v]+")


def _words(text: str) -> list[str]:
    stripped = text.strip(WHITESPACE)
    return _WORD_SEP_RE.split(stripped) if stripped else []


def render(
    template: str,
    context: TemplateContext | Mapping[str, Any] | None = None,
    *,
    options: RenderOptions | None = None,
    **variables: Any,
) -> str:
    """Render *template* with the given variables.

    *context* may be a :class:`TemplateContext` or a plain mapping whose
    values are converted with :func:`~breeze.values.to_template_value`.
    Keyword arguments are appended after the context bindings.

    Raises:
        TemplateError: on the first parse, syntax, render or memory error.
    """
    ctx = _build_context(context, variables)
    renderer = _Renderer(template, ctx, options or RenderOptions.from_env())
    try:
        return renderer.run()
    except MemoryError:
        raise renderer.error(
            ErrorKind.MEMORY, "Out of memory while rendering template", renderer.pos,
        ) from None


def _build_context(
    context: TemplateContext | Mapping[str, Any] | None,
    variables: Mapping[str, Any],
) -> TemplateContext:
    if context is None:
        ctx = TemplateContext()
    elif isinstance(context, TemplateContext):
        if not variables:
            return context
        ctx = TemplateContext(context)
    else:
        ctx = TemplateContext.from_mapping(context)
    for name, value in variables.items():
        ctx.add(name, value)
    return ctx


class _Renderer:
    """State for one render call."""

    def __init__(
        self,
        template: str,
        context: TemplateContext,
        options: RenderOptions,
    ) -> None:
        self.text = template
        self.context = context
        self.options = options
        self.out = OutputBuffer()
        self.loops = LoopStack()
        self.conditions = ConditionalStack()
        self.pos = 0
        self._directives = {
            "for": self._for,
            "endfor": self._endfor,
            "if": self._if,
            "else": self._else,
            "endif": self._endif,
        }

    def error(self, kind: ErrorKind, message: str, position: int) -> TemplateError:
        return TemplateError(kind, message, line_number(self.text, position))

    def run(self) -> str:
        with self.loops, self.conditions:
            self._scan()
            result = self.out.getvalue()
        logger.debug("Rendered template: %d chars in, %d chars out", len(self.text), len(result))
        return result

    # --- Main loop ----------------------------------------------------------

    def _scan(self) -> None:
        text = self.text
        end = len(text)
        in_comment = False
        comment_start = 0

        while self.pos < end:
            pos = self.pos
            if in_comment:
                close = text.find(COMMENT_CLOSE, pos)
                if close == -1:
                    self.pos = end
                else:
                    in_comment = False
                    self.pos = close + len(COMMENT_CLOSE)
                continue

            if text.startswith(COMMENT_OPEN, pos):
                in_comment = True
                comment_start = pos
                self.pos = pos + len(COMMENT_OPEN)
                continue
            if text.startswith(COMMENT_CLOSE, pos):
                raise self.error(ErrorKind.PARSE, "Unmatched comment closing tag '-->'", pos)

            suppressed = self.conditions.suppressed
            if text.startswith(VAR_OPEN, pos):
                self._variable(pos, suppressed)
            elif text.startswith(TAG_OPEN, pos):
                self._directive(pos, suppressed)
            else:
                match = _MARKER_RE.search(text, pos + 1)
                stop = match.start() if match else end
                if not suppressed:
                    self.out.append(text[pos:stop])
                self.pos = stop

        if in_comment:
            raise self.error(ErrorKind.SYNTAX, "Unterminated HTML comment '<!--'", comment_start)
        if self.loops.depth:
            raise self.error(ErrorKind.SYNTAX, "Unclosed 'for' loop at end of template", self.pos)
        if self.conditions.depth:
            raise self.error(
                ErrorKind.SYNTAX, "Unclosed 'if' statement at end of template", self.pos,
            )

    # --- Variables ----------------------------------------------------------

    def _variable(self, start: int, suppressed: bool) -> None:
        close = self.text.find(VAR_CLOSE, start + len(VAR_OPEN))
        if close == -1:
            raise self.error(ErrorKind.PARSE, "Unterminated '{{' tag", start)

        if not suppressed:
            raw = self.text[start + len(VAR_OPEN):close]
            if len(raw) > self.options.max_token_length:
                raise self.error(ErrorKind.PARSE, "Variable name is too long", start)
            value = self._resolve(raw.strip(WHITESPACE), start)
            self.out.append(value_to_text(value))
        self.pos = close + len(VAR_CLOSE)

    def _resolve(self, name: str, position: int) -> TemplateValue:
        """Look *name* up in the active loops (innermost first), then the context."""
        value = self.loops.lookup(name)
        if value is None:
            value = self.context.get(name)
        if value is None:
            raise self.error(
                ErrorKind.RENDER, f"Missing template variable for '{name}'", position,
            )
        return value

    # --- Directives ---------------------------------------------------------

    def _directive(self, start: int, suppressed: bool) -> None:
        close = self.text.find(TAG_CLOSE, start + len(TAG_OPEN))
        if close == -1:
            raise self.error(ErrorKind.PARSE, "Unterminated '{%' tag", start)
        tag_end = close + len(TAG_CLOSE)

        line_end = self._standalone_end(start, tag_end)
        if line_end is None:
            self.pos = tag_end
        else:
            if not suppressed:
                self.out.truncate_line()
            self.pos = line_end

        raw = self.text[start + len(TAG_OPEN):close]
        if len(raw) > self.options.max_token_length:
            raise self.error(ErrorKind.PARSE, "Directive is too long", start)

        command = raw.strip(WHITESPACE)
        words = _words(command)
        keyword = words[0] if words else ""
        handler = self._directives.get(keyword)
        if handler is None or (keyword in ("endfor", "else", "endif") and command != keyword):
            raise self.error(ErrorKind.SYNTAX, f"Unknown directive '{command}'", start)
        handler(command, start, suppressed)

    def _for(self, command: str, start: int, suppressed: bool) -> None:
        parts = _words(command)
        if len(parts) != 4 or parts[2] != "in":
            raise self.error(
                ErrorKind.SYNTAX, "Invalid 'for' loop. Use: {% for item in items %}", start,
            )
        if suppressed:
            return

        _, item_name, _, collection = parts
        value = self.context.get(collection)
        if value is None or value.kind is not ValueKind.ARRAY:
            raise self.error(ErrorKind.RENDER, "Variable for loop is not a valid array", start)

        self.loops.push(value.data, item_name, self.pos)
        if value.data.count == 0:
            target = self._find_matching(self.pos, "for", ("endfor",))
            if target is None:
                raise self.error(
                    ErrorKind.SYNTAX, "Unclosed 'for' loop at end of template", len(self.text),
                )
            _, tag_start, tag_end = target
            self.pos = self._landing(tag_start, tag_end)
            self.loops.pop()

    def _endfor(self, command: str, start: int, suppressed: bool) -> None:
        if suppressed:
            return
        frame = self.loops.top()
        if frame is None:
            raise self.error(ErrorKind.SYNTAX, "Found 'endfor' with no matching 'for'", start)

        frame.index += 1
        if frame.index < frame.array.count:
            self.pos = frame.body_start
        else:
            self.loops.pop()

    def _if(self, command: str, start: int, suppressed: bool) -> None:
        condition = command[len("if"):].strip(WHITESPACE)
        if not condition:
            raise self.error(
                ErrorKind.SYNTAX, "Invalid 'if' statement. Use: {% if condition %}", start,
            )
        # Evaluated even inside a suppressed branch so frames stay balanced.
        result = is_truthy(self._resolve(condition, start))
        frame = self.conditions.push(result, start)
        if result:
            return

        target = self._find_matching(self.pos, "if", ("else", "endif"))
        if target is None:
            # No else/endif: the rest is suppressed and reported as unclosed.
            return
        keyword, tag_start, tag_end = target
        self.pos = self._landing(tag_start, tag_end)
        if keyword == "else":
            frame.in_else_branch = True
        else:
            self.conditions.pop()
        self._skip_newlines()

    def _else(self, command: str, start: int, suppressed: bool) -> None:
        frame = self.conditions.top()
        if frame is None:
            raise self.error(ErrorKind.SYNTAX, "Found 'else' with no matching 'if'", start)

        frame.in_else_branch = True
        if not frame.condition_met:
            return
        target = self._find_matching(self.pos, "if", ("endif",))
        if target is None:
            return
        _, tag_start, tag_end = target
        self.pos = self._landing(tag_start, tag_end)
        self.conditions.pop()
        self._skip_newlines()

    def _endif(self, command: str, start: int, suppressed: bool) -> None:
        if self.conditions.pop() is None:
            raise self.error(ErrorKind.SYNTAX, "Found 'endif' with no matching 'if'", start)

    # --- Cursor helpers -----------------------------------------------------

    def _standalone_end(self, tag_start: int, tag_end: int) -> int | None:
        """Return the offset past the tag's line if the tag stands alone on it."""
        text = self.text
        line_start = text.rfind("\n", 0, tag_start) + 1
        if text[line_start:tag_start].strip(WHITESPACE):
            return None
        newline = text.find("\n", tag_end)
        line_end = len(text) if newline == -1 else newline
        if text[tag_end:line_end].strip(WHITESPACE):
            return None
        return line_end if newline == -1 else newline + 1

    def _landing(self, tag_start: int, tag_end: int) -> int:
        line_end = self._standalone_end(tag_start, tag_end)
        return tag_end if line_end is None else line_end

    def _skip_newlines(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] == "\n":
            self.pos += 1

    def _find_matching(
        self, position: int, opener: str, targets: tuple[str, ...],
    ) -> tuple[str, int, int] | None:
        """Find the first directive in *targets* at the current nesting depth.

        Nested ``opener`` … ``end<opener>`` blocks and comments are
        stepped over.  Returns ``(keyword, tag_start, tag_end)`` or
        ``None`` when the block is never closed.
        """
        text = self.text
        closer = "end" + opener
        depth = 0
        while True:
            match = _BLOCK_RE.search(text, position)
            if match is None:
                return None
            if match.group() == COMMENT_OPEN:
                close = text.find(COMMENT_CLOSE, match.end())
                if close == -1:
                    return None
                position = close + len(COMMENT_CLOSE)
                continue

            close = text.find(TAG_CLOSE, match.end())
            if close == -1:
                return None
            position = close + len(TAG_CLOSE)
            words = _words(text[match.end():close])
            keyword = words[0] if words else ""
            if keyword == opener:
                depth += 1
            elif depth == 0 and keyword in targets:
                return keyword, match.start(), position
            elif keyword == closer:
                depth -= 1
