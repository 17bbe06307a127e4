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

"""File-based template loading with directory fallback.

Resolution order when rendering ``loader.render("page.html", ...)``:

1. ``<user_dir>/page.html``: user customised version
2. ``<default_dir>/page.html``: application-shipped default

This lets users override any template without touching installed code.
When no *user_dir* is given, ``$BREEZE_TEMPLATE_DIR`` is used if set.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from breeze.config import TEMPLATE_DIR_ENV_VAR, RenderOptions
from breeze.context import TemplateContext
from breeze.engine import render
from breeze.errors import TemplateNotFound

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIXES = (".html", ".txt", ".tmpl")


class TemplateLoader:
    """Load templates from disk and render them.

    Args:
        user_dir: User override directory (checked first).
        default_dir: Default directory (fallback).
        options: Render options applied to every template.
    """

    def __init__(
        self,
        user_dir: str | Path | None = None,
        default_dir: str | Path | None = None,
        options: RenderOptions | None = None,
    ) -> None:
        user_dir = user_dir or os.environ.get(TEMPLATE_DIR_ENV_VAR)
        self.user_dir = Path(user_dir).expanduser() if user_dir else None
        self.default_dir = Path(default_dir).expanduser() if default_dir else None
        self.options = options or RenderOptions.from_env()

    def _find(self, template_name: str) -> Path | None:
        for directory in (self.user_dir, self.default_dir):
            if directory is None:
                continue
            path = directory / template_name
            if path.is_file():
                return path
        return None

    def load(self, template_name: str) -> str:
        """Return the source text of a template.

        Raises :class:`~breeze.errors.TemplateNotFound` if the template
        does not exist in either directory.
        """
        path = self._find(template_name)
        if path is None:
            raise TemplateNotFound(template_name)
        logger.debug("Loading template %s from %s", template_name, path)
        return path.read_text(encoding="utf-8")

    def render(
        self,
        template_name: str,
        context: TemplateContext | Mapping[str, Any] | None = None,
        **variables: Any,
    ) -> str:
        """Render a template file with the given variables."""
        return render(
            self.load(template_name), context, options=self.options, **variables,
        )

    def has_template(self, template_name: str) -> bool:
        """Check whether a template exists in either directory."""
        return self._find(template_name) is not None

    def install_defaults(self) -> None:
        """Copy all default templates to the user directory.

        Skips templates that already exist in the user directory.
        """
        if self.user_dir is None or self.default_dir is None:
            return
        if not self.default_dir.is_dir():
            return

        self.user_dir.mkdir(parents=True, exist_ok=True)
        for src in self.default_dir.iterdir():
            if src.is_file() and src.suffix in TEMPLATE_SUFFIXES:
                dest = self.user_dir / src.name
                if not dest.exists():
                    dest.write_text(src.read_text(encoding="utf-8"), encoding="utf-8")
                    logger.info("Installed default template: %s", dest)
