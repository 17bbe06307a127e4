"""breeze output matches Jinja2 on the syntax both engines share.

Jinja2 with ``trim_blocks`` and ``lstrip_blocks`` removes block tags that
stand alone on their line, which is the same whitespace rule breeze
applies.  Only values whose text form is identical in both engines
(strings and integers) are interpolated here.
"""

from __future__ import annotations

import pytest
from jinja2 import Environment

from breeze import render

CASES = [
    (
        "Hello {{ name }}, you are {{ age }} years old.",
        {"name": "John", "age": 30},
    ),
    (
        "{% for fruit in fruits %}{{ fruit }}, {% endfor %}",
        {"fruits": ["apple", "banana", "cherry"]},
    ),
    (
        "{% for o in outers %}{% for i in inners %}{{ o }}{{ i }}{% endfor %}{% endfor %}",
        {"outers": ["A", "B"], "inners": [1, 2, 3]},
    ),
    (
        "[{% for f in fruits %}{{ f }}{% endfor %}]",
        {"fruits": []},
    ),
    (
        "<ul>\n  {% for item in items %}\n  <li>{{ item }}</li>\n  {% endfor %}\n</ul>\n",
        {"items": ["a", "b", "c"]},
    ),
    (
        "Hello\n  {% if show %}\n    {{ name }}\n  {% endif %}\nWorld",
        {"show": True, "name": "John"},
    ),
    (
        "Hello\n  {% if show %}\n    {{ name }}\n  {% endif %}\nWorld",
        {"show": False, "name": "John"},
    ),
    (
        "A\n{% if x %}\nyes\n{% else %}\nno\n{% endif %}\nB",
        {"x": True},
    ),
    (
        "A\n{% if x %}\nyes\n{% else %}\nno\n{% endif %}\nB",
        {"x": False},
    ),
    (
        "{% for f in flags %}{% if f %}Y{% else %}N{% endif %}{% endfor %}",
        {"flags": [True, False, False, True]},
    ),
    (
        "<table>\n{% for row in rows %}\n  <tr>\n  {% for cell in cells %}\n"
        "    <td>{{ row }}{{ cell }}</td>\n  {% endfor %}\n  </tr>\n{% endfor %}\n</table>\n",
        {"rows": ["r1", "r2"], "cells": [1, 2]},
    ),
]


@pytest.fixture(scope="module")
def jinja_env():
    return Environment(trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)


@pytest.mark.parametrize(("template", "variables"), CASES)
def test_matches_jinja2(jinja_env, template, variables):
    expected = jinja_env.from_string(template).render(**variables)
    assert render(template, **variables) == expected
