"""Matrix flavour expansion.

A matrix flavour names a template (``build-{{row.os}}-{{row.arch}}``) and a
mapping of dimension name -> ordered values. Expansion takes the cartesian
product of the dimensions in the mapping's own key order, last dimension
varying fastest, and renders the template once per combination.

The template engine is injected: anything with ``compile(source)`` returning an
object with ``render(bindings)`` works. Jinja2 with ``StrictUndefined`` is the
default, so referencing a placeholder that no dimension binds is an error
rather than an empty string. Placeholders are Jinja expressions, so a
hyphenated dimension such as ``python-version`` parses as a subtraction and
fails as an undefined name.
"""

from __future__ import annotations

import itertools
from typing import Dict, List, Mapping, Optional, Protocol, Sequence

from jinja2 import Environment, StrictUndefined

from maniparse.core.manifest.errors import TemplateError, UnsupportedDimensionalityError
from maniparse.core.manifest.version import ScalarVersion

MAX_MATRIX_DIMENSIONS = 4
ROW_PREFIX = "row."

BuildMatrix = Mapping[str, Sequence[ScalarVersion]]


class CompiledTemplate(Protocol):
    def render(self, bindings: Mapping[str, str]) -> str:
        ...


class TemplateRenderer(Protocol):
    """Whatever ``compile`` or ``render`` raises is reported as ``TemplateError``."""

    def compile(self, source: str) -> CompiledTemplate:
        ...


class JinjaTemplateRenderer:
    def __init__(self, env: Optional[Environment] = None):
        self.env = env or Environment(
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def compile(self, source: str) -> CompiledTemplate:
        return self.env.from_string(source)


DEFAULT_RENDERER = JinjaTemplateRenderer()


def strip_row_prefix(template: str) -> str:
    """``{{row.os}}`` binds against ``os``."""
    return template.replace(ROW_PREFIX, "")


def combinations(matrix: BuildMatrix) -> List[Dict[str, str]]:
    """One flat binding set per point of the product, display-rendered."""
    keys = list(matrix.keys())
    return [
        {key: str(value) for key, value in zip(keys, row)}
        for row in itertools.product(*(matrix[key] for key in keys))
    ]


def expand(
    name_template: str,
    matrix: BuildMatrix,
    renderer: Optional[TemplateRenderer] = None,
) -> List[str]:
    dimensions = len(matrix)
    if not 1 <= dimensions <= MAX_MATRIX_DIMENSIONS:
        raise UnsupportedDimensionalityError(template=name_template, dimensions=dimensions)

    renderer = renderer or DEFAULT_RENDERER
    try:
        compiled = renderer.compile(strip_row_prefix(name_template))
    except Exception as exc:  # any engine failure is a template failure
        raise TemplateError(template=name_template, cause=exc) from exc

    names: List[str] = []
    for bindings in combinations(matrix):
        try:
            names.append(compiled.render(bindings))
        except Exception as exc:
            raise TemplateError(template=name_template, cause=exc) from exc
    return names
