"""Manifest error taxonomy.

Parsing is all-or-nothing and flavor enumeration either completes or names the
flavour that failed. Nothing here is recovered locally; callers decide.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ManifestError(Exception):
    pass


class ManifestReadError(ManifestError):
    def __init__(self, *, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read manifest {self.path}: {reason}")


class ParseError(ManifestError):
    pass


class DocumentSyntaxError(ParseError):
    """The text is not valid YAML."""


class SchemaError(ParseError):
    """Well-formed document whose shape does not fit the manifest schema."""

    def __init__(self, message: str, *, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = list(errors or [])
        super().__init__(message)


class ExpansionError(ManifestError):
    def __init__(self, message: str, *, template: str, flavour: Optional[str] = None):
        self.template = template
        self.flavour = flavour
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.flavour is None:
            return base
        return f"flavour {self.flavour!r}: {base}"


class UnsupportedDimensionalityError(ExpansionError):
    def __init__(self, *, template: str, dimensions: int, flavour: Optional[str] = None):
        self.dimensions = dimensions
        super().__init__(
            f"Cannot expand matrix with {dimensions} dimensions (supported: 1 to 4)",
            template=template,
            flavour=flavour,
        )


class TemplateError(ExpansionError):
    def __init__(self, *, template: str, cause: BaseException, flavour: Optional[str] = None):
        self.cause = cause
        super().__init__(
            f"Template {template!r} failed: {cause}",
            template=template,
            flavour=flavour,
        )
