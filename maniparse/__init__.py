from .core.manifest.errors import (
    DocumentSyntaxError,
    ExpansionError,
    ManifestError,
    ManifestReadError,
    ParseError,
    SchemaError,
    TemplateError,
    UnsupportedDimensionalityError,
)
from .core.manifest.version import ScalarVersion, VersionKind
from .core.manifest.models import (
    DEFAULT_FLAVOR,
    Manifest,
    MatrixFlavour,
    Recipe,
    RecipeFlavour,
    SimpleFlavour,
)
from .core.manifest.loader import load_manifest, parse_manifest
from .core.generators.matrix_gen import JinjaTemplateRenderer, expand

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_FLAVOR",
    "DocumentSyntaxError",
    "ExpansionError",
    "JinjaTemplateRenderer",
    "Manifest",
    "ManifestError",
    "ManifestReadError",
    "MatrixFlavour",
    "ParseError",
    "Recipe",
    "RecipeFlavour",
    "ScalarVersion",
    "SchemaError",
    "SimpleFlavour",
    "TemplateError",
    "UnsupportedDimensionalityError",
    "VersionKind",
    "expand",
    "load_manifest",
    "parse_manifest",
]
