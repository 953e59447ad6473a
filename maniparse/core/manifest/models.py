"""Typed manifest model.

Flavour entries are untagged in the document, so their shape is inferred from
which keys are present, in a fixed order:

  1. ``recipes`` present          -> RecipeFlavour
  2. otherwise ``matrix`` absent  -> SimpleFlavour
  3. otherwise                    -> MatrixFlavour

An entry carrying both ``recipes`` and ``matrix`` is therefore recipe-bearing.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any, ClassVar, Dict, List, Mapping, Optional, Set, Tuple, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Discriminator, Field, Tag, WrapSerializer

from maniparse.core.generators.matrix_gen import TemplateRenderer, expand
from maniparse.core.manifest.errors import ExpansionError
from maniparse.core.manifest.version import DocumentScalar

DEFAULT_FLAVOR = "^"
TOOLS_CATEGORY = "tools"

# Parsed containers are read-only: mappings become MappingProxyType views and
# sequences become tuples. Dumps still emit plain dicts.
_ReadOnly = AfterValidator(MappingProxyType)
_DumpAsDict = WrapSerializer(lambda value, handler: handler(dict(value)))

Strings = Tuple[str, ...]
RequirementSet = Annotated[Dict[str, DocumentScalar], _ReadOnly, _DumpAsDict]
BuildMatrix = Annotated[Dict[str, Tuple[DocumentScalar, ...]], _ReadOnly, _DumpAsDict]
ExportsRegistry = Annotated[Dict[str, Strings], _ReadOnly, _DumpAsDict]


class _ManifestModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Recipe(_ManifestModel):
    requires: Optional[RequirementSet] = None
    load_requires: Optional[RequirementSet] = Field(default=None, alias="loadRequires")
    steps: Strings
    contributors: Optional[Strings] = None


RecipeMap = Annotated[Dict[str, Recipe], _ReadOnly, _DumpAsDict]


class _FlavourBase(_ManifestModel):
    shape: ClassVar[str] = ""

    name: str
    load_requires: Optional[RequirementSet] = Field(default=None, alias="loadRequires")
    build_requires: Optional[RequirementSet] = Field(default=None, alias="buildRequires")
    test_requires: Optional[RequirementSet] = Field(default=None, alias="testRequires")
    system_requires: Optional[RequirementSet] = Field(default=None, alias="systemRequires")
    supports: Optional[Strings] = None

    def flavor_names(self, renderer: Optional[TemplateRenderer] = None) -> List[str]:
        return [self.name]


class SimpleFlavour(_FlavourBase):
    shape: ClassVar[str] = "simple"

    platforms: Optional[Strings] = None
    sites: Optional[Strings] = None


class RecipeFlavour(_FlavourBase):
    shape: ClassVar[str] = "recipes"

    recipes: RecipeMap
    platforms: Optional[Strings] = None
    sites: Optional[Strings] = None


class MatrixFlavour(_FlavourBase):
    shape: ClassVar[str] = "matrix"

    matrix: BuildMatrix
    requires: Optional[RequirementSet] = None

    def flavor_names(self, renderer: Optional[TemplateRenderer] = None) -> List[str]:
        return expand(self.name, self.matrix, renderer)


def flavour_shape(value: Any) -> Optional[str]:
    if isinstance(value, _FlavourBase):
        return value.shape
    if not isinstance(value, Mapping):
        return None
    if "recipes" in value:
        return RecipeFlavour.shape
    if "matrix" not in value:
        return SimpleFlavour.shape
    return MatrixFlavour.shape


Flavour = Annotated[
    Union[
        Annotated[RecipeFlavour, Tag(RecipeFlavour.shape)],
        Annotated[SimpleFlavour, Tag(SimpleFlavour.shape)],
        Annotated[MatrixFlavour, Tag(MatrixFlavour.shape)],
    ],
    Discriminator(
        flavour_shape,
        custom_error_type="invalid_flavour",
        custom_error_message="Flavour entry must be a mapping",
    ),
]


class Manifest(_ManifestModel):
    name: str
    version: str

    supports: Optional[Strings] = None
    platforms: Optional[Strings] = None
    sites: Optional[Strings] = None

    requires: Optional[RequirementSet] = None
    load_requires: Optional[RequirementSet] = Field(default=None, alias="loadRequires")
    build_requires: Optional[RequirementSet] = Field(default=None, alias="buildRequires")
    test_requires: Optional[RequirementSet] = Field(default=None, alias="testRequires")
    system_requires: Optional[RequirementSet] = Field(default=None, alias="systemRequires")

    recipes: Optional[RecipeMap] = None
    flavours: Optional[Tuple[Flavour, ...]] = None
    exports: Optional[ExportsRegistry] = None

    @classmethod
    def from_str(cls, contents: str) -> "Manifest":
        from maniparse.core.manifest.loader import parse_manifest

        return parse_manifest(contents)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Manifest":
        from maniparse.core.manifest.loader import load_manifest

        return load_manifest(path)

    def has_default_flavour(self) -> bool:
        return self.requires is not None or self.recipes is not None

    def flavors(self, renderer: Optional[TemplateRenderer] = None) -> List[str]:
        """
        Concrete flavor identifiers in build order.

        ``^`` (the manifest's own implicit flavour) comes first when top-level
        ``requires`` or ``recipes`` are declared, then one block per declared
        flavour in document order. Any expansion failure aborts the whole call.
        """
        names: List[str] = []
        if self.has_default_flavour():
            names.append(DEFAULT_FLAVOR)

        for flavour in self.flavours or []:
            try:
                names.extend(flavour.flavor_names(renderer))
            except ExpansionError as exc:
                exc.flavour = flavour.name
                raise
        return names

    def export_keys(self) -> Optional[Set[str]]:
        if self.exports is None:
            return None
        return set(self.exports.keys())

    def exports_for(self, category: str) -> Optional[List[str]]:
        if self.exports is None or category not in self.exports:
            return None
        return list(self.exports[category])

    def tools(self) -> List[str]:
        return self.exports_for(TOOLS_CATEGORY) or []
