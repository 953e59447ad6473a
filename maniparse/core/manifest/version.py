"""Tolerant version scalar.

YAML hands back ``7`` as an int, ``7.1`` as a float and ``7.3.2`` as a string,
so a requirement bound may arrive as any of the three. ``ScalarVersion`` keeps
exactly one of them and remembers which.

Two entry points:

- validation of an already-typed document scalar (what ``yaml.safe_load``
  produced): int in 0..65535 -> whole, float -> real, str -> text. Ints outside
  the whole range are kept as text in their decimal form.
- ``ScalarVersion.classify(token)`` for raw lexical text: integer pattern ->
  float pattern -> text. The float pattern also takes every form
  ``str(float)`` produces (``1e+20``, ``inf``, ``nan``), so display re-classifies
  to the same variant.

Manifest fields use ``DocumentScalar``, which rejects mappings outright; only
keyword construction in Python reaches the ``kind``/``value`` field path.

Ordering is variant first (text < real < whole) and value second. Comparing a
whole against a text is defined but carries no numeric meaning, and a NaN real
makes the order partial.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Any, Dict, Mapping, Tuple, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, StrictFloat, StrictInt, StrictStr, model_validator

WHOLE_MAX = 65535

_INT_PATTERN = re.compile(r"[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[-+]?(?:(?:[0-9]+\.[0-9]*|\.[0-9]+)(?:[eE][-+]?[0-9]+)?|[0-9]+[eE][-+]?[0-9]+|inf|nan)"
)


class VersionKind(str, Enum):
    TEXT = "text"
    REAL = "real"
    WHOLE = "whole"


_RANK = {VersionKind.TEXT: 0, VersionKind.REAL: 1, VersionKind.WHOLE: 2}


def _fields_for_scalar(raw: Any) -> Dict[str, Any]:
    # bool is an int subclass; YAML true/false is never a version
    if isinstance(raw, bool):
        raise ValueError(f"expected a version scalar, got boolean {raw!r}")
    if isinstance(raw, int):
        if 0 <= raw <= WHOLE_MAX:
            return {"kind": VersionKind.WHOLE, "value": raw}
        return {"kind": VersionKind.TEXT, "value": str(raw)}
    if isinstance(raw, float):
        return {"kind": VersionKind.REAL, "value": raw}
    if isinstance(raw, str):
        return {"kind": VersionKind.TEXT, "value": raw}
    raise ValueError(f"expected a version scalar, got {type(raw).__name__}")


class ScalarVersion(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: VersionKind
    value: Union[StrictInt, StrictFloat, StrictStr]

    @model_validator(mode="before")
    @classmethod
    def _from_document_scalar(cls, data: Any) -> Any:
        if isinstance(data, (dict, ScalarVersion)):
            return data
        return _fields_for_scalar(data)

    @model_validator(mode="after")
    def _check_kind_matches_value(self) -> "ScalarVersion":
        if self.kind is VersionKind.WHOLE:
            if not isinstance(self.value, int) or not 0 <= self.value <= WHOLE_MAX:
                raise ValueError(f"whole version must be an int in 0..{WHOLE_MAX}, got {self.value!r}")
        elif self.kind is VersionKind.REAL:
            if not isinstance(self.value, float):
                raise ValueError(f"real version must be a float, got {self.value!r}")
        elif not isinstance(self.value, str):
            raise ValueError(f"text version must be a str, got {self.value!r}")
        return self

    @classmethod
    def classify(cls, token: str) -> "ScalarVersion":
        """Pick the variant a bare token's lexical form implies."""
        if _INT_PATTERN.fullmatch(token):
            number = int(token)
            if number <= WHOLE_MAX:
                return cls(kind=VersionKind.WHOLE, value=number)
        elif _FLOAT_PATTERN.fullmatch(token):
            return cls(kind=VersionKind.REAL, value=float(token))
        return cls(kind=VersionKind.TEXT, value=token)

    @classmethod
    def text(cls, value: str) -> "ScalarVersion":
        return cls(kind=VersionKind.TEXT, value=value)

    @classmethod
    def real(cls, value: float) -> "ScalarVersion":
        return cls(kind=VersionKind.REAL, value=float(value))

    @classmethod
    def whole(cls, value: int) -> "ScalarVersion":
        return cls(kind=VersionKind.WHOLE, value=value)

    def _sort_key(self) -> Tuple[int, Union[int, float, str]]:
        return (_RANK[self.kind], self.value)

    def __str__(self) -> str:
        if self.kind is VersionKind.TEXT:
            return self.value
        return str(self.value)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, ScalarVersion):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, ScalarVersion):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, ScalarVersion):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, ScalarVersion):
            return NotImplemented
        return self._sort_key() >= other._sort_key()


def document_scalar(raw: Any) -> ScalarVersion:
    """Validate a scalar read from a manifest; mappings are never field sets here."""
    if isinstance(raw, ScalarVersion):
        return raw
    if isinstance(raw, Mapping):
        raise ValueError("expected a version scalar, got a mapping")
    return ScalarVersion(**_fields_for_scalar(raw))


# Field type for requirement bounds and matrix values as they appear in a document.
DocumentScalar = Annotated[ScalarVersion, BeforeValidator(document_scalar)]
