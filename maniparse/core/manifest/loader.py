"""
Manifest parser.

Reads a YAML manifest into a ``Manifest``. Parsing is all-or-nothing: a
syntax problem raises ``DocumentSyntaxError``, a shape problem raises
``SchemaError`` carrying pydantic's error list, and nothing partial is ever
returned.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from maniparse.core.manifest.errors import DocumentSyntaxError, ManifestReadError, SchemaError
from maniparse.core.manifest.models import Manifest

_log = logging.getLogger("maniparse.loader")

VERSION_KEY = "version"


def _scalar_text(root: yaml.Node, key: str) -> Optional[str]:
    """Source text of a plain scalar under ``key`` in the root mapping."""
    text = None
    for key_node, value_node in root.value:
        if (
            isinstance(key_node, yaml.ScalarNode)
            and key_node.value == key
            and isinstance(value_node, yaml.ScalarNode)
        ):
            text = value_node.value
    return text


def _load_document(contents: str) -> Any:
    loader = yaml.SafeLoader(contents)
    try:
        root = loader.get_single_node()
        data = loader.construct_document(root) if root is not None else None
    except yaml.YAMLError as exc:
        raise DocumentSyntaxError(f"Manifest is not valid YAML: {exc}") from exc
    finally:
        loader.dispose()

    # version is free-form text: keep `1.10` as written instead of the float 1.1
    if isinstance(data, dict) and isinstance(root, yaml.MappingNode):
        version = data.get(VERSION_KEY)
        if isinstance(version, (int, float)) and not isinstance(version, bool):
            text = _scalar_text(root, VERSION_KEY)
            if text is not None:
                data[VERSION_KEY] = text
    return data


def parse_manifest(contents: str) -> Manifest:
    data = _load_document(contents)
    if not isinstance(data, dict):
        raise SchemaError(f"Manifest root must be a mapping, got {type(data).__name__}")

    try:
        return Manifest.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        raise SchemaError(
            f"Manifest does not match schema ({len(errors)} error(s)): {exc}",
            errors=errors,
        ) from exc


def read_manifest_text(path: Union[str, Path]) -> str:
    resolved = Path(path)
    try:
        return resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestReadError(path=resolved, reason=str(exc)) from exc


def load_manifest(path: Union[str, Path]) -> Manifest:
    resolved = Path(path)
    contents = read_manifest_text(resolved)
    manifest = parse_manifest(contents)
    _log.debug(
        "Loaded manifest %s (%s %s, %d declared flavours)",
        resolved,
        manifest.name,
        manifest.version,
        len(manifest.flavours or []),
    )
    return manifest
