"""
Manifest parser and file loader tests.
"""
from __future__ import annotations

import logging

import pytest

from maniparse.core.manifest.errors import (
    DocumentSyntaxError,
    ManifestReadError,
    ParseError,
    SchemaError,
)
from maniparse.core.manifest.loader import load_manifest, parse_manifest
from maniparse.core.manifest.models import Manifest


# ---------------------------------------------------------------------------
# parse_manifest
# ---------------------------------------------------------------------------

def test_parse_sample(sample_manifest_text):
    m = parse_manifest(sample_manifest_text)
    assert m.name == "widget"
    assert m.version == "1.4.0"
    assert len(m.flavours) == 3


def test_invalid_yaml_is_syntax_error():
    with pytest.raises(DocumentSyntaxError) as ei:
        parse_manifest("name: [unclosed\nversion: 1\n")
    assert isinstance(ei.value, ParseError)


@pytest.mark.parametrize("text", ["", "- a\n- b\n", "just a string\n"])
def test_non_mapping_root_is_schema_error(text):
    with pytest.raises(SchemaError):
        parse_manifest(text)


def test_missing_name_is_schema_error():
    with pytest.raises(SchemaError) as ei:
        parse_manifest("version: 1.0.0\n")
    assert any(e["loc"] == ("name",) for e in ei.value.errors)


def test_missing_version_is_schema_error():
    with pytest.raises(SchemaError) as ei:
        parse_manifest("name: p\n")
    assert any(e["loc"] == ("version",) for e in ei.value.errors)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("1.10", "1.10"),
        ("2", "2"),
        ("1.0", "1.0"),
        ("1e3", "1e3"),
        ("0x1F", "0x1F"),
    ],
)
def test_numeric_version_keeps_source_text(raw, expected):
    m = parse_manifest(f"name: p\nversion: {raw}\n")
    assert m.version == expected


def test_quoted_version_unchanged():
    assert parse_manifest("name: p\nversion: '1.10'\n").version == "1.10"


def test_later_duplicate_version_key_wins():
    assert parse_manifest("name: p\nversion: 1.0\nversion: 2.50\n").version == "2.50"


@pytest.mark.parametrize("raw", ["true", "null", "[1, 2]"])
def test_non_text_version_is_schema_error(raw):
    with pytest.raises(SchemaError):
        parse_manifest(f"name: p\nversion: {raw}\n")


@pytest.mark.parametrize("value", ["true", "null", "[1, 2]", "{a: 1}"])
def test_non_scalar_requirement_is_schema_error(value):
    with pytest.raises(SchemaError):
        parse_manifest(f"name: p\nversion: '1'\nrequires:\n  dep: {value}\n")


def test_exports_must_be_lists_of_strings():
    with pytest.raises(SchemaError):
        parse_manifest("name: p\nversion: '1'\nexports:\n  tools: widget\n")


def test_schema_error_chains_validation_error():
    with pytest.raises(SchemaError) as ei:
        parse_manifest("name: p\n")
    assert ei.value.__cause__ is not None


def test_from_str_delegates(sample_manifest_text):
    assert Manifest.from_str(sample_manifest_text) == parse_manifest(sample_manifest_text)


# ---------------------------------------------------------------------------
# load_manifest
# ---------------------------------------------------------------------------

def test_load_from_file(write_manifest, sample_manifest_text):
    path = write_manifest(sample_manifest_text)
    m = load_manifest(path)
    assert m.name == "widget"
    assert Manifest.from_path(str(path)) == m


def test_missing_file_is_read_error(tmp_path):
    path = tmp_path / "nope.yaml"
    with pytest.raises(ManifestReadError) as ei:
        load_manifest(path)
    assert ei.value.path == path
    assert not isinstance(ei.value, ParseError)


def test_directory_is_read_error(tmp_path):
    with pytest.raises(ManifestReadError):
        load_manifest(tmp_path)


def test_invalid_file_contents_propagate_parse_error(write_manifest):
    path = write_manifest("name: p\n")
    with pytest.raises(SchemaError):
        load_manifest(path)


def test_load_logs_at_debug(write_manifest, sample_manifest_text, caplog):
    caplog.set_level(logging.DEBUG, logger="maniparse.loader")
    load_manifest(write_manifest(sample_manifest_text))
    assert "Loaded manifest" in caplog.text
    assert "widget" in caplog.text
