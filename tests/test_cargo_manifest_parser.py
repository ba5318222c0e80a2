"""Tests for Cargo.toml interpretation."""

import pytest

from common.errors import ManifestFormatError
from registry.cargo.manifest_parser import (
    load_manifest,
    parse_dependencies,
    read_package_name,
)


class TestParseDependencies:
    """Test [dependencies] extraction."""

    def test_scalar_and_table_entries_keep_declaration_order(self):
        manifest = {
            "dependencies": {
                "serde": "1.0",
                "rand": {"version": "0.8.5", "features": ["small_rng"]},
                "log": "0.4.17",
            }
        }

        assert parse_dependencies(manifest) == [
            ("serde", "1.0"),
            ("rand", "0.8.5"),
            ("log", "0.4.17"),
        ]

    def test_scalar_entry_has_no_residual_quotes(self):
        manifest = {"dependencies": {"foo": '"1.2.3"'}}
        assert parse_dependencies(manifest) == [("foo", "1.2.3")]

    def test_table_version_quotes_stripped(self):
        manifest = {"dependencies": {"foo": {"version": '"2.0"'}}}
        assert parse_dependencies(manifest) == [("foo", "2.0")]

    def test_table_without_version_yields_empty_spec(self):
        manifest = {"dependencies": {"local": {"path": "../local"}}}
        assert parse_dependencies(manifest) == [("local", "")]

    def test_empty_dependencies_table(self):
        assert parse_dependencies({"dependencies": {}}) == []

    def test_missing_dependencies_section(self):
        with pytest.raises(ManifestFormatError):
            parse_dependencies({"package": {"name": "top"}})

    def test_dependencies_not_a_table(self):
        with pytest.raises(ManifestFormatError):
            parse_dependencies({"dependencies": ["serde"]})

    def test_unsupported_entry_shape(self):
        with pytest.raises(ManifestFormatError) as exc_info:
            parse_dependencies({"dependencies": {"weird": 42}})
        assert "weird" in str(exc_info.value)

    def test_non_string_table_version(self):
        with pytest.raises(ManifestFormatError):
            parse_dependencies({"dependencies": {"weird": {"version": 1}}})


class TestLoadManifest:
    """Test manifest loading from disk."""

    def test_load_and_parse(self, tmp_path):
        manifest_path = tmp_path / "Cargo.toml"
        manifest_path.write_text(
            """[package]
name = "top"
version = "0.1.0"

[dependencies]
foo = "1.0"
bar = { version = "2.0" }
baz = { git = "https://example.com/baz.git" }
""",
            encoding="utf-8",
        )

        manifest = load_manifest(str(manifest_path))

        assert read_package_name(manifest) == "top"
        assert parse_dependencies(manifest) == [("foo", "1.0"), ("bar", "2.0"), ("baz", "")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestFormatError) as exc_info:
            load_manifest(str(tmp_path / "Cargo.toml"))
        assert "not available" in str(exc_info.value)

    def test_invalid_toml(self, tmp_path):
        manifest_path = tmp_path / "Cargo.toml"
        manifest_path.write_text("invalid toml {", encoding="utf-8")
        with pytest.raises(ManifestFormatError):
            load_manifest(str(manifest_path))

    def test_missing_package_name(self):
        with pytest.raises(ManifestFormatError):
            read_package_name({"dependencies": {}})
