"""Tests for settings precedence and YAML config loading."""

from unittest.mock import MagicMock

from args import parse_args
from cli_config import load_config, resolve_settings


class TestLoadConfig:
    """Tests for YAML config loading."""

    def test_no_path(self):
        assert load_config(None) == {}

    def test_missing_file(self, tmp_path):
        assert load_config(str(tmp_path / "missing.yml")) == {}

    def test_section(self, tmp_path):
        path = tmp_path / "depbuild.yml"
        path.write_text("build_deps:\n  release: true\n  features: [serde, std]\n", encoding="utf-8")

        assert load_config(str(path)) == {"release": True, "features": ["serde", "std"]}

    def test_top_level_keys(self, tmp_path):
        path = tmp_path / "depbuild.yml"
        path.write_text("target: wasm32-unknown-unknown\n", encoding="utf-8")

        assert load_config(str(path)) == {"target": "wasm32-unknown-unknown"}

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "depbuild.yml"
        path.write_text("release: [unterminated\n", encoding="utf-8")

        assert load_config(str(path)) == {}

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "depbuild.yml"
        path.write_text("- release\n", encoding="utf-8")

        assert load_config(str(path)) == {}


class TestResolveSettings:
    """Tests for CLI > config > environment > default precedence."""

    def test_defaults(self):
        settings = resolve_settings(parse_args([]), {}, {})

        assert settings.cargo == "cargo"
        assert settings.manifest_path == "Cargo.toml"
        assert settings.lockfile_path == "Cargo.lock"
        assert settings.source == "manifest"
        assert settings.flags.release is False
        assert settings.flags.target is None
        assert settings.flags.features == ()
        assert settings.flags.skip_update is False

    def test_cli_overrides_config(self):
        args = parse_args(["--release", "--target", "x86_64-pc-windows-gnu", "--features", "a b"])
        config = {"release": False, "target": "wasm32-unknown-unknown", "features": ["c"], "nightly": True}

        settings = resolve_settings(args, config, {})

        assert settings.flags.release is True
        assert settings.flags.target == "x86_64-pc-windows-gnu"
        assert settings.flags.features == ("a", "b")
        assert settings.flags.nightly is True

    def test_cargo_binary_precedence(self):
        args = parse_args([])
        assert resolve_settings(args, {}, {"CARGO": "/env/cargo"}).cargo == "/env/cargo"
        assert resolve_settings(args, {"cargo": "/cfg/cargo"}, {"CARGO": "/env/cargo"}).cargo == "/cfg/cargo"

    def test_lockfile_defaults_next_to_manifest(self):
        args = parse_args(["--manifest-path", "/work/app/Cargo.toml"])
        settings = resolve_settings(args, {}, {})
        assert settings.lockfile_path == "/work/app/Cargo.lock"

    def test_unknown_source_in_config(self):
        settings = resolve_settings(parse_args([]), {"source": "registry"}, {})
        assert settings.source == "manifest"

    def test_string_booleans_in_config(self):
        config = {"release": "false", "nightly": "yes", "skip_update": "False", "all_features": "on"}
        settings = resolve_settings(parse_args([]), config, {})
        assert settings.flags.release is False
        assert settings.flags.nightly is True
        assert settings.flags.skip_update is False
        assert settings.flags.all_features is True

    def test_non_boolean_config_value_ignored(self):
        settings = resolve_settings(parse_args([]), {"release": "sometimes", "nightly": 1}, {})
        assert settings.flags.release is False
        assert settings.flags.nightly is False

    def test_mock_args_without_attributes(self):
        args = MagicMock(spec=[])
        settings = resolve_settings(args, {"skip_update": True, "all_features": True}, {})
        assert settings.flags.skip_update is True
        assert settings.flags.all_features is True
