"""Tests for the cargo metadata backed version resolver."""

import pytest

from common.errors import VersionResolutionError
from versioning.models import MetadataPackage, PackageIdentifier
from versioning.parser import format_identifier, normalize_version_spec
from versioning.resolvers.cargo import CargoVersionResolver, is_exact_version


def make_resolver(*packages):
    """Helper to build a resolver over (name, version) pairs."""
    metadata = [MetadataPackage(name=n, version=v) for n, v in packages]
    return CargoVersionResolver(lambda: metadata)


class TestCargoVersionResolver:
    """Test resolution of non-exact specs."""

    def test_exact_version_returned_unchanged(self):
        resolver = make_resolver(("foo", "9.9.9"))

        assert resolver.resolve("foo", "1.2.3") == PackageIdentifier("foo", "1.2.3")
        assert not resolver.metadata_loaded

    def test_exact_version_without_metadata(self):
        resolver = CargoVersionResolver()
        assert resolver.resolve("foo", "1.2.3").version == "1.2.3"

    def test_operator_prefixed_exact_version(self):
        resolver = CargoVersionResolver()
        assert resolver.resolve("foo", "=1.2.3").version == "1.2.3"

    def test_empty_spec_matches_only_entry(self):
        resolver = make_resolver(("foo", "0.4.0"))
        assert resolver.resolve("foo", "").version == "0.4.0"

    def test_prefix_match(self):
        resolver = make_resolver(("bar", "2.0.1"), ("foo", "1.0.4"))
        assert resolver.resolve("foo", "1.0").version == "1.0.4"

    def test_caret_spec_uses_prefix(self):
        resolver = make_resolver(("foo", "0.8.5"))
        assert resolver.resolve("foo", "^0.8").version == "0.8.5"

    def test_first_match_is_lowest_semver(self):
        resolver = make_resolver(("foo", "1.0.10"), ("foo", "1.0.4"), ("foo", "1.0.9"))
        assert resolver.resolve("foo", "1.0").version == "1.0.4"

    def test_same_name_different_majors_not_disambiguated(self):
        resolver = make_resolver(("rand", "0.8.5"), ("rand", "0.7.3"))
        assert resolver.resolve("rand", "").version == "0.7.3"

    def test_no_matching_name(self):
        resolver = make_resolver(("bar", "1.0.0"))
        with pytest.raises(VersionResolutionError) as exc_info:
            resolver.resolve("foo", "1.0")
        assert exc_info.value.name == "foo"

    def test_no_matching_prefix(self):
        resolver = make_resolver(("foo", "2.0.0"))
        with pytest.raises(VersionResolutionError):
            resolver.resolve("foo", "1.0")

    def test_metadata_loaded_once(self):
        calls = []

        def loader():
            calls.append(1)
            return [MetadataPackage("foo", "1.0.4"), MetadataPackage("bar", "2.0.1")]

        resolver = CargoVersionResolver(loader)
        result = resolver.resolve_all([("foo", "1.0"), ("bar", "2"), ("baz", "3.0.0")])

        assert [str(i) for i in result] == ["foo:1.0.4", "bar:2.0.1", "baz:3.0.0"]
        assert len(calls) == 1


class TestVersionHelpers:
    """Test identifier and spec helpers."""

    def test_format_identifier(self):
        assert format_identifier("a", "1.0.0") == "a:1.0.0"

    def test_format_identifier_empty_name(self):
        with pytest.raises(ValueError):
            format_identifier("", "1.0.0")

    @pytest.mark.parametrize("spec,expected", [
        ("1.2.3", True),
        ("1.0.0-alpha.1", True),
        ("1.0", False),
        ("", False),
        ("*", False),
    ])
    def test_is_exact_version(self, spec, expected):
        assert is_exact_version(spec) is expected

    @pytest.mark.parametrize("spec,expected", [
        ("=1.2.3", "1.2.3"),
        ("^0.8", "0.8"),
        ("~1.2", "1.2"),
        (" 1.0 ", "1.0"),
        ("", ""),
    ])
    def test_normalize_version_spec(self, spec, expected):
        assert normalize_version_spec(spec) == expected
