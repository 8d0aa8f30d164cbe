"""Tests for kvdag.attributes - AttributeMap and merge semantics."""

import pytest

from kvdag.attributes import AttributeMap


class TestAttributeMapBasics:
    """AttributeMap behaves as an ordinary mutable mapping."""

    def test_construct_empty(self):
        attrs = AttributeMap()
        assert len(attrs) == 0
        assert dict(attrs) == {}

    def test_construct_from_mapping_copies(self):
        source = {"a": 1}
        attrs = AttributeMap(source)
        attrs["b"] = 2
        assert source == {"a": 1}

    def test_get_set_delete(self):
        attrs = AttributeMap({"a": 1})
        attrs["a"] = 10
        attrs["b"] = 2
        del attrs["a"]
        assert list(attrs) == ["b"]
        assert attrs["b"] == 2

    def test_missing_key_raises(self):
        with pytest.raises(KeyError):
            AttributeMap()["nope"]

    def test_equality_with_dict(self):
        assert AttributeMap({"a": 1}) == {"a": 1}


class TestMerge:
    """merge() overlays the receiver onto its argument."""

    def test_receiver_wins_on_collision(self):
        attrs = AttributeMap({"k": "mine"})
        attrs.merge({"k": "theirs"})
        assert attrs["k"] == "mine"

    def test_missing_keys_are_added(self):
        attrs = AttributeMap({"a": 1})
        attrs.merge({"b": 2})
        assert dict(attrs) == {"a": 1, "b": 2}

    def test_returns_self(self):
        attrs = AttributeMap()
        assert attrs.merge({"a": 1}) is attrs

    def test_argument_is_not_modified(self):
        other = AttributeMap({"a": 1})
        AttributeMap({"a": 2, "b": 3}).merge(other)
        assert dict(other) == {"a": 1}

    def test_nested_values_are_not_deep_merged(self):
        attrs = AttributeMap({"net": {"ip": "10.0.0.1"}})
        attrs.merge({"net": {"mtu": 9000}})
        assert attrs["net"] == {"ip": "10.0.0.1"}


class TestKeyPaths:
    """String keys containing the separator walk nested mappings."""

    def test_nested_lookup(self):
        attrs = AttributeMap({"net": {"ip": "10.0.0.1"}})
        assert attrs["net.ip"] == "10.0.0.1"

    def test_literal_key_takes_precedence(self):
        attrs = AttributeMap({"net.ip": "literal", "net": {"ip": "nested"}})
        assert attrs["net.ip"] == "literal"

    def test_missing_path_raises(self):
        attrs = AttributeMap({"net": {"ip": "10.0.0.1"}})
        with pytest.raises(KeyError):
            attrs["net.mtu"]
        with pytest.raises(KeyError):
            attrs["net.ip.octet"]

    def test_contains_is_path_aware(self):
        attrs = AttributeMap({"net": {"ip": "10.0.0.1"}})
        assert "net.ip" in attrs
        assert "net.mtu" not in attrs

    def test_custom_separator(self):
        attrs = AttributeMap({"net": {"ip": "10.0.0.1"}}, separator="/")
        assert attrs["net/ip"] == "10.0.0.1"
        assert "net.ip" not in attrs

    def test_separator_none_disables_paths(self):
        attrs = AttributeMap({"net": {"ip": "10.0.0.1"}}, separator=None)
        assert "net.ip" not in attrs

    def test_write_stores_literal_key(self):
        attrs = AttributeMap()
        attrs["net.ip"] = "10.0.0.1"
        assert list(attrs) == ["net.ip"]


class TestMatch:
    """match() evaluates declarative filters."""

    def test_empty_filter_matches(self):
        assert AttributeMap().match({})
        assert AttributeMap().match(None)

    def test_all_keys_must_match(self):
        attrs = AttributeMap({"role": "web", "port": 80})
        assert attrs.match({"role": "web"})
        assert attrs.match({"role": "web", "port": 80})
        assert not attrs.match({"role": "web", "port": 443})

    def test_missing_key_does_not_match(self):
        assert not AttributeMap({"role": "web"}).match({"env": "prod"})

    def test_key_path_filter(self):
        attrs = AttributeMap({"net": {"mtu": 1500}})
        assert attrs.match({"net.mtu": 1500})


class TestCopy:
    """copy() shares nested values unless asked for a deep copy."""

    def test_shallow_copy_shares_nested(self):
        attrs = AttributeMap({"net": {"mtu": 1500}})
        attrs.copy()["net"]["mtu"] = 9000
        assert attrs["net.mtu"] == 9000

    def test_deep_copy_detaches_nested(self):
        attrs = AttributeMap({"net": {"mtu": 1500}}, separator="/")
        clone = attrs.copy(deep=True)
        clone["net"]["mtu"] = 9000
        assert attrs["net/mtu"] == 1500
        assert clone.separator == "/"


class TestToDict:
    """to_dict() returns plain, independent structures."""

    def test_nested_mappings_become_dicts(self):
        inner = AttributeMap({"ip": "10.0.0.1"})
        attrs = AttributeMap({"net": inner, "tags": ("a", "b")})
        result = attrs.to_dict()
        assert result == {"net": {"ip": "10.0.0.1"}, "tags": ["a", "b"]}
        assert type(result["net"]) is dict

    def test_copy_is_independent(self):
        attrs = AttributeMap({"net": {"ip": "10.0.0.1"}})
        attrs.to_dict()["net"]["ip"] = "changed"
        assert attrs["net.ip"] == "10.0.0.1"
