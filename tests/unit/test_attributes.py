"""Unit tests for AttrMap"""

import pytest

from ral.providers.base.attributes import AttrMap
from ral.providers.base.values import ABSENT, Value


@pytest.fixture
def attrs():
    return AttrMap(ensure="present", ttl=60, aliases=["www"], managed=True)


class TestTotalLookup:
    def test_missing_key_reads_absent(self, attrs):
        assert attrs["nope"] is ABSENT

    def test_missing_key_is_not_inserted(self, attrs):
        _ = attrs["nope"]
        assert "nope" not in attrs

    @pytest.mark.parametrize("py_type,default", [(str, "d"), (int, 9), (bool, False), (list, [])])
    def test_missing_key_lookup_returns_default(self, attrs, py_type, default):
        assert attrs.lookup("nope", py_type, default) == default
        assert attrs.lookup_optional("nope", py_type) is None


class TestTypedLookup:
    def test_matching_type(self, attrs):
        assert attrs.lookup("ensure", str, "absent") == "present"
        assert attrs.lookup("ttl", int, 0) == 60
        assert attrs.lookup("managed", bool, False) is True
        assert attrs.lookup("aliases", list, []) == ["www"]

    def test_wrong_type_yields_default(self, attrs):
        assert attrs.lookup("ttl", str, "fallback") == "fallback"
        assert attrs.lookup("managed", int, -1) == -1

    def test_optional_distinguishes_wrong_type(self, attrs):
        assert attrs.lookup_optional("ttl", int) == 60
        assert attrs.lookup_optional("ttl", str) is None


class TestWrites:
    def test_literals_are_wrapped(self):
        attrs = AttrMap()
        attrs["ip"] = "10.0.0.1"
        assert attrs["ip"] == Value.string("10.0.0.1")

    def test_overwrite_keeps_insertion_order(self, attrs):
        attrs["ttl"] = 120
        attrs["new"] = "x"
        assert list(attrs) == ["ensure", "ttl", "aliases", "managed", "new"]
        assert attrs["ttl"] == Value.integer(120)

    def test_copy_is_independent(self, attrs):
        copied = attrs.copy()
        copied["ensure"] = "absent"
        assert attrs["ensure"] == Value.string("present")
        assert isinstance(copied, AttrMap)

    def test_to_dict(self, attrs):
        assert attrs.to_dict() == {
            "ensure": "present",
            "ttl": 60,
            "aliases": ["www"],
            "managed": True,
        }
