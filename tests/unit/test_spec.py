"""Unit tests for ProviderSpec parsing"""

import pytest

from ral.providers.base.spec import AttrSpec, ProviderSpec
from ral.providers.base.values import Value, ValueKind


class TestRead:
    def test_reads_metadata(self, hosts_metadata):
        result = ProviderSpec.read("/opt/ral/hosts.prov", hosts_metadata)
        assert result.is_ok()
        spec = result.unwrap()
        assert spec.name == "host::hosts"
        assert spec.type == "host"
        assert spec.source == "/opt/ral/hosts.prov"
        assert spec.suitable is True
        assert spec.identity == "name"
        assert spec.properties() == ["ensure", "ip", "x", "aliases", "ttl", "managed"]

    def test_name_is_implicit(self):
        spec = ProviderSpec.read("svc.prov", {"provider": {"type": "service"}}).unwrap()
        assert spec.attr("name") is not None
        assert spec.properties() == []

    def test_requires_provider_map(self):
        result = ProviderSpec.read("x.prov", {"provider": "nope"})
        assert result.is_err()
        assert "expected 'provider' key in metadata to contain a map" in result.err().detail

    def test_requires_type(self):
        result = ProviderSpec.read("x.prov", {"provider": {"attributes": {}}})
        assert result.is_err()
        assert "type" in result.err().detail

    def test_rejects_unknown_attribute_type(self):
        node = {"provider": {"type": "t", "attributes": {"size": {"type": "float"}}}}
        result = ProviderSpec.read("x.prov", node)
        assert result.is_err()
        assert "unknown attribute type 'float'" in result.err().detail

    @pytest.mark.parametrize("flag,expected", [("true", True), ("false", False), (False, False)])
    def test_suitable_flag(self, flag, expected):
        node = {"provider": {"type": "t", "suitable": flag}}
        assert ProviderSpec.read("x.prov", node).unwrap().suitable is expected

    def test_suitable_flag_must_be_boolean(self):
        node = {"provider": {"type": "t", "suitable": "maybe"}}
        result = ProviderSpec.read("x.prov", node)
        assert result.is_err()
        assert "'suitable' must be either 'true' or 'false' but was 'maybe'" in result.err().detail

    def test_attribute_without_body(self):
        node = {"provider": {"type": "t", "attributes": {"owner": None}}}
        spec = ProviderSpec.read("x.prov", node).unwrap()
        assert spec.attr("owner").type == "string"


class TestAttrSpec:
    def test_type_directed_read(self):
        assert AttrSpec(name="n", type="integer").read_string("12").unwrap() == Value.integer(12)
        assert AttrSpec(name="n", type="boolean").read_string("true").unwrap() == Value.boolean(True)
        assert AttrSpec(name="n", type="array[string]").read_string("a,b").unwrap() == Value.array(
            ["a", "b"]
        )

    def test_read_error_names_attribute(self):
        result = AttrSpec(name="ttl", type="integer").read_string("soon")
        assert result.is_err()
        assert result.err().detail.startswith("attribute 'ttl':")

    def test_enum(self):
        spec = AttrSpec(name="ensure", type="enum[present, absent]")
        assert spec.enum_values == ["present", "absent"]
        assert spec.value_kind == ValueKind.STRING
        assert spec.read_string("absent").unwrap() == Value.string("absent")
        result = spec.read_string("purged")
        assert result.is_err()
        assert "expected one of present, absent" in result.err().detail
