"""
Unit tests for the provider contract

Covers the shared behaviour in the Provider base class (prepare, parse,
the default find) and the in-process MemoryProvider.
"""

from ral.domain import Ok, error
from ral.providers import MemoryProvider, Provider, ProviderSpec
from ral.providers.base.attributes import AttrMap
from ral.providers.base.changes import ChangeSet
from ral.providers.base.resource import Resource
from ral.providers.base.values import Value


class ListOnlyProvider(Provider):
    """Minimal provider relying on the default find()"""

    def __init__(self, names, describe_result=None):
        super().__init__()
        self.names = names
        self.instance_calls = 0
        self.describe_result = describe_result

    def describe(self):
        if self.describe_result is not None:
            return self.describe_result
        return ProviderSpec.read(
            "list.prov", {"provider": {"type": "thing", "attributes": {"n": {"type": "integer"}}}}
        )

    def suitable(self):
        return Ok(True)

    def instances(self):
        self.instance_calls += 1
        return [self.create(name) for name in self.names]

    def create(self, name):
        return Resource(self, name)

    def update(self, resource, desired):
        return Ok(ChangeSet())

    def flush(self):
        pass


class TestPrepareAndParse:
    def test_parse_before_prepare_is_internal_error(self):
        provider = ListOnlyProvider([])
        result = provider.parse("n", "1")
        assert result.is_err()
        assert result.err().detail == "internal error: spec was not initialized"

    def test_prepare_stores_spec(self):
        provider = ListOnlyProvider([])
        assert provider.spec is None
        assert provider.prepare() == Ok(True)
        assert provider.spec.name == "thing::list"
        assert provider.name == "thing::list"

    def test_prepare_propagates_describe_error(self):
        provider = ListOnlyProvider([], describe_result=error("bad metadata"))
        result = provider.prepare()
        assert result.is_err()
        assert result.err().detail == "bad metadata"
        assert provider.spec is None

    def test_parse_is_type_directed(self):
        provider = ListOnlyProvider([])
        provider.prepare()
        assert provider.parse("n", "7").unwrap() == Value.integer(7)
        assert provider.parse("n", "seven").is_err()

    def test_parse_unknown_attribute(self):
        provider = ListOnlyProvider([])
        provider.prepare()
        result = provider.parse("color", "red")
        assert result.is_err()
        assert result.err().detail == "there is no attribute 'color'"

    def test_parse_attrs_stops_on_first_error(self):
        provider = ListOnlyProvider([])
        provider.prepare()
        assert provider.parse_attrs({"n": "1"}).unwrap() == AttrMap(n=1)
        assert provider.parse_attrs({"n": "1", "bogus": "x"}).is_err()

    def test_builtin_source(self):
        assert ListOnlyProvider([]).source() == "builtin"


class TestDefaultFind:
    def test_scans_instances(self):
        provider = ListOnlyProvider(["a", "b", "c"])
        found = provider.find("b")
        assert found is not None
        assert found.name == "b"

    def test_missing_name(self):
        assert ListOnlyProvider(["a"]).find("z") is None

    def test_find_is_not_cached(self):
        provider = ListOnlyProvider(["a"])
        first = provider.find("a")
        second = provider.find("a")
        assert first is not second
        assert provider.instance_calls == 2

    def test_try_variants_wrap_lossy_calls(self):
        provider = ListOnlyProvider(["a"])
        assert provider.try_find("a").unwrap().name == "a"
        assert provider.try_find("z") == Ok(None)
        assert [r.name for r in provider.try_instances().unwrap()] == ["a"]


class TestMemoryProvider:
    def test_suitable(self, memory_provider):
        assert memory_provider.suitable() == Ok(True)
        unsuitable = MemoryProvider("host", suitable=False)
        unsuitable.prepare()
        assert unsuitable.suitable() == Ok(False)

    def test_instances_are_fresh(self, memory_provider):
        names = [r.name for r in memory_provider.instances()]
        assert names == ["alpha", "beta"]
        first = memory_provider.find("beta")
        first["ip"] = "changed"
        assert memory_provider.find("beta")["ip"] == Value.string("10.0.0.2")

    def test_find_reads_record(self, memory_provider):
        beta = memory_provider.find("beta")
        assert beta["ensure"] == Value.string("present")
        assert beta.lookup("ttl", int, 0) == 60
        assert memory_provider.find("gamma") is None

    def test_create_has_no_side_effect(self, memory_provider):
        resource = memory_provider.create("gamma")
        assert resource.attributes() == AttrMap()
        assert "gamma" not in memory_provider.records

    def test_update_reports_check_changes(self, memory_provider):
        alpha = memory_provider.find("alpha")
        result = alpha.update(AttrMap(ip="10.0.0.9"))
        assert result.is_ok()
        changes = result.unwrap()
        assert [c.attr for c in changes] == ["ip"]
        assert changes[0].is_ == Value.string("10.0.0.1")
        assert changes[0].was == Value.string("10.0.0.9")
        assert alpha["ip"] == Value.string("10.0.0.9")

    def test_update_without_differences(self, memory_provider):
        alpha = memory_provider.find("alpha")
        assert len(alpha.update(AttrMap(ip="10.0.0.1")).unwrap()) == 0

    def test_update_creates_record(self, memory_provider):
        gamma = memory_provider.create("gamma")
        changes = gamma.update(AttrMap(ensure="present", ip="10.0.0.3")).unwrap()
        assert changes.exists("ensure")
        assert changes.exists("ip")
        assert memory_provider.find("gamma")["ip"] == Value.string("10.0.0.3")

    def test_update_removes_record(self, memory_provider):
        beta = memory_provider.find("beta")
        changes = beta.update(AttrMap(ensure="absent")).unwrap()
        assert [c.attr for c in changes] == ["ensure"]
        assert memory_provider.find("beta") is None

    def test_update_rejects_unknown_attribute(self, memory_provider):
        alpha = memory_provider.find("alpha")
        result = alpha.update(AttrMap(color="red"))
        assert result.is_err()
        assert result.err().detail == "there is no attribute 'color'"
