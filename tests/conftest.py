import copy

import pytest

from ral.providers import ExternalProvider, MemoryProvider
from tests.utils.providers import HOSTS_METADATA, FakeExecutor


@pytest.fixture
def hosts_metadata():
    """Metadata of the sample host provider (a fresh copy per test)"""
    return copy.deepcopy(HOSTS_METADATA)


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def hosts_provider(hosts_metadata, fake_executor):
    """Prepared external host provider talking to a FakeExecutor"""
    provider = ExternalProvider("/opt/ral/hosts.prov", hosts_metadata, executor=fake_executor)
    assert provider.prepare().is_ok()
    return provider


@pytest.fixture
def memory_provider():
    """Prepared in-process host provider with two records"""
    provider = MemoryProvider(
        "host",
        attributes={"ip": {"type": "string"}, "ttl": {"type": "integer"}},
        records={"alpha": {"ip": "10.0.0.1"}, "beta": {"ip": "10.0.0.2", "ttl": 60}},
    )
    assert provider.prepare().is_ok()
    return provider


@pytest.fixture
def provider_dir(tmp_path):
    """Empty directory for provider executables"""
    directory = tmp_path / "providers"
    directory.mkdir()
    return directory
