import pytest

from mvcgem.registry import DEFAULT_NAMESPACE, InstanceKey, InstanceRegistry


def test_instance_key_defaults_to_real_namespace():
    assert InstanceKey("pkg.Type") == InstanceKey("pkg.Type", "real")
    assert DEFAULT_NAMESPACE == "real"


def test_store_get_contains():
    registry = InstanceRegistry()
    key = InstanceKey("pkg.Type", "a")
    obj = object()

    assert not registry.contains(key)
    registry.store(key, obj)

    assert key in registry
    assert registry.get(key) is obj
    assert len(registry) == 1


def test_store_refuses_second_write():
    """A key holds at most one instance."""
    registry = InstanceRegistry()
    key = InstanceKey("pkg.Type")
    registry.store(key, object())

    with pytest.raises(KeyError):
        registry.store(key, object())


def test_register_instance_overrides():
    registry = InstanceRegistry()
    fake = object()
    registry.register_instance("pkg.Type", fake, namespace="x")
    assert registry.get(InstanceKey("pkg.Type", "x")) is fake


# -----------------------------
# Mock namespace partitions
# -----------------------------
def test_mock_namespace_isolates_instances():
    registry = InstanceRegistry()
    key = InstanceKey("pkg.Type")
    real = object()
    registry.store(key, real)

    with registry.use_mock_namespace("mock"):
        assert registry.mock_namespace == "mock"
        assert not registry.contains(key)
        registry.store(key, object())

    assert registry.mock_namespace == "real"
    assert registry.get(key) is real


def test_flush_one_partition_keeps_the_others():
    registry = InstanceRegistry()
    key = InstanceKey("pkg.Type")
    registry.store(key, object())
    registry.set_mock_namespace("mock")
    registry.store(key, object())

    registry.flush("mock")
    assert not registry.contains(key)

    registry.set_mock_namespace("real")
    assert registry.contains(key)

    registry.flush()
    assert len(registry) == 0
