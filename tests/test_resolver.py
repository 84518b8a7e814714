import threading
import time

from unittest.mock import MagicMock

import pytest

from mvcgem.exceptions import ConstructionError, ContractViolationError, TypeNotFoundError
from mvcgem.registry import InstanceRegistry
from mvcgem.resolver import NamespacedSingletonResolver


class Session:
    def __init__(self, name):
        self.name = name


class Hooked:
    def __init__(self):
        self.hook_calls = 0

    def after_build(self):
        self.hook_calls += 1

    def is_valid(self):
        return True


class Invalid:
    def is_valid(self):
        return False


class Exploding:
    def __init__(self):
        raise RuntimeError("boom")


class Slow:
    built = 0

    def __init__(self):
        time.sleep(0.01)
        type(self).built += 1


@pytest.fixture
def resolver():
    return NamespacedSingletonResolver(InstanceRegistry())


# -----------------------------
# Singleton per (type, namespace)
# -----------------------------
def test_same_key_returns_same_instance_and_first_args_win(resolver):
    first = resolver.resolve(Session, ["user1"], namespace="user1")
    second = resolver.resolve(Session, ["someone-else"], namespace="user1")

    assert first is second
    assert second.name == "user1"


def test_namespaces_partition_instances(resolver):
    user1 = resolver.resolve(Session, ["user1"], namespace="user1")
    user2 = resolver.resolve(Session, ["user2"], namespace="user2")

    assert user1 is not user2
    assert user2.name == "user2"


def test_default_namespace_is_real(resolver):
    resolver.resolve(Session, ["x"])
    assert resolver.is_built(Session, "real")
    assert resolver.is_built(Session)


def test_dotted_path_and_class_share_a_key(resolver):
    from mvcgem.components import Cache

    by_class = resolver.resolve(Cache, ["c"])
    by_path = resolver.resolve("mvcgem.components.Cache", ["other"])
    assert by_class is by_path


def test_building_one_key_leaves_others_untouched(resolver):
    resolver.resolve(Session, ["a"], namespace="a")
    assert len(resolver.registry) == 1
    assert not resolver.is_built(Session, "b")


# -----------------------------
# Hooks
# -----------------------------
def test_post_construct_hook_runs_once_and_never_on_hits(resolver):
    obj = resolver.resolve(Hooked, post_construct_hook="after_build")
    assert obj.hook_calls == 1

    again = resolver.resolve(Hooked, post_construct_hook="after_build")
    assert again is obj
    assert obj.hook_calls == 1


def test_validator_hook_accepts(resolver):
    assert isinstance(resolver.resolve(Hooked, validator_hook="is_valid"), Hooked)


def test_validator_hook_rejects_and_leaves_key_absent(resolver):
    with pytest.raises(ContractViolationError):
        resolver.resolve(Invalid, validator_hook="is_valid")
    assert not resolver.is_built(Invalid)


def test_missing_hook_method_is_a_contract_violation(resolver):
    with pytest.raises(ContractViolationError):
        resolver.resolve(Session, ["x"], post_construct_hook="nope")


def test_expected_type_mismatch(resolver):
    with pytest.raises(ContractViolationError) as exc_info:
        resolver.resolve(Session, ["x"], expected_type=Hooked)
    assert "must extend" in str(exc_info.value)
    assert not resolver.is_built(Session)


# -----------------------------
# Errors
# -----------------------------
def test_unknown_type(resolver):
    with pytest.raises(TypeNotFoundError):
        resolver.resolve("mvcgem.components.DoesNotExist")


def test_rejected_arguments(resolver):
    with pytest.raises(ConstructionError) as exc_info:
        resolver.resolve(Session, [])
    assert isinstance(exc_info.value.__cause__, TypeError)


def test_failing_constructor_is_chained(resolver):
    with pytest.raises(ConstructionError) as exc_info:
        resolver.resolve(Exploding)
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert not resolver.is_built(Exploding)


# -----------------------------
# Concurrency
# -----------------------------
def test_concurrent_resolution_builds_once(resolver):
    Slow.built = 0
    results = []

    def worker():
        results.append(resolver.resolve(Slow))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert Slow.built == 1
    assert all(r is results[0] for r in results)


def test_unknown_type_is_logged_before_raising(resolver):
    resolver.logger = MagicMock()

    with pytest.raises(TypeNotFoundError):
        resolver.resolve("mvcgem.components.DoesNotExist", namespace="ns")

    resolver.logger.error.assert_called_once()
    assert "DoesNotExist" in resolver.logger.error.call_args.args[0]


def test_empty_namespace_is_kept(resolver):
    empty = resolver.resolve(Session, ["x"], namespace="")

    assert resolver.key_for(Session, "").namespace == ""
    assert resolver.is_built(Session, "")
    assert not resolver.is_built(Session)
    assert resolver.resolve(Session, ["y"]) is not empty
