"""
Namespaced singleton resolution: build once per (type, namespace), fetch afterwards.
"""

import inspect
from typing import Any, Optional, Sequence, Type

from mvcgem.exceptions import ConstructionError, ContainerError, ContractViolationError, TypeNotFoundError
from mvcgem.locator import TypeRef, locate_type, type_id_of
from mvcgem.logger import create_logger
from mvcgem.registry import DEFAULT_NAMESPACE, InstanceKey, InstanceRegistry


class NamespacedSingletonResolver:
    """Build-or-fetch strategy shared by every container accessor."""

    def __init__(
        self,
        registry: Optional[InstanceRegistry] = None,
        log_file: Optional[str] = None,
        log_level: Optional[str] = None,
    ):
        self.registry = registry if registry is not None else InstanceRegistry()
        self.logger = create_logger("NamespacedSingletonResolver", log_file=log_file, level=log_level)

    def key_for(self, type_ref: TypeRef, namespace: Optional[str] = None) -> InstanceKey:
        return InstanceKey(type_id_of(type_ref), namespace if namespace is not None else DEFAULT_NAMESPACE)

    def is_built(self, type_ref: TypeRef, namespace: Optional[str] = None) -> bool:
        return self.registry.contains(self.key_for(type_ref, namespace))

    def resolve(
        self,
        type_ref: TypeRef,
        args: Sequence[Any] = (),
        namespace: Optional[str] = None,
        validator_hook: Optional[str] = None,
        post_construct_hook: Optional[str] = None,
        expected_type: Optional[Type] = None,
    ) -> Any:
        """
        Return the instance cached under (type, namespace), building it on first use.

        On a cache hit ``args`` are ignored: the first caller's constructor
        arguments stay in effect for the lifetime of the key.

        Raises:
            TypeNotFoundError: type_ref does not point to a class.
            ConstructionError: the constructor rejected args or failed.
            ContractViolationError: the validator hook returned a falsy value
                or the instance is not an ``expected_type``.
        """
        key = self.key_for(type_ref, namespace)

        with self.registry.lock:
            if self.registry.contains(key):
                self.logger.debug("Instance cache hit", type=key.type_id, namespace=key.namespace)
                return self.registry.get(key)

            try:
                cls = locate_type(type_ref)
            except TypeNotFoundError as e:
                self.logger.error(e.message, namespace=key.namespace)
                raise
            instance = self._construct(cls, key, args)

            if post_construct_hook:
                self._call_hook(instance, post_construct_hook, key)

            if validator_hook and not self._call_hook(instance, validator_hook, key):
                message = f"Instance of [{key.type_id}] rejected by validator '{validator_hook}'"
                self.logger.error(message, namespace=key.namespace)
                raise ContractViolationError(message)

            if expected_type is not None and not isinstance(instance, expected_type):
                message = (
                    f"[{key.type_id}] must extend "
                    f"{expected_type.__module__}.{expected_type.__qualname__}"
                )
                self.logger.error(message, namespace=key.namespace)
                raise ContractViolationError(message)

            self.registry.store(key, instance)
            self.logger.debug("Instance built", type=key.type_id, namespace=key.namespace)
            return instance

    def _construct(self, cls: Type, key: InstanceKey, args: Sequence[Any]) -> Any:
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError):
            signature = None

        if signature is not None:
            try:
                signature.bind(*args)
            except TypeError as e:
                message = f"Cannot build [{key.type_id}] with {len(args)} argument(s): {e}"
                self.logger.error(message, namespace=key.namespace)
                raise ConstructionError(message) from e

        try:
            return cls(*args)
        except ContainerError:
            raise
        except Exception as e:
            message = f"Constructor of [{key.type_id}] failed: {e}"
            self.logger.error(message, namespace=key.namespace)
            raise ConstructionError(message) from e

    def _call_hook(self, instance: Any, hook_name: str, key: InstanceKey) -> Any:
        hook = getattr(instance, hook_name, None)
        if not callable(hook):
            message = f"[{key.type_id}] has no callable '{hook_name}'"
            self.logger.error(message, namespace=key.namespace)
            raise ContractViolationError(message)
        return hook()
