"""
mvcgem - namespaced singleton container for MVC applications.
"""

from mvcgem.config.settings import ContainerSettings
from mvcgem.container import (
    ComponentRole,
    Container,
    get_container,
    initialize_container,
    reset_container,
)
from mvcgem.exceptions import (
    ConstructionError,
    ContainerError,
    ContractViolationError,
    NotFoundError,
    TypeNotFoundError,
)
from mvcgem.naming import NamingConvention, Role
from mvcgem.registry import DEFAULT_NAMESPACE, InstanceKey, InstanceRegistry
from mvcgem.resolver import NamespacedSingletonResolver

__all__ = [
    "ComponentRole",
    "ConstructionError",
    "Container",
    "ContainerError",
    "ContainerSettings",
    "ContractViolationError",
    "DEFAULT_NAMESPACE",
    "InstanceKey",
    "InstanceRegistry",
    "NamespacedSingletonResolver",
    "NamingConvention",
    "NotFoundError",
    "Role",
    "TypeNotFoundError",
    "get_container",
    "initialize_container",
    "reset_container",
]
