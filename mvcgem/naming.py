"""
Naming conventions mapping an application context to concrete type ids.

    <app_namespace>.<Context>.<Role suffix>   e.g. App.Blog.Controller

Controller lookups are strict (missing module -> 404). Router and Bootstrap
lookups fall back to the default context when the context lacks the resource.
"""

import importlib.util
import os
from enum import Enum
from typing import Callable, Optional

from mvcgem.components import Router
from mvcgem.config.settings import ContainerSettings
from mvcgem.exceptions import NotFoundError
from mvcgem.logger import create_logger


class Role(str, Enum):
    CONTROLLER = "Controller"
    ROUTER = "Router"
    BOOTSTRAP = "Bootstrap"
    VIEW_HELPER = "View.Helper"

    @property
    def suffix(self) -> str:
        return self.value


def ucfirst(name: Optional[str]) -> str:
    if not name:
        return ""
    return name[:1].upper() + name[1:]


class NamingConvention:
    """Derives type ids and checks that a context provides a resource."""

    # resource markers, relative to the context directory
    ROUTER_CONFIG = ("Config", "Router")
    BOOTSTRAP_FILE = ("Bootstrap",)

    def __init__(
        self,
        settings: ContainerSettings,
        current_context: Optional[Callable[[], Optional[str]]] = None,
    ):
        self.settings = settings
        self._current_context = current_context or (lambda: None)
        self.logger = create_logger("NamingConvention", log_file=settings.log_file, level=settings.log_level)

    # -------------------------
    # Context names
    # -------------------------
    def default_context(self) -> str:
        return Router.get_default_controller_name(True, self.settings)

    def current_context(self) -> str:
        """Controller name of the active request, capitalized ("" when unset)."""
        return ucfirst(self._current_context())

    def derive_type_name(self, role: Role, context_name: Optional[str] = None) -> str:
        context = ucfirst(context_name) if context_name else self.current_context()
        if not context:
            context = self.default_context()
        return f"{self.settings.app_namespace}.{context}.{role.suffix}"

    # -------------------------
    # Existence checks
    # -------------------------
    def _exists(self, context: str, *parts: str, is_dir: bool = False) -> bool:
        if not context:
            return False

        if self.settings.application_path:
            path = os.path.join(self.settings.application_path, self.settings.app_namespace, context, *parts)
            if is_dir:
                return os.path.isdir(path)
            return os.path.isfile(path + ".py") or os.path.isdir(path)

        # no application path: ask the import system instead
        module_name = ".".join((self.settings.app_namespace, context) + parts)
        try:
            return importlib.util.find_spec(module_name) is not None
        except ModuleNotFoundError:
            return False

    def has_module(self, context: str) -> bool:
        return self._exists(ucfirst(context), is_dir=True)

    def has_router_config(self, context: str) -> bool:
        return self._exists(ucfirst(context), *self.ROUTER_CONFIG)

    def has_bootstrap(self, context: str) -> bool:
        return self._exists(ucfirst(context), *self.BOOTSTRAP_FILE)

    # -------------------------
    # Role policies
    # -------------------------
    def require_module(self, context_name: str) -> str:
        """Strict: the context must exist, otherwise NotFoundError (404)."""
        context = ucfirst(context_name)
        if not self.has_module(context):
            message = f"Controller [{context}] not found"
            self.logger.warning(message, code=404)
            raise NotFoundError(message, 404)
        return context

    def router_context(self, context_name: Optional[str] = None) -> str:
        """Permissive: fall back to the default context without a router config."""
        context = ucfirst(context_name) if context_name else self.current_context()
        if not self.has_router_config(context):
            fallback = self.default_context()
            self.logger.info("Router config missing, using default context", context=context, fallback=fallback)
            return fallback
        return context

    def bootstrap_context(self, context_name: Optional[str] = None) -> str:
        """Permissive: fall back to the default context without a bootstrap file."""
        context = ucfirst(context_name) if context_name else self.current_context()
        if not self.has_bootstrap(context):
            fallback = self.default_context()
            self.logger.info("Bootstrap missing, using default context", context=context, fallback=fallback)
            return fallback
        return context
