"""
mvcgem container.

Each ``get_xxx()`` accessor is a thin specialization of the shared
build-or-fetch strategy: fixed role, fixed argument list, fixed namespace.
Do not worry about how to build a component, just ask the container for it.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Type, Union

from mvcgem import components
from mvcgem.config.settings import ContainerSettings
from mvcgem.locator import TypeRef, locate_type
from mvcgem.logger import create_logger
from mvcgem.naming import NamingConvention, Role
from mvcgem.registry import InstanceRegistry
from mvcgem.resolver import NamespacedSingletonResolver


class ComponentRole(str, Enum):
    APPLICATION = "application"
    REQUEST = "request"
    RESPONSE = "response"
    VIEW = "view"
    VIEW_HELPER = "view_helper"
    BOOTSTRAP = "bootstrap"
    CONFIG = "config"
    CRYPT = "crypt"
    NAVIGATION = "navigation"
    DOC_MAKER = "doc_maker"
    MARKDOWN = "markdown"
    DEVICE = "device"
    SESSION = "session"
    CACHE = "cache"
    LOCALE = "locale"


DEFAULT_COMPONENTS: Dict[ComponentRole, TypeRef] = {
    ComponentRole.APPLICATION: components.Application,
    ComponentRole.REQUEST: components.Request,
    ComponentRole.RESPONSE: components.Response,
    ComponentRole.VIEW: components.View,
    ComponentRole.VIEW_HELPER: components.ViewHelper,
    ComponentRole.BOOTSTRAP: components.Bootstrap,
    ComponentRole.CONFIG: "mvcgem.config.app_config.AppConfig",
    ComponentRole.CRYPT: components.Crypt,
    ComponentRole.NAVIGATION: components.Navigation,
    ComponentRole.DOC_MAKER: components.DocMaker,
    ComponentRole.MARKDOWN: components.Markdown,
    ComponentRole.DEVICE: components.MobileDetect,
    ComponentRole.SESSION: components.AppSession,
    ComponentRole.CACHE: components.Cache,
    ComponentRole.LOCALE: components.Locale,
}


class Container:
    """Service locator over the framework's components."""

    def __init__(
        self,
        settings: Optional[ContainerSettings] = None,
        registry: Optional[InstanceRegistry] = None,
        component_types: Optional[Dict[Union[ComponentRole, str], TypeRef]] = None,
    ):
        self.settings = settings or ContainerSettings()
        self.logger = create_logger(
            self.settings.app_name, log_file=self.settings.log_file, level=self.settings.log_level
        )
        self.resolver = NamespacedSingletonResolver(
            registry, log_file=self.settings.log_file, log_level=self.settings.log_level
        )
        self.naming = NamingConvention(self.settings, lambda: self.get_request().get_controller())

        self._components: Dict[ComponentRole, TypeRef] = dict(DEFAULT_COMPONENTS)
        for role, type_ref in {**self.settings.components, **(component_types or {})}.items():
            self.register_component(role, type_ref)

    @property
    def registry(self) -> InstanceRegistry:
        return self.resolver.registry

    # -------------------------
    # Component mapping
    # -------------------------
    def register_component(self, role: Union[ComponentRole, str], type_ref: TypeRef) -> None:
        """Bind a role to a class or dotted path. Already built instances are kept."""
        try:
            role = ComponentRole(role.lower() if isinstance(role, str) else role)
        except ValueError:
            raise ValueError(f"Unknown component role '{role}'") from None
        self._components[role] = type_ref
        self.logger.debug("Component registered", role=role.value, type=str(type_ref))

    def component_type(self, role: ComponentRole) -> TypeRef:
        return self._components[role]

    def resolve(
        self,
        type_ref: TypeRef,
        args: Sequence[Any] = (),
        namespace: Optional[str] = None,
        validator_hook: Optional[str] = None,
        post_construct_hook: Optional[str] = None,
        expected_type: Optional[Type] = None,
    ) -> Any:
        return self.resolver.resolve(
            type_ref,
            args,
            namespace=namespace,
            validator_hook=validator_hook,
            post_construct_hook=post_construct_hook,
            expected_type=expected_type,
        )

    def _build(self, role: ComponentRole, args: Sequence[Any] = (), namespace: Optional[str] = None, **hooks) -> Any:
        return self.resolve(self._components[role], args, namespace=namespace, **hooks)

    # -------------------------
    # Core components
    # -------------------------
    def get_application(self) -> Any:
        return self._build(ComponentRole.APPLICATION)

    def get_request(self) -> Any:
        return self._build(ComponentRole.REQUEST)

    def get_response(self) -> Any:
        return self._build(ComponentRole.RESPONSE)

    def get_config(self) -> Any:
        """Get the current application configuration."""
        return self._build(ComponentRole.CONFIG, [self.settings.config_file])

    # -------------------------
    # Convention-derived components
    # -------------------------
    def get_controller(self, app_name: str) -> Any:
        """Controller of an application module. Raises NotFoundError (404) when the module is missing."""
        context = self.naming.require_module(app_name)
        return self.resolve(self.naming.derive_type_name(Role.CONTROLLER, context), namespace=context)

    def get_router(self) -> Any:
        context = self.naming.router_context()
        router_params = self.get_config().get_config("router")
        if not isinstance(router_params, dict):
            router_params = {}
        return self.resolve(self.naming.derive_type_name(Role.ROUTER, context), [router_params])

    def get_bootstrap(self) -> Any:
        """Bootstrap of the current context (or the default one); must extend the Bootstrap base."""
        context = self.naming.bootstrap_context()
        return self.resolve(
            self.naming.derive_type_name(Role.BOOTSTRAP, context),
            namespace=context,
            expected_type=locate_type(self._components[ComponentRole.BOOTSTRAP]),
        )

    # -------------------------
    # Views
    # -------------------------
    def get_view(self) -> Any:
        return self._build(ComponentRole.VIEW, namespace="view")

    def get_layout(self, call_bootstrap: bool = False) -> Any:
        return self._build(
            ComponentRole.VIEW,
            namespace="layout",
            post_construct_hook="after_build_layout" if call_bootstrap else None,
        )

    def get_view_helper(self, app_name: Union[str, None, bool] = None, layout: bool = False) -> Any:
        """
        View helper with a context.
        app_name None: default application helper; False: the framework's base helper.
        View and layout helpers share one instance per helper type, the first view name wins.
        """
        if app_name is False:
            type_ref = self._components[ComponentRole.VIEW_HELPER]
        else:
            type_ref = self.naming.derive_type_name(Role.VIEW_HELPER, app_name or self.naming.default_context())
        view_name = "layout" if layout else "view"
        return self.resolve(type_ref, [view_name])

    def get_view_helper_layout(self, app_name: Union[str, None, bool] = None) -> Any:
        return self.get_view_helper(app_name, True)

    # -------------------------
    # Services
    # -------------------------
    def get_crypt(self, key: str = components.Crypt.DEFAULT_KEY, mode: str = components.Crypt.MODE_ASCII) -> Any:
        """Parameters only matter on the first call."""
        return self._build(ComponentRole.CRYPT, [key, mode])

    def get_navigation(self) -> Any:
        return self._build(ComponentRole.NAVIGATION)

    def get_navigation_menu(self, menu: str = "main") -> Any:
        return self.get_navigation().get_navigation(menu)

    def get_doc_maker(self, content: Optional[str] = None) -> Any:
        doc_maker = self._build(ComponentRole.DOC_MAKER)
        if content is not None:
            doc_maker.set_content(content)
        return doc_maker

    def get_markdown(self) -> Any:
        return self._build(ComponentRole.MARKDOWN)

    def get_device(self) -> Any:
        return self._build(ComponentRole.DEVICE)

    def get_session(self, namespace: str = components.AppSession.DEFAULT_NAMESPACE) -> Any:
        return self._build(ComponentRole.SESSION, [namespace], namespace=namespace)

    def get_cache(self, namespace: str = components.Cache.DEFAULT_NAMESPACE) -> Any:
        return self._build(ComponentRole.CACHE, [namespace], namespace=namespace)

    def get_locale(self) -> Any:
        return self._build(ComponentRole.LOCALE)

    # -------------------------
    # Introspection
    # -------------------------
    def list_instances(self) -> List[str]:
        return [f"{key.type_id}[{key.namespace}]" for key in self.registry.keys()]


# Global container
_container: Optional[Container] = None


def get_container() -> Container:
    """Get global container."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def initialize_container(
    settings: Optional[ContainerSettings] = None,
    registry: Optional[InstanceRegistry] = None,
) -> Container:
    """Replace the global container; called once by the hosting application's startup."""
    global _container
    _container = Container(settings=settings, registry=registry)
    _container.logger.info(
        "Container initialized",
        application_path=_container.settings.application_path,
        default_controller=_container.settings.default_controller,
    )
    return _container


def reset_container() -> None:
    """Flush and drop the global container (shutdown, tests)."""
    global _container
    if _container is not None:
        _container.registry.flush()
    _container = None
