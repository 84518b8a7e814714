"""
Default framework components.

The container only relies on their constructor signatures and on the few
methods it calls itself; applications swap in their own classes through
``Container.register_component`` or the ``MVCGEM_COMPONENTS__<ROLE>`` setting.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

from mvcgem.config.settings import ContainerSettings


class Application:
    """Placeholder for the hosting application object."""


class Request:
    """Current request context. The controller name is held per task/thread."""

    def __init__(self):
        self._controller: ContextVar[Optional[str]] = ContextVar(
            f"mvcgem_controller_{id(self)}", default=None
        )

    def get_controller(self) -> Optional[str]:
        return self._controller.get()

    def set_controller(self, name: Optional[str]) -> Token:
        return self._controller.set(name)

    def reset_controller(self, token: Token) -> None:
        self._controller.reset(token)


class Response:
    def __init__(self):
        self.status_code = 200
        self.headers: Dict[str, str] = {}


class View:
    def __init__(self):
        self.layout_ready = False

    def after_build_layout(self) -> None:
        self.layout_ready = True


class ViewHelper:
    def __init__(self, view_name: str = "view"):
        self.view_name = view_name


class Router:
    def __init__(self, params: Optional[Dict[str, Any]] = None):
        self.params = dict(params or {})

    @staticmethod
    def get_default_controller_name(capitalize: bool = False, settings: Optional[ContainerSettings] = None) -> str:
        """Configured default controller, first letter upper-cased when capitalize is set."""
        name = (settings or ContainerSettings()).default_controller
        if capitalize:
            return name[:1].upper() + name[1:]
        return name


class Bootstrap:
    """Base class every application bootstrap must extend."""

    def bootstrap(self) -> None:
        pass


class Crypt:
    DEFAULT_KEY = "mvcgem-default-key"
    MODE_ASCII = "ascii"
    MODE_BINARY = "binary"

    def __init__(self, key: str = DEFAULT_KEY, mode: str = MODE_ASCII):
        if mode not in (self.MODE_ASCII, self.MODE_BINARY):
            raise ValueError(f"Unknown crypt mode '{mode}'")
        self.key = key
        self.mode = mode


class NavigationItem:
    def __init__(self, name: str):
        self.name = name
        self.children: list = []


class Navigation:
    def __init__(self):
        self._menus: Dict[str, NavigationItem] = {}

    def get_navigation(self, menu: str = "main") -> NavigationItem:
        if menu not in self._menus:
            self._menus[menu] = NavigationItem(menu)
        return self._menus[menu]


class DocMaker:
    def __init__(self):
        self.content: Optional[str] = None

    def set_content(self, content: str) -> "DocMaker":
        self.content = content
        return self


class Markdown:
    pass


class MobileDetect:
    pass


class AppSession:
    DEFAULT_NAMESPACE = "default"

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        self.namespace = namespace
        self.data: Dict[str, Any] = {}


class Cache:
    DEFAULT_NAMESPACE = "default"

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        self.namespace = namespace


class Locale:
    DEFAULT_LOCALE = "en_US"

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = locale
