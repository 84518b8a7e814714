import sys
import textwrap
from pathlib import Path

import pytest

from mvcgem.config.settings import ContainerSettings
from mvcgem.container import Container
from mvcgem.registry import InstanceRegistry

# -----------------------------
# Throw-away application tree
# -----------------------------
APP_FILES = {
    "App/__init__.py": "",
    # Blog: complete module
    "App/Blog/__init__.py": "",
    "App/Blog/Controller.py": """
        class Controller:
            built = 0

            def __init__(self):
                type(self).built += 1
    """,
    "App/Blog/Config/__init__.py": "",
    "App/Blog/Config/Router.py": "",
    "App/Blog/Router.py": """
        from mvcgem.components import Router as BaseRouter

        class Router(BaseRouter):
            pass
    """,
    "App/Blog/Bootstrap.py": """
        from mvcgem.components import Bootstrap as BaseBootstrap

        class Bootstrap(BaseBootstrap):
            pass
    """,
    "App/Blog/View/__init__.py": "",
    "App/Blog/View/Helper.py": """
        from mvcgem.components import ViewHelper

        class Helper(ViewHelper):
            pass
    """,
    # Shop: controller only, router and bootstrap come from the default context
    "App/Shop/__init__.py": "",
    "App/Shop/Controller.py": """
        class Controller:
            pass
    """,
    # Common: default context
    "App/Common/__init__.py": "",
    "App/Common/Controller.py": """
        class Controller:
            pass
    """,
    "App/Common/Config/__init__.py": "",
    "App/Common/Config/Router.py": "",
    "App/Common/Router.py": """
        from mvcgem.components import Router as BaseRouter

        class Router(BaseRouter):
            pass
    """,
    "App/Common/Bootstrap.py": """
        from mvcgem.components import Bootstrap as BaseBootstrap

        class Bootstrap(BaseBootstrap):
            pass
    """,
    "App/Common/View/__init__.py": "",
    "App/Common/View/Helper.py": """
        from mvcgem.components import ViewHelper

        class Helper(ViewHelper):
            pass
    """,
    # Rogue: bootstrap that does not extend the base class
    "App/Rogue/__init__.py": "",
    "App/Rogue/Bootstrap.py": """
        class Bootstrap:
            pass
    """,
}


def write_tree(root: Path, files: dict) -> None:
    for rel, source in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source).lstrip(), encoding="utf-8")


def _drop_app_modules():
    for name in list(sys.modules):
        if name == "App" or name.startswith("App."):
            del sys.modules[name]


@pytest.fixture
def app_root(tmp_path, monkeypatch):
    """Application tree importable as the ``App`` package."""
    write_tree(tmp_path, APP_FILES)
    _drop_app_modules()
    monkeypatch.syspath_prepend(str(tmp_path))
    yield tmp_path
    _drop_app_modules()


@pytest.fixture
def settings(app_root):
    return ContainerSettings(
        application_path=str(app_root),
        default_controller="common",
        config_file=str(app_root / "mvcgem.yml"),
    )


@pytest.fixture
def registry():
    return InstanceRegistry()


@pytest.fixture
def container(settings, registry):
    return Container(settings=settings, registry=registry)
