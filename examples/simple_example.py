"""
Simple working example of an mvcgem application.

    python examples/simple_example.py
    curl http://127.0.0.1:8000/blog/index
"""

import os
import sys

from fastapi import APIRouter, Depends

HERE = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, HERE)

from mvcgem import ContainerSettings, initialize_container  # noqa: E402
from mvcgem.web import create_app, provide_container, provide_controller  # noqa: E402

container = initialize_container(
    ContainerSettings(
        application_path=HERE,
        default_controller="common",
        config_file=os.path.join(HERE, "mvcgem.yml"),
    )
)

router = APIRouter()


@router.get("/{module}/index")
def index(module: str, controller=Depends(provide_controller)):
    return controller.index()


@router.get("/{module}/router")
def router_info(module: str, container=Depends(provide_container)):
    mvc_router = container.get_router()
    return {"router": type(mvc_router).__module__, "prefix": mvc_router.prefix()}


if __name__ == "__main__":
    container.get_bootstrap().bootstrap()
    create_app(container).add_routes(router).run()
