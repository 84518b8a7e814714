"""
FastAPI entry point.
Puts the active controller name in the container's Request for each HTTP
request so convention-derived lookups (router, bootstrap, controller) follow it.
"""

from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from mvcgem.container import Container, get_container
from mvcgem.exceptions import ContainerError
from mvcgem.logger import create_logger


def controller_name_from_path(path: str) -> Optional[str]:
    """First path segment, None for the root path."""
    segment = path.strip("/").split("/", 1)[0]
    return segment or None


class MvcGemApplication:
    """ASGI application wrapping FastAPI around a container."""

    def __init__(self, container: Optional[Container] = None, title: str = "mvcgem application"):
        self.container = container or get_container()
        self.app = FastAPI(title=title)
        self.app.state.container = self.container
        self.logger = create_logger("MvcGemApplication")
        self._configured = False

    async def __call__(self, scope, receive, send):
        """Make MvcGemApplication ASGI-compatible."""
        return await self.app(scope, receive, send)

    def configure(self) -> "MvcGemApplication":
        if self._configured:
            return self

        container = self.container

        @self.app.middleware("http")
        async def controller_context(request: Request, call_next):
            name = controller_name_from_path(request.url.path) or container.settings.default_controller
            mvc_request = container.get_request()
            token = mvc_request.set_controller(name)
            try:
                return await call_next(request)
            finally:
                mvc_request.reset_controller(token)

        @self.app.exception_handler(ContainerError)
        async def container_error_handler(request: Request, exc: ContainerError):
            self.logger.warning("Container error", path=request.url.path, code=exc.code, error=exc.message)
            return JSONResponse(status_code=exc.code, content=exc.to_dict())

        @self.app.get("/health")
        async def health_check():
            return {
                "status": "healthy",
                "application": container.settings.app_name,
                "instances": container.list_instances(),
            }

        self._configured = True
        return self

    def add_routes(self, *routers) -> "MvcGemApplication":
        for router in routers:
            self.app.include_router(router)
        return self

    def run(self, host: str = "127.0.0.1", port: int = 8000):
        import uvicorn

        if not self._configured:
            self.configure()
        uvicorn.run(self.app, host=host, port=port, log_level=self.container.settings.log_level.lower())


# ----------------------------
# Dependencies
# ----------------------------
def provide_container(request: Request) -> Container:
    return request.app.state.container


def provide_controller(container: Container = Depends(provide_container)) -> Any:
    """Controller of the active request's module (404 when it does not exist)."""
    return container.get_controller(container.naming.current_context() or container.naming.default_context())


def create_app(container: Optional[Container] = None) -> MvcGemApplication:
    """Create and configure an mvcgem application."""
    return MvcGemApplication(container).configure()
