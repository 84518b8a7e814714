from mvcgem.components import Router as BaseRouter


class Router(BaseRouter):
    def prefix(self) -> str:
        return self.params.get("prefix", "")
