from mvcgem.components import Bootstrap as BaseBootstrap


class Bootstrap(BaseBootstrap):
    def bootstrap(self) -> None:
        print("Common bootstrap complete")
