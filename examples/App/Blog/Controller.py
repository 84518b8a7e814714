from mvcgem.container import get_container


class Controller:
    def __init__(self):
        self.session = get_container().get_session("blog")
        self.session.data.setdefault("views", 0)

    def index(self):
        self.session.data["views"] += 1
        return {"module": "blog", "views": self.session.data["views"]}
