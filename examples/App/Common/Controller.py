class Controller:
    def index(self):
        return {"module": "common", "message": "Welcome"}
