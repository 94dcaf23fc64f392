from .protocols.http import Field, Request, Response

TEXT_PLAIN = Field("Content-Type", "text/plain; charset=utf-8")


def text_response(status: int, body: str, *headers: Field) -> Response:
    return Response(status, (TEXT_PLAIN, *headers), body.encode("utf-8"))


class Router:
    "Static table of path -> method -> handler"

    def __init__(self):
        self.routes = {}

    def add(self, method, path: str, handler):
        self.routes.setdefault(path, {})[str(method)] = handler

    def route(self, method, path: str):
        def decorator(handler):
            self.add(method, path, handler)
            return handler

        return decorator

    def __call__(self, request: Request) -> Response:
        handlers = self.routes.get(request.target.path)
        if handlers is None:
            return text_response(404, f"{request.target.path} not found\n")
        handler = handlers.get(str(request.method))
        if handler is None:
            allow = Field("Allow", ", ".join(sorted(handlers)))
            return text_response(405, f"{request.method} not allowed\n", allow)
        return handler(request)


def default_router() -> Router:
    router = Router()

    @router.route("GET", "/")
    def index(request):
        return text_response(200, "ok")

    @router.route("HEAD", "/")
    def index_head(request):
        return Response(200, (TEXT_PLAIN, Field("Content-Length", "2")))

    @router.route("GET", "/echo")
    def echo(request):
        return text_response(200, request.describe() + "\n")

    return router
