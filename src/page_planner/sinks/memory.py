from page_planner.core.errors import RouteConflictError
from page_planner.models import PageRequest


class InMemoryPageSink:
    """Route registry keyed by route path.

    Registering an identical request twice is a no-op, so replaying a build
    leaves the registry unchanged.
    """

    def __init__(self) -> None:
        self.pages: dict[str, PageRequest] = {}
        self.flush_count = 0

    async def create_page(self, request: PageRequest) -> None:
        existing = self.pages.get(request.route_path)
        if existing is None:
            self.pages[request.route_path] = request
        elif existing != request:
            raise RouteConflictError(request.route_path)

    async def flush(self) -> None:
        self.flush_count += 1

    def routes(self) -> list[str]:
        return list(self.pages)
