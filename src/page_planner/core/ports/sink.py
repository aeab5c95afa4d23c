from typing import Protocol

from page_planner.models import PageRequest


class PageSink(Protocol):
    async def create_page(self, request: PageRequest) -> None: ...

    async def flush(self) -> None: ...
