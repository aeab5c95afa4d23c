from typing import Protocol

from page_planner.models import Document


class ContentSource(Protocol):
    async def fetch_documents(self) -> list[Document]: ...
