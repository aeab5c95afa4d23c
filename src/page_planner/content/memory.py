from collections.abc import Iterable

from page_planner.models import Document


class InMemoryContentSource:
    def __init__(self, documents: Iterable[Document] = ()) -> None:
        self.documents: list[Document] = list(documents)
        self.fetch_count = 0

    def add(self, document: Document) -> None:
        self.documents.append(document)

    async def fetch_documents(self) -> list[Document]:
        self.fetch_count += 1
        return list(self.documents)
