from typing import Protocol


class FileWatcherPort(Protocol):
    """Watches content for changes while ``watch`` mode is running."""

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
