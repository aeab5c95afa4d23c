"""Page sink writing a JSON route manifest for an external renderer.

The manifest lists pages in registration order:

    {"pages": [{"path": "/blog", "template": "listing", "context": {...}}, ...]}
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from page_planner.sinks.memory import InMemoryPageSink

logger = logging.getLogger(__name__)


class ManifestPageSink(InMemoryPageSink):
    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)

    def render(self) -> str:
        payload = {"pages": [request.to_dict() for request in self.pages.values()]}
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    async def flush(self) -> None:
        await super().flush()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        tmp_path.write_text(self.render(), encoding="utf-8")
        os.replace(tmp_path, self.path)
        logger.info("Wrote %d page(s) to %s", len(self.pages), self.path)
