from page_planner.sinks.manifest import ManifestPageSink
from page_planner.sinks.memory import InMemoryPageSink

__all__ = [
    "InMemoryPageSink",
    "ManifestPageSink",
]
