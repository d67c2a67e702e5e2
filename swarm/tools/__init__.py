"""External tools used to enrich a turn."""

from .web_search import WebSearchClient, summarize_findings

__all__ = [
    "WebSearchClient",
    "summarize_findings"
]
