"""
External Context Fetcher.
Optional single web search whose findings are shared with workers, judges and
the finalizer. Never raises: failures yield an empty list.
"""

import asyncio
import os
from typing import Any, Dict, List, Optional

import httpx
from duckduckgo_search import DDGS

from swarm.models.schemas import WebFinding
from swarm.utils import truncate

TAVILY_API_URL = "https://api.tavily.com/search"
SNIPPET_CHARS = 300


class WebSearchClient:
    """Tavily search when a key is configured, DuckDuckGo otherwise."""

    def __init__(
        self,
        tavily_api_key: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        verbose: bool = True
    ):
        """
        Initialize the search client.

        Args:
            tavily_api_key: Tavily key, defaults to TAVILY_API_KEY from the environment
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport, used by tests
            verbose: Whether to print search failures
        """
        self.tavily_api_key = tavily_api_key if tavily_api_key is not None else os.getenv("TAVILY_API_KEY")
        self.timeout = timeout
        self.transport = transport
        self.verbose = verbose

    def _log(self, message: str):
        if self.verbose:
            print(f"[WebSearch] {message}")

    async def search(self, query: str, max_results: int = 5) -> List[WebFinding]:
        """
        Search the web for ``query``.

        Args:
            query: Search query, usually the user's question
            max_results: Maximum number of findings

        Returns:
            Findings, or an empty list when nothing could be fetched
        """
        if not query or not query.strip() or max_results <= 0:
            return []

        if self.tavily_api_key:
            try:
                return await self._tavily_search(query, max_results)
            except Exception as e:
                self._log(f"[WARN] Tavily search failed, falling back to DuckDuckGo: {e}")

        try:
            return await asyncio.to_thread(self._duckduckgo_search, query, max_results)
        except Exception as e:
            self._log(f"[WARN] DuckDuckGo search failed: {e}")
            return []

    async def _tavily_search(self, query: str, max_results: int) -> List[WebFinding]:
        payload = {
            "api_key": self.tavily_api_key,
            "query": query,
            "max_results": max_results,
            "include_images": False,
            "include_answer": False,
            "search_depth": "basic"
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(TAVILY_API_URL, json=payload)
            response.raise_for_status()
            data: Dict[str, Any] = response.json()

        return [
            WebFinding(
                title=str(result.get("title") or ""),
                url=str(result.get("url") or ""),
                snippet=str(result.get("content") or ""),
                published_at=result.get("published_date")
            )
            for result in (data.get("results") or [])[:max_results]
            if isinstance(result, dict)
        ]

    def _duckduckgo_search(self, query: str, max_results: int) -> List[WebFinding]:
        findings = []
        with DDGS() as ddgs:
            for result in ddgs.text(query, safesearch="moderate", max_results=max_results) or []:
                # DuckDuckGo uses 'href' and 'body' instead of 'url' and 'snippet'
                findings.append(WebFinding(
                    title=str(result.get("title") or ""),
                    url=str(result.get("href") or ""),
                    snippet=str(result.get("body") or "")
                ))
                if len(findings) >= max_results:
                    break
        return findings


def summarize_findings(findings: Optional[List[WebFinding]]) -> str:
    """
    Render findings as a compact prompt block.

    Returns:
        The block, or an empty string when there are no findings
    """
    if not findings:
        return ""

    lines = ["Live web findings:"]
    for index, finding in enumerate(findings, start=1):
        header = f"{index}. {finding.title or 'Untitled'}"
        if finding.url:
            header += f" ({finding.url})"
        if finding.published_at:
            header += f" [{finding.published_at}]"
        lines.append(header)
        if finding.snippet:
            lines.append(f"   {truncate(finding.snippet, SNIPPET_CHARS)}")
    return "\n".join(lines)
