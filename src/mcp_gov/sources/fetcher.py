from __future__ import annotations

import asyncio
import logging
import typing as t

import httpx
from lxml import etree

from ..cache import LRUCache, get_or_fetch, make_key
from ..errors import SourceError
from ..utils.config import HttpConfig, ResilienceConfig
from ..utils.resilience import CircuitBreaker, CircuitBreakerConfig, CircuitOpenError, with_retries
from . import catalog
from .models import DocumentContent, Feed, Region, SearchResult
from .parsing import extract_document, parse_date, parse_eurlex_results, parse_feed

logger = logging.getLogger(__name__)

EURLEX_SEARCH_URL = "https://eur-lex.europa.eu/search.html"
FEDERAL_REGISTER_URL = "https://www.federalregister.gov/api/v1/articles"
GOVINFO_SEARCH_URL = "https://api.govinfo.gov/search"

FEDERAL_REGISTER_FIELDS = [
    "title",
    "document_number",
    "publication_date",
    "abstract",
    "html_url",
    "type",
    "agencies",
]
GOVINFO_COLLECTIONS = ["BILLS", "CREC", "FR"]
ITEMS_PER_FEED = 5
MAX_GOVINFO_RESULTS = 5
SUSTAINABILITY_WINDOW = 50

# Failures at a source boundary that turn into a fallback instead of an error.
UPSTREAM_ERRORS = (httpx.HTTPError, SourceError, CircuitOpenError, ValueError, etree.LxmlError)


class GovernanceFetcher:
    """Retrieval layer over the regulatory sources.

    Every lookup is memoized in the shared ``LRUCache`` under a key built from
    its namespace and parameters. Fallback results produced after an upstream
    failure are returned but never cached, so the next call retries the source.
    """

    def __init__(
        self,
        cache: LRUCache,
        client: httpx.AsyncClient,
        http_config: t.Optional[HttpConfig] = None,
        resilience: t.Optional[ResilienceConfig] = None,
    ) -> None:
        self._cache = cache
        self._client = client
        self._http = http_config or HttpConfig()
        self._resilience = resilience or ResilienceConfig()
        self._breakers: t.Dict[str, CircuitBreaker] = {}

    @classmethod
    def from_config(
        cls,
        cache: LRUCache,
        http_config: HttpConfig,
        resilience: t.Optional[ResilienceConfig] = None,
    ) -> "GovernanceFetcher":
        client = httpx.AsyncClient(
            timeout=http_config.timeout_seconds,
            headers={"User-Agent": http_config.user_agent},
            follow_redirects=True,
        )
        return cls(cache, client, http_config=http_config, resilience=resilience)

    @property
    def cache(self) -> LRUCache:
        return self._cache

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GovernanceFetcher":
        return self

    async def __aexit__(self, *exc_info: t.Any) -> None:
        await self.aclose()

    def _breaker(self, source: str) -> CircuitBreaker:
        breaker = self._breakers.get(source)
        if breaker is None:
            breaker = CircuitBreaker(
                source,
                CircuitBreakerConfig(
                    failure_threshold=self._resilience.failure_threshold,
                    reset_timeout_seconds=self._resilience.reset_timeout_seconds,
                ),
            )
            self._breakers[source] = breaker
        return breaker

    async def _request(self, source: str, method: str, url: str, **kwargs: t.Any) -> httpx.Response:
        async def _op() -> httpx.Response:
            response = await self._client.request(method, url, **kwargs)
            if response.status_code >= 400:
                raise SourceError(source, f"HTTP {response.status_code} from {url}", response.status_code)
            return response

        def _attempt() -> t.Awaitable[httpx.Response]:
            return with_retries(_op, self._resilience.retry_max_attempts, self._resilience.retry_backoff_ms)

        if not self._resilience.circuit_breaker_enabled:
            return await _attempt()
        return await self._breaker(source).run(_attempt)

    # EUR-Lex

    async def search_eurlex(self, query: str, max_results: int = 10) -> t.List[SearchResult]:
        key = make_key("eurlex", query, max_results)
        try:
            results = await get_or_fetch(self._cache, key, lambda: self._search_eurlex(query, max_results))
        except UPSTREAM_ERRORS as exc:
            logger.warning("EUR-Lex search failed: %s", exc)
            return [
                SearchResult.from_key_document(doc, "EUR-Lex (offline cache)") for doc in catalog.EURLEX.key_docs
            ]
        return list(results)

    async def _search_eurlex(self, query: str, max_results: int) -> t.Tuple[SearchResult, ...]:
        response = await self._request(
            "eurlex",
            "GET",
            EURLEX_SEARCH_URL,
            params={"scope": "EURLEX", "text": query, "lang": "en", "type": "quick"},
        )
        results = parse_eurlex_results(response.text, EURLEX_SEARCH_URL, max_results)
        if not results:
            # the search page often renders client side; fall back to known documents
            q = query.lower()
            results = [
                SearchResult.from_key_document(doc, "EUR-Lex (known)")
                for doc in catalog.EURLEX.key_docs
                if q in doc.title.lower() or "ai act" in q or "gdpr" in q
            ]
        return tuple(results)

    # US Federal Register

    async def search_federal_register(self, query: str, max_results: int = 10) -> t.List[SearchResult]:
        key = make_key("fedregister", query, max_results)
        try:
            results = await get_or_fetch(
                self._cache, key, lambda: self._search_federal_register(query, max_results)
            )
        except UPSTREAM_ERRORS as exc:
            logger.warning("Federal Register search failed: %s", exc)
            return [
                SearchResult.from_key_document(doc, "GovInfo (offline cache)") for doc in catalog.GOVINFO.key_docs
            ]
        return list(results)

    async def _search_federal_register(self, query: str, max_results: int) -> t.Tuple[SearchResult, ...]:
        response = await self._request(
            "fedregister",
            "GET",
            FEDERAL_REGISTER_URL,
            params={
                "conditions[term]": query,
                "fields[]": FEDERAL_REGISTER_FIELDS,
                "per_page": max_results,
                "order": "newest",
            },
        )
        payload = response.json()
        results = []
        for item in payload.get("results") or []:
            agencies = item.get("agencies") or []
            results.append(
                SearchResult(
                    title=item.get("title") or "(untitled)",
                    url=item.get("html_url"),
                    date=item.get("publication_date"),
                    summary=item.get("abstract"),
                    type=item.get("type"),
                    agencies=", ".join(a["name"] for a in agencies if a.get("name")) or None,
                    source="Federal Register",
                    region=Region.US,
                )
            )
        return tuple(results)

    # GovInfo

    async def search_govinfo(self, query: str, max_results: int = 10) -> t.List[SearchResult]:
        key = make_key("govinfo", query, max_results)
        try:
            results = await get_or_fetch(self._cache, key, lambda: self._search_govinfo(query, max_results))
        except UPSTREAM_ERRORS as exc:
            logger.warning("GovInfo search failed: %s", exc)
            return []
        return list(results)

    async def _search_govinfo(self, query: str, max_results: int) -> t.Tuple[SearchResult, ...]:
        collections = " OR ".join(GOVINFO_COLLECTIONS)
        response = await self._request(
            "govinfo",
            "POST",
            GOVINFO_SEARCH_URL,
            params={"api_key": self._http.govinfo_api_key},
            json={
                "query": f"{query} collection:({collections})",
                "pageSize": max_results,
                "offsetMark": "*",
                "sorts": [{"field": "publishdate", "sortOrder": "DESC"}],
            },
        )
        payload = response.json()
        return tuple(
            SearchResult(
                title=item.get("title") or "(untitled)",
                url=item.get("detailsLink"),
                date=item.get("dateIssued") or item.get("publishdate"),
                summary=item.get("description"),
                type=item.get("docClass") or item.get("docType"),
                source="GovInfo",
                region=Region.US,
            )
            for item in payload.get("results") or []
        )

    # RSS

    async def fetch_rss_updates(self, region: str = catalog.REGION_ALL, max_items: int = 20) -> t.List[SearchResult]:
        selected = catalog.parse_region(region)
        region = selected.value if selected is not None else catalog.REGION_ALL
        feeds = catalog.feeds_for_region(region)
        key = make_key("rss", region, max_items)
        results = await get_or_fetch(self._cache, key, lambda: self._fetch_rss(feeds, max_items))
        return list(results)

    async def sustainability_updates(
        self, region: str = catalog.REGION_ALL, max_items: int = 12
    ) -> t.List[SearchResult]:
        """Feed items about climate, disclosure and ESG regulation.

        Filters a wider window of the cached feed aggregate, so it shares the
        ``rss`` entries with :meth:`fetch_rss_updates`.
        """
        items = await self.fetch_rss_updates(region, max_items=SUSTAINABILITY_WINDOW)
        matching = [
            item for item in items if catalog.is_sustainability_related(item.title, item.summary, item.feed_label)
        ]
        return matching[:max_items]

    async def _fetch_rss(self, feeds: t.Sequence[Feed], max_items: int) -> t.Tuple[SearchResult, ...]:
        per_feed = await asyncio.gather(*(self._fetch_feed(feed) for feed in feeds))
        items = [item for feed_items in per_feed for item in feed_items]
        items.sort(key=lambda item: parse_date(item.date), reverse=True)
        return tuple(items[:max_items])

    async def _fetch_feed(self, feed: Feed) -> t.List[SearchResult]:
        try:
            response = await self._request(
                f"rss:{feed.label}", "GET", feed.url, timeout=self._http.rss_timeout_seconds
            )
            return parse_feed(response.content, feed, max_items=ITEMS_PER_FEED)
        except UPSTREAM_ERRORS as exc:
            logger.warning("RSS feed error (%s): %s", feed.label, exc)
            return []

    # Documents

    async def fetch_document_content(self, url: str) -> DocumentContent:
        key = make_key("doc", url)
        try:
            return await get_or_fetch(self._cache, key, lambda: self._fetch_document(url))
        except UPSTREAM_ERRORS as exc:
            logger.warning("document fetch failed for %s: %s", url, exc)
            return DocumentContent(url=url, error=f"Could not fetch document: {exc}")

    async def _fetch_document(self, url: str) -> DocumentContent:
        response = await self._request("documents", "GET", url)
        title, content = extract_document(response.text)
        return DocumentContent(url=url, title=title, content=content)

    # Combined

    async def global_search(
        self,
        query: str,
        max_results: int = 10,
        regions: t.Iterable[str] = (Region.EU.value, Region.US.value, Region.GLOBAL.value),
    ) -> t.List[SearchResult]:
        selected = {catalog.parse_region(r) for r in regions}
        if None in selected:
            selected = set(Region)

        searches: t.List[t.Awaitable[t.List[SearchResult]]] = []
        if Region.EU in selected:
            searches.append(self.search_eurlex(query, max_results))
        if Region.US in selected:
            searches.append(self.search_federal_register(query, max_results))
            searches.append(self.search_govinfo(query, min(max_results, MAX_GOVINFO_RESULTS)))

        combined: t.List[SearchResult] = []
        # each search already falls back on upstream failure
        for outcome in await asyncio.gather(*searches):
            combined.extend(outcome)

        seen: t.Set[str] = set()
        deduped = []
        for item in combined:
            if not item.url or item.url in seen:
                continue
            seen.add(item.url)
            deduped.append(item)
        return deduped[: max_results * 2]
