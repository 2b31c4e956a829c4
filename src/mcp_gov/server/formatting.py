"""Plain-text rendering of tool results for language-model clients."""

from __future__ import annotations

import typing as t
from pathlib import Path

from ..cache import LRUCache
from ..sources import catalog
from ..sources.models import DocumentContent, KeyDocument, SearchResult, Source
from .feedback import Feedback

# Summary length per response mode; compact trades detail for fewer tokens.
SUMMARY_CHARS = {"compact": 180, "detailed": 420}
DEFAULT_RESPONSE_MODE = "detailed"


def truncate(text: str, limit: t.Optional[int]) -> str:
    if limit is None or len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."


def _format_result(index: int, item: SearchResult, summary_chars: t.Optional[int] = None) -> str:
    lines = [f"{index}. {item.title}"]
    meta = [item.source, item.region.value]
    if item.date:
        meta.append(item.date)
    if item.type:
        meta.append(item.type)
    if item.status:
        meta.append(item.status)
    lines.append("   " + " | ".join(meta))
    if item.agencies:
        lines.append(f"   Agencies: {item.agencies}")
    if item.url:
        lines.append(f"   URL: {item.url}")
    if item.summary:
        lines.append(f"   {truncate(item.summary, summary_chars)}")
    return "\n".join(lines)


def format_results(
    heading: str,
    results: t.Sequence[SearchResult],
    summary_chars: t.Optional[int] = None,
) -> str:
    if not results:
        return f"{heading}\n\nNo results found."
    body = "\n\n".join(_format_result(i, item, summary_chars) for i, item in enumerate(results, start=1))
    return f"{heading} ({len(results)} results)\n\n{body}"


def format_limitations(context: str) -> str:
    """Fallback answer listing trusted starting points when live sources come up empty."""
    resources = "\n".join(f"{i}. {r.label}: {r.url}" for i, r in enumerate(catalog.GENERIC_RESOURCES, start=1))
    return (
        f"No specific answer for {context} could be found in the reachable live sources.\n\n"
        f"Trusted starting resources:\n{resources}\n\n"
        "Live endpoints can be unavailable, rate-limited or blocked. "
        "Narrowing the region or use case usually helps."
    )


def _format_key_document(doc: KeyDocument) -> t.List[str]:
    lines = [f"- {doc.title} [{doc.region.value}]", f"  {doc.type} | {doc.status} | {doc.date}"]
    if doc.celex:
        lines.append(f"  CELEX: {doc.celex}")
    lines.append(f"  {doc.url}")
    return lines


def format_key_documents(region: str, groups: t.Sequence[t.Tuple[Source, t.Sequence[KeyDocument]]]) -> str:
    if not groups:
        return f"No key documents for region {region}."
    lines = [f"Key AI governance documents ({region}):"]
    for source, docs in groups:
        lines.append("")
        lines.append(f"{source.name} ({source.base_url})" if source.base_url else source.name)
        for doc in docs:
            lines.extend(_format_key_document(doc))
    return "\n".join(lines)


def format_document(doc: DocumentContent) -> str:
    if not doc.ok:
        return f"{doc.error}\nURL: {doc.url}\n\n{format_limitations('that document')}"
    title = doc.title or doc.url
    return f"{title}\nURL: {doc.url}\nFetched: {doc.fetched_at}\n\n{doc.content}"


def format_briefing(overview: str, heading: str, results: t.Sequence[SearchResult]) -> str:
    """Static overview followed by live results for a requested topic, if any."""
    if not results:
        return overview
    return f"{overview}\n\n{format_results(heading, results)}"


def format_sustainability_briefing(
    region: str,
    updates: t.Sequence[SearchResult],
    docs: t.Sequence[KeyDocument],
) -> str:
    lines = [f"Sustainability & AI regulatory briefing ({region})", "", "Latest updates:"]
    if updates:
        for i, item in enumerate(updates, start=1):
            lines.append(f"{i}. {item.title}")
            lines.append(f"   {item.region.value} | {item.source}")
            if item.url:
                lines.append(f"   {item.url}")
    else:
        lines.append("No sustainability-related feed items right now; see the core sources below.")
    lines.extend(["", "Core sustainability regulation sources:"])
    if docs:
        for i, doc in enumerate(docs, start=1):
            lines.append(f"{i}. {doc.title}")
            lines.append(f"   {doc.type} | {doc.status}")
            lines.append(f"   {doc.url}")
    else:
        lines.append("No sustainability key documents for this region.")
    return "\n".join(lines)


def format_feedback_receipt(feedback: Feedback, path: Path) -> str:
    return (
        "Feedback received.\n"
        f"Rating: {feedback.rating}/5\n"
        f"Context: {feedback.query_context or 'not provided'}\n"
        f"Stored at: {path}"
    )


def format_cache_stats(cache: LRUCache) -> str:
    stats = cache.get_stats()
    ttl = "none" if cache.ttl_seconds is None else f"{cache.ttl_seconds:g}s"
    return (
        f"Cache entries: {len(cache)}/{cache.max_entries} (ttl {ttl})\n"
        f"Hits: {stats.hits}\n"
        f"Misses: {stats.misses}\n"
        f"Hit ratio: {stats.hit_ratio:.1%}"
    )
