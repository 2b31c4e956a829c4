"""Unit tests for text formatting of tool results."""

from mcp_gov.cache import LRUCache
from mcp_gov.server import formatting
from mcp_gov.sources.catalog import key_documents_by_source, sustainability_documents
from mcp_gov.sources.models import DocumentContent, Region, SearchResult


def test_format_results():
    results = [
        SearchResult(
            title="AI Rule",
            source="Federal Register",
            region=Region.US,
            url="https://fr/1",
            date="2024-06-01",
            type="Rule",
            agencies="NIST",
            summary="About AI",
        ),
        SearchResult(title="Bare", source="GovInfo", region=Region.US),
    ]

    text = formatting.format_results("Heading", results)

    assert text.startswith("Heading (2 results)")
    assert "1. AI Rule\n   Federal Register | US | 2024-06-01 | Rule" in text
    assert "   Agencies: NIST" in text
    assert "2. Bare\n   GovInfo | US" in text


def test_format_results_empty():
    assert formatting.format_results("Heading", []) == "Heading\n\nNo results found."


def test_format_key_documents():
    text = formatting.format_key_documents("Global", key_documents_by_source("Global"))

    assert text.startswith("Key AI governance documents (Global):")
    assert "OECD AI Policy Observatory (https://oecd.ai)" in text
    assert "UNESCO Recommendation on the Ethics of AI [Global]" in text
    assert "CELEX" not in text


def test_format_key_documents_empty():
    assert formatting.format_key_documents("EU", []) == "No key documents for region EU."


def test_truncate():
    assert formatting.truncate("short", 10) == "short"
    assert formatting.truncate("a long sentence here", 7) == "a long..."
    assert formatting.truncate("anything", None) == "anything"


def test_format_document_error():
    doc = DocumentContent(url="https://x", error="Could not fetch document: 404")

    text = formatting.format_document(doc)

    assert text.startswith("Could not fetch document: 404\nURL: https://x")
    assert "Trusted starting resources" in text


def test_format_cache_stats_without_ttl():
    cache = LRUCache(max_entries=3)

    text = formatting.format_cache_stats(cache)

    assert "Cache entries: 0/3 (ttl none)" in text
    assert "Hit ratio: 0.0%" in text


def test_format_sustainability_briefing_without_updates():
    text = formatting.format_sustainability_briefing("all", [], sustainability_documents())

    assert "No sustainability-related feed items" in text
    assert "ISSB IFRS S1 and S2 Sustainability Disclosure Standards" in text
    assert "GDPR" not in text
