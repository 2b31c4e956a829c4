from .catalog import ALL_FEEDS, ALL_KEY_DOCS, GENERIC_RESOURCES, SOURCES, get_key_documents, key_documents_by_source
from .fetcher import GovernanceFetcher
from .models import DocumentContent, Feed, KeyDocument, Region, Resource, SearchResult, Source

__all__ = [
    "GovernanceFetcher",
    "SOURCES",
    "ALL_FEEDS",
    "ALL_KEY_DOCS",
    "GENERIC_RESOURCES",
    "get_key_documents",
    "key_documents_by_source",
    "DocumentContent",
    "Feed",
    "KeyDocument",
    "Region",
    "Resource",
    "SearchResult",
    "Source",
]
