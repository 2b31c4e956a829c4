from __future__ import annotations

import enum
import typing as t
from dataclasses import dataclass, field
from datetime import datetime, timezone


class Region(str, enum.Enum):
    EU = "EU"
    US = "US"
    GLOBAL = "Global"


@dataclass(frozen=True)
class KeyDocument:
    id: str
    title: str
    url: str
    date: str
    status: str
    type: str
    region: Region
    celex: t.Optional[str] = None


@dataclass(frozen=True)
class Feed:
    label: str
    url: str

    @property
    def region(self) -> Region:
        if "EU" in self.label or "EUR" in self.label:
            return Region.EU
        if "Federal" in self.label:
            return Region.US
        return Region.GLOBAL


@dataclass(frozen=True)
class Source:
    key: str
    name: str
    region: Region
    base_url: t.Optional[str] = None
    feeds: t.Tuple[Feed, ...] = ()
    key_docs: t.Tuple[KeyDocument, ...] = ()


@dataclass(frozen=True)
class SearchResult:
    title: str
    source: str
    region: Region
    url: t.Optional[str] = None
    date: t.Optional[str] = None
    summary: t.Optional[str] = None
    type: t.Optional[str] = None
    status: t.Optional[str] = None
    agencies: t.Optional[str] = None
    feed_label: t.Optional[str] = None

    @classmethod
    def from_key_document(cls, doc: KeyDocument, source: str) -> "SearchResult":
        return cls(
            title=doc.title,
            source=source,
            region=doc.region,
            url=doc.url,
            date=doc.date,
            type=doc.type,
            status=doc.status,
        )


@dataclass(frozen=True)
class DocumentContent:
    url: str
    title: str = ""
    content: str = ""
    error: t.Optional[str] = None
    fetched_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class Resource:
    label: str
    url: str
