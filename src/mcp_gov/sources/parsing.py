"""HTML and feed parsing on top of lxml."""

from __future__ import annotations

import re
import typing as t
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from urllib.parse import urljoin

from lxml import etree, html

from .models import Feed, Region, SearchResult

ATOM_NS = "{http://www.w3.org/2005/Atom}"
MAX_DOCUMENT_CHARS = 8000
MIN_MAIN_CONTENT_CHARS = 200

_WHITESPACE = re.compile(r"\s+")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def has_class(name: str) -> str:
    """XPath predicate equivalent to the CSS selector ``.name``."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


_NOISE_XPATH = " | ".join(
    (
        "//nav",
        "//script",
        "//style",
        "//footer",
        "//header",
        f"//*[{has_class('cookie-banner')}]",
        f"//*[{has_class('navigation')}]",
    )
)

_MAIN_CONTENT_XPATHS = (
    "//article",
    "//main",
    f"//*[{has_class('content')}]",
    "//*[@id='content']",
    f"//*[{has_class('document-body')}]",
    f"//*[{has_class('text')}]",
)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _text(nodes: t.Sequence[t.Any]) -> str:
    return "".join(node.text_content() for node in nodes).strip()


def _parse_html(markup: t.Union[str, bytes]) -> t.Optional[html.HtmlElement]:
    if isinstance(markup, str):
        # lxml refuses str input that carries an encoding declaration (XHTML pages)
        markup = _XML_DECLARATION.sub("", markup, count=1)
    if not markup or not markup.strip():
        return None
    return html.fromstring(markup)


def parse_eurlex_results(markup: str, base_url: str, max_results: int) -> t.List[SearchResult]:
    tree = _parse_html(markup)
    if tree is None:
        return []

    results: t.List[SearchResult] = []
    for block in tree.xpath(f"//*[{has_class('SearchResult')}]"):
        if len(results) >= max_results:
            break
        links = block.xpath(f".//*[{has_class('title')}]//a")
        title = _text(links[:1])
        if not title:
            continue
        href = links[0].get("href")
        date = _text(block.xpath(f".//*[{has_class('date')}]"))
        summary = _text(block.xpath(f".//*[{has_class('snippet')}]"))
        results.append(
            SearchResult(
                title=title,
                url=urljoin(base_url, href) if href else None,
                date=date or None,
                summary=summary or None,
                source="EUR-Lex",
                region=Region.EU,
            )
        )
    return results


def extract_document(markup: t.Union[str, bytes]) -> t.Tuple[str, str]:
    """Return ``(title, main_text)`` of a fetched web page.

    XHTML pages often open with ``<?xml ... encoding=...?>``; that declaration
    is dropped from str input, which lxml would otherwise reject.
    """
    tree = _parse_html(markup)
    if tree is None:
        return "", ""

    title = _text(tree.xpath("//title")) or _text(tree.xpath("//h1")[:1])

    for node in tree.xpath(_NOISE_XPATH):
        if node.getparent() is not None:
            node.drop_tree()

    text = ""
    for xpath in _MAIN_CONTENT_XPATHS:
        found = _text(tree.xpath(xpath))
        if len(found) > MIN_MAIN_CONTENT_CHARS:
            text = found
            break
    if not text:
        body = tree.xpath("//body")
        text = _text(body) if body else tree.text_content()

    return collapse_whitespace(title), collapse_whitespace(text)[:MAX_DOCUMENT_CHARS]


def parse_date(value: t.Optional[str]) -> datetime:
    """Parse RFC 822 or ISO 8601 dates; unparseable values sort as oldest."""
    if not value:
        return _EPOCH
    parsed: t.Optional[datetime] = None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return _EPOCH
    if parsed is None:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _strip_markup(value: t.Optional[str]) -> t.Optional[str]:
    if not value:
        return None
    if "<" in value:
        fragment = _parse_html(value)
        value = fragment.text_content() if fragment is not None else ""
    value = collapse_whitespace(value)
    return value or None


def _child_text(element: t.Any, tag: str) -> t.Optional[str]:
    child = element.find(tag)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def parse_feed(content: bytes, feed: Feed, max_items: int = 5) -> t.List[SearchResult]:
    """Parse an RSS 2.0 or Atom document into results labelled with ``feed``."""
    parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)
    root = etree.fromstring(content, parser=parser)
    if root is None:
        return []

    if root.tag == f"{ATOM_NS}feed":
        channel_title = _child_text(root, f"{ATOM_NS}title")
        entries = root.findall(f"{ATOM_NS}entry")
    else:
        channel = root.find("channel")
        if channel is None:
            return []
        channel_title = _child_text(channel, "title")
        entries = channel.findall("item")

    results: t.List[SearchResult] = []
    for entry in entries[:max_items]:
        if entry.tag == f"{ATOM_NS}entry":
            link = entry.find(f"{ATOM_NS}link")
            url = link.get("href") if link is not None else None
            date = _child_text(entry, f"{ATOM_NS}updated") or _child_text(entry, f"{ATOM_NS}published")
            summary = _child_text(entry, f"{ATOM_NS}summary") or _child_text(entry, f"{ATOM_NS}content")
            title = _child_text(entry, f"{ATOM_NS}title")
        else:
            url = _child_text(entry, "link")
            date = _child_text(entry, "pubDate")
            summary = _child_text(entry, "description")
            title = _child_text(entry, "title")
        results.append(
            SearchResult(
                title=title or "(untitled)",
                url=url,
                date=date,
                summary=_strip_markup(summary),
                source=channel_title or feed.label,
                region=feed.region,
                feed_label=feed.label,
            )
        )
    return results
