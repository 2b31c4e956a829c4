"""Static catalog of AI governance sources, feeds and key documents."""

from __future__ import annotations

import typing as t

from .models import Feed, KeyDocument, Region, Resource, Source

EURLEX = Source(
    key="eurlex",
    name="EUR-Lex (EU Law Database)",
    region=Region.EU,
    base_url="https://eur-lex.europa.eu",
    feeds=(
        Feed("EU AI Act Updates", "https://eur-lex.europa.eu/legal-content/EN/RSS/?uri=CELEX:32024R1689"),
    ),
    key_docs=(
        KeyDocument(
            id="32024R1689",
            title="EU Artificial Intelligence Act (2024)",
            url="https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32024R1689",
            date="2024-07-12",
            status="In force",
            type="Regulation",
            region=Region.EU,
            celex="32024R1689",
        ),
        KeyDocument(
            id="32016R0679",
            title="General Data Protection Regulation (GDPR)",
            url="https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32016R0679",
            date="2016-04-27",
            status="In force",
            type="Regulation",
            region=Region.EU,
            celex="32016R0679",
        ),
        KeyDocument(
            id="32022L2464",
            title="Corporate Sustainability Reporting Directive (CSRD)",
            url="https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32022L2464",
            date="2022-12-14",
            status="In force",
            type="Directive",
            region=Region.EU,
            celex="32022L2464",
        ),
        KeyDocument(
            id="32024L1760",
            title="Corporate Sustainability Due Diligence Directive (CSDDD)",
            url="https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32024L1760",
            date="2024-07-05",
            status="In force",
            type="Directive",
            region=Region.EU,
            celex="32024L1760",
        ),
    ),
)

GOVINFO = Source(
    key="govinfo",
    name="GovInfo (US Government)",
    region=Region.US,
    base_url="https://api.govinfo.gov",
    feeds=(
        Feed(
            "Federal Register - AI Rules",
            "https://www.federalregister.gov/api/v1/articles.rss?conditions[term]=artificial+intelligence"
            "&conditions[type][]=RULE&conditions[type][]=PRORULE",
        ),
        Feed(
            "Federal Register - AI Notices",
            "https://www.federalregister.gov/api/v1/articles.rss?conditions[term]=artificial+intelligence"
            "&conditions[type][]=NOTICE",
        ),
    ),
    key_docs=(
        KeyDocument(
            id="EO-14110",
            title="Executive Order on Safe, Secure, and Trustworthy AI (Biden, 2023)",
            url="https://www.federalregister.gov/documents/2023/11/01/2023-24283/"
            "safe-secure-and-trustworthy-development-and-use-of-artificial-intelligence",
            date="2023-10-30",
            status="Revoked (Jan 2025)",
            type="Executive Order",
            region=Region.US,
        ),
        KeyDocument(
            id="EO-14179",
            title="Removing Barriers to American Leadership in AI (Trump, 2025)",
            url="https://www.federalregister.gov/documents/2025/01/23/2025-01953/"
            "removing-barriers-to-american-leadership-in-artificial-intelligence",
            date="2025-01-20",
            status="Active",
            type="Executive Order",
            region=Region.US,
        ),
        KeyDocument(
            id="NIST-AI-RMF",
            title="NIST AI Risk Management Framework 1.0",
            url="https://airc.nist.gov/RMF",
            date="2023-01-26",
            status="Active",
            type="Framework",
            region=Region.US,
        ),
        KeyDocument(
            id="SEC-CLIMATE-2024",
            title="SEC Climate-Related Disclosure Rule (adopted 2024, litigation pending)",
            url="https://www.sec.gov/rules-regulations/2024/03/"
            "enhancement-standardization-climate-related-disclosures-investors",
            date="2024-03-06",
            status="Adopted; implementation stayed",
            type="Rule",
            region=Region.US,
        ),
    ),
)

OECD = Source(
    key="oecd",
    name="OECD AI Policy Observatory",
    region=Region.GLOBAL,
    base_url="https://oecd.ai",
    feeds=(Feed("OECD AI News", "https://oecd.ai/en/feed"),),
    key_docs=(
        KeyDocument(
            id="OECD-AI-Principles",
            title="OECD Principles on Artificial Intelligence (2019, updated 2024)",
            url="https://oecd.ai/en/ai-principles",
            date="2024-05-03",
            status="Active",
            type="Principles",
            region=Region.GLOBAL,
        ),
        KeyDocument(
            id="G7-Hiroshima-AI-Process",
            title="G7 Hiroshima AI Process - International Code of Conduct",
            url="https://www.meti.go.jp/press/2023/10/20231030002/20231030002-1.pdf",
            date="2023-10-30",
            status="Active",
            type="Code of Conduct",
            region=Region.GLOBAL,
        ),
        KeyDocument(
            id="ISSB-IFRS-S1-S2",
            title="ISSB IFRS S1 and S2 Sustainability Disclosure Standards",
            url="https://www.ifrs.org/issued-standards/ifrs-sustainability-standards-navigator/",
            date="2023-06-26",
            status="Active",
            type="Disclosure Standard",
            region=Region.GLOBAL,
        ),
        KeyDocument(
            id="UNESCO-AI-ETHICS",
            title="UNESCO Recommendation on the Ethics of AI",
            url="https://unesdoc.unesco.org/ark:/48223/pf0000381137",
            date="2021-11-23",
            status="Active",
            type="Recommendation",
            region=Region.GLOBAL,
        ),
    ),
)

NEWS = Source(
    key="news",
    name="AI Governance News Feeds",
    region=Region.GLOBAL,
    feeds=(
        Feed("Future of Life Institute", "https://futureoflife.org/feed/"),
        Feed("AI Now Institute", "https://ainowinstitute.org/feed"),
        Feed("Stanford HAI", "https://hai.stanford.edu/news/rss.xml"),
        Feed(
            "Federal Register - AI (all types)",
            "https://www.federalregister.gov/api/v1/articles.rss?conditions[term]=artificial+intelligence",
        ),
        Feed(
            "Federal Register - Climate & Sustainability",
            "https://www.federalregister.gov/api/v1/articles.rss"
            "?conditions[term]=climate+disclosure+OR+sustainability",
        ),
        Feed("ESG Today", "https://www.esgtoday.com/feed/"),
    ),
)

SOURCES: t.Dict[str, Source] = {s.key: s for s in (EURLEX, GOVINFO, OECD, NEWS)}

ALL_KEY_DOCS: t.Tuple[KeyDocument, ...] = EURLEX.key_docs + GOVINFO.key_docs + OECD.key_docs
ALL_FEEDS: t.Tuple[Feed, ...] = EURLEX.feeds + GOVINFO.feeds + OECD.feeds + NEWS.feeds

REGION_ALL = "all"

# Starting points offered when live sources cannot answer a request.
GENERIC_RESOURCES: t.Tuple[Resource, ...] = (
    Resource("OECD AI Policy Observatory", "https://oecd.ai"),
    Resource("EU EUR-Lex AI Act", "https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32024R1689"),
    Resource(
        "US Federal Register AI Search",
        "https://www.federalregister.gov/documents/search?conditions%5Bterm%5D=artificial+intelligence",
    ),
    Resource("NIST AI Risk Management Framework", "https://airc.nist.gov/RMF"),
    Resource("UNESCO AI Ethics Recommendation", "https://unesdoc.unesco.org/ark:/48223/pf0000381137"),
    Resource(
        "IFRS Sustainability Standards Navigator",
        "https://www.ifrs.org/issued-standards/ifrs-sustainability-standards-navigator/",
    ),
)

SUSTAINABILITY_TERMS = ("sustainab", "climate", "esg", "emission", "environment", "disclosure", "csrd", "csddd")


def parse_region(region: str) -> t.Optional[Region]:
    """Map a user supplied region to a ``Region``; ``"all"`` maps to ``None``."""
    if region.lower() == REGION_ALL:
        return None
    for candidate in Region:
        if candidate.value.lower() == region.lower():
            return candidate
    raise ValueError(f"unknown region {region!r}, expected one of: all, EU, US, Global")


def get_key_documents(region: str = REGION_ALL) -> t.List[KeyDocument]:
    selected = parse_region(region)
    if selected is None:
        return list(ALL_KEY_DOCS)
    return [doc for doc in ALL_KEY_DOCS if doc.region == selected]


def feeds_for_region(region: str = REGION_ALL) -> t.List[Feed]:
    selected = parse_region(region)
    if selected is None:
        return list(ALL_FEEDS)
    if selected == Region.EU:
        return list(EURLEX.feeds)
    if selected == Region.US:
        return list(GOVINFO.feeds)
    return list(OECD.feeds + NEWS.feeds)


def key_documents_by_source(region: str = REGION_ALL) -> t.List[t.Tuple[Source, t.List[KeyDocument]]]:
    """Key documents for ``region`` grouped under the source that publishes them."""
    selected = parse_region(region)
    groups = []
    for source in SOURCES.values():
        docs = [doc for doc in source.key_docs if selected is None or doc.region == selected]
        if docs:
            groups.append((source, docs))
    return groups


def is_sustainability_related(*texts: t.Optional[str]) -> bool:
    haystack = " ".join(text for text in texts if text).lower()
    return any(term in haystack for term in SUSTAINABILITY_TERMS)


def sustainability_documents(region: str = REGION_ALL) -> t.List[KeyDocument]:
    return [doc for doc in get_key_documents(region) if is_sustainability_related(doc.title, doc.type)]
