"""Unit tests for the static source catalog."""

import pytest

from mcp_gov.sources import catalog
from mcp_gov.sources.models import Feed, Region


def test_all_key_documents():
    docs = catalog.get_key_documents()

    assert len(docs) == 12
    assert {d.region for d in docs} == {Region.EU, Region.US, Region.GLOBAL}


@pytest.mark.parametrize(
    ("region", "expected_id"),
    [("EU", "32024R1689"), ("us", "NIST-AI-RMF"), ("Global", "OECD-AI-Principles")],
)
def test_key_documents_by_region(region, expected_id):
    docs = catalog.get_key_documents(region)

    assert expected_id in {d.id for d in docs}
    assert len({d.region for d in docs}) == 1


def test_unknown_region_rejected():
    with pytest.raises(ValueError, match="unknown region"):
        catalog.get_key_documents("Mars")


def test_feeds_for_region():
    assert catalog.feeds_for_region("all") == list(catalog.ALL_FEEDS)
    assert catalog.feeds_for_region("EU") == list(catalog.EURLEX.feeds)
    assert catalog.feeds_for_region("US") == list(catalog.GOVINFO.feeds)
    assert catalog.NEWS.feeds[0] in catalog.feeds_for_region("Global")


@pytest.mark.parametrize(
    ("label", "region"),
    [
        ("EU AI Act Updates", Region.EU),
        ("Federal Register - AI Rules", Region.US),
        ("Stanford HAI", Region.GLOBAL),
    ],
)
def test_feed_region_from_label(label, region):
    assert Feed(label, "https://example.org/feed").region == region


def test_key_documents_grouped_by_source():
    groups = catalog.key_documents_by_source("all")

    assert [source.key for source, _ in groups] == ["eurlex", "govinfo", "oecd"]
    assert sum(len(docs) for _, docs in groups) == 12
    assert [source.key for source, _ in catalog.key_documents_by_source("US")] == ["govinfo"]


@pytest.mark.parametrize(
    ("texts", "expected"),
    [
        (("Climate-related disclosures", None), True),
        (("AI Act",), False),
        ((None, "ESG Today"), True),
        ((None, None), False),
    ],
)
def test_is_sustainability_related(texts, expected):
    assert catalog.is_sustainability_related(*texts) is expected


def test_sustainability_documents():
    ids = {doc.id for doc in catalog.sustainability_documents()}

    assert ids == {"32022L2464", "32024L1760", "SEC-CLIMATE-2024", "ISSB-IFRS-S1-S2"}
    assert {doc.id for doc in catalog.sustainability_documents("US")} == {"SEC-CLIMATE-2024"}


def test_generic_resources_are_https():
    assert catalog.GENERIC_RESOURCES
    assert all(r.url.startswith("https://") for r in catalog.GENERIC_RESOURCES)
