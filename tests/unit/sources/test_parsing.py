"""Unit tests for HTML and feed parsing."""

from datetime import datetime, timezone

from mcp_gov.sources.models import Feed, Region
from mcp_gov.sources.parsing import (
    MAX_DOCUMENT_CHARS,
    extract_document,
    parse_date,
    parse_eurlex_results,
    parse_feed,
)

EURLEX_PAGE = """
<html><body>
  <div class="SearchResult">
    <h2 class="title"><a href="./legal-content/EN/TXT/?uri=CELEX:32024R1689">Artificial Intelligence Act</a></h2>
    <div class="date">12/07/2024</div>
    <div class="snippet">Harmonised rules on artificial intelligence.</div>
  </div>
  <div class="SearchResult">
    <h2 class="title"><a>GDPR</a></h2>
  </div>
  <div class="SearchResult"><h2 class="title"></h2></div>
  <div class="SearchResult extra">
    <h2 class="title"><a href="/third">Third</a></h2>
  </div>
</body></html>
"""

RSS_FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel>
  <title>Federal Register AI</title>
  <item>
    <title>Older rule</title>
    <link>https://example.gov/older</link>
    <pubDate>Mon, 01 Jan 2024 10:00:00 GMT</pubDate>
    <description>&lt;p&gt;Some &lt;b&gt;html&lt;/b&gt;   summary&lt;/p&gt;</description>
  </item>
  <item>
    <title>Second</title>
    <link>https://example.gov/second</link>
  </item>
</channel></rss>
"""

ATOM_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>OECD AI</title>
  <entry>
    <title>Principles update</title>
    <link href="https://oecd.ai/post"/>
    <updated>2024-05-03T12:00:00Z</updated>
    <summary>Updated principles</summary>
  </entry>
</feed>
"""


class TestEurLex:
    def test_parses_result_blocks(self):
        results = parse_eurlex_results(EURLEX_PAGE, "https://eur-lex.europa.eu/search.html", 10)

        assert [r.title for r in results] == ["Artificial Intelligence Act", "GDPR", "Third"]
        first = results[0]
        assert first.url == "https://eur-lex.europa.eu/legal-content/EN/TXT/?uri=CELEX:32024R1689"
        assert first.date == "12/07/2024"
        assert first.summary == "Harmonised rules on artificial intelligence."
        assert first.region == Region.EU
        assert results[1].url is None
        assert results[2].url == "https://eur-lex.europa.eu/third"

    def test_respects_max_results(self):
        results = parse_eurlex_results(EURLEX_PAGE, "https://eur-lex.europa.eu/search.html", 1)

        assert len(results) == 1

    def test_empty_page(self):
        assert parse_eurlex_results("", "https://eur-lex.europa.eu/", 5) == []
        assert parse_eurlex_results("<html><body></body></html>", "https://eur-lex.europa.eu/", 5) == []


class TestExtractDocument:
    def test_prefers_main_content(self):
        body = "Article text. " * 30
        page = f"""
        <html><head><title> The  Act </title><script>var x = 1;</script></head>
        <body>
          <nav>Menu Menu</nav>
          <header>Site header</header>
          <main>{body}</main>
          <footer>Footer</footer>
        </body></html>
        """

        title, content = extract_document(page)

        assert title == "The Act"
        assert content.startswith("Article text. Article text.")
        assert "Menu" not in content
        assert "Footer" not in content

    def test_falls_back_to_body_and_h1(self):
        page = "<html><body><h1>Heading</h1><p>Short   body</p><div class='cookie-banner'>Accept</div></body></html>"

        title, content = extract_document(page)

        assert title == "Heading"
        assert "Short body" in content
        assert "Accept" not in content

    def test_drops_navigation_blocks_matched_by_class(self):
        page = (
            "<html><body><p>Recital text</p>"
            "<div class='site navigation'>Home | About</div>"
            "<div class='navigation-extra'>kept</div></body></html>"
        )

        _, content = extract_document(page)

        assert "Home | About" not in content
        assert "kept" in content

    def test_xhtml_with_encoding_declaration(self):
        page = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<html xmlns="http://www.w3.org/1999/xhtml"><head><title>Official Journal</title></head>'
            "<body><p>Regulation text</p></body></html>"
        )

        assert extract_document(page) == ("Official Journal", "Regulation text")
        assert extract_document(page.encode("utf-8")) == ("Official Journal", "Regulation text")

    def test_truncates_long_documents(self):
        page = "<html><body><article>" + ("word " * 5000) + "</article></body></html>"

        _, content = extract_document(page)

        assert len(content) == MAX_DOCUMENT_CHARS


class TestFeeds:
    def test_rss(self):
        feed = Feed("Federal Register - AI Rules", "https://example.gov/rss")

        items = parse_feed(RSS_FEED, feed)

        assert [i.title for i in items] == ["Older rule", "Second"]
        assert items[0].source == "Federal Register AI"
        assert items[0].summary == "Some html summary"
        assert items[0].region == Region.US
        assert items[0].feed_label == feed.label
        assert items[1].date is None

    def test_atom(self):
        items = parse_feed(ATOM_FEED, Feed("OECD AI News", "https://oecd.ai/en/feed"))

        assert len(items) == 1
        assert items[0].url == "https://oecd.ai/post"
        assert items[0].date == "2024-05-03T12:00:00Z"
        assert items[0].region == Region.GLOBAL

    def test_max_items(self):
        assert len(parse_feed(RSS_FEED, Feed("x", "https://x"), max_items=1)) == 1


class TestParseDate:
    def test_rfc822(self):
        assert parse_date("Mon, 01 Jan 2024 10:00:00 GMT") == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)

    def test_iso(self):
        assert parse_date("2024-05-03T12:00:00Z") == datetime(2024, 5, 3, 12, tzinfo=timezone.utc)
        assert parse_date("2024-05-03") == datetime(2024, 5, 3, tzinfo=timezone.utc)

    def test_missing_or_garbage_sorts_oldest(self):
        assert parse_date(None) == parse_date("not a date") == datetime(1970, 1, 1, tzinfo=timezone.utc)
