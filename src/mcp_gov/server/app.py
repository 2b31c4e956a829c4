from __future__ import annotations

import logging
import typing as t

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from ..cache import LRUCache
from ..sources import briefings, catalog
from ..sources.fetcher import GovernanceFetcher
from ..utils.config import ServerConfig
from . import formatting
from .feedback import Feedback, record_feedback

logger = logging.getLogger(__name__)

MAX_RESULTS_LIMIT = 30
MAX_ITEMS_LIMIT = 50
BRIEFING_MAX_ITEMS = (3, 30)
TOPIC_SEARCH_RESULTS = 5
DEFAULT_FEEDBACK_DIR = "logs"
REGION_CHOICES = ["all", "EU", "US", "Global"]
SEARCH_REGIONS = ["EU", "US", "Global"]
RESPONSE_MODES = ["compact", "detailed"]
FOCUS_CHOICES = ["general", "sustainability"]
SUSTAINABILITY_QUERY_TERMS = "climate disclosure sustainability ESG"

_REGION = {"type": "string", "enum": REGION_CHOICES, "default": "all", "description": "Region filter"}
_RESPONSE_MODE = {
    "type": "string",
    "enum": RESPONSE_MODES,
    "default": "detailed",
    "description": "compact shortens summaries to reduce token usage",
}

TOOLS: t.List[types.Tool] = [
    types.Tool(
        name="search_ai_governance",
        description="Search EUR-Lex, the US Federal Register and GovInfo for AI governance documents",
        inputSchema={
            "type": "object",
            "required": ["query"],
            "properties": {
                "query": {"type": "string", "description": "Search terms, e.g. 'foundation model requirements'"},
                "regions": {
                    "type": "array",
                    "items": {"type": "string", "enum": SEARCH_REGIONS},
                    "default": SEARCH_REGIONS,
                    "description": "Regions to search",
                },
                "max_results": {"type": "integer", "minimum": 1, "maximum": MAX_RESULTS_LIMIT, "default": 10},
                "response_mode": _RESPONSE_MODE,
                "focus": {
                    "type": "string",
                    "enum": FOCUS_CHOICES,
                    "default": "general",
                    "description": "sustainability prioritises climate, disclosure and ESG regulation",
                },
            },
        },
    ),
    types.Tool(
        name="get_latest_ai_governance_updates",
        description="Latest items from regulatory and AI governance RSS feeds, newest first",
        inputSchema={
            "type": "object",
            "properties": {
                "region": _REGION,
                "max_items": {"type": "integer", "minimum": 1, "maximum": MAX_ITEMS_LIMIT, "default": 15},
                "response_mode": _RESPONSE_MODE,
            },
        },
    ),
    types.Tool(
        name="get_sustainability_ai_regulatory_briefing",
        description="Climate, disclosure and ESG regulatory updates with the core sustainability instruments",
        inputSchema={
            "type": "object",
            "properties": {
                "region": _REGION,
                "max_items": {
                    "type": "integer",
                    "minimum": BRIEFING_MAX_ITEMS[0],
                    "maximum": BRIEFING_MAX_ITEMS[1],
                    "default": 12,
                },
            },
        },
    ),
    types.Tool(
        name="get_key_ai_governance_documents",
        description="Landmark AI governance documents (AI Act, GDPR, executive orders, OECD principles, ...)",
        inputSchema={"type": "object", "properties": {"region": _REGION}},
    ),
    types.Tool(
        name="get_eu_ai_act_info",
        description="EU AI Act overview: timeline, risk tiers, GPAI duties, penalties; optional EUR-Lex topic search",
        inputSchema={
            "type": "object",
            "properties": {
                "topic": {"type": "string", "description": "e.g. 'prohibited practices', 'high-risk systems'"},
            },
        },
    ),
    types.Tool(
        name="get_us_ai_policy",
        description="US AI policy overview: executive orders, NIST frameworks; optional Federal Register topic search",
        inputSchema={
            "type": "object",
            "properties": {
                "topic": {"type": "string", "description": "e.g. 'executive orders', 'NIST framework'"},
            },
        },
    ),
    types.Tool(
        name="get_global_ai_frameworks",
        description="OECD, G7, UN, UNESCO, Bletchley and ISO/IEC AI frameworks with applied examples",
        inputSchema={"type": "object", "properties": {}},
    ),
    types.Tool(
        name="fetch_governance_document",
        description="Fetch a document URL and return its main text (truncated to 8000 characters)",
        inputSchema={
            "type": "object",
            "required": ["url"],
            "properties": {"url": {"type": "string", "description": "Document URL"}},
        },
    ),
    types.Tool(
        name="compare_ai_governance_frameworks",
        description="Compare how major AI governance frameworks treat a topic",
        inputSchema={
            "type": "object",
            "required": ["topic"],
            "properties": {
                "topic": {
                    "type": "string",
                    "description": "e.g. 'foundation models', 'transparency', 'prohibited uses'",
                },
            },
        },
    ),
    types.Tool(
        name="submit_mcp_feedback",
        description="Record feedback about this server's answers for its maintainers",
        inputSchema={
            "type": "object",
            "required": ["rating", "message"],
            "properties": {
                "rating": {"type": "integer", "minimum": 1, "maximum": 5},
                "message": {"type": "string", "minLength": 5, "maxLength": 2000},
                "query_context": {"type": "string"},
                "email": {"type": "string"},
            },
        },
    ),
    types.Tool(
        name="cache_stats",
        description="Report the retrieval cache size and hit/miss counters",
        inputSchema={"type": "object", "properties": {}},
    ),
]


def _int_arg(
    arguments: t.Dict[str, t.Any],
    name: str,
    default: int,
    maximum: int = MAX_RESULTS_LIMIT,
    minimum: int = 1,
) -> int:
    raw = arguments.get(name, default)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    return max(minimum, min(value, maximum))


def _required_str(arguments: t.Dict[str, t.Any], name: str) -> str:
    value = arguments.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} is required")
    return value.strip()


def _optional_str(arguments: t.Dict[str, t.Any], name: str) -> t.Optional[str]:
    value = arguments.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value.strip() or None


def _choice(arguments: t.Dict[str, t.Any], name: str, choices: t.Sequence[str], default: str) -> str:
    value = arguments.get(name) or default
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return value


async def _search(fetcher: GovernanceFetcher, arguments: t.Dict[str, t.Any]) -> str:
    query = _required_str(arguments, "query")
    max_results = _int_arg(arguments, "max_results", 10)
    regions = arguments.get("regions") or SEARCH_REGIONS
    response_mode = _choice(arguments, "response_mode", RESPONSE_MODES, formatting.DEFAULT_RESPONSE_MODE)
    focus = _choice(arguments, "focus", FOCUS_CHOICES, "general")

    effective_query = f"{query} {SUSTAINABILITY_QUERY_TERMS}" if focus == "sustainability" else query
    results = await fetcher.global_search(effective_query, max_results=max_results, regions=regions)
    if not results:
        return formatting.format_limitations(f"query '{query}'")

    heading = f"Search results for '{query}'"
    if focus != "general":
        heading += f" [focus: {focus}]"
    return formatting.format_results(heading, results, formatting.SUMMARY_CHARS[response_mode])


async def _latest_updates(fetcher: GovernanceFetcher, arguments: t.Dict[str, t.Any]) -> str:
    region = arguments.get("region", catalog.REGION_ALL)
    max_items = _int_arg(arguments, "max_items", 15, maximum=MAX_ITEMS_LIMIT)
    response_mode = _choice(arguments, "response_mode", RESPONSE_MODES, formatting.DEFAULT_RESPONSE_MODE)

    items = await fetcher.fetch_rss_updates(region, max_items=max_items)
    if not items:
        return formatting.format_limitations("the latest governance updates")
    return formatting.format_results(f"Recent updates ({region})", items, formatting.SUMMARY_CHARS[response_mode])


async def _sustainability_briefing(fetcher: GovernanceFetcher, arguments: t.Dict[str, t.Any]) -> str:
    region = arguments.get("region", catalog.REGION_ALL)
    low, high = BRIEFING_MAX_ITEMS
    max_items = _int_arg(arguments, "max_items", 12, maximum=high, minimum=low)

    updates = await fetcher.sustainability_updates(region, max_items=max_items)
    docs = catalog.sustainability_documents(region)
    return formatting.format_sustainability_briefing(region, updates, docs)


async def _eu_ai_act(fetcher: GovernanceFetcher, arguments: t.Dict[str, t.Any]) -> str:
    topic = _optional_str(arguments, "topic")
    if topic is None:
        return briefings.EU_AI_ACT
    results = await fetcher.search_eurlex(f"AI Act {topic}", TOPIC_SEARCH_RESULTS)
    return formatting.format_briefing(briefings.EU_AI_ACT, f"EUR-Lex results for '{topic}'", results)


async def _us_ai_policy(fetcher: GovernanceFetcher, arguments: t.Dict[str, t.Any]) -> str:
    topic = _optional_str(arguments, "topic")
    if topic is None:
        return briefings.US_AI_POLICY
    results = await fetcher.search_federal_register(f"artificial intelligence {topic}", TOPIC_SEARCH_RESULTS)
    return formatting.format_briefing(briefings.US_AI_POLICY, f"Federal Register results for '{topic}'", results)


def _compare(arguments: t.Dict[str, t.Any]) -> str:
    topic = _required_str(arguments, "topic")
    text, curated = briefings.comparison_for(topic)
    if curated:
        return text
    return f"{text}\n\n{formatting.format_limitations(f'topic {topic!r}')}"


def _submit_feedback(arguments: t.Dict[str, t.Any], feedback_dir: str) -> str:
    rating = arguments.get("rating")
    if isinstance(rating, str) and rating.strip().isdigit():
        rating = int(rating)
    feedback = Feedback(
        rating=rating,
        message=_required_str(arguments, "message"),
        query_context=_optional_str(arguments, "query_context"),
        email=_optional_str(arguments, "email"),
    )
    path = record_feedback(feedback_dir, feedback)
    return formatting.format_feedback_receipt(feedback, path)


async def dispatch(
    fetcher: GovernanceFetcher,
    name: str,
    arguments: t.Optional[t.Dict[str, t.Any]],
    feedback_dir: str = DEFAULT_FEEDBACK_DIR,
) -> str:
    """Run tool ``name`` and render its result as text."""
    arguments = arguments or {}

    if name == "search_ai_governance":
        return await _search(fetcher, arguments)

    if name == "get_latest_ai_governance_updates":
        return await _latest_updates(fetcher, arguments)

    if name == "get_sustainability_ai_regulatory_briefing":
        return await _sustainability_briefing(fetcher, arguments)

    if name == "get_key_ai_governance_documents":
        region = arguments.get("region", catalog.REGION_ALL)
        return formatting.format_key_documents(region, catalog.key_documents_by_source(region))

    if name == "get_eu_ai_act_info":
        return await _eu_ai_act(fetcher, arguments)

    if name == "get_us_ai_policy":
        return await _us_ai_policy(fetcher, arguments)

    if name == "get_global_ai_frameworks":
        return briefings.GLOBAL_FRAMEWORKS

    if name == "fetch_governance_document":
        url = _required_str(arguments, "url")
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"url must be http(s), got {url!r}")
        return formatting.format_document(await fetcher.fetch_document_content(url))

    if name == "compare_ai_governance_frameworks":
        return _compare(arguments)

    if name == "submit_mcp_feedback":
        return _submit_feedback(arguments, feedback_dir)

    if name == "cache_stats":
        return formatting.format_cache_stats(fetcher.cache)

    raise ValueError(f"Unknown tool: {name}")


def create_server(
    fetcher: GovernanceFetcher,
    name: str = "ai-governance-mcp",
    feedback_dir: str = DEFAULT_FEEDBACK_DIR,
) -> Server:
    app = Server(name)

    @app.list_tools()
    async def list_tools() -> list[types.Tool]:
        return TOOLS

    @app.call_tool()
    async def call_tool(tool_name: str, arguments: dict) -> list[types.ContentBlock]:
        logger.info("call_tool name=%s", tool_name)
        text = await dispatch(fetcher, tool_name, arguments, feedback_dir=feedback_dir)
        return [types.TextContent(type="text", text=text)]

    return app


async def run_stdio(config: ServerConfig) -> None:
    # one cache per process, shared by every retrieval path
    cache = LRUCache(max_entries=config.cache.max_entries, ttl_seconds=config.cache.ttl_seconds)
    async with GovernanceFetcher.from_config(cache, config.http, config.resilience) as fetcher:
        app = create_server(fetcher, config.name, feedback_dir=config.feedback_dir)
        logger.info(
            "starting %s (cache max_entries=%d ttl=%s)",
            config.name,
            config.cache.max_entries,
            config.cache.ttl_seconds,
        )
        async with stdio_server() as (read_stream, write_stream):
            await app.run(read_stream, write_stream, app.create_initialization_options())
        stats = cache.get_stats()
        logger.info("shutting down: cache hits=%d misses=%d", stats.hits, stats.misses)
