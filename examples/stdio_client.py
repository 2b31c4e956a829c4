#!/usr/bin/env python3
"""Run the server over stdio, repeat a search and show the cache counters."""

import sys

import anyio
import click
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client


async def run(query: str, repeat: int) -> None:
    params = StdioServerParameters(command=sys.executable, args=["-m", "mcp_gov", "--log-level", "WARNING"])
    async with stdio_client(params) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await session.initialize()
            tools = await session.list_tools()
            print("tools:", ", ".join(tool.name for tool in tools.tools))

            for i in range(repeat):
                with anyio.fail_after(60):
                    result = await session.call_tool("search_ai_governance", {"query": query, "max_results": 5})
                text = result.content[0].text if result.content else ""
                print(f"--- search #{i + 1} ({len(text)} chars)")
                if i == 0:
                    print(text)

            stats = await session.call_tool("cache_stats", {})
            print("---")
            print(stats.content[0].text)


@click.command()
@click.option("--query", default="artificial intelligence", help="Search terms")
@click.option("--repeat", default=2, help="How many times to issue the same search")
def main(query: str, repeat: int) -> None:
    anyio.run(run, query, repeat)


if __name__ == "__main__":
    main()
