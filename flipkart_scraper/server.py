"""
Flipkart Scraper MCP Server.

Exposes product search, product details, and raw-markup extraction as tools
over stdio.
"""
import asyncio
import json
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from . import extract_product, extract_search
from .actions.search import SearchAction
from .browser import BrowserManager
from .config import ScraperSettings
from .errors import ExtractionError

logger = logging.getLogger(__name__)

server = Server("flipkart-scraper")

# Lazy-initialized singletons
_settings: ScraperSettings | None = None
_browser_manager: BrowserManager | None = None
_search_action: SearchAction | None = None


def _get_settings() -> ScraperSettings:
    global _settings
    if _settings is None:
        _settings = ScraperSettings.from_env()
    return _settings


def _get_browser_manager() -> BrowserManager:
    global _browser_manager
    if _browser_manager is None:
        _browser_manager = BrowserManager(_get_settings())
    return _browser_manager


def _get_search_action() -> SearchAction:
    global _search_action
    if _search_action is None:
        _search_action = SearchAction(_get_browser_manager(), _get_settings())
    return _search_action


# ---------------------------------------------------------------------------
# Tool definitions
# ---------------------------------------------------------------------------

@server.list_tools()
async def list_tools() -> list[Tool]:
    return [
        Tool(
            name="search_products",
            description="Search Flipkart by query. Returns product names, links, thumbnails, and prices.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Product search query (e.g., 'samsung galaxy f13')",
                    },
                    "max_results": {
                        "type": "integer",
                        "description": "Maximum number of results to return (default: 10)",
                    },
                },
                "required": ["query"],
            },
        ),
        Tool(
            name="get_product_details",
            description=(
                "Fetch a Flipkart product page and extract its name, price, rating, "
                "availability, seller, highlights, offers, thumbnails, and specifications."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "url": {
                        "type": "string",
                        "description": "Product page URL on flipkart.com",
                    },
                },
                "required": ["url"],
            },
        ),
        Tool(
            name="extract_markup",
            description=(
                "Extract structured data from HTML you already have, without fetching. "
                "Use kind='product' for a product page or kind='search' for a results page."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "kind": {
                        "type": "string",
                        "enum": ["product", "search"],
                        "description": "Which page shape the HTML is",
                    },
                    "html": {
                        "type": "string",
                        "description": "Complete HTML document",
                    },
                    "url": {
                        "type": "string",
                        "description": "Page URL, used as the share link fallback for products",
                    },
                },
                "required": ["kind", "html"],
            },
        ),
    ]


# ---------------------------------------------------------------------------
# Tool dispatch
# ---------------------------------------------------------------------------

@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    try:
        if name == "search_products":
            result = await _handle_search_products(arguments)
        elif name == "get_product_details":
            result = await _handle_get_product_details(arguments)
        elif name == "extract_markup":
            result = await _handle_extract_markup(arguments)
        else:
            return [TextContent(type="text", text=f"Unknown tool: {name}")]

        if isinstance(result, str):
            text = result
        else:
            text = json.dumps(result, indent=2, ensure_ascii=False)
        return [TextContent(type="text", text=text)]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        return [TextContent(type="text", text=f"Error: {str(e)}")]


# ---------------------------------------------------------------------------
# Tool implementations
# ---------------------------------------------------------------------------

async def _handle_search_products(args: dict) -> str:
    """Search Flipkart via Playwright. Returns readable text."""
    query = args["query"]
    max_results = args.get("max_results", 10)

    search = _get_search_action()
    result = await search.search(query, max_results=max_results)

    lines = [f"Search results for \"{query}\":", ""]
    for i, r in enumerate(result.get("results", []), 1):
        price = r["price"]
        price_text = f"₹{price['current']:,}"
        if price.get("original"):
            price_text += f" (was ₹{price['original']:,})"
        lines.append(f"  {i}. {r['name']}")
        lines.append(f"     Price: {price_text}")
        lines.append(f"     URL: {r['link']}")
        lines.append("")

    total = result.get("total_results", 0)
    lines.append(f"Found {total} results from: {', '.join(result.get('retailers_searched', []))}")
    return "\n".join(lines)


async def _handle_get_product_details(args: dict) -> dict:
    """Get product details from a URL via Playwright."""
    search = _get_search_action()
    return await search.get_details(args["url"])


async def _handle_extract_markup(args: dict) -> dict:
    """Run the extractors over caller-supplied HTML."""
    kind = args["kind"]
    html = args["html"]
    settings = _get_settings()

    try:
        if kind == "product":
            details = extract_product(html, url=args.get("url"), settings=settings)
            return {"status": "ok", "details": details.to_dict()}
        if kind == "search":
            results = extract_search(html, settings=settings)
            return {
                "status": "ok",
                "results": [r.to_dict() for r in results],
                "total_results": len(results),
            }
    except ExtractionError as e:
        return {"status": "error", "error": type(e).__name__, "message": str(e)}

    return {"status": "error", "message": f"Unknown kind: {kind}. Use 'product' or 'search'."}


# ---------------------------------------------------------------------------
# Server entry point
# ---------------------------------------------------------------------------

async def main():
    """Run the MCP server over stdio."""
    logging.basicConfig(
        level=_get_settings().log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Flipkart Scraper MCP server starting...")

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        # Clean up browser on shutdown
        if _browser_manager:
            await _browser_manager.close()


def run():
    """Sync entry point for console_scripts."""
    asyncio.run(main())
