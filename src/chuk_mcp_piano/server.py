#!/usr/bin/env python3
"""
Entry point for the CHUK Piano MCP Server.

Runs the piano practice tools over stdio (for desktop MCP clients) or
HTTP. Recordings, progressions and project exercises live under the data
directory, which defaults to the working directory.
"""

import argparse
import asyncio
import logging
import os

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command-line options for chuk-mcp-piano."""
    parser = argparse.ArgumentParser(description="CHUK Piano MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory for recordings/, progressions/ and exercises/ (default: current directory)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main() -> None:
    """Main entry point with transport detection."""
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # The server resolves its directories from the working directory at import
    if args.data_dir:
        os.makedirs(args.data_dir, exist_ok=True)
        os.chdir(args.data_dir)

    from chuk_mcp_piano.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting CHUK Piano MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Piano MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
