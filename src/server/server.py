"""Server bootstrap for the file data producer query service.

Creates the FastMCP instance, wires the scanner and query handler into
the get_file_data tool, and starts the chosen transport (optionally
behind TLS via uvicorn).
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import uvicorn
from mcp.server.fastmcp import FastMCP

from config import (
    LOG_LEVEL,
    MCP_TRANSPORT,
    PATHS_FILE,
    QUERY_TIMEOUT,
    SCAN_WORKERS,
    SERVER_HOST,
    SERVER_PORT,
    SORT_MATCHES,
    TLS_CERT_FILE,
    TLS_ENABLED,
    TLS_KEY_FILE,
)
from core.logs import configure_logging
from scanning.orchestrator import ScanOrchestrator
from scanning.query_handler import QueryHandler
from sources.path_resolver import PathResolver

from tools.get_file_data import register as register_get_file_data

SERVER_NAME = "file-data-producer"
TRANSPORTS = ("stdio", "sse", "streamable-http")

logger = logging.getLogger(__name__)


def register_tools(
    mcp: FastMCP,
    *,
    paths_file: str,
    workers: Optional[int] = SCAN_WORKERS,
    sort_matches: bool = SORT_MATCHES,
    query_timeout: Optional[float] = QUERY_TIMEOUT,
) -> QueryHandler:
    orchestrator = ScanOrchestrator(
        resolver=PathResolver(sort_matches=sort_matches),
        max_workers=workers,
    )
    handler = QueryHandler(
        manifest_path=paths_file,
        orchestrator=orchestrator,
        query_timeout=query_timeout,
    )

    register_get_file_data(mcp, handler=handler)
    return handler


def build_server(
    *,
    paths_file: str = PATHS_FILE,
    host: str = SERVER_HOST,
    port: int = SERVER_PORT,
    workers: Optional[int] = SCAN_WORKERS,
    sort_matches: bool = SORT_MATCHES,
    query_timeout: Optional[float] = QUERY_TIMEOUT,
) -> FastMCP:
    mcp = FastMCP(SERVER_NAME, host=host, port=port)
    register_tools(
        mcp,
        paths_file=paths_file,
        workers=workers,
        sort_matches=sort_matches,
        query_timeout=query_timeout,
    )
    return mcp


def serve(
    mcp: FastMCP,
    *,
    transport: str,
    tls: bool = False,
    cert_file: str = TLS_CERT_FILE,
    key_file: str = TLS_KEY_FILE,
) -> None:
    if not tls:
        mcp.run(transport=transport)
        return

    # FastMCP.run has no TLS options; serve its ASGI app directly instead.
    app = mcp.sse_app() if transport == "sse" else mcp.streamable_http_app()
    uvicorn.run(
        app,
        host=mcp.settings.host,
        port=mcp.settings.port,
        ssl_certfile=cert_file,
        ssl_keyfile=key_file,
        log_level=mcp.settings.log_level.lower(),
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-data-server",
        description="Serve file data from the paths listed in a manifest over MCP.",
    )
    parser.add_argument("--paths-file", default=PATHS_FILE, help="The file containing all files' paths.")
    parser.add_argument("--host", default=SERVER_HOST, help="Interface to listen on.")
    parser.add_argument("--port", type=int, default=SERVER_PORT, help="The server port.")
    parser.add_argument("--transport", choices=TRANSPORTS, default=MCP_TRANSPORT)
    parser.add_argument(
        "--tls",
        action=argparse.BooleanOptionalAction,
        default=TLS_ENABLED,
        help="Connection uses TLS if true, else plain TCP.",
    )
    parser.add_argument("--cert-file", default=TLS_CERT_FILE, help="The TLS cert file.")
    parser.add_argument("--key-file", default=TLS_KEY_FILE, help="The TLS key file.")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if args.tls:
        if args.transport == "stdio":
            parser.error("--tls requires an HTTP transport (sse or streamable-http)")
        missing = [p for p in (args.cert_file, args.key_file) if not os.path.isfile(p)]
        if missing:
            logger.error("Failed to load TLS credentials, missing: %s", ", ".join(missing))
            return 1

    mcp = build_server(paths_file=args.paths_file, host=args.host, port=args.port)
    logger.info(
        "Serving %s on %s (paths file: %s)",
        SERVER_NAME,
        "stdio" if args.transport == "stdio" else f"{args.host}:{args.port}",
        args.paths_file,
    )
    serve(
        mcp,
        transport=args.transport,
        tls=args.tls,
        cert_file=args.cert_file,
        key_file=args.key_file,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
