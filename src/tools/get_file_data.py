"""MCP tool that returns the content of a named file from every manifest path.

Registers the 'get_file_data' tool which adapts the QueryHandler to the
MCP tool interface.
"""

from __future__ import annotations

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from scanning.query_handler import QueryHandler


def register(mcp: FastMCP, *, handler: QueryHandler) -> None:
    @mcp.tool(name="get_file_data")
    async def get_file_data(file_name: str) -> Dict[str, Any]:
        """Collect the non-blank lines of `file_name` across all manifest paths.

        The manifest is re-read for every call. Each path listed in it is
        narrowed to the requested name and every matching file is read.

        Params:
          - file_name: bare file name or glob (no path separators), e.g. "x.csv".

        Returns:
          A dict with:
          - request_id: unique, increasing id for this request.
          - status: "ok" or "error".
          - data: matched lines joined with newlines, in manifest order.
          - files: the files that were read, in the same order.
          - error / error_kind: set when status is "error" (e.g. the
            manifest is unreadable or the file name is invalid).
        """
        response = await handler.handle(file_name)
        return response.to_dict()
