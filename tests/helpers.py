from urllib.parse import unquote

from fastapi import Request


def make_request(path: str, query: str = "", method: str = "GET") -> Request:
    """Build a starlette Request the way an ASGI server would."""
    return Request(
        {
            "type": "http",
            "http_version": "1.1",
            "method": method,
            "scheme": "http",
            "server": ("testserver", 80),
            "root_path": "",
            "path": unquote(path),
            "raw_path": path.encode(),
            "query_string": query.encode(),
            "headers": [],
        }
    )
