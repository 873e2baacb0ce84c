"""
StudySphere Backend: JSON Response Class
==========================================

What:  JSONResponse subclass that indents its body.
Why:   The API has always returned human-readable JSON (3-space indent),
       and clients and fixtures compare against that format.
How:   Installed as FastAPI's default_response_class and used by the
       exception handlers, so success and error bodies look the same.
"""

import json
from typing import Any

from fastapi.responses import JSONResponse

from app.config import settings


class PrettyJSONResponse(JSONResponse):
    """Renders content with `settings.json_indent` spaces (compact when 0)."""

    def render(self, content: Any) -> bytes:
        indent = settings.json_indent or None
        separators = None if indent else (",", ":")
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=indent,
            separators=separators,
        ).encode("utf-8")
