"""Two-step decoding of Shopify HTTP responses.

Upstream error pages are not always JSON (a misconfigured shop domain answers
with an HTML page), so bodies are read as text first and parsed only when the
declared content type says JSON. Decoding never raises; callers decide what a
missing or unparseable body means.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

import httpx

PREVIEW_CHARS = 200


@dataclass
class DecodedResponse:
    """Text and (optionally) parsed JSON of an upstream response.

    Attributes:
        status_code: HTTP status returned by Shopify
        content_type: Declared content type ("" when absent)
        text: Raw body text
        data: Parsed JSON body, or None if not JSON or unparseable
        json_error: Parser message when the body claimed JSON but did not parse
    """
    status_code: int
    content_type: str
    text: str
    data: Any = None
    json_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_json(self) -> bool:
        return "application/json" in self.content_type.lower()

    @property
    def preview(self) -> str:
        return self.text[:PREVIEW_CHARS]


def decode_response(response: httpx.Response) -> DecodedResponse:
    """Read the body as text, then parse it only if it is declared JSON."""
    content_type = response.headers.get("content-type", "")
    decoded = DecodedResponse(
        status_code=response.status_code,
        content_type=content_type,
        text=response.text,
    )

    if decoded.is_json:
        try:
            decoded.data = json.loads(decoded.text)
        except ValueError as e:
            decoded.json_error = str(e)

    return decoded
