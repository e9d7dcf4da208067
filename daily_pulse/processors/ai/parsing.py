from __future__ import annotations

import json
import re
from typing import Any, List

from ...errors import MalformedResponse

_json_fence_re = re.compile(r"```json([\s\S]*?)```")
_any_fence_re = re.compile(r"```([\s\S]*?)```")


def extract_json_text(raw: str) -> str:
    """Pick the JSON candidate out of a free-form model reply.

    Fallback chain: a ```json fenced block, then any fenced block, then the
    whole reply.
    """
    text = raw.strip()
    match = _json_fence_re.search(text) or _any_fence_re.search(text)
    if match:
        return match.group(1).strip()
    return text


def parse_articles_payload(raw: str) -> List[dict]:
    """Parse and validate the article array in an AI reply.

    Expected: a JSON array whose elements are objects. Field-level problems
    are left to normalization.
    """
    if not raw or not raw.strip():
        raise MalformedResponse("No text content returned from the model.")

    candidate = extract_json_text(raw)
    try:
        data: Any = json.loads(candidate)
    except ValueError as exc:
        raise MalformedResponse("AI response was not valid JSON. Please try again.") from exc

    if not isinstance(data, list):
        raise MalformedResponse(f"AI response must be a JSON array, got {type(data).__name__}.")
    for idx, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedResponse(f"AI response item {idx} is not an object.")
    return data
