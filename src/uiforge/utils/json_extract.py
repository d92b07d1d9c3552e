"""Best-effort JSON extraction from free-text model replies.

Model replies often wrap the requested JSON object in prose or markdown
fences. ``extract_json`` pulls out the outermost ``{...}`` span and decodes
it. It never raises: anything that is not a JSON object comes back as None
so callers can substitute their fallback value.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Greedy: first '{' up to the last '}' in the reply.
_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def extract_json(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """Extract the first JSON object embedded in ``text``.

    Returns the decoded dict, or None when there is no candidate span, the
    span does not decode, or it decodes to something other than an object.
    """
    if not text or not isinstance(text, str):
        return None

    match = _JSON_OBJECT_RE.search(text)
    if not match:
        logger.debug("No JSON object found in model reply (%d chars)", len(text))
        return None

    try:
        data = json.loads(match.group(0))
    except (json.JSONDecodeError, ValueError) as e:
        logger.debug(f"JSON object in model reply did not decode: {e}")
        return None

    if not isinstance(data, dict):
        return None
    return data


def has_keys(data: Optional[Dict[str, Any]], required: tuple[str, ...]) -> bool:
    """True when ``data`` is a dict containing every key in ``required``."""
    return isinstance(data, dict) and all(key in data for key in required)


__all__ = ['extract_json', 'has_keys']
