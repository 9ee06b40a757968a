"""
Extraction of recipe documents from raw provider text

Providers sometimes wrap the JSON payload in prose or markdown fences, so
parsing runs in two steps: the whole text first, then the outermost
``{...}`` span.
"""

import json
import logging
from typing import Any, Dict, Optional

from .exceptions import ParseError

logger = logging.getLogger(__name__)


def parse_whole(text: str) -> Optional[Dict[str, Any]]:
    """Parse the entire text as a JSON object; None if it is not one"""
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


def extract_embedded(text: str) -> Optional[Dict[str, Any]]:
    """Parse the span from the first ``{`` to the last ``}``; None on failure"""
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return parse_whole(text[start:end + 1])


def parse_recipe_response(text: str) -> Dict[str, Any]:
    """Extract the recipe document from provider output"""
    data = parse_whole(text)
    if data is not None:
        return data

    data = extract_embedded(text)
    if data is not None:
        logger.info("Recipe JSON extracted from surrounding text")
        return data

    raise ParseError("could not extract recipe data")
