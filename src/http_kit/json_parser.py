"""
JSON parsing helpers.
"""
import json
from typing import Any, Dict, List

from .errors import ParseException


class JSONParseException(ParseException):
    """Raised when JSON content cannot be parsed into the requested shape."""


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise JSONParseException("Error parsing JSON content") from e


def parse_json_to_map(text: str) -> Dict[str, Any]:
    """Parse a JSON object."""
    data = _loads(text)
    if not isinstance(data, dict):
        raise JSONParseException(f"Expected a JSON object, got {type(data).__name__}")
    return data


def parse_json_to_list(text: str) -> List[Any]:
    """Parse a JSON array."""
    data = _loads(text)
    if not isinstance(data, list):
        raise JSONParseException(f"Expected a JSON array, got {type(data).__name__}")
    return data
