"""
Sanitizing and decoding of raw model output.
"""

import json
import re
from typing import Any

from .errors import MalformedPayload

# A line holding nothing but a fence marker, optionally language-tagged
_FENCE_LINE = re.compile(r"^[ \t]*```[ \t]*[A-Za-z0-9_+.-]*[ \t]*\r?$\n?", re.MULTILINE)
# Fences glued to the payload on the same line: ```json{...}```
_LEADING_FENCE = re.compile(r"^```[A-Za-z0-9_+.-]*\s*(?=[\[{])")
_TRAILING_FENCE = re.compile(r"(?<=[\]}])\s*```$")


def strip_code_fences(raw_text: str) -> str:
    """Remove fence markers the model wraps around its JSON and trim the result."""
    if raw_text is None:
        return ""
    if not isinstance(raw_text, str):
        raw_text = str(raw_text)
    text = raw_text.strip()
    if "```" not in text:
        return text
    text = _FENCE_LINE.sub("", text).strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def parse_payload(candidate: str) -> Any:
    """Decode ``candidate`` or raise MalformedPayload with the decoder message."""
    try:
        return json.loads(candidate)
    except (TypeError, ValueError) as e:
        raise MalformedPayload(str(e), raw_text=candidate) from e
