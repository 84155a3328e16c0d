"""
Normalization of decoded model output into the canonical insight payload.

Every field has its own coercion rule and default, so ``normalize_insights``
accepts any decoded JSON value (dict, list, str, number, bool or None) and
always returns a complete payload. Malformed values are coerced or replaced,
never raised. ``salaryRanges`` is the one exception to "coerce, don't drop":
an entry without a role or numeric bounds is removed rather than padded with
placeholders.
"""

import json
import math
import re
from typing import Any, Dict, List, Optional

DEMAND_LEVELS = ("High", "Medium", "Low")
MARKET_OUTLOOKS = ("Positive", "Neutral", "Negative")

DEFAULT_DEMAND_LEVEL = "Medium"
DEFAULT_MARKET_OUTLOOK = "Neutral"
DEFAULT_SOURCE_TYPE = "Article"

MAX_TOP_SKILLS = 10
MAX_KEY_TRENDS = 10
MAX_SOURCES_PER_SKILL = 3

_NON_NUMERIC = re.compile(r"[^0-9.]")
_NUMERIC_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def default_insights() -> Dict[str, Any]:
    """The neutral payload used when the model gives us nothing usable."""
    return {
        "salaryRanges": [],
        "growthRate": 0,
        "demandLevel": DEFAULT_DEMAND_LEVEL,
        "topSkills": [],
        "marketOutlook": DEFAULT_MARKET_OUTLOOK,
        "keyTrends": [],
        "recommendedSkills": [],
    }


def flatten(value: Any) -> List[Any]:
    """Flatten arbitrarily nested lists; anything that is not a list yields []."""
    if not isinstance(value, list):
        return []
    flat = []
    stack = [iter(value)]
    while stack:
        try:
            item = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue
        if isinstance(item, list):
            stack.append(iter(item))
        else:
            flat.append(item)
    return flat


def _is_number(value: Any) -> bool:
    # bool is an int subclass, but true/false are not numbers in JSON
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and not math.isfinite(value))


def parse_number(value: Any) -> Optional[float]:
    """Native numbers pass through; anything else is stringified, stripped to
    digits and dots, and its leading numeric prefix parsed. None when nothing
    numeric remains."""
    if _is_number(value):
        return value
    if value is None or isinstance(value, (dict, list)):
        return None
    cleaned = _NON_NUMERIC.sub("", str(value))
    match = _NUMERIC_PREFIX.match(cleaned)
    if not match:
        return None
    number = float(match.group())
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def coerce_number(value: Any, default=0):
    number = parse_number(value)
    return default if number is None else number


def coerce_enum(value: Any, allowed, default: str) -> str:
    if isinstance(value, str) and value in allowed:
        return value
    return default


def coerce_text(value: Any, default: str = "") -> str:
    """Stringify a leaf value; None becomes ``default``."""
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def coerce_text_list(value: Any, limit: int) -> List[str]:
    return [coerce_text(item) for item in flatten(value)[:limit]]


def normalize_salary_range(entry: Any) -> Optional[Dict[str, Any]]:
    """Salary entry or None when it has no role or no numeric bounds."""
    if not isinstance(entry, dict):
        return None
    role = coerce_text(entry.get("role")).strip()
    minimum = parse_number(entry.get("min"))
    maximum = parse_number(entry.get("max"))
    # zero is a legitimate bound; only absent/non-numeric bounds are rejected
    if not role or minimum is None or maximum is None:
        return None
    return {
        "role": role,
        "min": minimum,
        "max": maximum,
        "median": coerce_number(entry.get("median")),
        "location": coerce_text(entry.get("location")),
    }


def normalize_source(source: Any) -> Dict[str, str]:
    if not isinstance(source, dict):
        return {"name": coerce_text(source), "type": DEFAULT_SOURCE_TYPE, "url": ""}
    return {
        "name": coerce_text(source.get("name")),
        "type": coerce_text(source.get("type")) or DEFAULT_SOURCE_TYPE,
        "url": coerce_text(source.get("url")),
    }


def normalize_recommended_skill(entry: Any) -> Dict[str, Any]:
    if not isinstance(entry, dict):
        # A bare "Docker" is still a skill name, just without sources
        return {"skill": coerce_text(entry), "sources": []}
    sources = flatten(entry.get("sources"))[:MAX_SOURCES_PER_SKILL]
    return {
        "skill": coerce_text(entry.get("skill")),
        "sources": [normalize_source(source) for source in sources],
    }


def normalize_insights(parsed: Any) -> Dict[str, Any]:
    """Coerce any decoded value into a complete, schema-valid insight payload."""
    if not isinstance(parsed, dict):
        return default_insights()

    salary_ranges = []
    for entry in flatten(parsed.get("salaryRanges")):
        normalized = normalize_salary_range(entry)
        if normalized is not None:
            salary_ranges.append(normalized)

    return {
        "salaryRanges": salary_ranges,
        "growthRate": coerce_number(parsed.get("growthRate")),
        "demandLevel": coerce_enum(parsed.get("demandLevel"), DEMAND_LEVELS, DEFAULT_DEMAND_LEVEL),
        "topSkills": coerce_text_list(parsed.get("topSkills"), MAX_TOP_SKILLS),
        "marketOutlook": coerce_enum(parsed.get("marketOutlook"), MARKET_OUTLOOKS, DEFAULT_MARKET_OUTLOOK),
        "keyTrends": coerce_text_list(parsed.get("keyTrends"), MAX_KEY_TRENDS),
        "recommendedSkills": [
            normalize_recommended_skill(entry) for entry in flatten(parsed.get("recommendedSkills"))
        ],
    }
