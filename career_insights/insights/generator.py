"""
Fetch, sanitize, parse and normalize one industry's insights.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..simple_logger import get_logger
from .errors import MalformedPayload, UpstreamUnavailable
from .normalizer import default_insights, normalize_insights
from .parsing import parse_payload, strip_code_fences
from .prompts import build_insight_prompt

logger = get_logger("insight_generator")


@dataclass
class GenerationOutcome:
    """Result of one generation attempt.

    ``payload`` is always a complete normalized payload. When the model call
    or decoding failed, it holds the defaults and ``error`` names the reason.
    """
    payload: Dict[str, Any] = field(default_factory=default_insights)
    error: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.error is not None


class InsightGenerator:
    """Runs the model pipeline against an injected text client."""

    def __init__(self, text_client):
        self.text_client = text_client

    def generate(self, industry: str) -> GenerationOutcome:
        prompt = build_insight_prompt(industry)
        try:
            raw_text = self.text_client.generate(prompt)
            parsed = parse_payload(strip_code_fences(raw_text))
        except UpstreamUnavailable as e:
            logger.warning(f"Text service unavailable for '{industry}': {e}")
            return GenerationOutcome(error=f"upstream_unavailable: {e}")
        except MalformedPayload as e:
            logger.warning(f"Invalid JSON from model for '{industry}': {e.message}")
            return GenerationOutcome(error=f"malformed_payload: {e.message}")
        return GenerationOutcome(payload=normalize_insights(parsed))
