# Industry insight pipeline: prompt -> model text -> sanitize -> parse -> normalize -> persist

from .generator import GenerationOutcome, InsightGenerator
from .normalizer import default_insights, normalize_insights
from .repository import InsightRepository

__all__ = [
    'GenerationOutcome',
    'InsightGenerator',
    'InsightRepository',
    'default_insights',
    'normalize_insights',
]
