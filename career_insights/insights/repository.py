"""
Storage gate for industry insights.

At most one row exists per industry. The unique constraint on
``industry_insights.industry`` enforces this, not any in-process lock. Callers
that lose a creation race roll back and return the row that won.
"""

from sqlalchemy.exc import IntegrityError

from ..db import db
from ..models import IndustryInsight
from ..simple_logger import get_logger
from .errors import UniquenessViolation

logger = get_logger("insight_repository")


class InsightRepository:

    def __init__(self, generator, refresh_days=7, session=None):
        self.generator = generator
        self.refresh_days = refresh_days
        self.session = session if session is not None else db.session

    def find_by_industry(self, industry):
        return self.session.query(IndustryInsight).filter_by(industry=industry).first()

    def create_unique(self, industry, payload):
        """Insert a new insight row; UniquenessViolation if the industry already has one."""
        insight = IndustryInsight.from_payload(industry, payload, refresh_days=self.refresh_days)
        self.session.add(insight)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise UniquenessViolation(industry) from e
        return insight

    def get_or_create(self, industry):
        existing = self.find_by_industry(industry)
        if existing is not None:
            logger.info(f"Insight cache hit for '{industry}'")
            return existing

        logger.info(f"Insight cache miss for '{industry}', generating")
        outcome = self.generator.generate(industry)
        if outcome.used_fallback:
            logger.warning(f"Using fallback insights for '{industry}' ({outcome.error})")

        try:
            insight = self.create_unique(industry, outcome.payload)
        except UniquenessViolation:
            winner = self.find_by_industry(industry)
            if winner is None:
                # Conflict without a readable row: not a creation race
                raise
            logger.warning(f"Concurrent insight creation for '{industry}'; returning existing row {winner.id}")
            return winner

        logger.info(f"Created insight {insight.id} for '{industry}'")
        return insight
