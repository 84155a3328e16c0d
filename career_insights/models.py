from .db import db
from datetime import datetime, timedelta


def _isoformat(value):
    return value.isoformat() if value else None


class User(db.Model):
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=True)
    industry = db.Column(db.String(255), nullable=True, index=True)  # Subject key of the shared insight
    experience = db.Column(db.Integer, nullable=True)  # Years of experience
    bio = db.Column(db.Text, nullable=True)
    skills = db.Column(db.JSON, nullable=True)  # Ordered list of skill names
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'industry': self.industry,
            'experience': self.experience,
            'bio': self.bio,
            'skills': list(self.skills or []),
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }


class IndustryInsight(db.Model):
    __tablename__ = "industry_insights"
    id = db.Column(db.Integer, primary_key=True)
    # One row per industry; concurrent creators race on this constraint
    industry = db.Column(db.String(255), unique=True, nullable=False)
    salary_ranges = db.Column(db.JSON, nullable=False, default=list)  # [{role, min, max, median, location}]
    growth_rate = db.Column(db.Float, nullable=False, default=0)
    demand_level = db.Column(db.String(16), nullable=False, default="Medium")
    top_skills = db.Column(db.JSON, nullable=False, default=list)
    market_outlook = db.Column(db.String(16), nullable=False, default="Neutral")
    key_trends = db.Column(db.JSON, nullable=False, default=list)
    recommended_skills = db.Column(db.JSON, nullable=False, default=list)  # [{skill, sources: [{name, type, url}]}]
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    last_updated = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    next_update = db.Column(db.DateTime, nullable=False)

    @classmethod
    def from_payload(cls, industry, payload, refresh_days=7, now=None):
        """Build an unsaved row from a normalized insight payload."""
        now = now or datetime.utcnow()
        return cls(
            industry=industry,
            salary_ranges=payload["salaryRanges"],
            growth_rate=payload["growthRate"],
            demand_level=payload["demandLevel"],
            top_skills=payload["topSkills"],
            market_outlook=payload["marketOutlook"],
            key_trends=payload["keyTrends"],
            recommended_skills=payload["recommendedSkills"],
            created_at=now,
            last_updated=now,
            next_update=now + timedelta(days=refresh_days),
        )

    def is_stale(self, now=None):
        """Advisory only: True once ``next_update`` has passed."""
        now = now or datetime.utcnow()
        return self.next_update is not None and now >= self.next_update

    def to_dict(self):
        return {
            'id': self.id,
            'industry': self.industry,
            'salaryRanges': self.salary_ranges or [],
            'growthRate': self.growth_rate,
            'demandLevel': self.demand_level,
            'topSkills': self.top_skills or [],
            'marketOutlook': self.market_outlook,
            'keyTrends': self.key_trends or [],
            'recommendedSkills': self.recommended_skills or [],
            'createdAt': _isoformat(self.created_at),
            'lastUpdated': _isoformat(self.last_updated),
            'nextUpdate': _isoformat(self.next_update),
            'isStale': self.is_stale(),
        }
