"""
Pytest configuration and fixtures
"""

import os

os.environ.setdefault("LOG_TO_FILE", "0")

import jwt
import pytest

from career_insights import create_app
from career_insights.config import TestingConfig
from career_insights.db import db
from career_insights.models import User

TEST_JWT_SECRET = "test-secret-key-for-career-insights-suite"


class InsightTestConfig(TestingConfig):
    JWT_SECRET_KEY = TEST_JWT_SECRET


class FakeTextClient:
    """Stands in for the text generation service; records every prompt."""

    provider = "fake"

    def __init__(self, response="", error=None, side_effect=None):
        self.response = response
        self.error = error
        self.side_effect = side_effect
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.side_effect is not None:
            self.side_effect(prompt)
        if self.error is not None:
            raise self.error
        return self.response

    def get_health_status(self):
        return {"provider": self.provider, "model": "fake-model", "configured": True}


VALID_INSIGHT_TEXT = """```json
{
  "salaryRanges": [
    {"role": "Data Engineer", "min": 90000, "max": 150000, "median": 120000, "location": "US"},
    {"role": "ML Engineer", "min": 110000, "max": 180000, "median": 140000, "location": "US"}
  ],
  "growthRate": 12.5,
  "demandLevel": "High",
  "topSkills": ["Python", "SQL", "Spark"],
  "marketOutlook": "Positive",
  "keyTrends": ["LLMs", "Data contracts"],
  "recommendedSkills": [
    {"skill": "dbt", "sources": [
      {"name": "dbt docs", "type": "Documentation", "url": "https://docs.getdbt.com"}
    ]}
  ]
}
```"""


@pytest.fixture
def app():
    """Create test application"""
    app = create_app(InsightTestConfig)
    app.extensions["insight_text_client"] = FakeTextClient(response=VALID_INSIGHT_TEXT)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def text_client(app):
    return app.extensions["insight_text_client"]


@pytest.fixture
def user(app):
    user = User(email="ada@example.com", name="Ada")
    db.session.add(user)
    db.session.commit()
    return user


def make_token(email="ada@example.com", secret=TEST_JWT_SECRET):
    return jwt.encode({"email": email}, secret, algorithm="HS256")


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}
