"""
Caller-facing insight and profile operations.

``identity`` is the decoded claims dict from ``auth_utils.get_current_user``
(or None). These functions raise domain errors; the HTTP layer maps them to
status codes.
"""

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..db import db
from ..models import User
from ..simple_logger import get_logger
from .errors import NotFound, ProfileUpdateFailed, Unauthorized, UniquenessViolation
from .generator import InsightGenerator
from .repository import InsightRepository

logger = get_logger("insight_service")


def get_insight_repository():
    """Repository bound to the app's shared text client."""
    text_client = current_app.extensions["insight_text_client"]
    return InsightRepository(
        InsightGenerator(text_client),
        refresh_days=current_app.config.get("INSIGHT_REFRESH_DAYS", 7),
    )


def resolve_user(identity):
    if not identity or not identity.get("email"):
        raise Unauthorized("Unauthorized")
    user = User.query.filter_by(email=identity["email"]).first()
    if not user:
        raise NotFound("User not found")
    return user


def get_industry_insight(identity, repository=None):
    user = resolve_user(identity)
    if not user.industry:
        raise NotFound("Profile has no industry")
    repository = repository or get_insight_repository()
    return repository.get_or_create(user.industry)


def update_profile(identity, data, repository=None):
    """Ensure the insight for ``data['industry']`` exists, then update the
    caller's profile. Existing insights are never overwritten."""
    user = resolve_user(identity)
    user_id = user.id
    repository = repository or get_insight_repository()

    try:
        industry = data["industry"]
        try:
            repository.get_or_create(industry)
        except (SQLAlchemyError, UniquenessViolation) as e:
            # The profile is still updated; the insight is created lazily on next read
            db.session.rollback()
            logger.error(f"Could not ensure insight for '{industry}': {e}")

        user.industry = industry
        user.experience = data.get("experience")
        user.bio = data.get("bio")
        user.skills = list(data.get("skills") or [])
        db.session.commit()
        return user
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating user {user_id} and industry: {e}")
        raise ProfileUpdateFailed() from e


def get_onboarding_status(identity):
    user = resolve_user(identity)
    return {"isOnboarded": bool(user.industry)}
