"""
Industry insight endpoints
"""

from flask import Blueprint, current_app, jsonify
from sqlalchemy.exc import SQLAlchemyError

from ..auth_utils import get_current_user
from ..db import db
from ..simple_logger import get_logger
from .errors import NotFound, Unauthorized
from .service import get_industry_insight

logger = get_logger("insights_api")

insights_bp = Blueprint('insights', __name__)


@insights_bp.route('/industry', methods=['GET'])
def industry_insight():
    """Insight for the caller's industry, generated on first request"""
    try:
        insight = get_industry_insight(get_current_user())
    except Unauthorized:
        return jsonify({"error": "Unauthorized"}), 401
    except NotFound as e:
        return jsonify({"error": str(e)}), 404
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Industry insight lookup failed: {e}")
        return jsonify({"error": "Failed to load industry insights"}), 500

    return jsonify({"data": insight.to_dict()}), 200


@insights_bp.route('/health', methods=['GET'])
def health_check():
    """Text service configuration status"""
    status = current_app.extensions["insight_text_client"].get_health_status()
    status["service_status"] = "healthy" if status["configured"] else "unconfigured"
    return jsonify(status), 200 if status["configured"] else 503
