from flask import Blueprint, jsonify, request

from ..auth_utils import get_current_user
from ..insights.errors import NotFound, ProfileUpdateFailed, Unauthorized
from ..insights.service import get_onboarding_status, update_profile
from ..simple_logger import get_logger

logger = get_logger("user_profile")

user_bp = Blueprint("user_api", __name__)


def _parse_experience(raw_value):
    if raw_value is None or raw_value == "":
        return None
    if isinstance(raw_value, bool):
        raise ValueError("experience must be a number of years")
    try:
        years = int(float(raw_value))
    except (TypeError, ValueError):
        raise ValueError("experience must be a number of years")
    if years < 0:
        raise ValueError("experience cannot be negative")
    return years


def _parse_skills(raw_value):
    if raw_value is None:
        return []

    if isinstance(raw_value, list):
        return [str(skill).strip() for skill in raw_value if str(skill).strip()]

    if isinstance(raw_value, str):
        return [skill.strip() for skill in raw_value.split(",") if skill.strip()]

    return []


def _parse_profile_form(form_data):
    industry = form_data.get("industry")
    if not isinstance(industry, str) or not industry.strip():
        raise ValueError("industry is required")
    bio = form_data.get("bio")
    return {
        "industry": industry.strip(),
        "experience": _parse_experience(form_data.get("experience")),
        "bio": str(bio) if bio is not None else None,
        "skills": _parse_skills(form_data.get("skills")),
    }


@user_bp.route("/profile", methods=["PUT", "POST"])
def update_user_profile():
    identity = get_current_user()
    if not identity:
        return jsonify({"error": "Unauthorized"}), 401

    form_data = request.get_json(silent=True) or {}
    try:
        data = _parse_profile_form(form_data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    try:
        user = update_profile(identity, data)
    except Unauthorized:
        return jsonify({"error": "Unauthorized"}), 401
    except NotFound:
        return jsonify({"error": "User not found"}), 404
    except ProfileUpdateFailed as e:
        return jsonify({"error": str(e)}), 500

    return jsonify({"data": user.to_dict()}), 200


@user_bp.route("/onboarding-status", methods=["GET"])
def onboarding_status():
    try:
        status = get_onboarding_status(get_current_user())
    except Unauthorized:
        return jsonify({"error": "Unauthorized"}), 401
    except NotFound:
        return jsonify({"error": "User not found"}), 404
    except Exception as e:
        logger.error(f"Error checking onboarding status: {e}")
        return jsonify({"error": "Failed to check onboarding status"}), 500

    return jsonify(status), 200
