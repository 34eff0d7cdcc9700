# Overview: Flask API routes for registration-token redemption; parses input and returns JSON responses.

# backend/tattsync/routes/registration.py
"""
Registration API Routes

WHY: Approved applicants follow an emailed link carrying a single-use
token. The frontend first fetches what the applicant must confirm, then
submits the completed form.

ENDPOINTS:
- GET  /api/registration/<token>   registration view for a redeemable token
- POST /api/registration/complete  redeem the token

No authentication: possession of the token is the credential.
"""

from flask import Blueprint, request, jsonify, current_app

from ..services import registration_service
from ..services.errors import RegistrationError, TokenError
from ..services.registration_view import assemble_completion, assemble_registration_view
from ..services.requirements_service import resolve_requirements
from ..services.token_service import validate_token
from ..validation import ValidationError


registration_bp = Blueprint("registration", __name__, url_prefix="/api/registration")


def _error(exc, status: int):
    body = {"error": str(exc), "code": exc.code}
    if isinstance(exc, ValidationError) and exc.fields:
        body["fields"] = exc.fields
    return jsonify(body), status


@registration_bp.get("/<token>")
def get_registration_route(token: str):
    """
    Get registration data for a token.

    Returns:
        200: {token, application, requirements, payment_settings}
        404: Unknown token
        410: Token expired
        409: Registration already completed
        500: Server error
    """
    try:
        record = validate_token(token)
        requirements = resolve_requirements(record.event_id, record.application_type)
        return jsonify(assemble_registration_view(record, requirements)), 200

    except TokenError as e:
        return _error(e, e.http_status)
    except RegistrationError as e:
        current_app.logger.exception("Failed to fetch registration data")
        return _error(e, e.http_status)
    except Exception:
        current_app.logger.exception("Failed to fetch registration data")
        return jsonify({"error": "Failed to fetch registration data"}), 500


@registration_bp.post("/complete")
def complete_registration_route():
    """
    Complete a registration.

    Request body:
    {
        "token": "...",
        "registration_data": {
            "emergency_contact_name": "...",
            "emergency_contact_phone": "...",
            "medical_conditions": "...",
            "allergies": "...",
            "medications": "...",
            "agreement_accepted": true,
            "payment_method": "bank_transfer"   (required when the event requires payment)
        }
    }

    Returns:
        200: {message, registration_id}
        400: Missing/invalid/expired/used token, or invalid registration_data
        500: Write failed (storage_failure is safe to retry,
             partial_commit_failure is not)
    """
    try:
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object", "code": "validation_failure"}), 400

        token = data.get("token")
        registration_data = data.get("registration_data")

        if not token:
            return jsonify({"error": "token is required", "code": "validation_failure"}), 400
        if registration_data is None:
            return jsonify({"error": "registration_data is required", "code": "validation_failure"}), 400

        result = registration_service.complete_registration(token, registration_data)
        return jsonify(assemble_completion(result)), 200

    except (TokenError, ValidationError) as e:
        return _error(e, 400)
    except RegistrationError as e:
        current_app.logger.exception("Failed to complete registration")
        return _error(e, e.http_status)
    except Exception:
        current_app.logger.exception("Failed to complete registration")
        return jsonify({"error": "Failed to complete registration"}), 500
