"""JSON endpoint for prompt analysis.

Run locally with::

    flask --app data_designer_prompt_audit.server:create_app run
"""

from __future__ import annotations

import logging

from flask import Blueprint, Flask, current_app, jsonify, request

from data_designer_prompt_audit.adapter import GeminiAnalysisAdapter
from data_designer_prompt_audit.assembler import ResultAssembler, analyze
from data_designer_prompt_audit.errors import InvalidInputError
from data_designer_prompt_audit.settings import get_settings

logger = logging.getLogger(__name__)

analyze_bp = Blueprint("prompt_audit", __name__)

ASSEMBLER_KEY = "prompt_audit.assembler"


@analyze_bp.route("/api/analyze", methods=["POST"])
def analyze_prompt():
    body = request.get_json(silent=True)
    prompt = body.get("prompt") if isinstance(body, dict) else None
    if not prompt or not isinstance(prompt, str):
        return jsonify({"error": "Missing prompt in request body. Send JSON: { \"prompt\": \"...\" }"}), 400

    try:
        result = analyze(prompt, current_app.extensions[ASSEMBLER_KEY])
    except InvalidInputError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.exception("Analyze API error")
        return jsonify({"error": str(e) or type(e).__name__}), 500

    return jsonify(result.to_payload()), 200


def _method_not_allowed(_error):
    response = jsonify({"error": "Method not allowed. Use POST with JSON { prompt: '...' }"})
    response.status_code = 405
    response.headers["Allow"] = "POST"
    return response


def create_app(assembler: ResultAssembler | None = None) -> Flask:
    """Build the Flask app. Without an assembler one is wired from the environment."""
    app = Flask(__name__)
    if assembler is None:
        settings = get_settings()
        adapter = GeminiAnalysisAdapter.from_settings(settings) if settings.api_key else None
        if adapter is None:
            logger.warning("GEMINI_API_KEY is not set, responses will use the local fallback")
        assembler = ResultAssembler(adapter=adapter)
    app.extensions[ASSEMBLER_KEY] = assembler
    app.register_blueprint(analyze_bp)
    app.register_error_handler(405, _method_not_allowed)
    return app
