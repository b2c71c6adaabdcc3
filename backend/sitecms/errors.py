from flask import current_app, jsonify
from sitecms.domain.exceptions import (
    ContentError,
    Conflict,
    DuplicateSlug,
    IllegalTransition,
    NotFound,
    ValidationError,
)
from sitecms.domain.invariants.exceptions import InvariantViolation

STATUS_CODES = {
    NotFound: 404,
    ValidationError: 400,
    IllegalTransition: 409,
    Conflict: 409,
    DuplicateSlug: 409,
}

def register_error_handlers(app):
    @app.errorhandler(ContentError)
    def handle_content_error(error):
        status = next(
            (code for cls, code in STATUS_CODES.items() if isinstance(error, cls)),
            400,
        )
        current_app.logger.info("%s: %s", type(error).__name__, error.message)
        response = jsonify(error.to_dict())
        response.status_code = status
        return response

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        current_app.logger.error("Invariant violated: %s", error)
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 500
        return response
