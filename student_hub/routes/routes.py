import logging
from datetime import datetime

from flask import jsonify, request
from sqlalchemy import text
from werkzeug.exceptions import HTTPException

from ..extensions import db

logger = logging.getLogger(__name__)


def register_routes(app):

    @app.route('/api/health')
    def health():
        """
        Liveness + database check
        """
        try:
            db.session.execute(text("SELECT 1"))
            database = "connected"
        except Exception as error:
            logger.error("Database check failed: %s", error)
            database = "unavailable"

        return jsonify({
            'status': 'ok' if database == "connected" else 'degraded',
            'message': 'Smart Student Hub API is running',
            'timestamp': datetime.utcnow().isoformat(),
            'database': database
        }), 200

    @app.errorhandler(404)
    def not_found(error):
        logger.info("404 - Route not found: %s %s", request.method, request.path)
        return jsonify({'error': 'Route not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(413)
    def payload_too_large(error):
        return jsonify({'error': 'Uploaded file is too large'}), 413

    @app.errorhandler(Exception)
    def server_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'error': error.description}), error.code

        db.session.rollback()
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        details = str(error) if app.debug else 'Internal server error'
        return jsonify({'error': 'Something went wrong!', 'details': details}), 500
