from flask import current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from quizzle_app.extensions import db
from quizzle_app.utils.time_utils import to_iso, utcnow

from . import ops_bp


@ops_bp.route('/health', methods=['GET'])
def health():
    """Liveness plus a cheap database round-trip."""
    try:
        db.session.execute(text('SELECT 1'))
        database = 'ok'
    except SQLAlchemyError as e:
        current_app.logger.error(f"[OPS] Health check database error: {e}")
        database = 'error'

    status = 'OK' if database == 'ok' else 'DEGRADED'
    payload = {'status': status, 'database': database, 'timestamp': to_iso(utcnow())}
    return jsonify(payload), 200 if database == 'ok' else 503
