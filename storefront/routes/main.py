from flask import Blueprint, current_app
from sqlalchemy import text

from storefront import db

bp = Blueprint('main', __name__, url_prefix='/api')


@bp.route('/health')
def health():
    current_app.logger.debug('Health check endpoint called')
    db.session.execute(text('SELECT 1'))
    return {'status': 'healthy', 'database': 'connected'}, 200
