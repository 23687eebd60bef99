from flask import Blueprint
from flask_restx import Api, Resource, fields
import logging

from constants import BUILD_VERSION
from services import get_board_service
from utils import now_utc, isoformat

logger = logging.getLogger('main')


def init_rest_api(app):
    api_bp = Blueprint('api_docs', __name__, url_prefix='/api')
    api = Api(api_bp, version='1.0', title='Ops Board API',
        description='Kitchen operations status board',
        doc='/docs'
    )

    ns_system = api.namespace('v1/system', description='System operations')

    health_model = api.model('Health', {
        'status': fields.String(description='Service status'),
        'timestamp': fields.String(description='Server time (UTC, ISO-8601)'),
        'restaurant': fields.String(description='Configured restaurant name'),
        'version': fields.String(description='Build version'),
    })

    stats_model = api.model('BoardStats', {
        'outCount': fields.Integer(description='Active out-of-stock items'),
        'lowCount': fields.Integer(description='Active running-low items'),
        'maintCount': fields.Integer(description='Active maintenance tickets'),
        'notesCount': fields.Integer(description='Active notes'),
    })

    @ns_system.route('/health')
    class Health(Resource):
        @ns_system.marshal_with(health_model)
        def get(self):
            """Liveness check, touches the store for the restaurant name"""
            return {
                'status': 'healthy',
                'timestamp': isoformat(now_utc()),
                'restaurant': get_board_service().get_setting('restaurant_name'),
                'version': BUILD_VERSION,
            }

    @ns_system.route('/stats')
    class Stats(Resource):
        @ns_system.marshal_with(stats_model)
        def get(self):
            """Active item counts"""
            return get_board_service().get_stats()

    app.register_blueprint(api_bp)
    return api
