"""
Report server: Flask endpoint that renders service-report PDFs on request.

Endpoints:
  - GET /
  - GET /health
  - GET /api/pdf/<form_slug>/<record_id>
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify
from flask_cors import CORS

from fieldreport.adapters.factory import build_fetcher, build_store
from fieldreport.adapters.images import ImageFetcher
from fieldreport.config import Settings, get_settings
from fieldreport.errors import RecordNotFoundError, UnknownFormError
from fieldreport.report.forms import FORMS
from fieldreport.report.service import ReportStore, generate_report


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = 'INFO') -> None:
    logging.basicConfig(
        level=getattr(logging, str(level or 'INFO').upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def create_app(
    settings: Settings | None = None,
    *,
    store: ReportStore | None = None,
    fetcher: ImageFetcher | None = None,
) -> Flask:
    settings = settings or get_settings()
    store = store or build_store(settings)
    fetcher = fetcher or build_fetcher(settings)

    app = Flask(__name__)
    CORS(app, origins=settings.cors_origin_list())

    @app.route('/', methods=['GET'])
    def index():
        return jsonify(
            {
                'service': settings.app_name,
                'status': 'running',
                'forms': sorted(FORMS),
                'endpoints': {
                    'GET /api/pdf/<form_slug>/<record_id>': 'Render a report as PDF',
                    'GET /health': 'Health check and data store readiness',
                    'GET /': 'This page',
                },
            }
        )

    @app.route('/health', methods=['GET'])
    def health():
        ready = bool(store.configured)
        payload = {
            'status': 'healthy' if ready else 'unhealthy',
            'store_configured': ready,
            'forms': len(FORMS),
        }
        return jsonify(payload), (200 if ready else 503)

    @app.route('/api/pdf/<form_slug>/', methods=['GET'], defaults={'record_id': ''})
    @app.route('/api/pdf/<form_slug>/<record_id>', methods=['GET'])
    def render_pdf(form_slug: str, record_id: str):
        record_id = str(record_id or '').strip()
        if not record_id:
            return jsonify({'error': 'Record ID is required'}), 400

        try:
            report = generate_report(form_slug, record_id, store=store, fetcher=fetcher, settings=settings)
        except UnknownFormError:
            logger.info('Unknown form type requested: %s', form_slug)
            return jsonify({'error': 'Unknown form type'}), 404
        except RecordNotFoundError:
            logger.info('Record not found: %s/%s', form_slug, record_id)
            return jsonify({'error': 'Record not found'}), 404
        except Exception as e:
            logger.exception('Error generating PDF for %s/%s', form_slug, record_id)
            return jsonify({'error': 'Failed to generate PDF', 'details': str(e)}), 500

        return Response(
            report.content,
            mimetype='application/pdf',
            headers={'Content-Disposition': f'attachment; filename="{report.filename}"'},
        )

    return app


def run_server(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info('Starting report server on %s:%s', settings.server_host, settings.server_port)
    app.run(host=settings.server_host, port=settings.server_port, threaded=True)
