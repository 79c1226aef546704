"""
Flask web application serving rendered statement results.

Endpoints:
- POST /results: render a JSON batch as an HTML document (or text)
- GET /media/<path>: static assets referenced by the document
- GET /: a demo batch covering every command kind
"""

from flask import Blueprint, Flask, Response, current_app, jsonify, request, send_from_directory, url_for
import logging
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from resultsview.assets import MEDIA_DIR
from resultsview.config import PRETTY_PRINT_JSON_FIELDS, DictConfiguration
from resultsview.models import load_batch
from resultsview.render.document import ResultsRenderer
from resultsview.text_report import render_text
from resultsview.utils.exceptions import ResultsViewError

logger = logging.getLogger(__name__)

results_bp = Blueprint('results', __name__)

DEMO_BATCH = [
    {
        'command': 'SELECT',
        'rowCount': 2,
        'fields': [
            {'name': 'id', 'display_type': 'int4', 'format': 'int4'},
            {'name': 'title', 'display_type': 'text', 'format': 'text'},
            {'name': 'meta', 'display_type': 'jsonb', 'format': 'jsonb'},
        ],
        'rows': [
            [1, 'Finish results viewer', {'tags': ['work'], 'priority': 1}],
            [2, 'Write documentation', None],
        ],
    },
    {
        'command': 'INSERT',
        'rowCount': 1,
        'fields': [{'name': 'id', 'display_type': 'int4', 'format': 'int4'}],
        'rows': [[3]],
    },
    {'command': 'CREATE', 'rowCount': 0},
    {'command': 'EXPLAIN', 'rows': [['Seq Scan on tasks  (cost=0.00..1.02 rows=2 width=40)']]},
    {'command': 'ext-message', 'message': 'NOTICE: table "tasks" already exists, skipping'},
    {'command': 'VACUUM', 'rowCount': None},
]


class _MediaResolver:
    """Resolves page assets to this app's /media route."""

    def resolve(self, relative_path: str) -> str:
        return url_for('results.media', filename=relative_path)


def get_renderer() -> ResultsRenderer:
    """Build a renderer from the current app config."""
    config = DictConfiguration({PRETTY_PRINT_JSON_FIELDS: current_app.config.get(PRETTY_PRINT_JSON_FIELDS)})
    return ResultsRenderer(config=config, assets=_MediaResolver())


def render_payload(payload, state=None, output_format='html'):
    """Render a raw JSON batch in the requested format."""
    batch = load_batch(payload)
    if output_format == 'text':
        return Response(render_text(batch), mimetype='text/plain')
    return Response(get_renderer().render(batch, state), mimetype='text/html')


@results_bp.route('/')
def index():
    """Demo page."""
    return render_payload(DEMO_BATCH, state={'demo': True})


@results_bp.route('/media/<path:filename>')
def media(filename):
    """Serve packaged page assets."""
    return send_from_directory(MEDIA_DIR, filename)


@results_bp.route('/results', methods=['POST'])
def render_results():
    """Render a posted batch of statement results."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a JSON object with a "results" list'}), 400

    try:
        return render_payload(
            data.get('results'),
            state=data.get('state'),
            output_format=request.args.get('format', 'html'),
        )
    except ResultsViewError as e:
        logger.warning("Rejected results payload: %s", e)
        return jsonify({'error': str(e)}), 400


def create_app(config=None):
    """
    Create the Flask application.

    Args:
        config: Optional mapping applied over the defaults. The
            prettyPrintJSONfields default comes from RESULTSVIEW_* env vars.

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    app.config[PRETTY_PRINT_JSON_FIELDS] = DictConfiguration.from_env().get(PRETTY_PRINT_JSON_FIELDS, False)
    if config:
        app.config.update(config)
    app.register_blueprint(results_bp)
    return app


if __name__ == '__main__':
    app = create_app()
    logging.basicConfig(level=logging.INFO)
    print("\n" + "="*60)
    print("Results viewer running!")
    print("Open http://localhost:5000 in your browser")
    print("="*60 + "\n")
    app.run(debug=True, port=5000)
