"""Flask app for previewing and executing fluentsql statements."""

from flask import Flask, request, jsonify, Response, g
from fluentsql import json_select, json_insert, json_update, json_delete
from typing import Any, Dict
import logging
from .config import DB_CONFIG
from .conn import SqlCon

app = Flask(__name__)
logger = logging.getLogger(__name__)


def get_db() -> SqlCon:
    """Get or create SqlCon instance in Flask context."""
    if 'db' not in g:
        cfg = app.config.get('DB_CONFIG', DB_CONFIG)
        g.db = SqlCon(
            cfg['conn_str'], pool_size=cfg.get('pool_size', 5), pool_timeout=cfg.get('pool_timeout', 30),
            echo=cfg.get('echo', False), debug=cfg.get('debug', False), audit_db=cfg.get('audit_db')
        )
    return g.db


def get_payload() -> Dict[str, Any]:
    """Request JSON body as a dict."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValueError('Request body must be a JSON object')
    return payload


def preview(builder) -> Response:
    return jsonify({'sql': builder.render(), 'params': builder.params()})


@app.errorhandler(ValueError)
def handle_value_error(e: ValueError) -> Response:
    """Handle ValueError with 400 response."""
    return jsonify({'error': str(e)}), 400


@app.errorhandler(Exception)
def handle_general_error(e: Exception) -> Response:
    """Handle unexpected errors with 500 response."""
    logger.error(f'Server error: {e}')
    return jsonify({'error': 'Internal server error'}), 500


@app.route('/statement/select', methods=['POST'])
def select_statement():
    """Render or execute SELECT from JSON payload."""
    payload = get_payload()
    builder = json_select(payload)
    if not payload.get('execute', False):
        return preview(builder)
    try:
        with get_db().connect() as conn:
            if payload.get('one', False):
                return jsonify({'result': builder.fetch_one(conn)})
            return jsonify({'result': builder.fetch_many(conn)})
    except ValueError:
        raise
    except Exception as e:
        raise ValueError(f'Query execution failed: {e}')


@app.route('/statement/insert', methods=['POST'])
def insert_statement():
    """Render or execute INSERT from JSON payload."""
    payload = get_payload()
    builder = json_insert(payload)
    if not payload.get('execute', False):
        return preview(builder)
    try:
        with get_db().begin() as conn:
            return jsonify({'status': 'success', 'id': builder.execute(conn)})
    except ValueError:
        raise
    except Exception as e:
        raise ValueError(f'Insert execution failed: {e}')


@app.route('/statement/update', methods=['POST'])
def update_statement():
    """Render or execute UPDATE from JSON payload."""
    payload = get_payload()
    builder = json_update(payload)
    if not payload.get('execute', False):
        return preview(builder)
    try:
        with get_db().begin() as conn:
            return jsonify({'status': 'success', 'rows_affected': builder.execute(conn) or 0})
    except ValueError:
        raise
    except Exception as e:
        raise ValueError(f'Update execution failed: {e}')


@app.route('/statement/delete', methods=['POST'])
def delete_statement():
    """Render or execute DELETE from JSON payload."""
    payload = get_payload()
    builder = json_delete(payload)
    if not payload.get('execute', False):
        return preview(builder)
    try:
        with get_db().begin() as conn:
            return jsonify({'status': 'success', 'rows_affected': builder.execute(conn) or 0})
    except ValueError:
        raise
    except Exception as e:
        raise ValueError(f'Delete execution failed: {e}')


@app.teardown_appcontext
def close_db(error):
    """Close SqlCon instance on app context teardown."""
    if 'db' in g:
        g.pop('db').close()


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG if DB_CONFIG['debug'] else logging.INFO)
    app.run()
