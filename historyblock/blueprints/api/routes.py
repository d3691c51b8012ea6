"""API routes for HistoryBlock."""

import logging
from flask import jsonify

from . import api_bp
from historyblock import __version__

logger = logging.getLogger(__name__)


@api_bp.route('/health')
def health_check():
    """Health check endpoint.

    Returns:
        JSON response with status and version
    """
    return jsonify({
        'status': 'ok',
        'version': __version__
    }), 200
