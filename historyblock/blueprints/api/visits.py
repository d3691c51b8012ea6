"""Visit API endpoints for HistoryBlock.

Receives history visit notifications and reports purged URLs.
"""

import logging

from flask import jsonify, request

from . import api_bp
from historyblock.core.blocking.history_block import get_history_block
from historyblock.models.blacklist import VISIT_INVALID_URL

logger = logging.getLogger(__name__)


@api_bp.route('/visits', methods=['POST'])
def post_visit():
    """Decide on a visited URL, purging it from history when required.

    Request Body:
        {"url": "https://example.com/page"}

    Returns:
        200: Decision {"address", "purge", "mode", "matched_pattern"}
        400: Missing or empty url
    """
    data = request.get_json(silent=True)
    url = data.get("url") if isinstance(data, dict) else None
    if not isinstance(url, str) or not url:
        return jsonify({
            "success": False,
            "error": {
                "code": VISIT_INVALID_URL,
                "message": "Champ 'url' requis",
                "details": {},
            },
        }), 400

    decision = get_history_block().on_page_visited(url)

    return jsonify({
        "success": True,
        "result": decision.to_dict(),
    }), 200


@api_bp.route('/visits/purged', methods=['GET'])
def get_purged_visits():
    """List the URLs purged so far (most recent last)."""
    purger = get_history_block().purger
    get_log = getattr(purger, "get_log", None)
    if get_log is None:
        return jsonify({
            "success": True,
            "result": {"urls": [], "count": 0},
        }), 200

    return jsonify({
        "success": True,
        "result": get_log().to_dict(),
    }), 200
