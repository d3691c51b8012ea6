"""Blacklist state API endpoints for HistoryBlock.

Consumers reload from here after receiving 'blacklistUpdated'.
"""

import logging

from flask import current_app, jsonify

from . import api_bp
from historyblock.core.blocking.history_block import get_history_block

logger = logging.getLogger(__name__)


@api_bp.route('/blacklist', methods=['GET'])
def get_blacklist():
    """Get the current patterns and list mode.

    Example Response:
        {
            "success": true,
            "result": {
                "blacklist": ["^https://evil\\\\.com"],
                "listMode": "blacklist",
                "count": 1,
                "invalid_patterns": []
            }
        }
    """
    logger.debug("GET /api/blacklist called")

    history_block = get_history_block()
    state = history_block.store.load()
    invalid = [
        p for p in state.patterns
        if not history_block.visit_filter.is_valid_pattern(p)
    ]

    result = state.to_dict()
    result["count"] = len(state.patterns)
    result["invalid_patterns"] = invalid

    return jsonify({
        "success": True,
        "result": result,
    }), 200


@api_bp.route('/blacklist/export', methods=['GET'])
def export_blacklist():
    """Export the patterns in the comma-separated import format."""
    logger.debug("GET /api/blacklist/export called")

    exported = get_history_block().store.export()

    return jsonify({
        "success": True,
        "result": {"blacklist": exported},
    }), 200


@api_bp.route('/blacklist/revision', methods=['GET'])
def get_revision():
    """Get the number of 'blacklistUpdated' notifications published so far.

    Consumers outside the process poll this and reload from GET
    /api/blacklist when the revision moves. Writes made by another process
    are detected here too.

    Example Response:
        {
            "success": true,
            "result": {"revision": 3, "action": "blacklistUpdated"}
        }
    """
    # Picks up writes from another process before reading the counter
    get_history_block().store.snapshot()
    notifier = current_app.extensions['history_block_notifier']

    return jsonify({
        "success": True,
        "result": {
            "revision": notifier.revision,
            "action": notifier.last_action,
        },
    }), 200
