"""Message API endpoints for HistoryBlock.

Carries the action-tagged message protocol used by the options and
context-menu surfaces:

    {"action": "addToBlacklist", "url": "..."}
    {"action": "importBlacklist", "blacklist": "a,b,c"}
    {"action": "removeFromBlacklist", "url": "..."}
    {"action": "clearBlacklist"}
    {"action": "changeListMode", "listMode": "whitelist"}

Standard response format: {"success": bool, "result": {...}, "error": {...}}
"""

import logging

from flask import jsonify, request

from . import api_bp
from historyblock.core.blocking.history_block import get_history_block
from historyblock.models.blacklist import (
    MESSAGE_INVALID_BODY,
    UnknownActionError,
)

logger = logging.getLogger(__name__)


@api_bp.route('/messages', methods=['POST'])
def post_message():
    """Dispatch one action-tagged message.

    Returns:
        200: Message handled, result holds the operation return value
        400: Body is not a JSON object or action is unknown
        503: Storage unavailable
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({
            "success": False,
            "error": {
                "code": MESSAGE_INVALID_BODY,
                "message": "Objet JSON avec champ 'action' requis",
                "details": {},
            },
        }), 400

    logger.debug(f"POST /api/messages called (action={data.get('action')!r})")

    try:
        value = get_history_block().on_message(data)
    except UnknownActionError as exc:
        return jsonify({
            "success": False,
            "error": exc.to_dict(),
        }), 400

    return jsonify({
        "success": True,
        "result": {
            "action": data["action"],
            "value": value,
        },
    }), 200


@api_bp.route('/context-menu', methods=['POST'])
def post_context_menu():
    """Handle a context menu click on a tab.

    Request Body:
        {"menuItemId": "blockthis" | "unblockthis", "url": "https://..."}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "menuItemId" not in data:
        return jsonify({
            "success": False,
            "error": {
                "code": MESSAGE_INVALID_BODY,
                "message": "Champ 'menuItemId' requis",
                "details": {},
            },
        }), 400

    menu_item_id = data["menuItemId"]
    value = get_history_block().on_context_menu_clicked(menu_item_id, data.get("url"))

    return jsonify({
        "success": True,
        "result": {
            "menu_item_id": menu_item_id,
            "value": value,
        },
    }), 200
