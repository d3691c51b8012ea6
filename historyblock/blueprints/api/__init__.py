"""API Blueprint for HistoryBlock REST endpoints."""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

from historyblock.blueprints.api import routes  # noqa: E402, F401
from historyblock.blueprints.api import messages  # noqa: E402, F401
from historyblock.blueprints.api import blacklist  # noqa: E402, F401
from historyblock.blueprints.api import visits  # noqa: E402, F401
