"""WSGI entry point for HistoryBlock application."""

import os
from historyblock import create_app

config_name = os.environ.get('HISTORYBLOCK_CONFIG', 'development')
app = create_app(config_name)

if __name__ == '__main__':
    # Development server - use gunicorn in production
    debug = os.environ.get('FLASK_DEBUG', '0') == '1'
    app.run(host='127.0.0.1', port=5000, debug=debug)
