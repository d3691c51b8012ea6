"""HistoryBlock Application Factory.

This module provides the application factory pattern for creating Flask
application instances with the appropriate configuration.
"""

import logging
from pathlib import Path

from flask import Flask

from historyblock.config import config

__version__ = '0.1.0'


def create_app(config_name='default', config_overrides=None):
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name ('development', 'testing', 'production', 'default')
        config_overrides: Optional mapping applied on top of the config class

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    if config_overrides:
        app.config.update(config_overrides)

    # Configure logging
    _configure_logging(app, config_name)

    # Build the blocking core (storage, store, filter, purger)
    _configure_history_block(app)

    # Register blueprints
    _register_blueprints(app)

    # Register CLI commands
    _register_commands(app)

    # Register error handlers
    _register_error_handlers(app)

    app.logger.info(f'Application created (config={config_name})')

    return app


def _configure_logging(app, config_name):
    """Configure application logging with HistoryBlock structured format.

    Args:
        app: Flask application instance
        config_name: Current configuration name
    """
    from historyblock.logging_config import configure_logging
    configure_logging(app, config_name)


def _load_settings(app):
    """Read the YAML settings file.

    Returns:
        dict: Parsed settings, empty if the file is missing
    """
    import yaml

    base_path = Path(app.root_path).parent
    config_path = Path(app.config['HISTORYBLOCK_CONFIG_PATH'])
    if not config_path.is_absolute():
        config_path = base_path / config_path

    if not config_path.exists():
        app.logger.warning(f'Config file not found: {config_path}')
        return {}

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _configure_history_block(app):
    """Create the HistoryBlock core and store it in app.extensions.

    Storage path resolution order: HISTORYBLOCK_STORAGE_PATH config key,
    then 'storage.path' from the YAML file, then data/storage/sync.json.

    Args:
        app: Flask application instance
    """
    from historyblock.core.blocking import (
        ChangeNotifier,
        HistoryBlock,
        PatternStore,
        RecordingHistoryPurger,
        VisitFilter,
    )
    from historyblock.core.storage import JsonSyncStorage, MemorySyncStorage

    settings = _load_settings(app)
    storage_settings = settings.get('storage', {}) or {}
    filter_settings = settings.get('filter', {}) or {}
    history_settings = settings.get('history', {}) or {}

    base_path = Path(app.root_path).parent

    if app.config['HISTORYBLOCK_STORAGE_BACKEND'] == 'memory':
        storage = MemorySyncStorage()
        storage_path = None
    else:
        storage_path = Path(
            app.config.get('HISTORYBLOCK_STORAGE_PATH')
            or storage_settings.get('path')
            or 'data/storage/sync.json'
        )
        if not storage_path.is_absolute():
            storage_path = base_path / storage_path
        storage = JsonSyncStorage(storage_path)

    notifier = ChangeNotifier(synchronous=app.config['HISTORYBLOCK_SYNC_NOTIFY'])
    store = PatternStore(storage, notifier)
    visit_filter = VisitFilter(
        cache_patterns=bool(filter_settings.get('cache_patterns', True))
    )
    purger = RecordingHistoryPurger(
        max_recorded=int(history_settings.get('max_recorded', 500))
    )

    # Compiled patterns are dropped whenever the store changes
    notifier.subscribe(visit_filter.invalidate)
    notifier.subscribe(_log_update)

    history_block = HistoryBlock(store, visit_filter, purger)

    app.extensions['history_block'] = history_block
    app.extensions['history_block_notifier'] = notifier

    app.logger.info(
        f'History block configured (storage={storage_path or "memory"}, '
        f'cache_patterns={visit_filter.cache_patterns})'
    )

    if storage_path is not None and storage_settings.get('watch', False):
        _start_storage_watcher(
            app,
            storage_path,
            store,
            notifier,
            float(storage_settings.get('debounce_seconds', 1.0)),
        )


def _start_storage_watcher(app, storage_path, store, notifier, debounce_seconds):
    """Reload the store when the storage file is changed by another writer."""
    from historyblock.core.storage import StorageFileWatcher
    from historyblock.models.blacklist import ACTION_BLACKLIST_UPDATED

    def on_change():
        store.invalidate()
        notifier.publish(ACTION_BLACKLIST_UPDATED)

    watcher = StorageFileWatcher(
        storage_path, on_change, debounce_seconds=debounce_seconds
    )
    if watcher.start():
        app.extensions['storage_watcher'] = watcher
    else:
        app.logger.warning('Failed to start storage watcher')


def _log_update(action):
    logging.getLogger('historyblock.notifications').debug(
        f'Notification delivered (action={action})'
    )


def _register_blueprints(app):
    """Register all application blueprints.

    Args:
        app: Flask application instance
    """
    from historyblock.blueprints.api import api_bp

    app.register_blueprint(api_bp, url_prefix='/api')


def _register_commands(app):
    from historyblock.cli import blacklist_cli

    app.cli.add_command(blacklist_cli)


def _register_error_handlers(app):
    """Register custom error handlers.

    Args:
        app: Flask application instance
    """
    from flask import jsonify

    from historyblock.models.blacklist import StorageUnavailableError

    @app.errorhandler(StorageUnavailableError)
    def storage_unavailable_error(error):
        app.logger.error(f'Storage unavailable (error={error.message})')
        return jsonify({
            'success': False,
            'error': error.to_dict(),
        }), 503

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({
            'success': False,
            'error': {
                'code': 'SYSTEM_NOT_FOUND',
                'message': 'The requested resource was not found',
                'details': {}
            }
        }), 404

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({
            'success': False,
            'error': {
                'code': 'SYSTEM_INTERNAL_ERROR',
                'message': 'An internal server error occurred',
                'details': {}
            }
        }), 500
