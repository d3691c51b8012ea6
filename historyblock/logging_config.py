"""HistoryBlock logging configuration with custom formatter.

Provides a custom formatter that transforms Python module paths
to short module names:
[YYYY-MM-DD HH:MM:SS][LEVEL][module.submodule] Message (key=value)

Examples:
    historyblock.core.blocking.pattern_store -> blocking.pattern
    historyblock.blueprints.api.messages -> api.messages
    historyblock.core.storage.storage_watcher -> storage.watcher
    historyblock.core.storage.sync_storage -> storage.sync
"""

import logging


class HistoryBlockFormatter(logging.Formatter):
    """Custom formatter that produces short module names.

    Module names repeating their package (storage.storage_watcher) or
    ending in a role suffix (blocking.visit_filter) are shortened so the
    bracketed name stays readable in the console.
    """

    # Suffixes to remove for cleaner module names
    SUFFIXES_TO_STRIP = ('_store', '_filter', '_storage')

    def __init__(
        self,
        fmt: str = '[%(asctime)s][%(levelname)s][%(shortname)s] %(message)s',
        datefmt: str = '%Y-%m-%d %H:%M:%S',
    ):
        """Initialize the formatter.

        Args:
            fmt: Log format string. Use %(shortname)s for the short module name.
            datefmt: Date format string.
        """
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with its short module name in %(shortname)s."""
        record.shortname = self._get_short_name(record.name)
        return super().format(record)

    def _get_short_name(self, name: str) -> str:
        """Transform full module path to short name.

        Args:
            name: Full Python module path (e.g., 'historyblock.core.blocking.visit_filter')

        Returns:
            Short module name (e.g., 'blocking.visit')
        """
        if name.startswith('historyblock.'):
            name = name[len('historyblock.'):]

        # historyblock.blueprints.api.messages -> api.messages
        if name.startswith('blueprints.'):
            name = name[11:]

        # storage.storage_watcher -> storage.watcher
        package, _, module = name.rpartition('.')
        parent = package.rsplit('.', 1)[-1] + '_'
        if package and module.startswith(parent):
            name = f'{package}.{module[len(parent):]}'

        for suffix in self.SUFFIXES_TO_STRIP:
            if name.endswith(suffix):
                name = name[:-len(suffix)]
                break

        # core.blocking.visit -> blocking.visit
        if name.startswith('core.'):
            name = name[5:]

        return name


def configure_logging(app, config_name: str = 'default') -> None:
    """Configure application logging with HistoryBlock formatter.

    Args:
        app: Flask application instance.
        config_name: Configuration name for determining log level.
    """
    log_level = logging.DEBUG if app.config.get('DEBUG') else logging.INFO

    formatter = HistoryBlockFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from external libraries
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('watchdog').setLevel(logging.WARNING)
