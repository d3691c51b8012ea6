"""Unit tests for HistoryBlock application factory."""

from flask import Flask

from historyblock import create_app
from historyblock.config import config
from historyblock.core.blocking import HistoryBlock
from historyblock.core.storage import JsonSyncStorage, MemorySyncStorage


class TestCreateApp:
    """Tests for create_app function."""

    def test_create_app_returns_flask_instance(self):
        app = create_app('testing')
        assert isinstance(app, Flask)

    def test_create_app_testing_config(self):
        app = create_app('testing')
        assert app.config['TESTING'] is True
        assert app.config['DEBUG'] is False

    def test_create_app_production_config(self, tmp_path):
        app = create_app('production', {'HISTORYBLOCK_STORAGE_PATH': str(tmp_path / 's.json')})
        assert app.config['DEBUG'] is False
        assert app.config['TESTING'] is False

    def test_history_block_registered(self, app):
        history_block = app.extensions['history_block']
        assert isinstance(history_block, HistoryBlock)
        assert isinstance(history_block.store.storage, MemorySyncStorage)

    def test_json_storage_path_override(self, tmp_path):
        path = tmp_path / 'sync.json'
        app = create_app('development', {'HISTORYBLOCK_STORAGE_PATH': str(path)})
        storage = app.extensions['history_block'].store.storage
        assert isinstance(storage, JsonSyncStorage)
        assert storage.filepath == path

    def test_filter_cache_invalidated_on_update(self, app):
        history_block = app.extensions['history_block']
        history_block.visit_filter.decide('x', history_block.store.load())
        history_block.store.add('a')
        history_block.visit_filter.decide('x', history_block.store.snapshot())
        assert history_block.visit_filter.cache_size() == 1

        history_block.store.add('b')
        assert history_block.visit_filter.cache_size() == 0

    def test_missing_settings_file(self, tmp_path):
        app = create_app('testing', {'HISTORYBLOCK_CONFIG_PATH': str(tmp_path / 'none.yaml')})
        assert app.extensions['history_block'].visit_filter.cache_patterns is True

    def test_settings_file_is_read(self, tmp_path):
        settings = tmp_path / 'historyblock.yaml'
        settings.write_text(
            'filter:\n  cache_patterns: false\nhistory:\n  max_recorded: 2\n',
            encoding='utf-8',
        )
        app = create_app('testing', {'HISTORYBLOCK_CONFIG_PATH': str(settings)})
        history_block = app.extensions['history_block']
        assert history_block.visit_filter.cache_patterns is False
        for url in ('a', 'b', 'c'):
            history_block.purger.delete_url(url)
        assert history_block.purger.get_log().urls == ['b', 'c']


class TestHealthEndpoint:
    """Tests for /api/health endpoint."""

    def test_health_endpoint(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.content_type == 'application/json'
        data = response.get_json()
        assert data['status'] == 'ok'
        assert data['version'] == '0.1.0'

    def test_unknown_route_returns_json_404(self, client):
        response = client.get('/api/nope')
        assert response.status_code == 404
        assert response.get_json()['error']['code'] == 'SYSTEM_NOT_FOUND'


class TestConfigClasses:
    """Tests for configuration classes."""

    def test_config_dict_contains_all_environments(self):
        for name in ('development', 'testing', 'production', 'default'):
            assert name in config

    def test_testing_config_uses_memory_storage(self):
        assert config['testing'].HISTORYBLOCK_STORAGE_BACKEND == 'memory'
        assert config['testing'].HISTORYBLOCK_SYNC_NOTIFY is True
