"""Configuration classes for HistoryBlock application."""

import os


class Config:
    """Base configuration."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key'
    HISTORYBLOCK_CONFIG_PATH = 'data/config/historyblock.yaml'
    HISTORYBLOCK_STORAGE_PATH = os.environ.get('HISTORYBLOCK_STORAGE_PATH')

    # 'json' (file on disk) or 'memory'
    HISTORYBLOCK_STORAGE_BACKEND = 'json'
    HISTORYBLOCK_SYNC_NOTIFY = False


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""

    DEBUG = False
    TESTING = True
    HISTORYBLOCK_STORAGE_BACKEND = 'memory'
    HISTORYBLOCK_SYNC_NOTIFY = True


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    TESTING = False


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
