"""
Application Configuration

Centralizes all Flask and application configuration settings.
"""

import os

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'recipes.db'))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # External inventory service; blank means use the local inventory sheets
    INVENTORY_API_URL = os.environ.get('INVENTORY_API_URL', '')
    INVENTORY_API_TIMEOUT = float(os.environ.get('INVENTORY_API_TIMEOUT', '5'))

    # Ingredient search
    SEARCH_DEBOUNCE_SECONDS = float(os.environ.get('SEARCH_DEBOUNCE_SECONDS', '0.2'))
    SEARCH_LIMIT = int(os.environ.get('SEARCH_LIMIT', '20'))

    # Rows/recipes above this cost (USD) are logged
    HIGH_COST_WARNING = float(os.environ.get('HIGH_COST_WARNING', '50'))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    INVENTORY_API_URL = ''
    SEARCH_DEBOUNCE_SECONDS = 0.01
    LOG_LEVEL = 'WARNING'


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
