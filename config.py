import os
import secrets


class Config:
    """Base configuration"""
    # Generate a temporary key for development if not set
    _secret = os.environ.get('SECRET_KEY')
    if not _secret:
        _secret = secrets.token_hex(32)
    SECRET_KEY = _secret

    # Error Tracking
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Localization
    BOARD_TIMEZONE = os.environ.get('BOARD_TIMEZONE', 'America/Sao_Paulo')
    DEFAULT_PHONE_REGION = os.environ.get('DEFAULT_PHONE_REGION', 'BR')

    # Board
    DUE_SOON_HOURS = int(os.environ.get('DUE_SOON_HOURS', 24))
    # New workspaces start with A Fazer / Em Progresso / Revisao / Concluido
    DEFAULT_BOARD_COLUMNS = os.environ.get('DEFAULT_BOARD_COLUMNS', 'true').lower() == 'true'


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SENTRY_DSN = None  # Never report test failures
    LOGIN_DISABLED = False
    DEFAULT_BOARD_COLUMNS = True


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
