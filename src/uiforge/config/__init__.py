"""Configuration package."""

from .settings import Config, DevelopmentConfig, TestingConfig, ProductionConfig, get_config_class

__all__ = ['Config', 'DevelopmentConfig', 'TestingConfig', 'ProductionConfig', 'get_config_class']
