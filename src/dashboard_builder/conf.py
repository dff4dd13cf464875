"""
Configuration management for the Dashboard Builder.
Allows overriding settings via the DASHBOARD_BUILDER Django setting.
"""
from django.conf import settings
from typing import Dict, Any

DEFAULTS = {
    'DATA_SOURCE_PROVIDER': 'dashboard_builder.data_sources.static.StaticDataSourceProvider',
    'DATA_SOURCES_FILE': None,  # None means the bundled placeholder dataset
    'DEFAULT_COMPONENT_WIDTH': 400,
    'DEFAULT_COMPONENT_HEIGHT': 200,
    'TABLE_ROW_LIMIT': 50,
    'API_BASE_URL': 'http://localhost:8000/api/',
    'API_TIMEOUT': 10,
}


class DashboardBuilderSettings:
    def __init__(self, defaults: Dict[str, Any] = None, setting_name: str = 'DASHBOARD_BUILDER'):
        self.defaults = defaults or DEFAULTS
        self.setting_name = setting_name

    @property
    def user_settings(self) -> Dict[str, Any]:
        return getattr(settings, self.setting_name, None) or {}

    def __getattr__(self, attr):
        if attr not in self.defaults:
            raise AttributeError(f"Invalid setting: {attr}")
        return self.user_settings.get(attr, self.defaults[attr])


# Global settings instance
api_settings = DashboardBuilderSettings(DEFAULTS)
