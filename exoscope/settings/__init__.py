from .config import Settings, settings, get_settings, configure_logging

__all__ = ["Settings", "settings", "get_settings", "configure_logging"]
