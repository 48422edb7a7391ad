"""Store settings, menus and payment settings cache."""

from storefront_sdk.settings.cache import SettingsCache, resolve_path

__all__ = ["SettingsCache", "resolve_path"]
