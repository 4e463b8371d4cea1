from .cache import (
    clear_all_caches,
    clear_catalog_cache,
    clear_pallet_cache,
    clear_settings_cache,
)
from .catalog_repo import load_catalog
from .pallets_repo import get_pallet_profile, load_pallet_profiles
from .paths import catalog_json_path, data_dir, pallets_xml_path, settings_yaml_path
from .settings import DEFAULT_SETTINGS, load_settings

__all__ = [
    "DEFAULT_SETTINGS",
    "catalog_json_path",
    "clear_all_caches",
    "clear_catalog_cache",
    "clear_pallet_cache",
    "clear_settings_cache",
    "data_dir",
    "get_pallet_profile",
    "load_catalog",
    "load_pallet_profiles",
    "load_settings",
    "pallets_xml_path",
    "settings_yaml_path",
]
