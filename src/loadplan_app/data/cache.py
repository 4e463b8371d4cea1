def clear_catalog_cache() -> None:
    from .catalog_repo import load_catalog

    load_catalog.cache_clear()


def clear_pallet_cache() -> None:
    from .pallets_repo import load_pallet_profiles

    load_pallet_profiles.cache_clear()


def clear_settings_cache() -> None:
    from .settings import load_settings

    load_settings.cache_clear()


def clear_all_caches() -> None:
    clear_catalog_cache()
    clear_pallet_cache()
    clear_settings_cache()
