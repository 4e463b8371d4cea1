import os
from pathlib import Path

DATA_DIR = os.path.join(os.path.dirname(__file__))


def data_dir() -> str:
    env_dir = os.getenv("LOADPLAN_DATA_DIR")
    if env_dir:
        return str(Path(env_dir).expanduser().resolve())
    return DATA_DIR


def catalog_json_path() -> str:
    return os.path.join(data_dir(), "products-detail.json")


def pallets_xml_path() -> str:
    return os.path.join(data_dir(), "pallets.xml")


def settings_yaml_path() -> str:
    return os.path.join(data_dir(), "settings.yaml")
