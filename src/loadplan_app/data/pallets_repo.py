import os
import xml.etree.ElementTree as ET
from functools import lru_cache
from typing import Dict

from assembly_core.models import PalletConfig

from .paths import pallets_xml_path


def _load_xml(path: str) -> ET.Element:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Pallet profile file not found: {path}")
    try:
        tree = ET.parse(path)
        return tree.getroot()
    except ET.ParseError as e:
        raise ValueError(f"Invalid XML in file {path}: {e}")


@lru_cache(maxsize=None)
def load_pallet_profiles() -> Dict[str, PalletConfig]:
    """Return pallet profiles {name: PalletConfig} from pallets.xml."""
    root = _load_xml(pallets_xml_path())
    profiles: Dict[str, PalletConfig] = {}
    for pallet in root.findall("pallet"):
        try:
            name = pallet.get("name")
            profiles[name] = PalletConfig(
                length=float(pallet.get("l")),
                width=float(pallet.get("w")),
                max_height=float(pallet.get("max_h")),
                max_weight=float(pallet.get("max_wt")),
                tare_weight=float(pallet.get("tare")),
                name=name,
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid pallet data '{pallet.attrib}': {e}")
    return profiles


def get_pallet_profile(name: str) -> PalletConfig:
    profiles = load_pallet_profiles()
    try:
        return profiles[name]
    except KeyError:
        known = ", ".join(sorted(profiles))
        raise ValueError(f"Unknown pallet profile {name!r} (known: {known})") from None
