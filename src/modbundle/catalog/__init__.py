from modbundle.catalog.schemas import ALL_BRANDS, AddonCatalog, AddonDescriptor
from modbundle.catalog.defaults import BRANDS, default_catalog
from modbundle.catalog.loader import load_catalog, resolve_catalog

__all__ = [
    "ALL_BRANDS",
    "AddonCatalog",
    "AddonDescriptor",
    "BRANDS",
    "default_catalog",
    "load_catalog",
    "resolve_catalog",
]
