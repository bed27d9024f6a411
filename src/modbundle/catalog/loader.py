"""
Loads an add-on catalog from a YAML or JSON file.

Accepted layouts:

    addons:
      - id: AppleCarPlay
        url: https://example.com/carplay.zip
        brands: [Audi, Porsche]

or a bare list of add-on mappings.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from modbundle.catalog.defaults import default_catalog
from modbundle.catalog.schemas import AddonCatalog
from modbundle.core.exceptions import CatalogError

logger = logging.getLogger(__name__)


def load_catalog(path: Union[str, Path]) -> AddonCatalog:
    """
    Parse a catalog file. The format is chosen by suffix (.json, otherwise YAML).

    Raises:
        CatalogError: missing file, unparsable content, or invalid entries
    """
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog file '{path}' not found")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CatalogError(f"Cannot parse catalog '{path}': {e}") from e

    if isinstance(data, list):
        data = {"addons": data}
    elif not isinstance(data, dict) or "addons" not in data:
        raise CatalogError(f"Catalog '{path}' must be a list or a mapping with an 'addons' key")

    try:
        catalog = AddonCatalog.model_validate(data)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog '{path}': {e}") from e

    logger.info(f"Loaded {len(catalog.addons)} add-ons from {path}")
    return catalog


def resolve_catalog(path: Optional[Union[str, Path]] = None) -> AddonCatalog:
    """Load the catalog at `path`, or the built-in one when no path is given."""
    if path:
        return load_catalog(path)
    return default_catalog()
