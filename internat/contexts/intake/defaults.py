"""
Default values for the intake context.

Provides the static city list the City Resolver starts from. Order matters:
the first city found in a line wins, so broader names must not shadow
narrower ones placed after them.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

DEFAULT_CITIES = (
    "Paris",
    "Montpellier",
    "Toulouse",
    "Lyon",
    "Marseille",
    "Lille",
    "Bordeaux",
    "Strasbourg",
    "Nantes",
    "Rennes",
    "Rouen",
    "Nancy",
    "Reims",
    "Dijon",
    "Poitiers",
    "Clermont-Ferrand",
    "Besançon",
    "Amiens",
    "Grenoble",
    "Tours",
    "Angers",
    "Saint-Étienne",
    "Caen",
    "Limoges",
    "Nice",
    "Brest",
)

DEFAULT_SPECIALTY = "biologie médicale"


def load_extra_cities(config_path: Optional[Path] = None) -> List[str]:
    """
    Load additional city names from a YAML config file.

    The file holds a single list under the ``cities`` key:

        cities:
          - Pointe-à-Pitre
          - Fort-de-France

    Args:
        config_path: Optional path to config file (defaults to EXTRA_CITIES_PATH env variable)

    Returns:
        City names in file order, empty if no config is configured or the file is missing
    """
    if config_path is None:
        env_path = os.getenv("EXTRA_CITIES_PATH")
        if not env_path:
            return []
        config_path = Path(env_path)

    if not config_path.exists():
        return []

    config = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True) or {}
    cities = config.get("cities") or []
    if not isinstance(cities, list):
        raise ValueError(f"'cities' must be a list in {config_path}")

    return [str(city).strip() for city in cities if str(city).strip()]
