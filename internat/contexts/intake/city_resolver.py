"""
City resolution for placement lines.

Maps the free text of a logical line to one known city name. Known cities
live in an explicit ordered set so that the resolution order is visible and
new names can be appended at runtime without touching the defaults.
"""

from typing import Iterable, Iterator, List, Optional

from internat.contexts.intake.defaults import DEFAULT_CITIES
from internat.contexts.intake.patterns import CityAliasPatterns


class KnownCities:
    """
    Ordered set of city names.

    Iteration follows insertion order. Adding a name already present is a no-op.
    """

    def __init__(self, cities: Iterable[str] = ()):
        self._cities: List[str] = []
        for city in cities:
            self.add(city)

    @classmethod
    def default(cls) -> "KnownCities":
        """Build the set from the static default city list."""
        return cls(DEFAULT_CITIES)

    def add(self, city: str) -> bool:
        """
        Append a city name if not already known.

        Returns:
            True if the city was added, False if it was already present
        """
        if city in self._cities:
            return False
        self._cities.append(city)
        return True

    def __contains__(self, city: object) -> bool:
        return city in self._cities

    def __iter__(self) -> Iterator[str]:
        return iter(self._cities)

    def __len__(self) -> int:
        return len(self._cities)

    def __repr__(self) -> str:
        return f"KnownCities({self._cities!r})"


class CityResolver:
    """
    Resolve free text to the first matching known city.

    The AP-HP facility name always resolves to Paris before the general list
    is scanned, since AP-HP descriptions may not spell the city out.

    Example:
        >>> resolver = CityResolver()
        >>> resolver.resolve("CHU de Lyon, biologie médicale.")
        'Lyon'
    """

    def __init__(self, cities: Optional[KnownCities] = None):
        self.cities = cities if cities is not None else KnownCities.default()

    def resolve(self, text: str) -> Optional[str]:
        """Return the city named in text, or None."""
        if CityAliasPatterns.APHP in text:
            return CityAliasPatterns.APHP_CITY

        for city in self.cities:
            if city in text:
                return city

        return None

    def add_city(self, city: str) -> bool:
        """Extend the known cities (idempotent)."""
        return self.cities.add(city)
