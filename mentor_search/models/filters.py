"""
Mentor search filter model.

Filters describe the user's query intent. They are immutable values: edits
produce a new MentorSearchFilters through merge(), and the default value
places no constraints on the listing.
"""

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from mentor_search.error_handling import InvalidFiltersError


# Filter fields holding string collections, kept as ordered tuples
LIST_FIELDS = ('expertise', 'industries', 'languages')
NUMERIC_FIELDS = ('price_min', 'price_max', 'rating')
FLAG_FIELDS = ('available_now', 'free_intro', 'indigenous_background')

# Serialized (camelCase) key for each filter field
_SERIALIZED_KEYS = {
    'query': 'query',
    'expertise': 'expertise',
    'industries': 'industries',
    'price_min': 'priceMin',
    'price_max': 'priceMax',
    'rating': 'rating',
    'available_now': 'availableNow',
    'free_intro': 'freeIntro',
    'indigenous_background': 'indigenousBackground',
    'languages': 'languages',
}


def _as_tuple(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        values = values.split(',')
    return tuple(str(v).strip() for v in values if str(v).strip())


def _as_number(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidFiltersError(f"{name} must be a number: {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidFiltersError(f"{name} must be a number: {value!r}")
    if not math.isfinite(number):
        raise InvalidFiltersError(f"{name} must be a finite number: {value!r}")
    return number


def _as_flag(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ('true', '1', 'yes'):
            return True
        if text in ('false', '0', 'no', ''):
            return False
    elif isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    raise InvalidFiltersError(f"{name} must be true or false: {value!r}")


@dataclass(frozen=True)
class MentorSearchFilters:
    """User-editable mentor search parameters.

    Attributes:
        query: Free-text search keywords
        expertise: Expertise areas the mentor must cover
        industries: Industries the mentor must have worked in
        price_min: Minimum hourly rate (optional)
        price_max: Maximum hourly rate (optional)
        rating: Minimum average rating, 0 to 5 (optional)
        available_now: Only mentors available right now
        free_intro: Only mentors offering a free intro session
        indigenous_background: Only mentors with an Indigenous background
        languages: Languages the mentor must speak
    """
    query: str = ""
    expertise: Tuple[str, ...] = ()
    industries: Tuple[str, ...] = ()
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    rating: Optional[float] = None
    available_now: bool = False
    free_intro: bool = False
    indigenous_background: bool = False
    languages: Tuple[str, ...] = ()

    def __post_init__(self):
        """Normalize field values.

        Raises:
            InvalidFiltersError: If a numeric or boolean field holds a value
                that cannot be converted
        """
        # Accept any iterable for the collection fields
        for name in LIST_FIELDS:
            object.__setattr__(self, name, _as_tuple(getattr(self, name)))
        for name in NUMERIC_FIELDS:
            object.__setattr__(self, name, _as_number(name, getattr(self, name)))
        for name in FLAG_FIELDS:
            object.__setattr__(self, name, _as_flag(name, getattr(self, name)))
        query = self.query
        object.__setattr__(self, 'query', "" if query is None else str(query).strip())

    def validate(self) -> None:
        """Check value constraints.

        Raises:
            InvalidFiltersError: If a price is negative, the price range is
                inverted, or the rating is outside 0 to 5
        """
        for name in ('price_min', 'price_max'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise InvalidFiltersError(f"{name} cannot be negative: {value}")

        if self.price_min is not None and self.price_max is not None:
            if self.price_min > self.price_max:
                raise InvalidFiltersError(
                    f"price_min ({self.price_min}) cannot be greater than "
                    f"price_max ({self.price_max})"
                )

        if self.rating is not None and not 0 <= self.rating <= 5:
            raise InvalidFiltersError(f"rating must be between 0 and 5: {self.rating}")

    def merge(self, **partial: Any) -> 'MentorSearchFilters':
        """Return a copy with the given fields replaced.

        Raises:
            InvalidFiltersError: If a field name is unknown
        """
        known = {f.name for f in fields(self)}
        unknown = set(partial) - known
        if unknown:
            raise InvalidFiltersError(f"Unknown filter fields: {', '.join(sorted(unknown))}")
        return replace(self, **partial)

    def is_default(self) -> bool:
        return self == DEFAULT_FILTERS

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary with camelCase keys."""
        data = {}
        for name, key in _SERIALIZED_KEYS.items():
            value = getattr(self, name)
            data[key] = list(value) if name in LIST_FIELDS else value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MentorSearchFilters':
        """Create filters from a dictionary produced by to_dict().

        Unknown keys are ignored so stored preferences survive schema changes.
        """
        kwargs = {}
        for name, key in _SERIALIZED_KEYS.items():
            if key in data and data[key] is not None:
                kwargs[name] = data[key]
            elif name in data and data[name] is not None:
                kwargs[name] = data[name]
        return cls(**kwargs)


DEFAULT_FILTERS = MentorSearchFilters()
