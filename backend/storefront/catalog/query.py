import logging
from typing import Iterable, List, Mapping, NamedTuple, Optional, Set

from ..models import FilterCriteria, Season, SortKey, SortOption

logger = logging.getLogger(__name__)

SORT_ALIASES = {
    "price": SortOption(key=SortKey.PRICE),
    "price-asc": SortOption(key=SortKey.PRICE),
    "price-desc": SortOption(key=SortKey.PRICE, descending=True),
    "name": SortOption(key=SortKey.NAME),
    "name-asc": SortOption(key=SortKey.NAME),
    "name-desc": SortOption(key=SortKey.NAME, descending=True),
    "newest": SortOption(key=SortKey.RECENCY, descending=True),
    "oldest": SortOption(key=SortKey.RECENCY),
}

TRUTHY = {"1", "true", "yes", "on"}


class ListingQuery(NamedTuple):
    criteria: FilterCriteria
    sort: Optional[SortOption]
    page: int
    limit: int


def _values(params: Mapping, name: str) -> List[str]:
    # starlette's QueryParams has getlist; plain dicts hold one value
    if hasattr(params, "getlist"):
        raw = params.getlist(name)
    else:
        value = params.get(name)
        raw = value if isinstance(value, list) else ([value] if value is not None else [])
    return [str(v) for v in raw]


def _first(params: Mapping, name: str) -> Optional[str]:
    values = _values(params, name)
    return values[0].strip() if values else None


def _split(values: Iterable[str]) -> Set[str]:
    return {part.strip() for value in values for part in value.split(",") if part.strip()}


def parse_int(value: Optional[str], name: str = "value", minimum: Optional[int] = None) -> Optional[int]:
    """Lenient integer parse; anything malformed is treated as absent."""
    if value is None or value == "":
        return None
    try:
        number = int(float(value)) if "." in value or "e" in value.lower() else int(value)
    except (ValueError, OverflowError):
        logger.info("Ignoring malformed %s=%r", name, value)
        return None
    if minimum is not None and number < minimum:
        logger.info("Ignoring out-of-range %s=%r", name, value)
        return None
    return number


def parse_bool(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in TRUTHY


def parse_season(value: Optional[str]) -> Optional[Season]:
    if not value:
        return None
    try:
        return Season(value.strip().lower())
    except ValueError:
        logger.info("Ignoring unknown season=%r", value)
        return None


def parse_sort(value: Optional[str]) -> Optional[SortOption]:
    if not value:
        return None
    option = SORT_ALIASES.get(value.strip().lower())
    if option is None:
        logger.info("Ignoring unknown sortBy=%r", value)
    return option


def parse_listing_params(params: Mapping, default_limit: int = 24, max_limit: int = 100) -> ListingQuery:
    """
    Turn /products query parameters into criteria, sort and page window.
    Never raises: malformed values are dropped rather than rejected.
    """
    criteria = FilterCriteria(
        categories=_split(_values(params, "category")),
        min_price=parse_int(_first(params, "minPrice"), "minPrice", minimum=0),
        max_price=parse_int(_first(params, "maxPrice"), "maxPrice", minimum=0),
        colors=_split(_values(params, "color")),
        search_term=_first(params, "search") or None,
        in_stock_only=parse_bool(_first(params, "inStock")),
        trending_only=parse_bool(_first(params, "trending")),
        seasonal=parse_season(_first(params, "season")),
    )
    page = parse_int(_first(params, "page"), "page", minimum=1) or 1
    limit = parse_int(_first(params, "limit"), "limit", minimum=1) or default_limit
    return ListingQuery(criteria, parse_sort(_first(params, "sortBy")), page, min(limit, max_limit))
