from collections import Counter
from typing import List, Sequence

from ..models import FacetCount, Facets, NormalizedProduct, PriceBucket

UNCATEGORIZED = "uncategorized"
UNSPECIFIED_COLOR = "unspecified"
BUCKET_COUNT = 4


def _counts(labels: Sequence[str]) -> List[FacetCount]:
    # most common first, label breaks ties so output is stable
    counter = Counter(labels)
    return [FacetCount(label=label, count=count) for label, count in sorted(counter.items(), key=lambda kv: (-kv[1], kv[0]))]


def category_facets(products: Sequence[NormalizedProduct]) -> List[FacetCount]:
    return _counts([p.category.strip().lower() or UNCATEGORIZED for p in products])


def color_facets(products: Sequence[NormalizedProduct]) -> List[FacetCount]:
    # one count per product, by primary colour, so the facet sums to the set size
    return _counts([p.colors[0].lower() if p.colors else UNSPECIFIED_COLOR for p in products])


def _format_dollars(cents: int) -> str:
    return f"${cents / 100:,.2f}"


def price_buckets(products: Sequence[NormalizedProduct]) -> List[PriceBucket]:
    """
    Four equal-width buckets spanning the observed price range. The bounds move
    with the result set, so they are not comparable between requests.
    """
    if not products:
        return []
    prices = [p.price for p in products]
    low, high = min(prices), max(prices)
    if low == high:
        label = _format_dollars(low)
        return [PriceBucket(label=label, count=len(prices), min=low, max=high)]

    width = (high - low) / BUCKET_COUNT
    bounds = [low + round(width * i) for i in range(BUCKET_COUNT)] + [high]
    counts = [0] * BUCKET_COUNT
    for price in prices:
        index = min(int((price - low) / width), BUCKET_COUNT - 1)
        counts[index] += 1

    buckets = []
    for i in range(BUCKET_COUNT):
        lower, upper = bounds[i], bounds[i + 1]
        buckets.append(
            PriceBucket(
                label=f"{_format_dollars(lower)} - {_format_dollars(upper)}",
                count=counts[i],
                min=lower,
                max=upper,
            )
        )
    return buckets


def build_facets(products: Sequence[NormalizedProduct]) -> Facets:
    return Facets(
        categories=category_facets(products),
        colors=color_facets(products),
        price_buckets=price_buckets(products),
    )
