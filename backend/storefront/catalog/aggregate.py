import asyncio
import logging
import math
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models import CatalogPage, FilterCriteria, NormalizedProduct, SortKey, SortOption
from .cache import make_key
from .cdn import CdnResolver, default_resolver
from .facets import build_facets
from .filters import filter_products
from .normalizer import normalize_all
from .suggestions import search_suggestions

logger = logging.getLogger(__name__)


def dedupe(products: Iterable[NormalizedProduct]) -> List[NormalizedProduct]:
    """First occurrence of each id wins. Only meaningful within one source."""
    seen = set()
    unique = []
    for product in products:
        if product.id in seen:
            continue
        seen.add(product.id)
        unique.append(product)
    return unique


def _recency_sort(products: List[NormalizedProduct], descending: bool) -> List[NormalizedProduct]:
    dated = [p for p in products if p.created_at is not None]
    undated = [p for p in products if p.created_at is None]

    def timestamp(p: NormalizedProduct) -> float:
        ts = p.created_at
        if ts.tzinfo is None:
            return (ts - datetime(1970, 1, 1)).total_seconds()
        return ts.timestamp()

    # bundles carry no timestamp and trail in either direction
    return sorted(dated, key=timestamp, reverse=descending) + undated


def sort_products(products: Sequence[NormalizedProduct], option: Optional[SortOption]) -> List[NormalizedProduct]:
    products = list(products)
    if option is None:
        return products
    if option.key == SortKey.PRICE:
        return sorted(products, key=lambda p: p.price, reverse=option.descending)
    if option.key == SortKey.NAME:
        return sorted(products, key=lambda p: p.name.casefold(), reverse=option.descending)
    return _recency_sort(products, option.descending)


def paginate(products: Sequence[NormalizedProduct], page: int, limit: int) -> Tuple[List[NormalizedProduct], int]:
    page = max(page, 1)
    limit = max(limit, 1)
    total_pages = math.ceil(len(products) / limit)
    start = (page - 1) * limit
    return list(products[start:start + limit]), total_pages


async def _fetch_all(sources: Sequence, criteria: FilterCriteria) -> List[list]:
    results = await asyncio.gather(*(s.fetch(criteria) for s in sources), return_exceptions=True)
    batches = []
    for source, result in zip(sources, results):
        if isinstance(result, BaseException):
            logger.error(
                "Source %s raised instead of degrading; treating as empty",
                getattr(source, "source", source),
                exc_info=result,
            )
            batches.append([])
        else:
            batches.append(result or [])
    return batches


async def collect_products(
    criteria: FilterCriteria, sources: Sequence, resolver: CdnResolver = default_resolver
) -> Tuple[List[NormalizedProduct], List[str]]:
    """Fetch, normalize, filter and per-source dedupe; output keeps source order."""
    merged: List[NormalizedProduct] = []
    warnings: List[str] = []
    for batch in await _fetch_all(sources, criteria):
        products, batch_warnings = normalize_all(batch, resolver)
        warnings.extend(batch_warnings)
        merged.extend(dedupe(filter_products(products, criteria)))
    return merged, warnings


async def search_catalog(
    criteria: FilterCriteria,
    sources: Sequence,
    sort: Optional[SortOption] = None,
    page: int = 1,
    limit: int = 24,
    cache=None,
    resolver: CdnResolver = default_resolver,
) -> CatalogPage:
    key = make_key(criteria, sort, page, limit)
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            return cached

    merged, warnings = await collect_products(criteria, sources, resolver)
    ordered = sort_products(merged, sort)
    window, total_pages = paginate(ordered, page, limit)

    result = CatalogPage(
        products=window,
        total_count=len(ordered),
        current_page=max(page, 1),
        total_pages=total_pages,
        facets=build_facets(ordered),
        suggestions=search_suggestions(criteria, ordered),
        warnings=warnings,
    )
    logger.info(
        "Catalog search matched %d products %s (page %d/%d, %d data warnings)",
        result.total_count,
        count_by_source(ordered),
        result.current_page,
        total_pages,
        len(warnings),
    )
    if cache is not None:
        cache.set(key, result)
    return result


def count_by_source(products: Iterable[NormalizedProduct]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for product in products:
        counts[product.source.value] = counts.get(product.source.value, 0) + 1
    return counts
