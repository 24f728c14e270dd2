import logging
from functools import lru_cache
from typing import Tuple

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..catalog.adapters import ProductSource, default_sources
from ..catalog.aggregate import collect_products, search_catalog
from ..catalog.cache import ResponseCache
from ..catalog.cdn import CdnResolver
from ..catalog.normalizer import normalize
from ..catalog.query import parse_listing_params
from ..catalog.suggestions import smart_filter_suggestions
from ..config import get_settings
from ..models import CatalogPage, FilterCriteria, Source

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache()
def get_sources() -> Tuple[ProductSource, ...]:
    return tuple(default_sources(get_settings()))


@lru_cache()
def get_response_cache() -> ResponseCache:
    return ResponseCache(ttl_seconds=get_settings().cache_ttl_seconds)


@lru_cache()
def get_resolver() -> CdnResolver:
    return CdnResolver.from_settings(get_settings())


@router.get("")
async def list_products(
    request: Request,
    sources: Tuple[ProductSource, ...] = Depends(get_sources),
    cache: ResponseCache = Depends(get_response_cache),
    resolver: CdnResolver = Depends(get_resolver),
):
    """
    Merged catalog listing across the product table and curated bundles.
    Always answers 200; failures come back as an empty page with `error: true`
    so the storefront grid can render something.
    """
    try:
        settings = get_settings()
        query = parse_listing_params(
            request.query_params,
            default_limit=settings.default_page_size,
            max_limit=settings.max_page_size,
        )
        page = await search_catalog(
            query.criteria,
            sources,
            sort=query.sort,
            page=query.page,
            limit=query.limit,
            cache=cache,
            resolver=resolver,
        )
        return page.to_payload()
    except Exception as exc:
        logger.exception("Product listing failed")
        return CatalogPage(error=True, message=str(exc) or "Failed to fetch products").to_payload()


@router.get("/smart-filters")
async def smart_filters(
    sources: Tuple[ProductSource, ...] = Depends(get_sources),
    resolver: CdnResolver = Depends(get_resolver),
):
    products, _ = await collect_products(FilterCriteria(), sources, resolver)
    return [s.model_dump(by_alias=True) for s in smart_filter_suggestions(products)]


@router.get("/{source}/{product_id}")
async def get_product(
    source: Source,
    product_id: str,
    sources: Tuple[ProductSource, ...] = Depends(get_sources),
    resolver: CdnResolver = Depends(get_resolver),
):
    # ids are only unique per source, so lookups are namespaced
    adapter = next((s for s in sources if s.source == source), None)
    if adapter is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown product source")
    record = await adapter.get(product_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    product, _ = normalize(record, resolver)
    return product.model_dump(by_alias=True, mode="json")
