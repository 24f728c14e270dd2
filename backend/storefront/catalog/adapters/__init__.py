from typing import List, Optional, Protocol

from ...models import FilterCriteria, Source
from ..cdn import CdnResolver
from .adapter_bundles import CuratedBundleSource
from .adapter_database import DatabaseSource


class ProductSource(Protocol):
    source: Source

    async def fetch(self, criteria: FilterCriteria) -> list:
        ...

    async def get(self, product_id: str) -> Optional[object]:
        ...


def default_sources(settings=None) -> List[ProductSource]:
    """Database first, then bundles; the order breaks sort ties."""
    if settings is None:
        return [DatabaseSource(), CuratedBundleSource()]
    return [
        DatabaseSource(table=settings.products_table),
        CuratedBundleSource(resolver=CdnResolver.from_settings(settings)),
    ]


__all__ = ["CuratedBundleSource", "DatabaseSource", "ProductSource", "default_sources"]
