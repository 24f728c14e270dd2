# adapter_database.py
import asyncio
import logging
import re
from typing import Callable, List, Optional

from pydantic import ValidationError
from supabase import Client

from ...models import DatabaseRecord, FilterCriteria, Source
from ...supabase_client import get_supabase

logger = logging.getLogger(__name__)

# Embedded resources come back as lists on each product row.
PRODUCT_SELECT = "*, images:product_images(*), variants:product_variants(*)"

# Characters that would break PostgREST filter syntax; such categories are
# left for the post-fetch filter instead of being pushed down.
_UNSAFE_PATTERN = re.compile(r"[,()*%\\]")


def _pushdown_categories(criteria: FilterCriteria) -> List[str]:
    categories = sorted({c.strip() for c in criteria.categories if c.strip()})
    if any(_UNSAFE_PATTERN.search(c) for c in categories):
        return []
    return categories


class DatabaseSource:
    """
    Reads active rows from the products table.
    Category and a positive minimum price are pushed into the query; the
    price ceiling, search term and colour are matched after the fetch.
    """

    source = Source.DATABASE

    def __init__(self, client_factory: Callable[[], Client] = get_supabase, table: str = "products"):
        self._client_factory = client_factory
        self.table = table

    def build_query(self, client: Client, criteria: FilterCriteria):
        query = client.table(self.table).select(PRODUCT_SELECT).eq("status", "active")

        categories = _pushdown_categories(criteria)
        if len(categories) == 1:
            query = query.ilike("category", f"%{categories[0]}%")
        elif categories:
            query = query.or_(",".join(f"category.ilike.*{c}*" for c in categories))

        # NULL base_price normalizes to 0, so only a positive floor can be
        # pushed down without losing rows; the ceiling is checked after the fetch.
        if criteria.min_price is not None and criteria.min_price > 0:
            query = query.gte("base_price", criteria.min_price)
        return query.order("created_at", desc=True)

    def _execute(self, query) -> list:
        resp = query.execute()
        error = getattr(resp, "error", None)
        if error:
            raise RuntimeError(f"Supabase error: {error}")
        return getattr(resp, "data", None) or []

    def _fetch_rows(self, criteria: FilterCriteria) -> list:
        client = self._client_factory()
        return self._execute(self.build_query(client, criteria))

    def _to_records(self, rows: list) -> List[DatabaseRecord]:
        records = []
        for index, row in enumerate(rows):
            try:
                records.append(DatabaseRecord.model_validate(row))
            except ValidationError as exc:
                logger.warning("Skipping product row #%d without a usable id: %s", index, exc)
        return records

    async def fetch(self, criteria: FilterCriteria) -> List[DatabaseRecord]:
        try:
            rows = await asyncio.to_thread(self._fetch_rows, criteria)
        except Exception:
            logger.exception("Product table fetch failed; continuing without database products")
            return []
        records = self._to_records(rows)
        logger.info("Product table returned %d rows", len(records))
        return records

    def _fetch_one(self, product_id: str) -> list:
        client = self._client_factory()
        query = client.table(self.table).select(PRODUCT_SELECT).eq("id", product_id).limit(1)
        return self._execute(query)

    async def get(self, product_id: str) -> Optional[DatabaseRecord]:
        try:
            rows = await asyncio.to_thread(self._fetch_one, product_id)
        except Exception:
            logger.exception("Product lookup failed for %s", product_id)
            return None
        records = self._to_records(rows)
        return records[0] if records else None
