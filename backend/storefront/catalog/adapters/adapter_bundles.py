# adapter_bundles.py
import logging
from typing import Iterable, List, Optional

from ...models import CuratedBundleRecord, FilterCriteria, Source
from ..bundle_catalog import BUNDLES
from ..cdn import CdnResolver, default_resolver
from ..filters import matches
from ..normalizer import normalize_bundle_record

logger = logging.getLogger(__name__)


class CuratedBundleSource:
    """In-memory bundle list; every criteria field is applied here directly."""

    source = Source.CURATED_BUNDLE

    def __init__(self, bundles: Optional[Iterable[dict]] = None, resolver: CdnResolver = default_resolver):
        raw = BUNDLES if bundles is None else bundles
        self._records = [CuratedBundleRecord.model_validate(b) for b in raw]
        self._resolver = resolver

    async def fetch(self, criteria: FilterCriteria) -> List[CuratedBundleRecord]:
        try:
            return [
                record
                for record in self._records
                if matches(normalize_bundle_record(record, self._resolver).product, criteria)
            ]
        except Exception:
            logger.exception("Curated bundle filtering failed")
            return []

    async def get(self, product_id: str) -> Optional[CuratedBundleRecord]:
        return next((r for r in self._records if r.id == product_id), None)
