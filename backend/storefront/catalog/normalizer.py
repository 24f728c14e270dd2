import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, NamedTuple, Optional, Set, Tuple

from ..models import (
    BundleComponent,
    CuratedBundleRecord,
    DatabaseRecord,
    NormalizedProduct,
    Season,
    Source,
)
from .cdn import CdnResolver, default_resolver

logger = logging.getLogger(__name__)

COLOR_PATTERN = re.compile(
    r"\b(black|navy|grey|gray|blue|brown|tan|burgundy|white|cream|charcoal|red|green|pink|coral|sage|emerald|gold|indigo)\b",
    re.IGNORECASE,
)
OCCASION_KEYWORDS = ("wedding", "business", "formal", "casual", "prom", "cocktail", "black-tie", "gala", "party")
SEASONS = ("spring", "summer", "fall", "winter")

# (ceiling in dollars, tier); anything above the last ceiling is premium
BUNDLE_TIERS = [(199, "starter"), (229, "professional"), (249, "executive")]


class Sanitized(NamedTuple):
    product: NormalizedProduct
    warnings: List[str]


def _to_minor_units(value, scale: int) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip().lstrip("$").replace(",", ""))
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return int((amount * scale).to_integral_value())


def sanitize_price(value, scale: int, record_id: str, warnings: List[str]) -> int:
    price = _to_minor_units(value, scale)
    if price is None:
        warnings.append(f"{record_id}: missing or unparseable price {value!r}, defaulting to 0")
        return 0
    if price < 0:
        warnings.append(f"{record_id}: negative price {value!r}, defaulting to 0")
        return 0
    return price


def sanitize_name(value: Optional[str], record_id: str, warnings: List[str]) -> str:
    name = (value or "").strip()
    if not name:
        warnings.append(f"{record_id}: missing name")
    return name


def column_warnings(record: DatabaseRecord, warnings: List[str]) -> None:
    """Report columns the row mirror had to drop, including embedded images and variants."""
    for column in record.invalid_fields:
        warnings.append(f"{record.id}: unparseable {column}, ignored")
    for index, image in enumerate(record.images or []):
        for column in image.invalid_fields:
            warnings.append(f"{record.id}: unparseable images[{index}].{column}, ignored")
    for index, variant in enumerate(record.variants or []):
        for column in variant.invalid_fields:
            warnings.append(f"{record.id}: unparseable variants[{index}].{column}, ignored")


def extract_colors(*texts: Optional[str]) -> List[str]:
    found: List[str] = []
    for text in texts:
        for match in COLOR_PATTERN.findall(text or ""):
            color = match.lower()
            if color not in found:
                found.append(color)
    return found


def occasion_tags(*texts: Optional[str]) -> Set[str]:
    lowered = " ".join(t or "" for t in texts).lower()
    return {k for k in OCCASION_KEYWORDS if k in lowered}


def season_from_tags(tags: Iterable[str]) -> Optional[Season]:
    for tag in tags:
        lowered = tag.lower()
        for season in SEASONS:
            if season in lowered:
                return Season(season)
    return None


def bundle_tier(price_dollars: float) -> str:
    for ceiling, tier in BUNDLE_TIERS:
        if price_dollars <= ceiling:
            return tier
    return "premium"


def normalize_database_record(record: DatabaseRecord, resolver: CdnResolver = default_resolver) -> Sanitized:
    warnings: List[str] = []
    column_warnings(record, warnings)
    name = sanitize_name(record.name, record.id, warnings)
    price = sanitize_price(record.base_price, 1, record.id, warnings)
    category = (record.category or "").strip()
    raw_tags = [t for t in (record.tags or []) if isinstance(t, str) and t.strip()]

    tags = {t.strip().lower() for t in raw_tags}
    tags |= occasion_tags(name, record.description)
    if record.trending:
        tags.add("trending")
    if record.featured:
        tags.add("featured")

    ordered = sorted(record.images or [], key=lambda img: (not img.is_primary, img.position or 0))
    images: List[str] = []
    for img in ordered:
        fixed = resolver.fix_legacy_url(img.url)
        if fixed and fixed not in images:
            images.append(fixed)
    if not images:
        images.append(resolver.resolve_image(record.primary_image, name, category))

    variants = record.variants or []
    colors: List[str] = []
    for variant in variants:
        color = (variant.color or "").strip().lower()
        if color and color not in colors:
            colors.append(color)
    for color in extract_colors(name, *raw_tags):
        if color not in colors:
            colors.append(color)

    active = (record.status or "active").lower() == "active"
    if variants:
        in_stock = active and any((v.inventory_count or 0) > 0 for v in variants)
    else:
        in_stock = active

    product = NormalizedProduct(
        id=record.id,
        name=name,
        description=record.description or "",
        price=price,
        category=category,
        tags=tags,
        colors=colors,
        images=images,
        in_stock=in_stock,
        source=Source.DATABASE,
        season=season_from_tags(raw_tags),
        slug=record.slug,
        created_at=record.created_at,
    )
    return Sanitized(product, warnings)


def _component_colors(*components: Optional[BundleComponent]) -> List[str]:
    colors: List[str] = []
    for component in components:
        if component is None:
            continue
        color = component.color.strip().lower()
        if color and color not in colors:
            colors.append(color)
    return colors


def normalize_bundle_record(record: CuratedBundleRecord, resolver: CdnResolver = default_resolver) -> Sanitized:
    warnings: List[str] = []
    name = sanitize_name(record.name, record.id, warnings)
    # bundles are authored in dollars
    price = sanitize_price(record.bundle_price, 100, record.id, warnings)
    category = record.category.strip()

    tags = {"bundle"}
    if category:
        tags.add(category.lower())
    tags |= {o.lower() for o in record.occasions}
    if record.trending:
        tags.add("trending")

    product = NormalizedProduct(
        id=record.id,
        name=name,
        description=record.description,
        price=price,
        category=category,
        tags=tags,
        colors=_component_colors(record.suit, record.shirt, record.tie, record.pocket_square),
        images=[resolver.resolve_image(record.image_url, name, category)],
        in_stock=True,
        source=Source.CURATED_BUNDLE,
        season=record.season,
        bundle_tier=bundle_tier(price / 100),
    )
    return Sanitized(product, warnings)


def normalize(record, resolver: CdnResolver = default_resolver) -> Sanitized:
    if isinstance(record, DatabaseRecord):
        return normalize_database_record(record, resolver)
    if isinstance(record, CuratedBundleRecord):
        return normalize_bundle_record(record, resolver)
    raise TypeError(f"Unsupported source record: {type(record).__name__}")


def normalize_all(records, resolver: CdnResolver = default_resolver) -> Tuple[List[NormalizedProduct], List[str]]:
    products, warnings = [], []
    for record in records:
        product, record_warnings = normalize(record, resolver)
        products.append(product)
        warnings.extend(record_warnings)
    for warning in warnings:
        logger.warning("Catalog data quality: %s", warning)
    return products, warnings
