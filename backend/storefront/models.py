from datetime import datetime
from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Set, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Source(str, Enum):
    DATABASE = "database"
    CURATED_BUNDLE = "curated_bundle"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"
    YEAR_ROUND = "year-round"


class SortKey(str, Enum):
    PRICE = "price"
    NAME = "name"
    RECENCY = "recency"


class WireModel(BaseModel):
    """Models that leave the service are camelCased on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LenientRow(BaseModel):
    """
    Mirror of a table row that tolerates bad columns. A column that fails
    validation is dropped back to its default and its name recorded in
    `invalid_fields`; only the columns listed in `required_columns` can still
    reject the row.
    """

    required_columns: ClassVar[Tuple[str, ...]] = ()

    invalid_fields: List[str] = Field(default_factory=list, exclude=True)

    @model_validator(mode="wrap")
    @classmethod
    def _drop_invalid_columns(cls, data, handler):
        try:
            return handler(data)
        except ValidationError as exc:
            if not isinstance(data, dict):
                raise
            bad = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}
            if not bad or bad & set(cls.required_columns):
                raise
            row = handler({k: v for k, v in data.items() if k not in bad})
            row.invalid_fields = sorted(bad)
            return row


# --- public.product_images ---
# FK product_id -> products(id); position orders the gallery.
class ProductImage(LenientRow):
    id: Optional[str] = None
    url: Optional[str] = None
    alt_text: Optional[str] = None
    position: Optional[int] = 0
    is_primary: bool = False


# --- public.product_variants ---
# FK product_id -> products(id); price in minor units.
class ProductVariant(LenientRow):
    id: Optional[str] = None
    sku: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    price: Optional[int] = None
    inventory_count: Optional[int] = None
    status: Optional[str] = None


# --- public.products (with embedded images/variants) ---
class DatabaseRecord(LenientRow):
    required_columns: ClassVar[Tuple[str, ...]] = ("id",)

    kind: Literal["database"] = "database"
    id: str  # PRIMARY KEY
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    base_price: Optional[Any] = None  # minor units; coerced by the normalizer
    sale_price: Optional[Any] = None
    status: Optional[str] = None
    tags: Optional[List[str]] = None
    trending: Optional[bool] = None
    featured: Optional[bool] = None
    primary_image: Optional[str] = None
    images: Optional[List[ProductImage]] = None
    variants: Optional[List[ProductVariant]] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value):
        return str(value) if value is not None else value


class BundleComponent(BaseModel):
    color: str = ""
    type: Optional[str] = None
    fit: Optional[str] = None
    style: Optional[str] = None
    pattern: Optional[str] = None


# Hand-authored bundle; prices in major units (dollars).
class CuratedBundleRecord(BaseModel):
    kind: Literal["curated_bundle"] = "curated_bundle"
    id: str
    name: Optional[str] = None
    description: str = ""
    category: str = ""
    bundle_price: Optional[Any] = None
    original_price: Optional[float] = None
    image_url: Optional[str] = None
    suit: Optional[BundleComponent] = None
    shirt: Optional[BundleComponent] = None
    tie: Optional[BundleComponent] = None
    pocket_square: Optional[BundleComponent] = None
    occasions: List[str] = Field(default_factory=list)
    trending: bool = False
    season: Optional[Season] = None
    ai_score: Optional[int] = None


SourceRecord = Annotated[Union[DatabaseRecord, CuratedBundleRecord], Field(discriminator="kind")]


class NormalizedProduct(WireModel):
    id: str
    name: str = ""
    description: str = ""
    price: int = Field(default=0, ge=0)  # minor units
    category: str = ""
    tags: Set[str] = Field(default_factory=set)
    colors: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)  # first = primary
    in_stock: bool = True
    source: Source
    season: Optional[Season] = None
    bundle_tier: Optional[str] = None
    slug: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def key(self) -> str:
        # ids are only unique within one source
        return f"{self.source.value}:{self.id}"

    @field_serializer("tags")
    def _sorted_tags(self, tags: Set[str]) -> List[str]:
        return sorted(tags)


class FilterCriteria(WireModel):
    categories: Set[str] = Field(default_factory=set)
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    colors: Set[str] = Field(default_factory=set)
    search_term: Optional[str] = None
    in_stock_only: bool = False
    trending_only: bool = False
    seasonal: Optional[Season] = None

    def is_empty(self) -> bool:
        return not (
            self.categories
            or self.min_price is not None
            or self.max_price is not None
            or self.colors
            or self.search_term
            or self.in_stock_only
            or self.trending_only
            or self.seasonal
        )


class SortOption(BaseModel):
    key: SortKey
    descending: bool = False


class FacetCount(WireModel):
    label: str
    count: int = Field(ge=0)


class PriceBucket(FacetCount):
    min: int
    max: int


class Facets(WireModel):
    categories: List[FacetCount] = Field(default_factory=list)
    colors: List[FacetCount] = Field(default_factory=list)
    price_buckets: List[PriceBucket] = Field(default_factory=list)


class Suggestions(WireModel):
    did_you_mean: Optional[str] = None
    related_searches: List[str] = Field(default_factory=list)
    recommended_filters: Dict[str, Any] = Field(default_factory=dict)


class SmartFilterSuggestion(WireModel):
    type: str  # seasonal | weather | occasion | trending | ai-recommended
    title: str
    description: str
    filters: Dict[str, Any] = Field(default_factory=dict)
    priority: int


class CatalogPage(WireModel):
    products: List[NormalizedProduct] = Field(default_factory=list)
    total_count: int = 0
    current_page: int = 1
    total_pages: int = 0
    facets: Facets = Field(default_factory=Facets)
    suggestions: Suggestions = Field(default_factory=Suggestions)
    warnings: List[str] = Field(default_factory=list, exclude=True)
    error: bool = False
    message: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
