"""
Image URL resolution for catalog products.

Product images live in object storage behind a CDN. Older rows still point at
the raw public bucket hosts; those are rewritten onto the CDN domain. When a
product has no usable image at all, a CDN path is derived from its name, and
failing that a local placeholder is chosen by category. No network I/O happens
here: nothing checks that the resulting URL actually serves an image.
"""
from typing import Dict, Iterable, Optional
from urllib.parse import urlparse

from slugify import slugify

from ..config import DEFAULT_LEGACY_IMAGE_HOSTS

DEFAULT_CDN_BASE = "https://cdn.kctmenswear.com"
PLACEHOLDER = "/placeholder-product.jpg"

# bucket folder names that prefix every key on the legacy hosts (typo included)
LEGACY_BUCKET_PREFIXES = ("kct-prodcuts", "kct-products")

# First match wins, so the narrow lines go before the broad ones.
PRODUCT_LINES = [
    ("velvet", "blazers/velvet"),
    ("dinner jacket", "blazers/velvet"),
    ("sparkle", "blazers/prom"),
    ("sequin", "blazers/prom"),
    ("prom", "blazers/prom"),
    ("blazer", "blazers"),
    ("tuxedo", "tuxedos"),
    ("vest", "vests"),
    ("suit", "suits"),
    ("shirt", "shirts"),
]

CDN_VIEWS = ("model", "front", "back")

_CATEGORY_PLACEHOLDERS = [
    (("suit", "tuxedo", "blazer"), "/placeholder-suit.jpg"),
    (("shirt",), "/placeholder-shirt.jpg"),
    (("shoe", "footwear"), "/placeholder-shoes.jpg"),
    (("tie", "bowtie", "accessories"), "/placeholder-tie.jpg"),
]

_INVALID_MARKERS = ("/undefined", "/null", "placeholder", "pattern.svg")


def is_valid_image_url(url: Optional[str]) -> bool:
    if not url or not isinstance(url, str):
        return False
    value = url.strip()
    lowered = value.lower()
    if lowered in ("", "undefined", "null", "none"):
        return False
    if any(marker in lowered for marker in _INVALID_MARKERS):
        return False

    parsed = urlparse(value)
    if parsed.scheme in ("http", "https"):
        return bool(parsed.netloc)
    if parsed.scheme:
        return False
    return value.startswith("/") and ".." not in value


def placeholder_for(category: Optional[str]) -> str:
    """Local placeholder path for a category; deterministic for the same input."""
    if not category:
        return "/placeholder-product.svg"
    lowered = category.lower()
    for keywords, path in _CATEGORY_PLACEHOLDERS:
        if any(k in lowered for k in keywords):
            return path
    return "/placeholder-product.svg"


def product_slug(name: str) -> str:
    # "Men's Emerald Velvet Dinner Jacket" -> "mens-emerald-velvet-dinner-jacket"
    return slugify(name.replace("'", "").replace("’", ""))


class CdnResolver:
    def __init__(self, base_url: str = DEFAULT_CDN_BASE, legacy_hosts: Iterable[str] = DEFAULT_LEGACY_IMAGE_HOSTS):
        self.base_url = base_url.rstrip("/")
        self.legacy_hosts = {h.lower() for h in legacy_hosts}

    @classmethod
    def from_settings(cls, settings) -> "CdnResolver":
        return cls(settings.cdn_base_url, settings.legacy_image_hosts)

    def is_legacy(self, url: str) -> bool:
        host = (urlparse(url).hostname or "").lower()
        return host in self.legacy_hosts

    def fix_legacy_url(self, url: Optional[str]) -> Optional[str]:
        """
        Rewrite a legacy bucket URL onto the CDN domain.
        Valid non-legacy URLs pass through; unusable ones come back as None.
        """
        if not is_valid_image_url(url):
            return None
        url = url.strip()
        if not self.is_legacy(url):
            return url

        parsed = urlparse(url)
        segments = [s for s in parsed.path.split("/") if s]
        if segments and segments[0] in LEGACY_BUCKET_PREFIXES:
            segments = segments[1:]
        if not segments:
            return None
        return f"{self.base_url}/{'/'.join(segments)}"

    def generate_cdn_urls(self, name: Optional[str]) -> Dict[str, str]:
        """Derive CDN paths from a product name; placeholders when no product line matches."""
        placeholders = {view: PLACEHOLDER for view in CDN_VIEWS}
        if not name:
            return placeholders
        lowered = name.lower()
        line = next((path for keyword, path in PRODUCT_LINES if keyword in lowered), None)
        slug = product_slug(name)
        if line is None or not slug:
            return placeholders
        return {view: f"{self.base_url}/{line}/{slug}/{view}.webp" for view in CDN_VIEWS}

    def resolve_image(self, url: Optional[str], name: Optional[str] = None, category: Optional[str] = None) -> str:
        fixed = self.fix_legacy_url(url)
        if fixed:
            return fixed
        generated = self.generate_cdn_urls(name)["model"]
        if generated != PLACEHOLDER:
            return generated
        return placeholder_for(category)


default_resolver = CdnResolver()
