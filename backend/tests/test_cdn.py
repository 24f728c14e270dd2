import pytest

from storefront.catalog.cdn import CdnResolver, PLACEHOLDER, is_valid_image_url, placeholder_for, product_slug

LEGACY = "https://pub-46371bda6faf4910b74631159fc2dfd4.r2.dev"


@pytest.fixture
def resolver():
    return CdnResolver("https://cdn.kctmenswear.com")


@pytest.mark.parametrize(
    "url",
    ["https://cdn.kctmenswear.com/suits/navy.webp", "/images/suit.jpg", "http://example.com/a.png"],
)
def test_valid_image_urls(url):
    assert is_valid_image_url(url)


@pytest.mark.parametrize(
    "url",
    [None, "", "undefined", "NULL", "/images/undefined", "/placeholder.jpg", "pattern.svg", "ftp://x/y.jpg",
     "images/suit.jpg", "/../etc/passwd", "https://"],
)
def test_invalid_image_urls(url):
    assert not is_valid_image_url(url)


def test_legacy_host_is_rewritten_onto_cdn(resolver):
    fixed = resolver.fix_legacy_url(f"{LEGACY}/kct-prodcuts/suits/navy/navy-main-2.jpg")
    assert fixed == "https://cdn.kctmenswear.com/suits/navy/navy-main-2.jpg"


def test_legacy_url_keeps_encoded_path(resolver):
    fixed = resolver.fix_legacy_url(f"{LEGACY}/kct-prodcuts/Bow%3ATie/burgundy.jpg")
    assert fixed == "https://cdn.kctmenswear.com/Bow%3ATie/burgundy.jpg"


def test_non_legacy_urls_pass_through(resolver):
    url = "https://images.example.com/a.jpg"
    assert resolver.fix_legacy_url(url) == url
    assert resolver.fix_legacy_url("  /local/a.jpg ") == "/local/a.jpg"


def test_bare_legacy_bucket_is_unusable(resolver):
    assert resolver.fix_legacy_url(f"{LEGACY}/kct-prodcuts/") is None


def test_generate_cdn_urls_by_product_line(resolver):
    urls = resolver.generate_cdn_urls("Men's Emerald Velvet Dinner Jacket")
    assert urls == {
        "model": "https://cdn.kctmenswear.com/blazers/velvet/mens-emerald-velvet-dinner-jacket/model.webp",
        "front": "https://cdn.kctmenswear.com/blazers/velvet/mens-emerald-velvet-dinner-jacket/front.webp",
        "back": "https://cdn.kctmenswear.com/blazers/velvet/mens-emerald-velvet-dinner-jacket/back.webp",
    }


def test_generate_cdn_urls_without_a_product_line(resolver):
    assert resolver.generate_cdn_urls("Leather Belt") == {"model": PLACEHOLDER, "front": PLACEHOLDER, "back": PLACEHOLDER}
    assert resolver.generate_cdn_urls(None)["model"] == PLACEHOLDER


def test_resolve_image_fallback_chain(resolver):
    assert resolver.resolve_image("https://x.example.com/a.jpg", "Navy Suit") == "https://x.example.com/a.jpg"
    assert resolver.resolve_image(None, "Black Tuxedo") == "https://cdn.kctmenswear.com/tuxedos/black-tuxedo/model.webp"
    assert resolver.resolve_image("undefined", "Pocket Square", "Accessories") == "/placeholder-tie.jpg"


def test_resolve_image_is_deterministic(resolver):
    first = resolver.resolve_image(None, "Gold Sequin Prom Blazer", "Blazers")
    assert first == resolver.resolve_image(None, "Gold Sequin Prom Blazer", "Blazers")
    assert first.startswith("https://cdn.kctmenswear.com/blazers/prom/")


@pytest.mark.parametrize(
    "category,expected",
    [
        ("Suits", "/placeholder-suit.jpg"),
        ("Tuxedos", "/placeholder-suit.jpg"),
        ("Dress Shirts", "/placeholder-shirt.jpg"),
        ("Footwear", "/placeholder-shoes.jpg"),
        ("Bowtie", "/placeholder-tie.jpg"),
        ("Socks", "/placeholder-product.svg"),
        (None, "/placeholder-product.svg"),
    ],
)
def test_placeholder_for(category, expected):
    assert placeholder_for(category) == expected


def test_product_slug():
    assert product_slug("Men's Emerald Velvet Dinner Jacket") == "mens-emerald-velvet-dinner-jacket"
    assert product_slug("Navy  Classic Suit") == "navy-classic-suit"


def test_from_settings_uses_configured_hosts():
    class _Settings:
        cdn_base_url = "https://img.example.com"
        legacy_image_hosts = ["old.example.com"]

    resolver = CdnResolver.from_settings(_Settings())
    assert resolver.fix_legacy_url("https://old.example.com/kct-products/a.jpg") == "https://img.example.com/a.jpg"
    assert resolver.fix_legacy_url(f"{LEGACY}/kct-prodcuts/a.jpg") == f"{LEGACY}/kct-prodcuts/a.jpg"
