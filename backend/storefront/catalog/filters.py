"""
Predicate filters over normalized products.

Each active field of a FilterCriteria contributes one predicate and a product
must satisfy all of them. Category matching is a case-insensitive substring
test because the two sources use different taxonomies ("Suits" vs
"wedding-suits"); it lets the occasional unrelated category through.
"""
from typing import Callable, Iterable, List

from ..models import FilterCriteria, NormalizedProduct

Predicate = Callable[[NormalizedProduct, FilterCriteria], bool]


def match_category(product: NormalizedProduct, criteria: FilterCriteria) -> bool:
    category = product.category.lower()
    if not category:
        return False
    return any(c.strip().lower() in category for c in criteria.categories if c.strip())


def match_min_price(product: NormalizedProduct, criteria: FilterCriteria) -> bool:
    return product.price >= criteria.min_price


def match_max_price(product: NormalizedProduct, criteria: FilterCriteria) -> bool:
    return product.price <= criteria.max_price


def match_color(product: NormalizedProduct, criteria: FilterCriteria) -> bool:
    wanted = {c.strip().lower() for c in criteria.colors}
    return any(c.lower() in wanted for c in product.colors)


def match_search_term(product: NormalizedProduct, criteria: FilterCriteria) -> bool:
    term = criteria.search_term.strip().lower()
    if term in product.name.lower() or term in product.description.lower():
        return True
    return any(term in tag.lower() for tag in product.tags)


def match_in_stock(product: NormalizedProduct, criteria: FilterCriteria) -> bool:
    return product.in_stock


def match_trending(product: NormalizedProduct, criteria: FilterCriteria) -> bool:
    return "trending" in product.tags


def match_season(product: NormalizedProduct, criteria: FilterCriteria) -> bool:
    return product.season == criteria.seasonal


def active_predicates(criteria: FilterCriteria) -> List[Predicate]:
    predicates = []
    if any(c.strip() for c in criteria.categories):
        predicates.append(match_category)
    if criteria.min_price is not None:
        predicates.append(match_min_price)
    if criteria.max_price is not None:
        predicates.append(match_max_price)
    if any(c.strip() for c in criteria.colors):
        predicates.append(match_color)
    if criteria.search_term and criteria.search_term.strip():
        predicates.append(match_search_term)
    if criteria.in_stock_only:
        predicates.append(match_in_stock)
    if criteria.trending_only:
        predicates.append(match_trending)
    if criteria.seasonal is not None:
        predicates.append(match_season)
    return predicates


def matches(product: NormalizedProduct, criteria: FilterCriteria) -> bool:
    return all(predicate(product, criteria) for predicate in active_predicates(criteria))


def filter_products(products: Iterable[NormalizedProduct], criteria: FilterCriteria) -> List[NormalizedProduct]:
    predicates = active_predicates(criteria)
    if not predicates:
        return list(products)
    return [p for p in products if all(predicate(p, criteria) for predicate in predicates)]
