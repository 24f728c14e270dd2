"""
Merchandising hints that ride along with catalog responses.

Smart filters are calendar-driven presets (seasonal colours, wedding and prom
season) plus a couple derived from the current catalog. Search suggestions are
only produced when a query comes back empty.
"""
import re
from collections import Counter
from datetime import date
from typing import Dict, List, Optional, Sequence

from ..models import FilterCriteria, NormalizedProduct, Season, SmartFilterSuggestion, Suggestions

SEASONAL_RECOMMENDATIONS: Dict[Season, Dict[str, object]] = {
    Season.SPRING: {
        "categories": ["Suits", "Shirts", "Casual"],
        "colors": ["Navy", "Light Blue", "Gray", "White"],
        "description": "Light, fresh colors and breathable fabrics perfect for spring weather",
    },
    Season.SUMMER: {
        "categories": ["Shirts", "Casual", "Accessories"],
        "colors": ["White", "Light Blue", "Tan", "Navy"],
        "description": "Lightweight, breathable pieces to stay cool in summer heat",
    },
    Season.FALL: {
        "categories": ["Suits", "Jackets", "Vest & Tie Sets"],
        "colors": ["Burgundy", "Brown", "Dark Green", "Navy"],
        "description": "Rich colors and warmer fabrics for cooler autumn weather",
    },
    Season.WINTER: {
        "categories": ["Suits", "Tuxedos", "Formal"],
        "colors": ["Black", "Navy", "Charcoal", "Burgundy"],
        "description": "Formal pieces and rich colors perfect for winter events",
    },
}

SPELLING_CORRECTIONS = {
    "suite": "suit",
    "suites": "suits",
    "tuxido": "tuxedo",
    "blaizer": "blazer",
    "blaser": "blazer",
    "suspender": "suspenders",
    "bowtie": "bow tie",
    "cumberbund": "cummerbund",
    "grey": "gray",
    "necktie": "tie",
}

RELATED_SEARCHES = [
    (("wedding",), ["tuxedo", "formal suit", "groomsmen", "black tie"]),
    (("prom",), ["tuxedo", "dinner jacket", "bow tie", "formal wear"]),
    (("business", "work"), ["professional suit", "dress shirt", "tie", "two-piece suit"]),
]
GENERIC_SEARCHES = ["suits", "blazers", "dress shirts", "accessories"]


def current_season(today: Optional[date] = None) -> Season:
    month = (today or date.today()).month
    if 3 <= month <= 5:
        return Season.SPRING
    if 6 <= month <= 8:
        return Season.SUMMER
    if 9 <= month <= 11:
        return Season.FALL
    return Season.WINTER


def smart_filter_suggestions(
    products: Sequence[NormalizedProduct] = (), today: Optional[date] = None
) -> List[SmartFilterSuggestion]:
    today = today or date.today()
    season = current_season(today)
    rec = SEASONAL_RECOMMENDATIONS[season]
    month = today.month

    suggestions = [
        SmartFilterSuggestion(
            type="seasonal",
            title=f"Perfect for {season.value.capitalize()}",
            description=rec["description"],
            filters={"colors": rec["colors"], "categories": rec["categories"]},
            priority=1,
        )
    ]

    if month >= 11 or month <= 2:
        suggestions.append(
            SmartFilterSuggestion(
                type="weather",
                title="Formal Event Season",
                description="Perfect for holiday parties, galas, and winter weddings",
                filters={"categories": ["Tuxedos"], "colors": ["Black", "Navy"]},
                priority=2,
            )
        )
    if 4 <= month <= 6:
        suggestions.append(
            SmartFilterSuggestion(
                type="occasion",
                title="Wedding Season Essentials",
                description="Popular choices for spring and summer weddings",
                filters={"categories": ["Suits"], "colors": ["Navy", "Gray", "Light Blue"]},
                priority=2,
            )
        )
    if 3 <= month <= 5:
        suggestions.append(
            SmartFilterSuggestion(
                type="occasion",
                title="Prom Season Favorites",
                description="Stand out styles for prom and formal dances",
                filters={"categories": ["Tuxedos"], "trending": True},
                priority=3,
            )
        )

    if products:
        categories = Counter(p.category for p in products if p.category)
        if categories:
            # ties go to the alphabetically first category
            top, _ = min(categories.items(), key=lambda kv: (-kv[1], kv[0]))
            suggestions.append(
                SmartFilterSuggestion(
                    type="trending",
                    title=f"Trending: {top}",
                    description=f"{top} are popular right now",
                    filters={"categories": [top]},
                    priority=4,
                )
            )
        featured = sum(1 for p in products if "featured" in p.tags)
        if featured:
            suggestions.append(
                SmartFilterSuggestion(
                    type="ai-recommended",
                    title="Staff Picks",
                    description=f"{featured} carefully selected pieces by our style experts",
                    filters={"featured": True},
                    priority=5,
                )
            )

    return sorted(suggestions, key=lambda s: s.priority)


def did_you_mean(term: str) -> str:
    lowered = term.lower()
    for wrong, right in SPELLING_CORRECTIONS.items():
        if wrong in lowered:
            return re.sub(re.escape(wrong), right, term, flags=re.IGNORECASE)
    # no known misspelling: toggle the plural
    return term[:-1] if lowered.endswith("s") else f"{term}s"


def search_suggestions(criteria: FilterCriteria, results: Sequence[NormalizedProduct]) -> Suggestions:
    if results:
        return Suggestions()

    term = (criteria.search_term or "").strip()
    if term:
        lowered = term.lower()
        related = next(
            (searches for keywords, searches in RELATED_SEARCHES if any(k in lowered for k in keywords)),
            GENERIC_SEARCHES,
        )
        return Suggestions(did_you_mean=did_you_mean(term), related_searches=list(related))

    if criteria.categories or criteria.colors:
        return Suggestions(
            related_searches=["all products", "new arrivals", "best sellers"],
            recommended_filters={"categories": None, "colors": None},
        )
    return Suggestions()
