"""
Default catalog loaded at process start.

Nothing is persisted, so every restart begins from exactly this set of
products. Ids are fixed slugs so links to seeded products survive restarts.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import Product

_DEFAULT_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "ai-content-master",
        "title": "AI Content Master",
        "description": "Generate SEO-optimized blog posts, ads, and emails in seconds with tuned writing models.",
        "price": "$29.00",
        "image": "https://images.unsplash.com/photo-1677442136019-21780ecad995?w=800",
        "tags": ["AI", "SaaS", "Content"],
        "rating": 4.2,
        "reviews": 56,
        "featured": True,
        "type": "software",
        "category": "Marketing",
    },
    {
        "id": "ecom-empire",
        "title": "Ecom Empire",
        "description": "Scale an online store with a private community, supplier lists and weekly teardown calls.",
        "price": "$49.00",
        "image": "https://images.unsplash.com/photo-1556742049-0cfed4f7a07d?w=800",
        "tags": ["E-commerce", "Community"],
        "rating": 4.5,
        "reviews": 89,
        "featured": False,
        "type": "community",
        "category": "Business",
    },
    {
        "id": "python-web-bootcamp",
        "title": "Python Web Bootcamp",
        "description": "Build and deploy production APIs step by step, from routing to testing and monitoring.",
        "price": "$149.97",
        "image": "https://images.unsplash.com/photo-1552664730-d307ca884978?w=800",
        "tags": ["Education", "Python", "APIs"],
        "rating": 4.97,
        "reviews": 134,
        "featured": True,
        "type": "course",
        "category": "Education",
    },
    {
        "id": "open-study-group",
        "title": "Open Study Group",
        "description": "A free weekly study circle for people learning to code. Bring questions, leave with answers.",
        "price": "Free",
        "image": "https://images.unsplash.com/photo-1522202176988-66273c2fd55f?w=800",
        "tags": ["Community", "Learning"],
        "rating": 5,
        "reviews": 420,
        "featured": False,
        "type": "community",
    },
]


def default_catalog(now: Optional[datetime] = None) -> List[Product]:
    """Fresh Product instances for the seed catalog, all stamped with `now`."""
    created_at = now or datetime.now(timezone.utc)
    return [Product(created_at=created_at, **fields) for fields in _DEFAULT_PRODUCTS]
