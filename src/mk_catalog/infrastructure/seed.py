"""Deterministic demo catalog.

ensure_seeded() is the explicit start-up step that fills an empty (or
corrupt) products namespace. Reads never seed as a side effect.

Dataset: 4 hand-authored listings (one already sold) followed by
`count` generated ones. The generator uses its own random.Random(seed), so
the same seed always yields the same titles, prices, sellers and sold
flags; timestamps are offsets from `now_ms`.
"""

import json
import logging
import random

from src.mk_catalog.domain.models import Product
from src.mk_catalog.infrastructure.persistence import product_to_document
from src.mk_common.datetime_utils import now_ms as current_ms
from src.mk_common.enums import Category, Condition
from src.mk_common.errors import StorageFullError
from src.mk_store.documents import write_document
from src.mk_store.domain.store import DurableStoreProtocol
from src.mk_store.keys import PRODUCTS_KEY

logger = logging.getLogger(__name__)

LOCATIONS = (
    "Manhattan, New York, NY", "Brooklyn, New York, NY", "Queens, New York, NY",
    "Downtown, Los Angeles, CA", "Hollywood, Los Angeles, CA", "Venice, Los Angeles, CA",
    "Loop, Chicago, IL", "Lincoln Park, Chicago, IL",
    "Downtown, Houston, TX", "Montrose, Houston, TX",
    "Downtown, Phoenix, AZ", "Center City, Philadelphia, PA",
    "Alamo Heights, San Antonio, TX", "La Jolla, San Diego, CA",
    "Uptown, Dallas, TX", "Silicon Valley, San Jose, CA",
    "Downtown, Austin, TX", "Riverside, Jacksonville, FL",
)

ITEMS = (
    "iPhone 13", "Samsung Galaxy S21", "MacBook Air", "Sony Headphones",
    "Leather Sofa", "Dining Table", "Office Chair", "Gaming PC",
    "Mountain Bike", "Road Bike", "Toyota Camry", "Honda Civic",
    "Nike Sneakers", "Vintage Jacket", "Canon Camera", "Guitar",
    "Digital Watch", "Smart TV", "Bookshelf", "Microwave",
    "2BHK Apartment", "Commercial Office Space", "Persian Cat", "Labrador Puppy",
)

ADJECTIVES = (
    "Vintage", "Brand New", "Slightly Used", "Refurbished", "Custom",
    "Rare", "Modern", "Classic", "Premium", "Budget",
)

_SIXTY_DAYS_MS = 60 * 24 * 60 * 60 * 1000


def _picsum_id(n: int) -> str:
    return f"https://picsum.photos/id/{n}/800/600"


def static_products(now_ms: int) -> list[Product]:
    return [
        Product(
            id="1",
            title="Vintage Film Camera",
            price=12000,
            description=(
                "A beautiful 35mm film camera in excellent condition. tested and working. "
                "Comes with a 50mm lens."
            ),
            category=Category.ELECTRONICS.value,
            condition=Condition.GOOD.value,
            image=_picsum_id(250),
            images=[_picsum_id(250), _picsum_id(251), _picsum_id(252)],
            seller_id="demo_user",
            seller_name="John Doe",
            created_at=now_ms,
            location="Manhattan, New York, NY",
        ),
        Product(
            id="2",
            title="Modern Lounge Chair",
            price=6500,
            description=(
                "Mid-century modern style chair. distinctive wooden legs and grey fabric. "
                "Barely used."
            ),
            category=Category.FURNITURE.value,
            condition=Condition.LIKE_NEW.value,
            image=_picsum_id(1060),
            images=[_picsum_id(1060), _picsum_id(1062)],
            seller_id="jane_smith",
            seller_name="Jane Smith",
            created_at=now_ms - 100_000,
            location="San Francisco, CA",
        ),
        Product(
            id="3",
            title="Mountain Bike",
            price=15000,
            description="Reliable mountain bike for trails. 21 speed, disc brakes. Recently serviced.",
            category=Category.BIKES.value,
            condition=Condition.GOOD.value,
            image=_picsum_id(146),
            images=[_picsum_id(146)],
            seller_id="mike_b",
            seller_name="Mike B",
            created_at=now_ms - 200_000,
            location="Downtown, Denver, CO",
        ),
        Product(
            id="4",
            title="Leather Jacket",
            price=4000,
            description="Genuine leather jacket, vintage look. Size M. Very warm and stylish.",
            category=Category.FASHION.value,
            condition=Condition.GOOD.value,
            image=_picsum_id(1005),
            images=[_picsum_id(1005), _picsum_id(1006)],
            seller_id="sara_k",
            seller_name="Sara K",
            created_at=now_ms - 300_000,
            location="Austin, TX",
            status="sold",
        ),
    ]


def generate_demo_products(count: int, seed: int, now_ms: int) -> list[Product]:
    rng = random.Random(seed)
    categories = [c.value for c in Category]
    conditions = [c.value for c in Condition]
    products: list[Product] = []
    for i in range(count):
        item = rng.choice(ITEMS)
        adj = rng.choice(ADJECTIVES)
        category = rng.choice(categories)
        condition = rng.choice(conditions)
        location = rng.choice(LOCATIONS)
        age_ms = rng.randrange(_SIXTY_DAYS_MS)
        is_sold = rng.random() > 0.9
        image = f"https://picsum.photos/seed/{i}/800/600"
        products.append(
            Product(
                id=f"dummy_{i}",
                title=f"{adj} {item}",
                price=rng.randrange(100_000) + 500,
                description=(
                    f"Great deal on this {adj.lower()} {item}. Only used for a short time. "
                    f"Located in {location}. Contact me for more details!"
                ),
                category=category,
                condition=condition,
                image=image,
                images=[image, f"https://picsum.photos/seed/{i}extra/800/600"],
                seller_id=f"seller_{rng.randrange(50)}",
                seller_name=f"User_{rng.randrange(50)}",
                created_at=now_ms - age_ms,
                location=location,
                status="sold" if is_sold else "active",
            )
        )
    return products


def demo_catalog(count: int, seed: int, now_ms: int) -> list[Product]:
    return [*static_products(now_ms), *generate_demo_products(count, seed, now_ms)]


async def ensure_seeded(
    store: DurableStoreProtocol,
    *,
    count: int,
    seed: int,
    now_ms: int | None = None,
) -> bool:
    """Write the demo catalog unless a valid products array already exists.

    Returns True when it wrote. Idempotent: a second call is a no-op.
    """
    raw = await store.get(PRODUCTS_KEY)
    if raw is not None:
        try:
            if isinstance(json.loads(raw), list):
                return False
        except ValueError:
            pass
        logger.warning("Products namespace is corrupt, re-seeding demo catalog")

    products = demo_catalog(count, seed, current_ms() if now_ms is None else now_ms)
    try:
        await write_document(store, PRODUCTS_KEY, [product_to_document(p) for p in products])
    except StorageFullError:
        logger.warning("Storage quota exceeded, demo catalog not persisted")
        return False
    logger.info("Seeded demo catalog with %d listings", len(products))
    return True
