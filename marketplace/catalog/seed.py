"""Demo catalog stored on first start."""
import secrets
from typing import List

from marketplace.models import SYSTEM_SELLER_ID, Product

PLACEHOLDER_IMAGE_URL = "https://picsum.photos/seed/{seed}/600/400"

DEMO_PRODUCTS = [
    {
        "title": "Pro Photo Presets Pack",
        "price": 9.99,
        "desc": "10 professional Lightroom presets",
        "image": PLACEHOLDER_IMAGE_URL.format(seed="preset"),
    },
    {
        "title": "Minimal Website Template (HTML)",
        "price": 14.00,
        "desc": "A clean responsive HTML template",
        "image": PLACEHOLDER_IMAGE_URL.format(seed="template"),
    },
    {
        "title": "E-book: Productivity Hacks",
        "price": 4.50,
        "desc": "Short e-book on boosting focus",
        "image": PLACEHOLDER_IMAGE_URL.format(seed="ebook"),
    },
]


def placeholder_image() -> str:
    return PLACEHOLDER_IMAGE_URL.format(seed=secrets.token_hex(6))


def demo_products() -> List[Product]:
    """Fresh Product records for the demo catalog, owned by the system seller."""
    return [Product(seller_id=SYSTEM_SELLER_ID, **data) for data in DEMO_PRODUCTS]
