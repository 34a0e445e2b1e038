# packaged defaults used on first run, on corrupt storage, and on reset
from typing import List

from db.models import (
    Account,
    AdministratorAccount,
    CarouselSlide,
    Order,
    Product,
    ProductVariant,
    SiteConfiguration,
)

DEFAULT_ADMIN_USERNAME = "Anvar"
DEFAULT_ADMIN_PASSWORD = "Anvar@26"


def seed_products() -> List[Product]:
    return [
        Product(
            id=1,
            name="Cotton Pillow",
            category="Pillows",
            price=500,
            material="Cotton",
            rating=4.5,
            image_url="https://picsum.photos/seed/pillow/600/400",
            short_description="Soft hand-stuffed cotton pillow.",
            description="A breathable pillow filled with natural cotton, stitched by hand.",
            is_featured=True,
            variants=(
                ProductVariant(id=101, size="Standard", cloth_material="Cotton", price=500),
                ProductVariant(id=102, size="King", cloth_material="Cotton", price=650),
            ),
        ),
        Product(
            id=2,
            name="Orthopedic Mattress",
            category="Mattresses",
            price=12000,
            material="Coir & Foam",
            rating=4.8,
            image_url="https://picsum.photos/seed/mattress/600/400",
            short_description="Firm support for a healthy back.",
            description="Layered coir and high-density foam mattress for firm, even support.",
            is_featured=True,
            variants=(
                ProductVariant(id=201, size="Single", cloth_material="Quilted", price=12000),
                ProductVariant(id=202, size="Queen", cloth_material="Quilted", price=18000),
                ProductVariant(id=203, size="King", cloth_material="Quilted", price=21000),
            ),
        ),
        Product(
            id=3,
            name="Quilted Bedsheet Set",
            category="Bedsheets",
            price=1500,
            material="Cotton Blend",
            rating=4.2,
            image_url="https://picsum.photos/seed/bedsheet/600/400",
            short_description="Bedsheet with two matching pillow covers.",
            description="A fade-resistant cotton blend set with one bedsheet and two covers.",
            is_featured=False,
            variants=(
                ProductVariant(id=301, size="Double", cloth_material="Cotton Blend", price=1500),
                ProductVariant(id=302, size="King", cloth_material="Satin", price=2200),
            ),
        ),
        Product(
            id=4,
            name="Wool Blanket",
            category="Blankets",
            price=2500,
            material="Wool",
            rating=4.6,
            image_url="https://picsum.photos/seed/blanket/600/400",
            short_description="Warm blanket for cold nights.",
            description="Dense woven wool blanket with stitched edges.",
            is_featured=False,
            variants=(
                ProductVariant(id=401, size="Single", cloth_material="Wool", price=2500),
            ),
        ),
    ]


def seed_accounts() -> List[Account]:
    return [
        Account(id=1001, name="Alice", email="alice@example.com", password="alice123"),
        Account(id=1002, name="Bob", email="bob@example.com", password="bob123"),
    ]


def seed_orders() -> List[Order]:
    return []


def seed_carousel() -> List[CarouselSlide]:
    return [
        CarouselSlide(
            id=1,
            image_url="https://picsum.photos/seed/slide1/1200/400",
            headline="Sleep Better Tonight",
        ),
        CarouselSlide(
            id=2,
            image_url="https://picsum.photos/seed/slide2/1200/400",
            headline="New Mattress Collection",
        ),
        CarouselSlide(
            id=3,
            image_url="https://picsum.photos/seed/slide3/1200/400",
            headline="Festive Bedding Offers",
        ),
    ]


def seed_configuration() -> SiteConfiguration:
    return SiteConfiguration(
        logo_url="https://picsum.photos/seed/logo/40/40",
        favicon_url="https://picsum.photos/seed/favicon/32/32",
        upi_id="storefront@okaxis",
    )


def seed_administrators() -> List[AdministratorAccount]:
    return [
        AdministratorAccount(
            id=1, username=DEFAULT_ADMIN_USERNAME, password=DEFAULT_ADMIN_PASSWORD
        )
    ]
