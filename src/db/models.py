# provide dataclass models
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


class OrderStatus(str, Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    DUPLICATE_ACCOUNT = "duplicate_account"
    MISSING_CREDENTIALS = "missing_credentials"
    INVALID_CREDENTIALS = "invalid_credentials"
    ADMIN_FLOOR = "admin_floor"


@dataclass(frozen=True)
class Result:
    """
    Outcome of an operation that can fail in a way the caller should show.

    Failures carry a user-facing message and an ErrorKind; successes may carry
    a value (e.g. the created entity).
    """

    success: bool
    message: str = ""
    error: Optional[ErrorKind] = None
    value: Any = None

    @classmethod
    def ok(cls, value: Any = None, message: str = "") -> Result:
        return cls(success=True, message=message, value=value)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> Result:
        return cls(success=False, message=message, error=error)


@dataclass(frozen=True)
class ProductVariant:
    id: int
    size: str
    cloth_material: str
    price: float


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    category: str
    price: float
    material: str = ""
    rating: float = 0.0
    image_url: str = ""
    short_description: str = ""
    description: str = ""
    is_featured: bool = False
    variants: Tuple[ProductVariant, ...] = ()


@dataclass(frozen=True)
class ShippingAddress:
    street: str
    city: str
    region: str
    postal_code: str


@dataclass(frozen=True)
class Account:
    id: int
    name: str
    email: str
    password: str  # stored in clear text, see DESIGN.md
    addresses: Tuple[ShippingAddress, ...] = ()


@dataclass(frozen=True)
class AdministratorAccount:
    id: int
    username: str
    password: str


@dataclass(frozen=True)
class CartLineItem:
    product_id: int
    variant_id: int
    name: str
    image_url: str
    quantity: int
    variant_description: str
    price: float  # unit price when added to the cart


@dataclass(frozen=True)
class Order:
    id: str
    user_id: int
    date: str  # ISO calendar date
    items: Tuple[CartLineItem, ...]
    total: float
    status: OrderStatus
    shipping_address: ShippingAddress


@dataclass(frozen=True)
class SiteConfiguration:
    logo_url: str
    favicon_url: str
    upi_id: str


@dataclass(frozen=True)
class CarouselSlide:
    id: int
    image_url: str
    headline: str


@dataclass(frozen=True)
class LoginCredentials:
    email: str = ""
    password: str = ""
    admin: bool = False


@dataclass(frozen=True)
class Session:
    """
    Per-device identity flags.

    An administrator session is logged in and has no customer account;
    a customer session is logged in and has one. Anything else is logged out.
    """

    is_logged_in: bool = False
    is_admin: bool = False
    current_account: Optional[Account] = None

    def normalized(self) -> Session:
        if self.is_admin:
            consistent = self.is_logged_in and self.current_account is None
        else:
            consistent = self.is_logged_in == (self.current_account is not None)
        return self if consistent else Session()
