from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, List, Optional

from pydantic import TypeAdapter, ValidationError

from db import seed, storage
from db.cart import Cart
from db.models import (
    Account,
    AdministratorAccount,
    CarouselSlide,
    CartLineItem,
    ErrorKind,
    LoginCredentials,
    Order,
    OrderStatus,
    Product,
    ProductVariant,
    Result,
    Session,
    ShippingAddress,
)
from db.storage import Snapshot
from utils import config
from utils.logger import get_logger

_logger = get_logger(__name__)

_PRODUCT_ADAPTER = TypeAdapter(Product)
_VARIANTS_ADAPTER = TypeAdapter(List[ProductVariant])

Notifier = Callable[[str, str], None]

RESET_WARNING = (
    "Are you sure you want to reset all application data (products, users, orders)? "
    "This action cannot be undone."
)

_BLANK_SETTING_MESSAGES = {
    "logo_url": "Logo URL cannot be empty.",
    "favicon_url": "Favicon URL cannot be empty.",
    "upi_id": "UPI ID cannot be empty.",
}


def log_notify(message: str, severity: str = "information") -> None:
    """Default notifier used when no UI is attached."""
    if severity in ("warning", "error"):
        _logger.warning(message)
    else:
        _logger.info(message)


@dataclass
class AppState:
    """
    Centralized application state shared by every page.

    Fields:
      - snapshot: products, accounts, orders, configuration and carousel;
        saved as one unit by persist()
      - session: login flags, saved separately by persist_session()
      - administrators: admin accounts, kept in memory only
      - cart: the active cart, never saved
      - clock: source of ids and order dates
      - notify: blocking user notification, called as notify(message, severity)
    """

    snapshot: Snapshot
    session: Session = field(default_factory=Session)
    administrators: List[AdministratorAccount] = field(
        default_factory=seed.seed_administrators
    )
    cart: Cart = field(default_factory=Cart)
    clock: Callable[[], datetime] = datetime.now
    notify: Notifier = log_notify
    _last_id: int = field(default=0, repr=False)
    _write_lock: asyncio.Lock = field(
        default_factory=asyncio.Lock, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        ids = [p.id for p in self.snapshot.products]
        ids += [v.id for p in self.snapshot.products for v in p.variants]
        ids += [a.id for a in self.snapshot.accounts]
        ids += [s.id for s in self.snapshot.carousel]
        ids += [a.id for a in self.administrators]
        for order in self.snapshot.orders:
            suffix = order.id[len(config.ORDER_ID_PREFIX) :]
            if suffix.isdigit():
                ids.append(int(suffix))
        self._last_id = max([self._last_id, *ids])

    @classmethod
    async def open(
        cls,
        clock: Optional[Callable[[], datetime]] = None,
        notify: Optional[Notifier] = None,
    ) -> AppState:
        """Load (or seed) durable state and session flags, then return the state."""
        snapshot = await storage.load_snapshot()
        session = await storage.load_session()
        return cls(
            snapshot=snapshot,
            session=session,
            clock=clock or datetime.now,
            notify=notify or log_notify,
        )

    def _new_id(self) -> int:
        """Millisecond timestamp, bumped when needed so ids never repeat."""
        now_ms = int(self.clock().timestamp() * 1000)
        self._last_id = max(now_ms, self._last_id + 1)
        return self._last_id

    async def persist(self) -> bool:
        """Save the snapshot as it is once this write gets its turn."""
        async with self._write_lock:
            return await storage.save_snapshot(self.snapshot)

    async def persist_session(self) -> bool:
        async with self._write_lock:
            return await storage.save_session(self.session)

    # ---------------------------
    # Read accessors
    # ---------------------------

    @property
    def products(self) -> List[Product]:
        return list(self.snapshot.products)

    @property
    def accounts(self) -> List[Account]:
        return list(self.snapshot.accounts)

    @property
    def orders(self) -> List[Order]:
        return list(self.snapshot.orders)

    @property
    def configuration(self):
        return self.snapshot.configuration

    @property
    def carousel(self) -> List[CarouselSlide]:
        return list(self.snapshot.carousel)

    @property
    def is_logged_in(self) -> bool:
        return self.session.is_logged_in

    @property
    def is_admin(self) -> bool:
        return self.session.is_admin

    @property
    def current_account(self) -> Optional[Account]:
        return self.session.current_account

    # ---------------------------
    # Catalog
    # ---------------------------

    async def add_product(self, data: dict) -> Product:
        """Create a product from everything but its id; newest products come first."""
        product = _PRODUCT_ADAPTER.validate_python({**data, "id": self._new_id()})
        self.snapshot.products = [product, *self.snapshot.products]
        await self.persist()
        return product

    async def update_product(self, product: Product) -> None:
        self.snapshot.products = [
            product if p.id == product.id else p for p in self.snapshot.products
        ]
        await self.persist()

    async def remove_product(self, product_id: int) -> None:
        # past orders keep their own copy of the line items
        self.snapshot.products = [
            p for p in self.snapshot.products if p.id != product_id
        ]
        await self.persist()

    def get_product(self, product_id: int) -> Optional[Product]:
        return next((p for p in self.snapshot.products if p.id == product_id), None)

    def featured_products(self) -> List[Product]:
        return [p for p in self.snapshot.products if p.is_featured]

    async def update_product_variants(self, product_id: int, raw: str) -> Result:
        """Replace a product's variants from the admin's raw JSON input."""
        product = self.get_product(product_id)
        if product is None:
            return Result.fail(ErrorKind.VALIDATION, "Product not found.")
        try:
            variants = _VARIANTS_ADAPTER.validate_json(raw)
        except ValidationError as e:
            errors = e.errors()
            if any(err["type"] == "json_invalid" for err in errors):
                message = "Invalid JSON format for variants."
            elif any(err["type"] == "list_type" and not err["loc"] for err in errors):
                message = "Variants must be a valid JSON array."
            else:
                message = "Each variant needs id, size, cloth_material and price."
            return Result.fail(ErrorKind.VALIDATION, message)
        updated = replace(product, variants=tuple(variants))
        await self.update_product(updated)
        return Result.ok(updated)

    # ---------------------------
    # Identity
    # ---------------------------

    def _email_taken(self, email: str) -> bool:
        email = email.lower()
        return any(a.email.lower() == email for a in self.snapshot.accounts)

    async def _create_account(self, name: str, email: str, password: str) -> Result:
        if not name.strip() or not email.strip() or not password:
            return Result.fail(ErrorKind.VALIDATION, "Make sure all inputs are filled.")
        if self._email_taken(email):
            return Result.fail(
                ErrorKind.DUPLICATE_ACCOUNT,
                "An account with this email already exists.",
            )
        account = Account(id=self._new_id(), name=name, email=email, password=password)
        self.snapshot.accounts = [*self.snapshot.accounts, account]
        await self.persist()
        return Result.ok(account)

    async def _set_session(self, session: Session) -> None:
        self.session = session
        await self.persist_session()

    async def signup(self, name: str, email: str, password: str) -> Result:
        """Create a customer account and log it in."""
        result = await self._create_account(name, email, password)
        if result.success:
            await self._set_session(
                Session(is_logged_in=True, is_admin=False, current_account=result.value)
            )
        return result

    async def add_account(self, name: str, email: str, password: str) -> Result:
        """Create a customer account from the admin side; the session is untouched."""
        return await self._create_account(name, email, password)

    async def login(self, credentials: LoginCredentials) -> Result:
        if credentials.admin:
            # the administrator list is not consulted here, see DESIGN.md
            await self._set_session(Session(is_logged_in=True, is_admin=True))
            return Result.ok()

        if not credentials.email or not credentials.password:
            return Result.fail(
                ErrorKind.MISSING_CREDENTIALS, "Email and password are required."
            )
        email = credentials.email.lower()
        account = next(
            (
                a
                for a in self.snapshot.accounts
                if a.email.lower() == email and a.password == credentials.password
            ),
            None,
        )
        if account is None:
            return Result.fail(
                ErrorKind.INVALID_CREDENTIALS, "Invalid email or password."
            )
        await self._set_session(
            Session(is_logged_in=True, is_admin=False, current_account=account)
        )
        return Result.ok(account)

    async def logout(self) -> None:
        await self._set_session(Session())

    async def remove_account(self, account_id: int) -> None:
        """Remove an account together with every order it placed."""
        before = len(self.snapshot.orders)
        self.snapshot.orders = [
            o for o in self.snapshot.orders if o.user_id != account_id
        ]
        self.snapshot.accounts = [
            a for a in self.snapshot.accounts if a.id != account_id
        ]
        _logger.info(
            f"Removed account {account_id} and {before - len(self.snapshot.orders)} order(s)."
        )
        await self.persist()
        if self.current_account and self.current_account.id == account_id:
            await self.logout()

    def add_administrator(self, username: str, password: str) -> AdministratorAccount:
        admin = AdministratorAccount(
            id=self._new_id(), username=username, password=password
        )
        self.administrators = [*self.administrators, admin]
        return admin

    def remove_administrator(self, admin_id: int) -> Result:
        if len(self.administrators) <= 1:
            message = "You cannot remove the last admin user."
            self.notify(message, "warning")
            return Result.fail(ErrorKind.ADMIN_FLOOR, message)
        self.administrators = [a for a in self.administrators if a.id != admin_id]
        return Result.ok()

    # ---------------------------
    # Cart
    # ---------------------------

    def add_to_cart(
        self, product: Product, variant: ProductVariant, quantity: int
    ) -> None:
        self.cart.add(product, variant, quantity)

    def remove_from_cart(self, variant_id: int) -> None:
        self.cart.remove(variant_id)

    def update_quantity(self, variant_id: int, quantity: int) -> None:
        self.cart.update_quantity(variant_id, quantity)

    def get_cart_total(self) -> float:
        return self.cart.total()

    def clear_cart(self) -> None:
        self.cart.clear()

    @property
    def cart_items(self) -> List[CartLineItem]:
        return list(self.cart.items)

    # ---------------------------
    # Orders
    # ---------------------------

    async def place_order(self, shipping_address: ShippingAddress) -> Optional[str]:
        """
        Turn the cart into an order for the logged-in customer.
        Returns the new order id, or None if the cart is empty or no customer
        is logged in.
        """
        account = self.current_account
        if not self.cart or not self.is_logged_in or self.is_admin or account is None:
            return None

        order = Order(
            id=f"{config.ORDER_ID_PREFIX}{self._new_id()}",
            user_id=account.id,
            date=self.clock().date().isoformat(),
            items=self.cart.items,
            total=self.cart.total(),
            status=OrderStatus.PROCESSING,
            shipping_address=shipping_address,
        )
        self.snapshot.orders = [order, *self.snapshot.orders]
        self.cart.clear()
        _logger.info(f"Order {order.id} placed by account {account.id}.")
        await self.persist()
        return order.id

    async def update_order_status(self, order_id: str, status) -> bool:
        """Set the status of one order. Any status may follow any other."""
        try:
            status = OrderStatus(status)
        except ValueError:
            return False
        if self.get_order(order_id) is None:
            return False
        self.snapshot.orders = [
            replace(o, status=status) if o.id == order_id else o
            for o in self.snapshot.orders
        ]
        await self.persist()
        return True

    def get_order(self, order_id: str) -> Optional[Order]:
        return next((o for o in self.snapshot.orders if o.id == order_id), None)

    def orders_for_account(self, account_id: int) -> List[Order]:
        """A customer's past orders, newest first."""
        return [o for o in self.snapshot.orders if o.user_id == account_id]

    # ---------------------------
    # Site configuration & carousel
    # ---------------------------

    async def update_site_settings(self, **changes: str) -> Result:
        """Change only the given settings; the others keep their values."""
        cleaned = {}
        for name, value in changes.items():
            value = (value or "").strip()
            if not value:
                return Result.fail(
                    ErrorKind.VALIDATION,
                    _BLANK_SETTING_MESSAGES.get(name, f"{name} cannot be empty."),
                )
            cleaned[name] = value
        self.snapshot.configuration = replace(self.snapshot.configuration, **cleaned)
        await self.persist()
        return Result.ok(self.snapshot.configuration)

    async def add_carousel_slide(self, image_url: str, headline: str) -> Result:
        if not image_url or not headline:
            return Result.fail(
                ErrorKind.VALIDATION, "Image URL and Headline are required."
            )
        slide = CarouselSlide(id=self._new_id(), image_url=image_url, headline=headline)
        self.snapshot.carousel = [*self.snapshot.carousel, slide]
        await self.persist()
        return Result.ok(slide)

    async def update_carousel_slide(self, slide: CarouselSlide) -> Result:
        if not slide.image_url or not slide.headline:
            return Result.fail(
                ErrorKind.VALIDATION, "Image URL and Headline are required."
            )
        self.snapshot.carousel = [
            slide if s.id == slide.id else s for s in self.snapshot.carousel
        ]
        await self.persist()
        return Result.ok(slide)

    async def remove_carousel_slide(self, slide_id: int) -> None:
        self.snapshot.carousel = [s for s in self.snapshot.carousel if s.id != slide_id]
        await self.persist()

    # ---------------------------
    # Reset
    # ---------------------------

    async def reset_data(self, confirm: Callable[[str], bool]) -> bool:
        """
        Put every durable collection back to seed data, empty the cart and log out.
        Nothing happens unless confirm(RESET_WARNING) returns True.
        """
        if not confirm(RESET_WARNING):
            return False
        self.snapshot = Snapshot.seeded()
        self.cart.clear()
        await self.persist()
        await self.logout()
        _logger.info("Application data reset to seed values.")
        self.notify("Application data has been reset successfully.", "information")
        return True
