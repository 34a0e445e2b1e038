# durable snapshot and session flags on top of the key-value medium
from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import List, Optional, TypeVar

from pydantic import StrictBool, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from db import database, seed
from db.models import (
    Account,
    CarouselSlide,
    Order,
    Product,
    Session,
    SiteConfiguration,
)
from utils import config
from utils.logger import get_logger

_logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class Snapshot:
    """Everything that is persisted as one unit."""

    products: List[Product]
    accounts: List[Account]
    orders: List[Order]
    configuration: SiteConfiguration
    carousel: List[CarouselSlide]

    @classmethod
    def seeded(cls) -> Snapshot:
        return cls(
            products=seed.seed_products(),
            accounts=seed.seed_accounts(),
            orders=seed.seed_orders(),
            configuration=seed.seed_configuration(),
            carousel=seed.seed_carousel(),
        )


SNAPSHOT_ADAPTER = TypeAdapter(Snapshot)
_FLAG_ADAPTER = TypeAdapter(StrictBool)
_ACCOUNT_ADAPTER = TypeAdapter(Optional[Account])

_WRITE_ERRORS = (sqlite3.Error, OSError, PydanticSerializationError)


# ---------------------------
# Durable snapshot
# ---------------------------


async def load_snapshot() -> Snapshot:
    """
    Return the last saved snapshot.

    Falls back to seed data when nothing is stored, when the stored payload
    does not validate, or when the storage medium cannot be read.
    """
    try:
        raw = await database.get_item(config.SNAPSHOT_KEY)
    except (sqlite3.Error, OSError):
        _logger.exception("Could not read stored data, using seed data.")
        return Snapshot.seeded()

    if raw is None:
        _logger.info("No stored data found, using seed data.")
        return Snapshot.seeded()

    try:
        return SNAPSHOT_ADAPTER.validate_json(raw)
    except ValidationError as e:
        _logger.warning(
            f"Stored data is corrupt ({e.error_count()} error(s)), using seed data."
        )
        return Snapshot.seeded()


async def save_snapshot(snapshot: Snapshot) -> bool:
    """Rewrite the whole snapshot. Returns False if it could not be saved."""
    try:
        payload = SNAPSHOT_ADAPTER.dump_json(snapshot).decode()
        await database.set_item(config.SNAPSHOT_KEY, payload)
    except _WRITE_ERRORS:
        _logger.exception("Failed to save data to storage.")
        return False
    return True


# ---------------------------
# Session flags
# ---------------------------


async def _read_value(key: str, adapter: TypeAdapter[T], default: T) -> T:
    try:
        raw = await database.get_item(key)
        if raw is None:
            return default
        return adapter.validate_json(raw)
    except (sqlite3.Error, OSError, ValidationError) as e:
        _logger.warning(f"Error reading session key {key!r}: {e!r}")
        return default


async def load_session() -> Session:
    """
    Read the three session flags independently, each with its own default.
    A combination that is not a valid login state reads as logged out.
    """
    session = Session(
        is_logged_in=await _read_value(config.SESSION_LOGGED_IN_KEY, _FLAG_ADAPTER, False),
        is_admin=await _read_value(config.SESSION_ADMIN_KEY, _FLAG_ADAPTER, False),
        current_account=await _read_value(
            config.SESSION_ACCOUNT_KEY, _ACCOUNT_ADAPTER, None
        ),
    )
    return session.normalized()


async def save_session(session: Session) -> bool:
    try:
        await database.set_item(
            config.SESSION_LOGGED_IN_KEY,
            _FLAG_ADAPTER.dump_json(session.is_logged_in).decode(),
        )
        await database.set_item(
            config.SESSION_ADMIN_KEY, _FLAG_ADAPTER.dump_json(session.is_admin).decode()
        )
        await database.set_item(
            config.SESSION_ACCOUNT_KEY,
            _ACCOUNT_ADAPTER.dump_json(session.current_account).decode(),
        )
    except _WRITE_ERRORS:
        _logger.exception("Failed to save session to storage.")
        return False
    return True
