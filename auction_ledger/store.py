import json
import logging
from typing import Optional, Protocol

from sqlalchemy import Column, String, Text, create_engine, select
from sqlalchemy.orm import Session, declarative_base

from .auction import Auction

logger = logging.getLogger(__name__)

MEMORY_URL = "memory://"

Base = declarative_base()


class StoreError(Exception):
    """Raised when the store cannot hold a record."""


class AuctionRecord(Base):
    __tablename__ = "auctions"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)


def encode_auction(auction: Auction) -> str:
    return json.dumps(auction.to_dict(), separators=(",", ":"))


def decode_auction(value: str) -> Auction:
    return Auction.from_dict(json.loads(value))


class AuctionStore(Protocol):
    """Item id -> Auction, upsert semantics, values in key order."""

    def get(self, key: str) -> Optional[Auction]: ...

    def insert(self, key: str, auction: Auction) -> Optional[Auction]: ...

    def values(self) -> list[Auction]: ...

    def close(self) -> None: ...


class _BaseStore:
    """Capacity limits shared by both stores. None means unbounded."""

    max_key_size: Optional[int]
    max_value_size: Optional[int]

    def __init__(
        self, max_key_size: Optional[int] = None, max_value_size: Optional[int] = None
    ) -> None:
        self.max_key_size = max_key_size or None
        self.max_value_size = max_value_size or None

    def close(self) -> None:
        pass

    def _encode(self, key: str, auction: Auction) -> str:
        value = encode_auction(auction)
        if self.max_key_size and len(key.encode()) > self.max_key_size:
            raise StoreError(f"Key exceeds {self.max_key_size} bytes.")
        if self.max_value_size and len(value.encode()) > self.max_value_size:
            raise StoreError(f"Value exceeds {self.max_value_size} bytes.")
        return value


class MemoryStore(_BaseStore):
    """Volatile store. Records are kept encoded, so callers never share state."""

    def __init__(self, **limits) -> None:
        super().__init__(**limits)
        self._records: dict[str, str] = {}

    def get(self, key: str) -> Optional[Auction]:
        if (value := self._records.get(key)) is None:
            return None
        return decode_auction(value)

    def insert(self, key: str, auction: Auction) -> Optional[Auction]:
        value = self._encode(key, auction)
        previous = self.get(key)
        self._records[key] = value
        return previous

    def values(self) -> list[Auction]:
        return [decode_auction(self._records[k]) for k in sorted(self._records)]


class SqlStore(_BaseStore):
    """Durable store on a single SQLAlchemy table."""

    def __init__(self, url: str, **limits) -> None:
        super().__init__(**limits)
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.engine = create_engine(url, connect_args=connect_args)
        Base.metadata.create_all(self.engine)

    def get(self, key: str) -> Optional[Auction]:
        with Session(self.engine) as session:
            record = session.get(AuctionRecord, key)
            return decode_auction(record.value) if record else None

    def insert(self, key: str, auction: Auction) -> Optional[Auction]:
        value = self._encode(key, auction)
        with Session(self.engine) as session, session.begin():
            if record := session.get(AuctionRecord, key):
                previous = decode_auction(record.value)
                record.value = value
            else:
                previous = None
                session.add(AuctionRecord(key=key, value=value))
        return previous

    def values(self) -> list[Auction]:
        with Session(self.engine) as session:
            records = session.scalars(select(AuctionRecord).order_by(AuctionRecord.key))
            return [decode_auction(r.value) for r in records]

    def close(self) -> None:
        self.engine.dispose()


def create_store(url: str, **limits) -> AuctionStore:
    """Open the store named by url; "memory://" gives a volatile one."""
    if url == MEMORY_URL:
        logger.info("Opened in-memory auction store")
        return MemoryStore(**limits)
    store = SqlStore(url, **limits)
    logger.info("Opened auction store at %s", store.engine.url)
    return store
