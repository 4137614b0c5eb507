import asyncio
import functools
import logging
import time
import uuid
from typing import Callable, Optional

from .auction import Auction
from .errors import AuctionError, InvalidPayload, NotFound, StorageFailure
from .result import Err, Ok, Result
from .store import AuctionStore
from .types import AuctionItem, Bid
from .utils import convert_date_to_timestamp, is_non_empty_str, is_positive_int

logger = logging.getLogger(__name__)


def new_item_id() -> str:
    return str(uuid.uuid4())


def operation(action: str):
    """Turn raised failures into Err values at the service boundary."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Result:
            try:
                return Ok(await func(*args, **kwargs))
            except AuctionError as e:
                logger.info("Failed to %s: %s (%s)", action, e.kind, e.message)
                return Err(e)
            except Exception as e:
                logger.exception("Failed to %s", action)
                return Err(StorageFailure(f"Failed to {action}.", detail=str(e)))

        return wrapper

    return decorator


class AuctionHouse:
    store: AuctionStore
    clock: Callable[[], float]
    """Seconds since epoch."""
    new_id: Callable[[], str]

    item_locks: dict[str, asyncio.Lock]

    def __init__(
        self,
        store: AuctionStore,
        clock: Callable[[], float] = time.time,
        new_id: Callable[[], str] = new_item_id,
    ) -> None:
        self.store = store
        self.clock = clock
        self.new_id = new_id

        self.item_locks = {}

    # ============ #
    # update logic #
    # ============ #

    @operation("list auction")
    async def list_item(
        self, title: str, description: str, min_bid: int, end_date: str
    ) -> Auction:
        """List a new item; the auction opens immediately and closes at end_date."""
        if not (is_non_empty_str(title) and is_non_empty_str(description)):
            raise InvalidPayload("Title and description are required.")
        if not is_positive_int(min_bid):
            raise InvalidPayload("Minimum bid must be a positive integer.")
        try:
            end_time = convert_date_to_timestamp(end_date)
        except (TypeError, ValueError) as e:
            raise InvalidPayload("Invalid end date.", detail=str(e))

        item_id = self.new_id()
        auction = Auction(AuctionItem(item_id, title, description, min_bid, end_time))
        await asyncio.to_thread(self.store.insert, item_id, auction)
        logger.info("Listed %s (min bid %d, ends at %d)", item_id, min_bid, end_time)
        return auction

    @operation("place bid")
    async def place_bid(self, item_id: str, bid: Bid) -> Auction:
        await self._get_auction_by_id(item_id)
        async with self._get_item_lock(item_id):
            auction = await self._get_auction_by_id(item_id)
            auction.submit(bid, self.clock())
            await asyncio.to_thread(self.store.insert, item_id, auction)
        logger.info("Accepted bid of %d on %s", bid.amount, item_id)
        return auction

    # =========== #
    # query logic #
    # =========== #

    @operation("fetch auctions")
    async def get_auctions(self) -> list[Auction]:
        return await asyncio.to_thread(self.store.values)

    @operation("get winner")
    async def get_winner(self, item_id: str) -> Optional[Bid]:
        auction = await self._get_auction_by_id(item_id)
        return auction.winner(self.clock())

    # ========= #
    # internals #
    # ========= #

    async def _get_auction_by_id(self, item_id: str) -> Auction:
        if not (auction := await asyncio.to_thread(self.store.get, item_id)):
            raise NotFound("Auction not found.")
        return auction

    def _get_item_lock(self, item_id: str) -> asyncio.Lock:
        """Lock serializing bids on one listed item."""
        if not (lock := self.item_locks.get(item_id)):
            lock = self.item_locks[item_id] = asyncio.Lock()
        return lock
