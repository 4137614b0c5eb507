from .auction import Auction
from .auction_house import AuctionHouse
from .errors import (
    AuctionEnded,
    AuctionError,
    AuctionNotEnded,
    BidTooLow,
    InvalidBid,
    InvalidPayload,
    NotFound,
    StorageFailure,
)
from .result import Err, Ok, Result
from .store import AuctionStore, MemoryStore, SqlStore, StoreError, create_store
from .types import AuctionItem, Bid
from .utils import convert_date_to_timestamp
