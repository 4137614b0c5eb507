from dataclasses import dataclass, field
from typing import Optional

from .errors import AuctionEnded, AuctionNotEnded, BidTooLow, InvalidBid
from .types import AuctionItem, Bid
from .utils import is_positive_int


@dataclass
class Auction:
    """Open ascending auction with a reserve floor and a fixed end time."""

    item: AuctionItem
    """Listed item."""
    bids: list[Bid] = field(default_factory=list)
    """Accepted bids, in arrival order."""
    highest_bid: Optional[Bid] = None
    """Most recently accepted bid, None until the first one."""

    def __post_init__(self) -> None:
        if not self.bids and self.highest_bid is not None:
            raise ValueError("Highest bid set on an auction without bids.")
        if self.bids and self.highest_bid != self.bids[-1]:
            raise ValueError("Highest bid is not the last accepted bid.")

    def has_ended(self, now: float) -> bool:
        return now > self.item.end_time

    def submit(self, bid: Bid, now: float) -> None:
        self._validate_bid(bid, now)
        self.bids.append(bid)
        self.highest_bid = bid

    def winner(self, now: float) -> Optional[Bid]:
        """Winning bid of a closed auction; None if nobody bid."""
        if not self.has_ended(now):
            raise AuctionNotEnded("Auction not ended yet.")
        return self.highest_bid

    def to_dict(self) -> dict:
        return {
            "item": self.item.to_dict(),
            "bids": [b.to_dict() for b in self.bids],
            "highestBid": self.highest_bid.to_dict() if self.highest_bid else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Auction":
        highest = data.get("highestBid")
        return cls(
            AuctionItem.from_dict(data["item"]),
            [Bid.from_dict(b) for b in data.get("bids", [])],
            Bid.from_dict(highest) if highest else None,
        )

    def _validate_bid(self, bid: Bid, now: float) -> None:
        if not is_positive_int(bid.amount):
            raise InvalidBid("Invalid bid amount.")
        if self.has_ended(now):
            raise AuctionEnded("Auction ended.")
        if bid.amount <= self.item.min_bid:
            raise BidTooLow(f"Bid must exceed the minimum bid of {self.item.min_bid}.")
        if self.highest_bid and bid.amount <= self.highest_bid.amount:
            raise BidTooLow(
                f"Bid must exceed the current highest bid of {self.highest_bid.amount}."
            )
