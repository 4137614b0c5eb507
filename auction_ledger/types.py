from dataclasses import dataclass


@dataclass(frozen=True)
class AuctionItem:
    id: str
    title: str
    description: str
    min_bid: int
    end_time: int
    """Seconds since epoch, fixed at listing time."""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "minBid": self.min_bid,
            "endTime": self.end_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuctionItem":
        return cls(
            data["id"],
            data["title"],
            data["description"],
            int(data["minBid"]),
            int(data["endTime"]),
        )


@dataclass(frozen=True)
class Bid:
    bidder: str
    amount: int

    def to_dict(self) -> dict:
        return {"bidder": self.bidder, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: dict) -> "Bid":
        return cls(data["bidder"], int(data["amount"]))
