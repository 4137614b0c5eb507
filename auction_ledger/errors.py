from typing import Optional


class AuctionError(Exception):
    """Base class for every failure an operation can report."""

    kind: str = "AuctionError"

    def __init__(self, message: str, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        res = {"error": self.kind, "message": self.message}
        if self.detail:
            res["detail"] = self.detail
        return res


class InvalidPayload(AuctionError):
    kind = "InvalidPayload"


class NotFound(AuctionError):
    kind = "NotFound"


class InvalidBid(AuctionError):
    kind = "InvalidBid"


class AuctionEnded(AuctionError):
    kind = "AuctionEnded"


class BidTooLow(AuctionError):
    kind = "BidTooLow"


class AuctionNotEnded(AuctionError):
    kind = "AuctionNotEnded"


class StorageFailure(AuctionError):
    kind = "StorageFailure"
