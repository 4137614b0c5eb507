import logging

from decouple import config
from quart import Quart, jsonify, request

from auction_ledger import AuctionHouse, Bid, Err, create_store
from auction_ledger.errors import AuctionError, InvalidPayload
from auction_ledger.utils import is_non_empty_str

HTTP_STATUS = {
    "InvalidPayload": 400,
    "InvalidBid": 400,
    "NotFound": 404,
    "AuctionEnded": 409,
    "BidTooLow": 409,
    "AuctionNotEnded": 409,
    "StorageFailure": 500,
}


def error_response(error: AuctionError):
    return jsonify(error.to_dict()), HTTP_STATUS.get(error.kind, 500)


async def get_payload() -> dict:
    data = await request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidPayload("Request body must be a JSON object.")
    return data


def register_routes(app: Quart, ah: AuctionHouse):

    @app.route("/items", methods=["POST"])
    async def list_item():
        """
        input: {"title": str, "description": str, "minBid": int, "endDate": str}
        """

        try:
            data = await get_payload()
        except InvalidPayload as e:
            return error_response(e)

        res = await ah.list_item(
            data.get("title"),
            data.get("description"),
            data.get("minBid"),
            data.get("endDate"),
        )
        if isinstance(res, Err):
            return error_response(res.error)
        return jsonify(res.value.to_dict())

    @app.route("/items/<item_id>/bids", methods=["POST"])
    async def place_bid(item_id: str):
        """
        input: {"bidder": str, "amount": int}
        """

        try:
            data = await get_payload()
            if not is_non_empty_str(data.get("bidder")):
                raise InvalidPayload("Bidder is required.")
        except InvalidPayload as e:
            return error_response(e)

        res = await ah.place_bid(item_id, Bid(data["bidder"], data.get("amount")))
        if isinstance(res, Err):
            return error_response(res.error)
        return jsonify(res.value.to_dict())

    @app.route("/auctions", methods=["GET"])
    async def get_auctions():
        res = await ah.get_auctions()
        if isinstance(res, Err):
            return error_response(res.error)
        return jsonify([a.to_dict() for a in res.value])

    @app.route("/items/<item_id>/winner", methods=["GET"])
    async def get_winner(item_id: str):
        res = await ah.get_winner(item_id)
        if isinstance(res, Err):
            return error_response(res.error)
        return jsonify(res.value.to_dict() if res.value else None)


def create_app(ah: AuctionHouse) -> Quart:
    app = Quart(__name__)
    register_routes(app, ah)

    @app.after_serving
    async def close_store():
        ah.store.close()

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=config("LOG_LEVEL", default="INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = create_store(
        config("DATABASE_URL", default="sqlite:///auctions.db"),
        max_key_size=config("STORE_MAX_KEY_SIZE", default=0, cast=int),
        max_value_size=config("STORE_MAX_VALUE_SIZE", default=0, cast=int),
    )
    ah = AuctionHouse(store)

    app = create_app(ah)
    app.run(host=config("HOST", default="127.0.0.1"), port=config("PORT", default=5000, cast=int))
