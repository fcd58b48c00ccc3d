import pytest

from binspot.spot.market.depth import DepthBuilder, OrderBook
from binspot.util import BinanceError


class FakeClient:
    def __init__(self, response):
        self.response = response
        self.calls = []

    async def get(self, endpoint, request):
        self.calls.append((endpoint, request))
        return self.response


def test_params_without_limit():
    builder = DepthBuilder(FakeClient(None), "ETHUSDT")
    assert builder.params() == "symbol=ETHUSDT"


def test_params_with_limit_and_chaining():
    builder = DepthBuilder(FakeClient(None), "ETHUSDT")
    assert builder.limit(5) is builder
    assert builder.params() == "symbol=ETHUSDT&limit=5"


@pytest.mark.asyncio
async def test_send_parses_order_book():
    client = FakeClient({"lastUpdateId": 7, "bids": [["1.5", "2"]], "asks": [["3.25", "0.5"]]})
    book = await DepthBuilder(client, "ETHUSDT").limit(5).send()
    assert client.calls == [("/api/v3/depth", "symbol=ETHUSDT&limit=5")]
    assert book.last_update_id == 7
    assert book.bids == [(1.5, 2.0)]
    assert book.asks == [(3.25, 0.5)]


def test_order_book_missing_field():
    with pytest.raises(BinanceError):
        OrderBook.from_dict({"lastUpdateId": 1, "bids": []})


def test_order_book_bad_level():
    with pytest.raises(BinanceError):
        OrderBook.from_dict({"lastUpdateId": 1, "bids": [["1.0"]], "asks": []})