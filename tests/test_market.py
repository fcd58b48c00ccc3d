from decimal import Decimal

import pytest

from binspot.spot.market.market import Market


TICKER = {
    "priceChange": "-94.99999800",
    "priceChangePercent": "-95.960",
    "weightedAvgPrice": "0.29628482",
    "prevClosePrice": "0.10002000",
    "lastPrice": "4.00000200",
    "bidPrice": "4.00000000",
    "askPrice": "4.00000200",
    "openPrice": "99.00000000",
    "highPrice": "100.00000000",
    "lowPrice": "0.10000000",
    "volume": "8913.30000000",
    "openTime": 1499783499040,
    "closeTime": 1499869899040,
    "firstId": 28385,
    "lastId": 28460,
    "count": 76,
}
TRADE = {
    "id": 28457,
    "price": "4.00000100",
    "qty": "12.00000000",
    "time": 1499865549590,
    "isBuyerMaker": True,
    "isBestMatch": True,
}
AGG = {"a": 26129, "p": "0.01633102", "q": "4.70443515", "f": 27781, "l": 27781, "T": 1498793709153, "m": True}
KLINE = [
    1499040000000,
    "0.01634790",
    "0.80000000",
    "0.01575800",
    "0.01577100",
    "148976.11427815",
    1499644799999,
    "2434.19055334",
    308,
    "1756.87402397",
    "28.46694368",
    "17928899.62484339",
]
DEPTH = {
    "lastUpdateId": 1027024,
    "bids": [["4.00000000", "431.00000000"]],
    "asks": [["4.00000200", "12.00000000"]],
}
PRICE = {"symbol": "ETHUSDT", "price": "4.00000200"}
BOOK = {
    "symbol": "ETHUSDT",
    "bidPrice": "4.00000000",
    "bidQty": "431.00000000",
    "askPrice": "4.00000200",
    "askQty": "9.00000000",
}


class RoutingClient:
    """Answers each endpoint with a canned response and records the calls."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    async def get(self, endpoint, request):
        self.calls.append((endpoint, request))
        return self.responses[(endpoint, request is None)]


def make_market():
    return Market(
        RoutingClient(
            {
                ("/api/v3/depth", False): DEPTH,
                ("/api/v3/trades", False): [TRADE],
                ("/api/v3/historicalTrades", False): [TRADE],
                ("/api/v3/aggTrades", False): [AGG],
                ("/api/v3/klines", False): [KLINE],
                ("/api/v3/ticker/24hr", False): TICKER,
                ("/api/v3/ticker/price", False): PRICE,
                ("/api/v3/ticker/bookTicker", False): BOOK,
            }
        )
    )


@pytest.mark.asyncio
async def test_market_depth():
    market = make_market()
    book = await market.get_depth("ETHUSDT").limit(5).send()
    assert market.client.calls == [("/api/v3/depth", "symbol=ETHUSDT&limit=5")]
    assert book.last_update_id == 1027024


@pytest.mark.asyncio
async def test_market_trades_family():
    market = make_market()
    trades = await market.get_trades("ETHUSDT").limit(5).send()
    historical = await market.get_historical_trades("ETHUSDT").limit(5).send()
    agg = await market.get_agg_trades("ETHUSDT").limit(5).send()
    assert trades == historical
    assert agg[0].agg_id == 26129
    assert [call[1] for call in market.client.calls] == ["symbol=ETHUSDT&limit=5"] * 3


@pytest.mark.asyncio
async def test_market_klines():
    market = make_market()
    klines = await market.get_klines("ETHUSDT", "1m").limit(5).send()
    assert market.client.calls == [("/api/v3/klines", "symbol=ETHUSDT&interval=1m&limit=5")]
    assert klines[0].number_of_trades == 308


@pytest.mark.asyncio
async def test_market_tickers():
    market = make_market()
    ticker = await market.get_ticker_24h("ETHUSDT").send()
    assert ticker.count == 76
    price = await market.get_last_price("ETHUSDT").send()
    assert price.price == Decimal("4.00000200")
    book = await market.get_book_ticker("ETHUSDT").send()
    assert book.symbol == "ETHUSDT"


@pytest.mark.asyncio
async def test_market_multi_tickers():
    market = Market(RoutingClient({}))
    market.client.responses = {
        ("/api/v3/ticker/24hr", False): [TICKER],
        ("/api/v3/ticker/price", False): [PRICE],
        ("/api/v3/ticker/bookTicker", False): [BOOK],
    }
    tickers = await market.get_ticker_24h_multi().symbols(["ETHUSDT", "BTCUSDT"]).send()
    prices = await market.get_last_price_multi().symbols(["ETHUSDT", "BTCUSDT"]).send()
    books = await market.get_book_ticker_multi().symbols(["ETHUSDT", "BTCUSDT"]).send()
    assert len(tickers) == len(prices) == len(books) == 1
    assert {call[1] for call in market.client.calls} == {'symbols=["ETHUSDT","BTCUSDT"]'}


def test_market_builders_keep_symbol():
    market = make_market()
    assert market.get_ticker_24h("ETHUSDT").params() == "symbol=ETHUSDT"
    assert market.get_last_price_multi().params() is None