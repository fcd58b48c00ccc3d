import pytest

from binspot.spot.market.klines import KlinesBuilder, parse_kline_row
from binspot.util import BinanceError

ROW = [
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


class FakeClient:
    def __init__(self, response):
        self.response = response
        self.calls = []

    async def get(self, endpoint, request):
        self.calls.append((endpoint, request))
        return self.response


def test_parse_kline_row():
    kline = parse_kline_row(ROW)
    assert kline.open_time == 1499040000000
    assert kline.open == float("0.01634790")
    assert kline.close_time == 1499644799999
    assert kline.number_of_trades == 308
    assert kline.taker_buy_quote_asset_volume == float("28.46694368")


def test_parse_short_row():
    with pytest.raises(BinanceError):
        parse_kline_row(ROW[:5])


def test_parse_row_bad_number():
    with pytest.raises(BinanceError):
        parse_kline_row([ROW[0], 1.5] + ROW[2:])


def test_params_order():
    builder = KlinesBuilder(FakeClient([]), "ETHUSDT", "1m")
    assert builder.params() == "symbol=ETHUSDT&interval=1m"
    builder.limit(5).end_time(20).start_time(10)
    assert builder.params() == "symbol=ETHUSDT&interval=1m&startTime=10&endTime=20&limit=5"


@pytest.mark.asyncio
async def test_send():
    client = FakeClient([ROW, ROW])
    klines = await KlinesBuilder(client, "ETHUSDT", "1m").limit(2).send()
    assert client.calls == [("/api/v3/klines", "symbol=ETHUSDT&interval=1m&limit=2")]
    assert len(klines) == 2
    assert klines[0] == klines[1] == parse_kline_row(ROW)