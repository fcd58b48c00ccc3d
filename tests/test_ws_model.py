import pytest

from binspot.spot.market.depth import OrderBook
from binspot.util import BinanceError
from binspot.ws_model import (
    AccountPositionUpdate,
    AccountUpdate,
    BalanceUpdate,
    BookTickerEvent,
    CombinedStreamEvent,
    DepthOrderBookEvent,
    KlineEvent,
    OrderListUpdate,
    OrderUpdate,
    QueryResult,
    TradesEvent,
    parse_untagged_event,
    parse_websocket_event,
    string_or_float,
)

AGG_TRADE = {
    "e": "aggTrade",
    "E": 123456789,
    "s": "BNBBTC",
    "a": 12345,
    "p": "0.001",
    "q": "100",
    "f": 100,
    "l": 105,
    "T": 123456785,
    "m": True,
    "M": True,
}

KLINE = {
    "e": "kline",
    "E": 123456789,
    "s": "BNBBTC",
    "k": {
        "t": 123400000,
        "T": 123460000,
        "s": "BNBBTC",
        "i": "1m",
        "f": 100,
        "L": 200,
        "o": "0.0010",
        "c": "0.0020",
        "h": "0.0025",
        "l": "0.0015",
        "v": "1000",
        "n": 100,
        "x": False,
        "q": "1.0000",
        "V": "500",
        "Q": "0.500",
        "B": "123456",
    },
}

ORDER_UPDATE = {
    "e": "executionReport",
    "E": 1499405658658,
    "s": "ETHBTC",
    "c": None,
    "S": "BUY",
    "o": "LIMIT",
    "f": "GTC",
    "q": "1.00000000",
    "p": "0.10264410",
    "P": "0.00000000",
    "F": "0.00000000",
    "g": -1,
    "C": "",
    "x": "NEW",
    "X": "NEW",
    "r": "NONE",
    "i": 4293153,
    "l": "0.00000000",
    "z": "0.00000000",
    "L": "0.00000000",
    "n": "0",
    "N": None,
    "T": 1499405658657,
    "t": -1,
    "I": 8641984,
    "w": True,
    "m": False,
    "M": False,
    "O": 1499405658657,
    "Z": "0.00000000",
    "Y": "0.00000000",
    "Q": "0.00000000",
}


def test_agg_trade_event():
    event = parse_websocket_event(AGG_TRADE)
    assert isinstance(event, TradesEvent)
    assert event.symbol == "BNBBTC"
    assert event.aggregated_trade_id == 12345
    assert event.price == "0.001"
    assert event.is_buyer_maker is True
    assert event.m_ignore is False


def test_variant_name_is_accepted_as_tag():
    event = parse_websocket_event({**AGG_TRADE, "e": "AggTrade"})
    assert isinstance(event, TradesEvent)
    assert event.first_break_trade_id == 100


def test_kline_event():
    event = parse_websocket_event(KLINE)
    assert isinstance(event, KlineEvent)
    assert event.kline.interval == "1m"
    assert event.kline.open == float("0.0010")
    assert event.kline.volume == float("1000")
    assert event.kline.ignore_me == ""


def test_order_update_with_null_client_order_id():
    event = parse_websocket_event(ORDER_UPDATE)
    assert isinstance(event, OrderUpdate)
    assert event.client_order_id is None
    assert event.order_list_id == -1
    assert event.price == float("0.10264410")
    assert event.commission_asset is None


def test_depth_event():
    data = {"e": "depthUpdate", "E": 1, "s": "BNBBTC", "U": 157, "u": 160, "b": [["0.0024", "10"]], "a": []}
    event = parse_websocket_event(data)
    assert isinstance(event, DepthOrderBookEvent)
    assert event.bids == [(float("0.0024"), 10.0)]
    assert event.asks == []


def test_balance_and_position_updates():
    balance = parse_websocket_event({"e": "balanceUpdate", "E": 5, "a": "BTC", "d": "100.0", "T": 6})
    assert isinstance(balance, BalanceUpdate)
    assert balance.delta == 100.0
    assert balance.clear_time == 6
    position = AccountPositionUpdate.from_dict(
        {"eventTime": 1, "lastUpdateTime": 2, "balances": [{"a": "ETH", "f": "1.5", "l": "0"}]}
    )
    assert position.event_time == 1
    assert position.balances[0].free == 1.5


def test_account_update_short_keys():
    update = AccountUpdate.from_dict(
        {"E": 1, "m": 15, "t": 15, "b": 0, "s": 0, "T": True, "W": True, "D": False, "B": []}
    )
    assert update.maker_commission_rate == 15
    assert update.can_deposit is False


def test_order_list_update():
    data = {
        "e": "listStatus",
        "E": 1,
        "s": "ETHBTC",
        "g": 2,
        "c": "OCO",
        "l": "EXEC_STARTED",
        "L": "EXECUTING",
        "r": "NONE",
        "C": "list-id",
        "T": 3,
        "O": [{"s": "ETHBTC", "i": 17, "c": "order-a"}],
    }
    event = parse_websocket_event(data)
    assert isinstance(event, OrderListUpdate)
    assert event.objects[0].order_id == 17
    assert event.list_client_order_id == "list-id"


def test_unknown_event_type():
    with pytest.raises(BinanceError):
        parse_websocket_event({**AGG_TRADE, "e": "nothing"})


def test_missing_field():
    data = dict(AGG_TRADE)
    del data["p"]
    with pytest.raises(BinanceError):
        parse_websocket_event(data)


def test_negative_unsigned_field():
    with pytest.raises(BinanceError):
        parse_websocket_event({**AGG_TRADE, "a": -1})


def test_untagged_order_book_and_book_ticker():
    book = parse_untagged_event({"lastUpdateId": 9, "bids": [], "asks": [["1", "2"]]})
    assert isinstance(book, OrderBook)
    assert book.asks == [(1.0, 2.0)]
    ticker = parse_untagged_event({"u": 400900217, "s": "BNBUSDT", "b": "25.35", "B": "31.21", "a": "25.36", "A": "40.66"})
    assert isinstance(ticker, BookTickerEvent)
    assert ticker.best_ask == float("25.36")


def test_untagged_prefers_tagged_event():
    event = parse_untagged_event(AGG_TRADE)
    assert isinstance(event, TradesEvent)
    assert event.symbol == "BNBBTC"
    assert event.aggregated_trade_id == 12345
    assert event.last_break_trade_id == 105


def test_untagged_no_match():
    with pytest.raises(BinanceError):
        parse_untagged_event({"x": 1})


@pytest.mark.parametrize(
    "stream, expected",
    [
        ("btcusdt@aggTrade", ("btcusdt", "aggTrade")),
        ("!ticker@arr", ("ticker", "arr")),
        ("!bookTicker", ("bookTicker", "")),
    ],
)
def test_parse_stream(stream, expected):
    event = CombinedStreamEvent.from_dict({"stream": stream, "data": {}})
    assert event.parse_stream() == expected


def test_combined_stream_with_parser():
    event = CombinedStreamEvent.from_dict({"stream": "bnbbtc@aggTrade", "data": AGG_TRADE}, parse_websocket_event)
    assert isinstance(event.data, TradesEvent)
    assert event.stream == "bnbbtc@aggTrade"


def test_string_or_float():
    assert string_or_float("1.5") == 1.5
    assert string_or_float(2) == 2.0
    with pytest.raises(BinanceError):
        string_or_float("abc")
    with pytest.raises(BinanceError):
        string_or_float(True)


def test_query_result():
    result = QueryResult.from_dict({"result": None, "id": 312})
    assert result.result is None
    assert result.id == 312