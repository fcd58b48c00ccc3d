from decimal import Decimal

import pytest

from binspot.spot.response import Order
from binspot.util import BinanceError

SAMPLE = {
    "symbol": "LTCBTC",
    "orderId": 1,
    "orderListId": -1,
    "clientOrderId": "myOrder1",
    "price": "0.1",
    "origQty": "1.0",
    "executedQty": "0.0",
    "cummulativeQuoteQty": "0.0",
    "status": "NEW",
    "timeInForce": "GTC",
    "type": "LIMIT",
    "side": "BUY",
    "stopPrice": "0.0",
    "icebergQty": "0.0",
    "time": 1499827319559,
    "updateTime": 1499827319559,
    "isWorking": True,
    "origQuoteOrderQty": "0.000000",
}


def test_order_from_dict():
    order = Order.from_dict(SAMPLE)
    assert order.symbol == "LTCBTC"
    assert order.order_list_id == -1
    assert order.price == Decimal("0.1")
    assert order.orig_qty == Decimal("1.0")
    assert order.order_type == "LIMIT"
    assert order.is_working is True


def test_order_missing_field():
    data = dict(SAMPLE)
    del data["side"]
    with pytest.raises(BinanceError):
        Order.from_dict(data)


def test_order_price_must_be_string():
    with pytest.raises(BinanceError):
        Order.from_dict({**SAMPLE, "price": 0.1})


def test_order_negative_order_id():
    with pytest.raises(BinanceError):
        Order.from_dict({**SAMPLE, "orderId": -3})