from decimal import Decimal
from urllib.parse import parse_qsl

import pytest

from binspot.spot.account.account import Account


class FakeClient:
    def __init__(self, response=None):
        self.response = response
        self.calls = []

    async def get_signed(self, endpoint, request):
        self.calls.append((endpoint, request))
        return self.response


def account_data():
    return {
        "makerCommission": 0,
        "takerCommission": 0,
        "buyerCommission": 0,
        "sellerCommission": 0,
        "canTrade": True,
        "canWithdraw": True,
        "canDeposit": True,
        "accountType": "SPOT",
        "balances": [{"asset": "USDT", "free": "100.0", "locked": "0.0"}],
        "permissions": ["SPOT"],
        "updateTime": 1,
    }


@pytest.mark.asyncio
async def test_get_account():
    client = FakeClient(account_data())
    account = Account(client=client)
    info = await account.get_account().send()
    assert client.calls[0][0] == "/api/v3/account"
    assert info.account_type == "SPOT"
    assert info.balances[0].free == Decimal("100.0")


def test_get_order_uses_symbol():
    builder = Account(client=FakeClient()).get_order("BTCUSDT").order_id("3229491")
    assert parse_qsl(builder.params())[1:] == [("symbol", "BTCUSDT"), ("orderId", "3229491")]


def test_get_open_orders_uses_symbol():
    builder = Account(client=FakeClient()).get_open_orders("ETHUSDT")
    assert ("symbol", "ETHUSDT") in parse_qsl(builder.params())


@pytest.mark.asyncio
async def test_get_all_orders_sends_to_endpoint():
    client = FakeClient([])
    orders = await Account(client=client).get_all_orders("BTCUSDT").send()
    assert orders == []
    assert client.calls[0][0] == "/api/v3/allOrders"


@pytest.mark.asyncio
async def test_get_my_trades_sends_to_endpoint():
    client = FakeClient([])
    trades = await Account(client=client).get_my_trades("BTCUSDT").send()
    assert trades == []
    assert client.calls[0][0] == "/api/v3/myTrades"
    assert ("symbol", "BTCUSDT") in parse_qsl(client.calls[0][1])