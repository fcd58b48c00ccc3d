from binspot.spot.request import GetOrderRequest, OrdersQuery
from binspot.util import build_request_p


def test_get_order_request_params_keys():
    params = GetOrderRequest(symbol="BTCUSDT", order_id=5).to_params()
    assert list(params) == ["symbol", "orderId", "origClientOrderId", "recvWindow"]
    assert params["orderId"] == 5
    assert params["origClientOrderId"] is None


def test_get_order_request_query_drops_missing():
    query = build_request_p(GetOrderRequest(symbol="BTCUSDT", order_id=5))
    assert query == "symbol=BTCUSDT&orderId=5"


def test_orders_query_defaults():
    query = OrdersQuery(symbol="ETHUSDT")
    assert query.limit is None
    assert build_request_p(query) == "symbol=ETHUSDT"


def test_orders_query_full():
    query = OrdersQuery(symbol="ETHUSDT", start_time=10, end_time=20, limit=3, recv_window=500)
    assert build_request_p(query) == "symbol=ETHUSDT&startTime=10&endTime=20&limit=3&recvWindow=500"