# binspot

Async building blocks for a spot exchange API: query-string helpers, typed
response models, request builders for market data and account queries, wallet
endpoints, user data stream listen keys, and a websocket client that decodes
stream events.

## Install

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Query strings (`binspot.util`)

```python
from binspot.util import build_request, build_request_p, build_signed_request

build_request([("symbol", "BTCUSDT"), ("limit", "5")])
# 'symbol=BTCUSDT&limit=5'

build_request_p({"symbol": "BTCUSDT", "orderId": None, "limit": 10})
# 'symbol=BTCUSDT&limit=10'   (None values are left out)

build_signed_request([("symbol", "BTCUSDT")], 5000)
# 'recvWindow=5000&timestamp=<now in ms>&symbol=BTCUSDT'
```

`build_signed_request_p` does the same for a mapping or any object with a
`to_params()` method. `recvWindow` is only added when the window is positive.
Other helpers: `string_to_decimal`, `u64_or_string`, `to_i64`, `to_f64`,
`get_timestamp`, `days_millis`, `bool_to_string`. Errors are raised as
`BinanceError`.

## Your HTTP client

The builders and gateways do not talk HTTP themselves; they call an async
client object you supply:

- market builders call `await client.get(endpoint, query_or_None)`;
- account query builders call `await client.get_signed(endpoint, query)`;
- `Wallet` calls `get_p`, `get_signed_p(endpoint, payload, recv_window)` and
  `post_signed_p(endpoint, payload, recv_window)`;
- `UserStream` calls `post`, `put` and `delete`.

Each call should return the decoded JSON response.

## Market data (`binspot.spot.market`)

```python
from binspot.spot.market.market import Market

market = Market(client)

book = await market.get_depth("ETHUSDT").limit(5).send()          # OrderBook
trades = await market.get_trades("ETHUSDT").limit(5).send()        # list[Trade]
aggs = await market.get_agg_trades("ETHUSDT").limit(5).send()      # list[AggTrade]
klines = await market.get_klines("ETHUSDT", "1m").limit(5).send()  # list[KlineSummary]
ticker = await market.get_ticker_24h("ETHUSDT").send()             # Ticker
prices = await market.get_last_price_multi().symbols(["ETHUSDT", "BTCUSDT"]).send()
```

Every builder's `params()` returns the query string it will send, so a
request can be inspected before it goes out. The multi-symbol builders return
`None` from `params()` when no symbols were chosen, asking for all symbols.

## Account queries (`binspot.spot.account`)

```python
from binspot.spot.account.account import Account

account = Account(client)
order = await account.get_order("BTCUSDT").order_id("12345").send()  # QueryOrder
open_orders = await account.get_open_orders("BTCUSDT").send()
info = await account.get_account().recv_window(5000).send()         # AccountInformation
mine = await account.get_my_trades("BTCUSDT").limit(10).send()      # list[TradeHistory]
```

`binspot.spot.request` holds the `GetOrderRequest` and `OrdersQuery` payloads
and `binspot.spot.response` the `Order` model.

## Websocket streams (`binspot.ws_client`, `binspot.ws_model`)

```python
import asyncio
from binspot.ws_client import WebSockets, kline_stream
from binspot.ws_model import parse_websocket_event

running = asyncio.Event()
running.set()

ws = WebSockets(print, "wss://stream.example.com:9443", parse_websocket_event)
await ws.connect(kline_stream("btcusdt", "1m"))
await ws.event_loop(running)   # receives while running.is_set()
await ws.disconnect()
```

An empty text message ends the loop; binary messages are ignored; a closed
connection raises `BinanceError`. For several streams use
`connect_multiple([...])` with a parser such as
`lambda d: CombinedStreamEvent.from_dict(d, parse_websocket_event)`;
`CombinedStreamEvent.parse_stream()` splits the stream name into symbol and
channel. `parse_untagged_event` also accepts order book snapshots and book
ticker events.

## Wallet and user stream

`binspot.wallet.Wallet` wraps the wallet endpoints (system status, coin info,
snapshots, withdrawals, deposit and withdrawal history, transfers, dust,
dividends, fees, funding wallet, API permissions). `deposit_history_quick` and
`withdraw_history_quick` walk back from `start_from` (default now) over
`total_duration` (default 90 days) in 90-day windows and return the non-empty
windows as `RecordHistory` items. `binspot.userstream.UserStream` starts,
keeps alive and closes a user data stream listen key.

## What this package does not do

- It does not place, cancel or replace orders; `binspot.spot.trade` has no
  modules yet.
- It has no HTTP client and does not sign requests: the signed builders
  produce the query string with `timestamp` and `recvWindow`, and your client
  must add the signature and API key.
- It has no command-line program.