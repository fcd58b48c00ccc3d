"""Market data: depth, trades, klines and tickers."""