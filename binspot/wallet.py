"""Wallet endpoints: deposits, withdrawals, transfers, dust and fees."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Generic, Protocol, TypeVar

SAPI_V1_SYSTEM_STATUS = "/sapi/v1/system/status"
SAPI_V1_CAPITAL_CONFIG_GETALL = "/sapi/v1/capital/config/getall"
SAPI_V1_ACCOUNTSNAPSHOT = "/sapi/v1/accountSnapshot"
SAPI_V1_ACCOUNT_DISABLEFASTWITHDRAWSWITCH = "/sapi/v1/account/disableFastWithdrawSwitch"
SAPI_V1_ACCOUNT_ENABLEFASTWITHDRAWSWITCH = "/sapi/v1/account/enableFastWithdrawSwitch"
SAPI_V1_CAPITAL_WITHDRAW_APPLY = "/sapi/v1/capital/withdraw/apply"
SAPI_V1_CAPITAL_DEPOSIT_HISREC = "/sapi/v1/capital/deposit/hisrec"
SAPI_V1_CAPITAL_WITHDRAW_HISTORY = "/sapi/v1/capital/withdraw/history"
SAPI_V1_CAPITAL_DEPOSIT_ADDRESS = "/sapi/v1/capital/deposit/address"
SAPI_V1_ACCOUNT_STATUS = "/sapi/v1/account/status"
SAPI_V1_ACCOUNT_APITRADINGSTATUS = "/sapi/v1/account/apiTradingStatus"
SAPI_V1_ASSET_DRIBBLET = "/sapi/v1/asset/dribblet"
SAPI_V1_ASSET_DUSTBTC = "/sapi/v1/asset/dust-btc"
SAPI_V1_ASSET_DUST = "/sapi/v1/asset/dust"
SAPI_V1_ASSET_ASSETDIVIDEND = "/sapi/v1/asset/assetDividend"
SAPI_V1_ASSET_ASSETDETAIL = "/sapi/v1/asset/assetDetail"
SAPI_V1_ASSET_TRADEFEE = "/sapi/v1/asset/tradeFee"
SAPI_V1_ASSET_TRADEFEE_US = "/sapi/v1/asset/query/trading-fee"
SAPI_V1_ASSET_TRANSFER = "/sapi/v1/asset/transfer"
SAPI_V1_ASSET_GETFUNDINGASSET = "/sapi/v1/asset/get-funding-asset"
SAPI_V1_ASSET_APIRESTRICTIONS = "/sapi/v1/account/apiRestrictions"

DEFAULT_WALLET_HISTORY_QUERY_INTERVAL_DAYS = 90

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

R = TypeVar("R")


class WalletClient(Protocol):
    """The HTTP client operations the wallet needs."""

    async def get_p(self, endpoint: str, request: Any) -> Any: ...

    async def get_signed_p(self, endpoint: str, payload: Any, recv_window: int) -> Any: ...

    async def post_signed_p(self, endpoint: str, payload: Any, recv_window: int) -> Any: ...


@dataclass
class RecordHistory(Generic[R]):
    """Records returned for one query window."""

    start_at: datetime
    end_at: datetime
    records: list[R] = field(default_factory=list)


def _millis(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def _with_window(query: Any, start_time: int, end_time: int) -> Any:
    if isinstance(query, Mapping):
        updated = dict(query)
        updated["startTime"] = start_time
        updated["endTime"] = end_time
        return updated
    updated = copy.copy(query)
    updated.start_time = start_time
    updated.end_time = end_time
    return updated


@dataclass
class Wallet:
    """Gateway to the wallet endpoints."""

    client: WalletClient
    recv_window: int = 0
    binance_us_api: bool = False

    async def system_status(self) -> Any:
        """Fetch system status."""
        return await self.client.get_p(SAPI_V1_SYSTEM_STATUS, None)

    async def all_coin_info(self) -> Any:
        """Coins available for deposit and withdrawal."""
        return await self.client.get_signed_p(SAPI_V1_CAPITAL_CONFIG_GETALL, None, self.recv_window)

    async def daily_account_snapshot(self, query: Any) -> Any:
        """Daily account snapshot; the period must be under 30 days."""
        return await self.client.get_signed_p(SAPI_V1_ACCOUNTSNAPSHOT, query, self.recv_window)

    async def disable_fast_withdraw_switch(self) -> Any:
        return await self.client.post_signed_p(
            SAPI_V1_ACCOUNT_DISABLEFASTWITHDRAWSWITCH, None, self.recv_window
        )

    async def enable_fast_withdraw_switch(self) -> Any:
        return await self.client.post_signed_p(
            SAPI_V1_ACCOUNT_ENABLEFASTWITHDRAWSWITCH, None, self.recv_window
        )

    async def withdraw(self, query: Any) -> Any:
        """Apply for a withdrawal."""
        return await self.client.post_signed_p(SAPI_V1_CAPITAL_WITHDRAW_APPLY, query, self.recv_window)

    async def deposit_history(self, query: Any) -> Any:
        return await self.client.get_signed_p(SAPI_V1_CAPITAL_DEPOSIT_HISREC, query, self.recv_window)

    async def _history_quick(
        self,
        fetch: Any,
        query: Any,
        start_from: datetime | None,
        total_duration: timedelta | None,
    ) -> list[RecordHistory[Any]]:
        interval = timedelta(days=DEFAULT_WALLET_HISTORY_QUERY_INTERVAL_DAYS)
        total = total_duration if total_duration is not None else interval
        period_end = start_from if start_from is not None else datetime.now(timezone.utc)
        end_at = period_end - total
        period_start = period_end - interval

        result: list[RecordHistory[Any]] = []
        while period_end > end_at:
            query = _with_window(query, _millis(period_start), _millis(period_end))
            records = await fetch(query)
            if records:
                result.append(RecordHistory(start_at=period_start, end_at=period_end, records=records))
            period_start -= interval
            period_end -= interval
        return result

    async def deposit_history_quick(
        self,
        query: Any,
        start_from: datetime | None = None,
        total_duration: timedelta | None = None,
    ) -> list[RecordHistory[Any]]:
        """Deposit history going back from ``start_from`` (default now) over
        ``total_duration`` (default 90 days), in 90-day windows."""
        return await self._history_quick(self.deposit_history, query, start_from, total_duration)

    async def withdraw_history(self, query: Any) -> Any:
        return await self.client.get_signed_p(SAPI_V1_CAPITAL_WITHDRAW_HISTORY, query, self.recv_window)

    async def withdraw_history_quick(
        self,
        query: Any,
        start_from: datetime | None = None,
        total_duration: timedelta | None = None,
    ) -> list[RecordHistory[Any]]:
        """Withdrawal history going back from ``start_from`` (default now) over
        ``total_duration`` (default 90 days), in 90-day windows."""
        return await self._history_quick(self.withdraw_history, query, start_from, total_duration)

    async def deposit_address(self, query: Any) -> Any:
        return await self.client.get_signed_p(SAPI_V1_CAPITAL_DEPOSIT_ADDRESS, query, self.recv_window)

    async def universal_transfer(
        self,
        asset: str,
        amount: float,
        from_symbol: str | None,
        to_symbol: str | None,
        transfer_type: Any,
    ) -> Any:
        """Transfer between wallets; symbols are needed for isolated-margin transfers."""
        transfer = {
            "asset": asset,
            "amount": amount,
            "fromSymbol": from_symbol,
            "toSymbol": to_symbol,
            "type": transfer_type,
        }
        return await self.client.post_signed_p(SAPI_V1_ASSET_TRANSFER, transfer, self.recv_window)

    async def universal_transfer_history(self, query: Any) -> Any:
        return await self.client.get_signed_p(SAPI_V1_ASSET_TRANSFER, query, self.recv_window)

    async def account_status(self) -> Any:
        return await self.client.get_signed_p(SAPI_V1_ACCOUNT_STATUS, None, self.recv_window)

    async def api_trading_status(self) -> Any:
        return await self.client.get_signed_p(SAPI_V1_ACCOUNT_APITRADINGSTATUS, None, self.recv_window)

    async def dust_log(self, start_time: int | None = None, end_time: int | None = None) -> Any:
        query = {"start_time": start_time, "end_time": end_time}
        return await self.client.get_signed_p(SAPI_V1_ASSET_DRIBBLET, query, self.recv_window)

    async def convertible_assets(self) -> Any:
        """Assets convertible to BNB."""
        return await self.client.post_signed_p(SAPI_V1_ASSET_DUSTBTC, None, self.recv_window)

    async def dust_transfer(self, assets: list[str]) -> Any:
        """Convert dust assets to BNB."""
        return await self.client.post_signed_p(
            SAPI_V1_ASSET_DUST, {"assets": list(assets)}, self.recv_window
        )

    async def asset_dividends(self, query: Any) -> Any:
        return await self.client.get_signed_p(SAPI_V1_ASSET_ASSETDIVIDEND, query, self.recv_window)

    async def asset_detail(self, asset: str | None = None) -> Any:
        return await self.client.get_signed_p(
            SAPI_V1_ASSET_ASSETDETAIL, {"asset": asset}, self.recv_window
        )

    async def trade_fees(self, symbol: str | None = None) -> Any:
        endpoint = SAPI_V1_ASSET_TRADEFEE_US if self.binance_us_api else SAPI_V1_ASSET_TRADEFEE
        return await self.client.get_signed_p(endpoint, {"symbol": symbol}, self.recv_window)

    async def funding_wallet(
        self, asset: str | None = None, need_btc_valuation: bool | None = None
    ) -> Any:
        """Funding wallet balances."""
        query = {
            "asset": asset,
            "need_btc_valuation": None
            if need_btc_valuation is None
            else ("true" if need_btc_valuation else "false"),
        }
        return await self.client.post_signed_p(SAPI_V1_ASSET_GETFUNDINGASSET, query, self.recv_window)

    async def api_key_permissions(self) -> Any:
        return await self.client.get_signed_p(SAPI_V1_ASSET_APIRESTRICTIONS, None, self.recv_window)