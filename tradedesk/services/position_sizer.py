"""Position sizing for micro futures contracts and BTC.

Given a dollar risk budget, a stop distance and an optional take-profit
distance, computes how many contracts (or how much BTC) to trade and the
resulting dollar risk and reward. All monetary arithmetic uses Decimal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from enum import Enum

from loguru import logger

from tradedesk.config import get_settings

# ---------------------------------------------------------------------------
# Symbol configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SymbolSpec:
    """Dollar value of one unit of price movement for a tradable symbol."""

    name: str
    value_per_point: Decimal
    unit: str  # "points", "price" or "usd"

    @property
    def is_fractional(self) -> bool:
        """Fractional symbols size in tenths rather than whole contracts."""
        return self.unit == "usd"

    @property
    def unit_label(self) -> str:
        if self.is_fractional:
            return "USD"
        return "pts" if self.unit == "points" else "price"


SYMBOLS: dict[str, SymbolSpec] = {
    "MNQ": SymbolSpec("MNQ", Decimal("2"), "points"),
    "MES": SymbolSpec("MES", Decimal("5"), "points"),
    "MGC1!": SymbolSpec("MGC1!", Decimal("10"), "price"),
    "BTCUSD": SymbolSpec("BTCUSD", Decimal("1"), "usd"),
}

FRACTIONAL_STEP = Decimal("0.1")

_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class RiskTier(str, Enum):
    """Qualitative bucket for the total dollar risk of a position."""

    VERY_LOW = "very_low"
    OK = "ok"
    HIGH = "high"
    EXCESSIVE = "excessive"

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]


_TIER_LABELS = {
    RiskTier.VERY_LOW: "Very low risk (0-50).",
    RiskTier.OK: "Risk OK (50-500).",
    RiskTier.HIGH: "High risk (500-1500).",
    RiskTier.EXCESSIVE: "Too much risk (1500+).",
}


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


@dataclass
class PositionSizeResult:
    """Computed size, dollar risk and dollar reward for one input set."""

    symbol: str
    size: Decimal
    total_risk: Decimal
    profit: Decimal
    is_fractional: bool = False

    @property
    def risk_tier(self) -> RiskTier:
        return classify_risk(self.total_risk)


def get_symbol(symbol: str) -> SymbolSpec:
    """Look up a symbol's spec.

    Raises:
        ValueError: If the symbol is not recognized.
    """
    if symbol not in SYMBOLS:
        raise ValueError(
            f"Unknown symbol '{symbol}'. Available: {list(SYMBOLS.keys())}"
        )
    return SYMBOLS[symbol]


def parse_amount(value: str | float | int | Decimal | None) -> Decimal:
    """Parse a user-entered amount from its leading number.

    Trailing text is ignored ("100 USD" -> 100); blanks and values with no
    leading number count as zero.
    """
    if value is None:
        return Decimal("0")
    match = _LEADING_NUMBER.match(str(value))
    if match is None:
        return Decimal("0")
    try:
        amount = Decimal(match.group(0).strip())
    except InvalidOperation:
        return Decimal("0")
    if not amount.is_finite():
        return Decimal("0")
    return amount


def classify_risk(total_risk: Decimal) -> RiskTier:
    if total_risk < 50:
        return RiskTier.VERY_LOW
    if total_risk <= 500:
        return RiskTier.OK
    if total_risk <= 1500:
        return RiskTier.HIGH
    return RiskTier.EXCESSIVE


# ---------------------------------------------------------------------------
# PositionSizer
# ---------------------------------------------------------------------------


class PositionSizer:
    """Calculates position size from a risk budget and stop distance.

    Whole-contract symbols are floored and capped at ``max_contracts``.
    Fractional symbols (BTCUSD) are floored to one decimal place.
    """

    def __init__(self, max_contracts: int | None = None) -> None:
        if max_contracts is None:
            max_contracts = get_settings().max_contracts
        self.max_contracts = max_contracts

    def calculate(
        self,
        symbol: str,
        risk,
        stop,
        take_profit=None,
    ) -> PositionSizeResult:
        """Size a position for ``symbol``.

        Args:
            symbol: Symbol key from SYMBOLS.
            risk: Dollar amount willing to lose.
            stop: Stop distance in the symbol's unit.
            take_profit: Take-profit distance in the symbol's unit.

        Returns:
            PositionSizeResult; all zero when risk or stop is not positive.
        """
        spec = get_symbol(symbol)
        risk_amount = parse_amount(risk)
        stop_distance = parse_amount(stop)
        tp_distance = parse_amount(take_profit)

        if risk_amount <= 0 or stop_distance <= 0:
            return PositionSizeResult(
                symbol=symbol,
                size=Decimal("0"),
                total_risk=Decimal("0"),
                profit=Decimal("0"),
                is_fractional=spec.is_fractional,
            )

        if spec.is_fractional:
            raw_size = risk_amount / stop_distance
            steps = (raw_size / FRACTIONAL_STEP).to_integral_value(rounding=ROUND_FLOOR)
            size = steps * FRACTIONAL_STEP
            total_risk = size * stop_distance
            profit = size * tp_distance
        else:
            per_contract = stop_distance * spec.value_per_point
            contracts = (risk_amount / per_contract).to_integral_value(rounding=ROUND_FLOOR)
            size = min(contracts, Decimal(self.max_contracts))
            total_risk = size * per_contract
            profit = size * tp_distance * spec.value_per_point

        logger.debug(
            "Position sizing: symbol={symbol}, risk=${risk}, stop={stop}, "
            "tp={tp}, size={size}, total_risk=${total}",
            symbol=symbol,
            risk=risk_amount,
            stop=stop_distance,
            tp=tp_distance,
            size=size,
            total=total_risk,
        )

        return PositionSizeResult(
            symbol=symbol,
            size=size,
            total_risk=total_risk,
            profit=profit,
            is_fractional=spec.is_fractional,
        )
