"""Persistence of calculator inputs and the selected symbol."""

from loguru import logger
from pydantic import ValidationError

from tradedesk.config import get_settings
from tradedesk.schemas.workspace import CalculatorInputs
from tradedesk.services.position_sizer import get_symbol
from tradedesk.storage.kv_store import CALCULATOR_KEY, SYMBOL_KEY, KeyValueStore


class CalculatorStateService:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    async def load_inputs(self) -> CalculatorInputs:
        raw = await self.store.get(CALCULATOR_KEY)
        if raw is None:
            return CalculatorInputs()
        try:
            return CalculatorInputs.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable calculator inputs: {raw!r}", raw=raw[:100])
            return CalculatorInputs()

    async def save_inputs(self, inputs: CalculatorInputs) -> None:
        await self.store.set(CALCULATOR_KEY, inputs.model_dump_json())

    async def reset_inputs(self) -> CalculatorInputs:
        inputs = CalculatorInputs()
        await self.save_inputs(inputs)
        return inputs

    async def load_symbol(self) -> str:
        """Stored symbol, falling back to the configured default."""
        symbol = await self.store.get(SYMBOL_KEY)
        if symbol is None:
            return get_settings().default_symbol
        try:
            get_symbol(symbol)
        except ValueError:
            logger.warning("Ignoring stored unknown symbol {symbol}", symbol=symbol)
            return get_settings().default_symbol
        return symbol

    async def save_symbol(self, symbol: str) -> None:
        """Persist the selected symbol.

        Raises:
            ValueError: If the symbol is not recognized.
        """
        get_symbol(symbol)
        await self.store.set(SYMBOL_KEY, symbol)
