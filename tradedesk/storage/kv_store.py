"""String key-value store on top of the kv_records table."""

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tradedesk.models.kv_record import KeyValueRecord

# Storage keys shared by the workspace services
SYMBOL_KEY = "crtv_symbol"
CALCULATOR_KEY = "crtv_calculator"
CHECKLIST_KEY = "crtv_checklist"


class KeyValueStore:
    """Get/set/remove of string values, committed on every write."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, key: str) -> str | None:
        result = await self.session.execute(
            select(KeyValueRecord.value).where(KeyValueRecord.key == key)
        )
        return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> None:
        record = await self.session.get(KeyValueRecord, key)
        if record is None:
            self.session.add(KeyValueRecord(key=key, value=value))
        else:
            record.value = value
        await self.session.commit()
        logger.debug("Stored key={key} ({size} chars)", key=key, size=len(value))

    async def remove(self, key: str) -> None:
        await self.session.execute(
            delete(KeyValueRecord).where(KeyValueRecord.key == key)
        )
        await self.session.commit()
        logger.debug("Removed key={key}", key=key)
