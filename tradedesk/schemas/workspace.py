"""Persisted workspace payload schemas."""

from pydantic import BaseModel, ConfigDict, Field


class CalculatorInputs(BaseModel):
    """Raw calculator form inputs, stored exactly as entered."""

    risk: str = ""
    stop: str = ""
    tp: str = ""


class ChecklistState(BaseModel):
    """Checked checklist items for one exchange-local trading date."""

    date_key: str = Field(alias="dateKey")
    items: dict[str, bool] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)
