from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EventOption(BaseModel):
    # Snapshot semantics: records keep their own copy of name and price.
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: int = Field(ge=0)


class RegistrationIn(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    college: str = ""
    roll_number: str = ""
    section: str = ""
    selected_events: list[str] = Field(default_factory=list)


class NewRegistration(BaseModel):
    """A validated registration that has not been stored yet."""

    name: str
    email: str
    phone: str
    college: str
    roll_number: str = ""
    section: str = ""
    selected_events: list[EventOption] = Field(min_length=1)
    total_amount: int = Field(ge=0)

    @model_validator(mode="after")
    def check_total(self):
        if self.total_amount != sum(e.price for e in self.selected_events):
            raise ValueError("total_amount must equal the sum of selected event prices")
        return self


class Registration(NewRegistration):
    """A stored registration; id and registration_date come from the store."""

    id: Optional[str] = None
    registration_date: datetime

    @property
    def event_names(self) -> list[str]:
        return [e.name for e in self.selected_events]


class EventStat(BaseModel):
    event_id: str
    event_name: str
    participant_count: int = 0
    revenue: int = 0


class DashboardTotals(BaseModel):
    participants: int = 0
    revenue: int = 0
    events: int = 0


class StatsOut(BaseModel):
    generation: int
    totals: DashboardTotals
    stats: list[EventStat]
