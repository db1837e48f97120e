from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from datetime import datetime


class Base(DeclarativeBase):
    pass


class RegistrationRow(Base):
    __tablename__ = "registrations"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120))
    email: Mapped[str] = mapped_column(String(160), index=True)
    phone: Mapped[str] = mapped_column(String(20))
    college: Mapped[str] = mapped_column(String(200))
    roll_number: Mapped[str] = mapped_column(String(40), default="")
    section: Mapped[str] = mapped_column(String(40), default="")
    selected_events: Mapped[list] = mapped_column(JSON)  # [{"id", "name", "price"}, ...]
    total_amount: Mapped[int] = mapped_column(Integer)
    registration_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
