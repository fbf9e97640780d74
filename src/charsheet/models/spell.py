"""Local cache of SRD spells."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utc_now


class SrdSpellRecord(Base):
    """A spell fetched from the SRD API, keyed by its SRD index."""

    __tablename__ = "srd_spells"

    index: Mapped[str] = mapped_column(String(100), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    school: Mapped[str] = mapped_column(String(100), nullable=False)
    casting_time: Mapped[str] = mapped_column(String(100), nullable=False)
    spell_range: Mapped[str] = mapped_column("range", String(100), nullable=False)
    duration: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    classes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    cached_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    def __repr__(self) -> str:
        return f"<SrdSpellRecord(index='{self.index}', level={self.level})>"
