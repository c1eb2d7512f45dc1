from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RaceMarker(Base):
    """One row per race id that has been submitted at least once."""

    __tablename__ = "races"

    race_id = Column(String, primary_key=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self):
        return f"<RaceMarker(race_id={self.race_id}, created_at={self.created_at})>"
