"""State/province reference model. Table: state."""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from refcache.infrastructure.persistence.database import Base
from refcache.infrastructure.persistence.models.mixins import ActiveMixin, TimestampMixin


class State(ActiveMixin, TimestampMixin, Base):
    """State within a country; code is unique per country."""

    __tablename__ = "state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    country_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("country.id", ondelete="CASCADE"), nullable=False, index=True
    )
    code: Mapped[str] = mapped_column(String, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (UniqueConstraint("country_id", "code", name="uq_state_country_code"),)
