"""City reference model. Table: city."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from refcache.infrastructure.persistence.database import Base
from refcache.infrastructure.persistence.models.mixins import ActiveMixin, TimestampMixin


class City(ActiveMixin, TimestampMixin, Base):
    """City within a state."""

    __tablename__ = "city"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    state_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("state.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    population: Mapped[int | None] = mapped_column(Integer, nullable=True)
