"""Country reference model. Table: country."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from refcache.infrastructure.persistence.database import Base
from refcache.infrastructure.persistence.models.mixins import ActiveMixin, TimestampMixin


class Country(ActiveMixin, TimestampMixin, Base):
    """Country keyed by ISO 3166-1 alpha-2 code."""

    __tablename__ = "country"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(2), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
