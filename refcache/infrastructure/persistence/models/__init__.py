"""Sample reference table models (country, state, city).

Importing this package registers the tables on Base.metadata so the SQL
table source can resolve them by name.
"""

from refcache.infrastructure.persistence.models.city import City
from refcache.infrastructure.persistence.models.country import Country
from refcache.infrastructure.persistence.models.state import State

__all__ = ["City", "Country", "State"]
