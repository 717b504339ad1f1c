"""Application interfaces (ports): cache store and table source protocols.

No runtime imports from refcache.infrastructure.
"""

from refcache.application.interfaces.adapters import ICacheStore, ITableSource

__all__ = ["ICacheStore", "ITableSource"]
