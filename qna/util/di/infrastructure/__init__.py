"""Infrastructure providers.

Implementations must be imported for ``get_provider`` to find them through
``__subclasses__()``.
"""

from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = ["PersistenceProvider", "ProdPersistenceProvider"]
