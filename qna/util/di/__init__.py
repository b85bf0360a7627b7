"""Dependency injection wiring.

Every provider class is listed in ``PROVIDERS``. A provider that declares
``__mock_component__`` is a swappable component; its subclasses are the
production and mock implementations, told apart by ``__is_mock__``.
"""

from typing import Type

from qna.util.di.application import ProdApplicationProvider
from qna.util.di.base import Component, ProviderBase
from qna.util.di.core import ProdConfigProvider
from qna.util.di.domain import ProdDomainProvider
from qna.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,  # Mockable: in-memory store in tests
]


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation."""
    return {
        p.__mock_component__ for p in PROVIDERS if p.__mock_component__ is not None
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for a PROVIDERS entry.

    Args:
        base: Entry of PROVIDERS
        use_mock: Whether a swappable component should use its mock

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If there is no implementation of the requested kind, or
            more than one
    """
    if base.__mock_component__ is None:
        return base

    candidates = [
        c for c in base.__subclasses__() if c.__is_mock__ == use_mock
    ]
    if len(candidates) != 1:
        kind = "mock" if use_mock else "production"
        raise ValueError(
            f"Expected one {kind} implementation for {base.__mock_component__}, "
            f"found {len(candidates)}"
        )

    return candidates[0]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
