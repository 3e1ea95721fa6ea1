"""
Provider Registry

Holds the prepared providers available to a run, keyed by qualified name.
"""

from __future__ import annotations

import logging

from .base.provider import Provider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Registry for managing resource providers"""

    def __init__(self) -> None:
        self.providers: dict[str, Provider] = {}

    def register(self, provider: Provider) -> None:
        """
        Register a prepared provider

        Args:
            provider: Provider whose ``prepare()`` has succeeded

        Raises:
            ValueError: If the provider is not prepared or its name is taken
        """
        if provider.spec is None:
            raise ValueError(f"Provider '{provider.name}' must be prepared before registration")
        if provider.name in self.providers:
            raise ValueError(f"Provider with name '{provider.name}' is already registered")

        self.providers[provider.name] = provider
        logger.debug("Registered provider: %s (%s)", provider.name, provider.source())

    def get(self, name: str) -> Provider | None:
        """
        Get a provider by name

        Accepts either the qualified name (``host::hosts``) or a bare type
        (``host``) when exactly one provider of that type is registered.
        """
        if name in self.providers:
            return self.providers[name]
        by_type = [p for p in self.providers.values() if p.spec is not None and p.spec.type == name]
        if len(by_type) == 1:
            return by_type[0]
        return None

    def get_all(self) -> list[Provider]:
        return list(self.providers.values())

    def get_all_ids(self) -> list[str]:
        return list(self.providers.keys())

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def unregister(self, name: str) -> None:
        if name in self.providers:
            del self.providers[name]

    def clear(self) -> None:
        """Clear all registered providers (useful for testing)"""
        self.providers.clear()

    def __len__(self) -> int:
        return len(self.providers)
