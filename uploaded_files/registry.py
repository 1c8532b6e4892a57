from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from uploaded_files.exceptions import NoConfiguration
from uploaded_files.models.configuration import UploadConfiguration

logger = logging.getLogger(__name__)


class ConfigurationRegistry:
    """Ordered, read-only set of named upload configurations.

    Order is the insertion order of the mapping it was built from; the first
    entry doubles as the fallback for unknown names in ``resolve``.
    """

    def __init__(self, configurations: Mapping[str, UploadConfiguration | Mapping[str, Any]] | None = None) -> None:
        entries: dict[str, UploadConfiguration] = {}
        for name, config in (configurations or {}).items():
            if not isinstance(config, UploadConfiguration):
                config = UploadConfiguration.model_validate(config)
            entries[name] = config
        self._configurations = MappingProxyType(entries)

    def has(self, name: str | None) -> bool:
        return name is not None and name in self._configurations

    def get(self, name: str | None) -> UploadConfiguration | None:
        if name is None:
            return None
        return self._configurations.get(name)

    def resolve(self, name: str = "default") -> UploadConfiguration:
        config = self._configurations.get(name)
        if config is not None:
            return config

        if not self._configurations:
            raise NoConfiguration(
                "No upload configuration found. Please configure at least one filesystem.",
                configuration=name,
            )

        first = next(iter(self._configurations))
        logger.debug("Configuration %r not found, falling back to %r", name, first)
        return self._configurations[first]

    def names(self) -> list[str]:
        return list(self._configurations)

    def __contains__(self, name: object) -> bool:
        return name in self._configurations

    def __iter__(self) -> Iterator[str]:
        return iter(self._configurations)

    def __len__(self) -> int:
        return len(self._configurations)

    def __repr__(self) -> str:
        return f"ConfigurationRegistry({self.names()!r})"


def load_configurations(raw: Mapping[str, Any]) -> ConfigurationRegistry:
    """Validate externally sourced configurations and build a registry.

    At least one entry is required and every entry needs a non-empty
    ``filesystem``; ``base_uri`` and ``path`` default to ``None``.
    """
    if not raw:
        raise ValueError("At least one upload configuration must be defined")

    registry = ConfigurationRegistry(raw)
    logger.info("Loaded %d upload configurations: %s", len(registry), ", ".join(registry.names()))
    return registry
