"""Resource Descriptor Registry — process-wide, read-only after startup."""

import logging
from collections.abc import Iterable

from content_admin.domain.entities import ResourceDescriptor
from content_admin.domain.exceptions import UnknownResourceError

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """Holds one ResourceDescriptor per resource key.

    Descriptors are registered while the application starts; ``freeze()``
    ends that phase and every later registration attempt fails.
    """

    def __init__(self, descriptors: Iterable[ResourceDescriptor] = ()):
        self._descriptors: dict[str, ResourceDescriptor] = {}
        self._frozen = False
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: ResourceDescriptor) -> None:
        if self._frozen:
            raise RuntimeError(
                f"Cannot register '{descriptor.resource_key}': registry is frozen"
            )
        if descriptor.resource_key in self._descriptors:
            raise ValueError(f"Resource '{descriptor.resource_key}' is already registered")
        self._descriptors[descriptor.resource_key] = descriptor

    def freeze(self) -> "ResourceRegistry":
        self._frozen = True
        logger.info("Resource registry frozen with %d resources", len(self._descriptors))
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def describe(self, resource_key: str) -> ResourceDescriptor:
        try:
            return self._descriptors[resource_key]
        except KeyError:
            raise UnknownResourceError(resource_key) from None

    def keys(self) -> list[str]:
        return list(self._descriptors)

    def __contains__(self, resource_key: object) -> bool:
        return resource_key in self._descriptors
