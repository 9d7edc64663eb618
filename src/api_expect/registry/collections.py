"""Group and context registries queried by the test runner.

A registry is written once by the loader and is read-only afterwards
until ``reset``. Resetting while the runner is reading is not
supported; callers must hold exclusive access for a reset.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel

from api_expect.errors import RegistryStateError
from api_expect.expectations.parameters import QueryParameter

logger = logging.getLogger(__name__)

GROUP_KEYS = ("resource", "method", "response", "body")
DEFAULT_CONTEXT = "default"


class RequestFixture(BaseModel):
    """Everything the runner needs to issue one request and check its response."""

    context: str
    resource: str  # resource path template
    method: str
    uri_template: str
    parameters: list[QueryParameter]
    uri_parameters: list[QueryParameter] = []
    headers: dict[str, str | None] = {}
    expected_status: int
    expected_headers: dict[str, str | None] = {}
    expected_body: str | None = None


class Registry:
    """Process-wide lookup tables of groups and contexts."""

    def __init__(self):
        self._groups: dict[str, list[Any]] = {}
        self._contexts: dict[str, list[RequestFixture]] = {}
        self.loaded = False

    @property
    def groups(self) -> Mapping[str, list[Any]]:
        return MappingProxyType(self._groups)

    @property
    def contexts(self) -> Mapping[str, list[RequestFixture]]:
        return MappingProxyType(self._contexts)

    def group(self, key: str) -> list[Any]:
        """Loaded nodes of one category; empty when there are none."""
        return list(self._groups.get(key, []))

    def context(self, name: str) -> list[RequestFixture]:
        """Fixtures of one variant; empty when there are none."""
        return list(self._contexts.get(name, []))

    def populate(
        self,
        groups: dict[str, list[Any]],
        contexts: dict[str, list[RequestFixture]],
    ) -> None:
        """Commit fully built tables. Only allowed on an empty registry."""
        if self.loaded:
            raise RegistryStateError("Registry is already loaded, reset it before loading again")
        self._groups = {key: list(groups.get(key, [])) for key in GROUP_KEYS}
        self._contexts = {DEFAULT_CONTEXT: []}
        for name, fixtures in contexts.items():
            self._contexts[name] = list(fixtures)
        self.loaded = True

    def reset(self) -> None:
        self._groups = {}
        self._contexts = {}
        self.loaded = False
        logger.info("Registry reset")


REGISTRY = Registry()


def reset() -> None:
    """Clear the process-wide registry, e.g. between test runs."""
    REGISTRY.reset()
