"""Typed description graph.

The parsing collaborator converts an API description into these models.
Everything downstream (URI templates, expectations, the registry) reads
only these types. Ordered lists are used wherever declaration order is
observable, e.g. query parameters in a URI template.

Nodes link to their parent. Links are rebuilt whenever a node is
constructed or copied, and take no part in equality.
"""

import json
from typing import Any, ClassVar

from pydantic import BaseModel, PrivateAttr, field_validator


def _coerce_example(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class GraphModel(BaseModel):
    """Base for graph nodes: parent links, field-only equality, relinking copies."""

    child_fields: ClassVar[tuple[str, ...]] = ()

    _parent: Any = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        self._link()

    def _link(self) -> None:
        for name in self.child_fields:
            for child in getattr(self, name):
                child._parent = self

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BaseModel):
            return NotImplemented
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def model_copy(self, *, update: dict[str, Any] | None = None, deep: bool = False):
        copied = super().model_copy(update=update, deep=deep)
        if not deep:
            # children are shared by a shallow copy; give the copy its own
            for name in self.child_fields:
                setattr(copied, name, [child.model_copy() for child in getattr(copied, name)])
        copied._link()
        return copied

    def __deepcopy__(self, memo: dict[int, Any] | None = None):
        copied = type(self).model_validate(self.model_dump(round_trip=True))
        copied._parent = self._parent
        return copied


class Parameter(GraphModel):
    """A query or URI parameter as declared, name not yet encoded."""

    name: str
    example: str | None = None
    optional: bool = True

    @field_validator("example", mode="before")
    @classmethod
    def coerce_example(cls, v: Any) -> str | None:
        return _coerce_example(v)


class Header(GraphModel):
    """A declared request or response header."""

    name: str
    optional: bool = True
    example: str | None = None

    @field_validator("example", mode="before")
    @classmethod
    def coerce_example(cls, v: Any) -> str | None:
        return _coerce_example(v)


class Body(GraphModel):
    """A response body for one media type."""

    media_type: str
    example: str | None = None

    @field_validator("example", mode="before")
    @classmethod
    def dump_structured_example(cls, v: Any) -> str | None:
        if isinstance(v, (dict, list)):
            return json.dumps(v)
        return _coerce_example(v)

    @property
    def parent(self) -> "Response":
        return self._parent


class Response(GraphModel):
    status: int
    headers: list[Header] = []
    bodies: list[Body] = []

    child_fields: ClassVar[tuple[str, ...]] = ("bodies",)

    @property
    def parent(self) -> "Method":
        return self._parent


class Trait(GraphModel):
    """A named variant of a method, adding its own query parameters."""

    name: str
    query_parameters: list[Parameter] = []


class Method(GraphModel):
    verb: str  # GET / POST / PUT / DELETE / PATCH ...
    query_parameters: list[Parameter] = []
    headers: list[Header] = []  # request headers
    traits: list[Trait] = []
    responses: list[Response] = []

    child_fields: ClassVar[tuple[str, ...]] = ("responses",)

    @field_validator("verb")
    @classmethod
    def verb_upper(cls, v: str) -> str:
        return v.upper()

    @property
    def parent(self) -> "Resource":
        return self._parent

    def trait(self, name: str) -> Trait | None:
        for trait in self.traits:
            if trait.name == name:
                return trait
        return None


class Resource(GraphModel):
    path: str  # /posts/{id}
    uri_parameters: list[Parameter] = []
    methods: list[Method] = []

    child_fields: ClassVar[tuple[str, ...]] = ("methods",)


class Description(GraphModel):
    """Root of the graph: resources in declaration order."""

    title: str = ""
    base_uri: str | None = None
    resources: list[Resource] = []

    child_fields: ClassVar[tuple[str, ...]] = ("resources",)

    def trait_names(self) -> list[str]:
        """Distinct trait names, in the order they are first declared."""
        names: list[str] = []
        for resource in self.resources:
            for method in resource.methods:
                for trait in method.traits:
                    if trait.name not in names:
                        names.append(trait.name)
        return names
