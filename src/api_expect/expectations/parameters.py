"""Per-request parameter lists handed to the test runner."""

from pydantic import BaseModel

from api_expect.description.base import Method, Parameter, Trait
from api_expect.expectations.uri_template import query_parameters_for


class QueryParameter(BaseModel):
    """One request parameter: raw name, example value, required flag."""

    name: str
    value: str | None
    required: bool


def format_parameters(params: list[Parameter]) -> list[QueryParameter]:
    return [
        QueryParameter(name=p.name, value=p.example, required=not p.optional)
        for p in params
    ]


def parameters_for(method: Method, trait: Trait | None = None) -> list[QueryParameter]:
    """Query parameter list in declaration order. Names stay unencoded."""
    return format_parameters(query_parameters_for(method, trait))


def uri_parameters_for(method: Method) -> list[QueryParameter]:
    """Parameters that expand the owning resource's path template."""
    return format_parameters(method.parent.uri_parameters)
