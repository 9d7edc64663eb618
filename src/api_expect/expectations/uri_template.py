"""RFC 6570 URI templates for a method's resource and query parameters."""

from api_expect.description.base import Method, Parameter, Trait
from api_expect.expectations.encoding import encode_parameter_name


def query_parameters_for(method: Method, trait: Trait | None = None) -> list[Parameter]:
    """Query parameters in declaration order, the trait's after the method's own."""
    params = list(method.query_parameters)
    if trait is not None:
        params.extend(trait.query_parameters)
    return params


def build_uri_template(method: Method, trait: Trait | None = None) -> str:
    """Build ``<path>{?a,b}`` for the method's owning resource.

    Without query parameters the resource path is returned verbatim.
    Names are encoded but never deduplicated.
    """
    template = method.parent.path
    params = query_parameters_for(method, trait)
    if not params:
        return template
    names = ",".join(encode_parameter_name(p.name) for p in params)
    return f"{template}{{?{names}}}"
