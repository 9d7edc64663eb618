"""Header expectations derived from declared headers.

A required header must carry an example value: the runner has nothing
to send or compare against otherwise. ``resolve_headers`` returns a
result so callers may collect every violation; ``expected_headers`` and
``request_headers`` raise on the first one.
"""

from dataclasses import dataclass, field

from api_expect.description.base import Body, Header, Method, Response
from api_expect.errors import MissingExampleError, MissingExamplesError


@dataclass
class HeaderResolution:
    headers: dict[str, str | None] = field(default_factory=dict)
    errors: list[MissingExampleError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> dict[str, str | None]:
        """Return the mapping, or raise the collected error(s)."""
        if len(self.errors) == 1:
            raise self.errors[0]
        if self.errors:
            raise MissingExamplesError(self.errors)
        return self.headers


def resolve_headers(headers: list[Header], collect_all: bool = False) -> HeaderResolution:
    """Map header name to example, checking required headers have one.

    With ``collect_all`` false, resolution stops at the first violation
    and no partial mapping is returned.
    """
    result = HeaderResolution()
    for header in headers:
        if not header.optional and header.example is None:
            result.errors.append(MissingExampleError(header.name))
            if not collect_all:
                result.headers = {}
                return result
            continue
        result.headers[header.name] = header.example
    if result.errors:
        result.headers = {}
    return result


def expected_headers(target: Body | Response) -> dict[str, str | None]:
    """Headers the response for ``target`` is expected to carry."""
    response = target.parent if isinstance(target, Body) else target
    return resolve_headers(response.headers).unwrap()


def request_headers(method: Method, body: Body | None = None) -> dict[str, str | None]:
    """Headers to send for ``method``, with Content-Type taken from ``body``."""
    return with_content_type(resolve_headers(method.headers).unwrap(), body)


def with_content_type(headers: dict[str, str | None], body: Body | None) -> dict[str, str | None]:
    """Copy of resolved request ``headers`` plus Content-Type from ``body``, if any."""
    headers = dict(headers)
    if body is not None:
        headers["Content-Type"] = body.media_type
    return headers
