"""Spec loader: walks a description graph once and fills a registry.

Traversal is resources, then methods, then responses, all in
declaration order. Everything is built into local tables and committed
at the end, so a failed load leaves the registry as it was.
"""

import logging

from api_expect.config import Config
from api_expect.description.base import Description, Header, Method, Trait
from api_expect.description.reader import read_description
from api_expect.errors import DescriptionError, MissingExampleError, MissingExamplesError, RegistryStateError
from api_expect.expectations.headers import resolve_headers, with_content_type
from api_expect.expectations.parameters import parameters_for, uri_parameters_for
from api_expect.expectations.uri_template import build_uri_template
from api_expect.registry.collections import (
    DEFAULT_CONTEXT,
    GROUP_KEYS,
    REGISTRY,
    Registry,
    RequestFixture,
)

logger = logging.getLogger(__name__)


def load(
    description: Description,
    registry: Registry = REGISTRY,
    collect_missing_examples: bool = False,
) -> Registry:
    """Populate ``registry`` from ``description``.

    By default the first required header without an example aborts the
    load with MissingExampleError. With ``collect_missing_examples`` the
    whole graph is walked first and every violation is reported together.
    """
    if registry.loaded:
        raise RegistryStateError("Registry is already loaded, reset it before loading again")

    trait_names = description.trait_names()
    if DEFAULT_CONTEXT in trait_names:
        raise DescriptionError(f"Trait name {DEFAULT_CONTEXT!r} is reserved for the default context")

    groups: dict[str, list] = {key: [] for key in GROUP_KEYS}
    contexts: dict[str, list[RequestFixture]] = {DEFAULT_CONTEXT: []}
    for name in trait_names:
        contexts.setdefault(name, [])
    errors: list[MissingExampleError] = []

    for resource in description.resources:
        groups["resource"].append(resource)
        for method in resource.methods:
            groups["method"].append(method)
            logger.debug("Loading %s %s", method.verb, resource.path)

            request = _resolve(method.headers, collect_missing_examples, errors)
            responses = []
            for response in method.responses:
                groups["response"].append(response)
                groups["body"].extend(response.bodies)
                expected = _resolve(response.headers, collect_missing_examples, errors)
                responses.append((response, expected))

            variants: list[tuple[str, Trait | None]] = [(DEFAULT_CONTEXT, None)]
            variants.extend((trait.name, trait) for trait in method.traits)
            for name, trait in variants:
                contexts[name].extend(_fixtures(method, name, trait, request, responses))

    if errors:
        raise MissingExamplesError(errors) if len(errors) > 1 else errors[0]

    registry.populate(groups, contexts)
    logger.info(
        "Loaded %d resources, %d methods, %d responses; contexts: %s",
        len(groups["resource"]),
        len(groups["method"]),
        len(groups["response"]),
        ", ".join(contexts),
    )
    return registry


def load_from_config(config: Config, registry: Registry = REGISTRY) -> Registry:
    """Read the configured description file and load it."""
    description = read_description(config.source_file)
    return load(
        description,
        registry=registry,
        collect_missing_examples=config.collect_missing_examples,
    )


def _resolve(
    headers: list[Header],
    collect_all: bool,
    errors: list[MissingExampleError],
) -> dict[str, str | None]:
    resolution = resolve_headers(headers, collect_all=collect_all)
    if collect_all:
        errors.extend(resolution.errors)
        return resolution.headers
    return resolution.unwrap()


def _fixtures(
    method: Method,
    context: str,
    trait: Trait | None,
    request: dict[str, str | None],
    responses: list,
) -> list[RequestFixture]:
    uri_template = build_uri_template(method, trait)
    parameters = parameters_for(method, trait)
    uri_parameters = uri_parameters_for(method)

    fixtures = []
    for response, expected in responses:
        for body in response.bodies or [None]:
            fixtures.append(
                RequestFixture(
                    context=context,
                    resource=method.parent.path,
                    method=method.verb,
                    uri_template=uri_template,
                    parameters=parameters,
                    uri_parameters=uri_parameters,
                    headers=with_content_type(request, body),
                    expected_status=response.status,
                    expected_headers=expected,
                    expected_body=body.example if body is not None else None,
                )
            )
    return fixtures
