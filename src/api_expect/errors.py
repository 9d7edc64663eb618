"""Error taxonomy for api-expect.

- MissingExampleError: a required header has no example value
- MissingExamplesError: several of the above, collected in one pass
- DescriptionError: a description graph file could not be read
- ConfigError: configuration loading/validation failed
- RegistryStateError: the registry was loaded twice without a reset
"""


class ApiExpectError(Exception):
    """Base class for every error raised by api-expect."""


class MissingExampleError(ApiExpectError):
    """A required header does not carry an example value."""

    def __init__(self, header_name: str):
        self.header_name = header_name
        super().__init__(f"Required header {header_name} does not have an example value")


class MissingExamplesError(ApiExpectError):
    """Several required headers are missing example values."""

    def __init__(self, errors: list[MissingExampleError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


class DescriptionError(ApiExpectError):
    """Description graph file is missing or malformed."""


class ConfigError(ApiExpectError):
    """Configuration loading/validation error."""


class RegistryStateError(ApiExpectError):
    """Registry used outside its load/reset lifecycle."""
