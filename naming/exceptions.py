class NamingError(Exception):
    pass


class ValidationError(NamingError):
    """Missing or malformed request input."""


class ConfigurationError(NamingError):
    """A provider credential is not configured."""


class UpstreamParseError(NamingError):
    """A provider answered but not in the shape we asked for."""


class UpstreamNetworkError(NamingError):
    """A call to an external service failed."""


class PipelineExhaustedError(NamingError):
    """Every attempt was abandoned before producing results."""
