"""Exception types raised by docpager."""


class ConfigurationError(ValueError):
    """Raised when a stage or pipeline is assembled with invalid settings.

    Always raised before any document is processed.
    """
    pass


class PipelineNotFoundError(KeyError):
    """Raised when documents are requested from a pipeline that has not run."""
    pass
