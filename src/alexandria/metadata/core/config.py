from alexandria.metadata.core.exceptions import ConfigurationError


class CannotLoadConfiguration(ConfigurationError):
    """The process-wide configuration is in an incomplete or inconsistent
    state.

    This is raised when settings cannot be loaded from the environment,
    before any metadata is processed.
    """
