from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from alexandria.metadata.core.config import CannotLoadConfiguration


class ServiceConfiguration(BaseSettings):
    """
    Base class for process-wide configuration. Each subclass defines its
    settings as pydantic fields, loaded from environment variables with the
    prefix given in its model_config.
    """

    model_config = SettingsConfigDict(
        env_prefix="ALEXANDRIA_",
        # Strip whitespace from all strings
        str_strip_whitespace=True,
        # Settings are loaded once at process start.
        frozen=True,
        # Allow env vars to be loaded from a .env file in the working directory
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    def __init__(self, *args: Any, **kwargs: Any):
        try:
            super().__init__(*args, **kwargs)
        except ValidationError as error_exception:
            # Report the failing settings by the environment variable that
            # sets them, rather than by pydantic location.
            errors = error_exception.errors()
            error_log_message = f"Error loading settings from environment:"
            for error in errors:
                delimiter = self.model_config.get("env_nested_delimiter") or "__"
                pydantic_location = error["loc"]
                if pydantic_location:
                    first_error_location = str(pydantic_location[0])
                    env_var = (
                        f"{self.model_config.get('env_prefix')}{first_error_location.upper()}"
                        if type(self).model_fields.get(first_error_location)
                        else first_error_location.upper()
                    )
                    location = delimiter.join(
                        str(e).upper() for e in (env_var, *pydantic_location[1:])
                    )
                    error_log_message += f"\n  {location}:  {error['msg']}"
                else:
                    error_log_message += f"\n  {error['msg']}"
            raise CannotLoadConfiguration(error_log_message) from error_exception
