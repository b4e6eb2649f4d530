from __future__ import annotations

import logging
from enum import StrEnum, auto

from pydantic_settings import SettingsConfigDict

from alexandria.metadata.service.configuration.service_configuration import (
    ServiceConfiguration,
)


class LogLevel(StrEnum):
    """
    Log levels as an Enum.

    The members' values are the upper-cased names the logging module uses, so
    they can be passed to it directly.
    """

    @staticmethod
    def _generate_next_value_(
        name: str, start: int, count: int, last_values: list[str]
    ) -> str:
        return name.upper()

    debug = auto()
    info = auto()
    warning = auto()
    error = auto()

    @property
    def levelno(self) -> int:
        return logging.getLevelNamesMapping()[self.value]

    @classmethod
    def from_level(cls, level: int | str) -> LogLevel:
        """
        Get a member of this enum from a string or integer log level.
        """
        if isinstance(level, int):
            parsed_level = logging.getLevelName(level)
        else:
            parsed_level = str(level).upper()

        try:
            return cls(parsed_level)
        except ValueError:
            raise ValueError(f"'{level}' is not a valid LogLevel") from None


class LoggingConfiguration(ServiceConfiguration):
    level: LogLevel = LogLevel.info
    # Applied to chatty third-party loggers.
    verbose_level: LogLevel = LogLevel.warning
    json_format: bool = False

    model_config = SettingsConfigDict(env_prefix="ALEXANDRIA_LOG_")
