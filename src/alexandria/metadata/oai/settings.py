from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from alexandria.metadata.service.configuration.service_configuration import (
    ServiceConfiguration,
)


class OAISettings(ServiceConfiguration):
    # The public host name of the repository, used to build absolute URLs
    # for the stored paths of derived files (e.g. "alexandria.ucsb.edu").
    host_name: str

    model_config = SettingsConfigDict(env_prefix="ALEXANDRIA_OAI_")
