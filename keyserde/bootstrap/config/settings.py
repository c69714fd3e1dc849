from pathlib import Path
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from keyserde.bootstrap.config.loader import get_configfile


class KeyserdeConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="KEYSERDE_",
        extra="forbid"
    )

    fixtures_dir: Annotated[
        Path,
        Field(
            description=(
                "Directory holding the fixture files, one per format, each named\n"
                "after its format (e.g. 'json', 'bincode', 'pickle_proto3_true').\n"
                "'generate' creates it when missing."
            ),
            default=Path("serialized")
        )
    ]

    formats: Annotated[
        list[str],
        Field(
            description=(
                "Names of the formats to run, in any order.\n"
                "Formats always run in catalogue order. Empty means all formats."
            ),
            default_factory=list
        )
    ]

    check_consistency: Annotated[
        bool,
        Field(
            description=(
                "Also check that each restored bundle is cryptographically sound:\n"
                "keys derive from the secret key and both signatures verify."
            ),
            default=True
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        configfile = get_configfile()
        if configfile is None:
            return init_settings, env_settings
        return init_settings, env_settings, YamlConfigSettingsSource(settings_cls, yaml_file=configfile)
