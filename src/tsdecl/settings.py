from enum import Enum
from typing import Optional, Tuple, Type

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


class NewLineKind(str, Enum):
    LF = "lf"
    CRLF = "crlf"


class QuoteStyle(str, Enum):
    DOUBLE = "double"
    SINGLE = "single"


class PrinterSettings(BaseSettings):
    """Settings controlling the layout of printed TypeScript."""

    model_config = SettingsConfigDict(env_prefix="TSDECL_")

    file_name: str = Field(
        default="generated.ts",
        description="Name of the virtual source file the printer anchors output to.",
    )
    new_line: NewLineKind = Field(
        default=NewLineKind.LF,
        description='Line ending used for the whole output ("lf" or "crlf").',
    )
    indent_size: int = Field(
        default=4,
        ge=0,
        description="Number of spaces per indentation level inside declaration bodies.",
    )
    quote_style: QuoteStyle = Field(
        default=QuoteStyle.DOUBLE,
        description='Quote character used for string literals ("double" or "single").',
    )


def load_settings(
    env_prefix: Optional[str] = None,
    env_file: Optional[str] = None,
    toml_file: Optional[str] = None,
    json_file: Optional[str] = None,
    **kwargs,
) -> PrinterSettings:
    config_dict = SettingsConfigDict(
        env_prefix=env_prefix if env_prefix is not None else "TSDECL_",
        env_file=env_file,
        toml_file=toml_file,
        json_file=json_file,
    )

    class Settings(PrinterSettings):
        model_config = config_dict

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: Type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
        ) -> Tuple[PydanticBaseSettingsSource, ...]:
            sources: list[PydanticBaseSettingsSource] = [
                init_settings,
                env_settings,
                dotenv_settings,
            ]
            if toml_file:
                sources.append(TomlConfigSettingsSource(settings_cls))
            if json_file:
                sources.append(JsonConfigSettingsSource(settings_cls))
            return tuple(sources)

    return Settings(**kwargs)

