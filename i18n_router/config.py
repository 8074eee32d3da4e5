from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from i18n_router.constants import COOKIE_MAX_AGE, COOKIE_NAME, STORAGE_KEY
from i18n_router.exceptions import ConfigError
from i18n_router.i18n.path_map import LocalePathMap
from i18n_router.schemas.locale import SwitcherPosition

load_dotenv()


class I18nRouterConfig(BaseModel):
    """User-facing router configuration.

    Accepts snake_case or camelCase keys, so a config written for the
    site generator (``defaultLocale``, ``localeNames``...) loads as is.
    ``rewrites`` and ``switcher_position`` are carried through for the
    theme and never interpreted here.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    locales: list[str] | dict[str, str]
    default_locale: str
    locale_names: dict[str, str] = {}
    rewrites: dict[str, str] = {}
    switcher_position: SwitcherPosition = "nav"

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> I18nRouterConfig:
        """Validate raw config data, reporting problems as ConfigError."""
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            first = e.errors()[0]
            loc = ".".join(str(part) for part in first["loc"]) or None
            raise ConfigError(f"Invalid i18n router config: {first['msg']}", field=loc) from e

    def build_path_map(self) -> LocalePathMap:
        return LocalePathMap.build(self.locales, self.default_locale)


@dataclass(frozen=True)
class NormalizedConfig:
    """Validated config: the locale map plus the pass-through theme options."""

    path_map: LocalePathMap
    locale_names: dict[str, str] = field(default_factory=dict)
    rewrites: dict[str, str] = field(default_factory=dict)
    switcher_position: SwitcherPosition = "nav"

    @property
    def locales(self) -> list[str]:
        return self.path_map.all_locales()

    @property
    def path_to_locale(self) -> dict[str, str]:
        return self.path_map.path_to_locale

    @property
    def locale_to_path(self) -> dict[str, str]:
        return self.path_map.locale_to_path

    @property
    def default_locale(self) -> str:
        return self.path_map.default_locale


def normalize_config(config: I18nRouterConfig | Mapping[str, Any]) -> NormalizedConfig:
    """Validate user config and build its locale map.

    Raises:
        ConfigError: the config is malformed or the locale map is invalid.
    """
    if not isinstance(config, I18nRouterConfig):
        config = I18nRouterConfig.parse(config)
    return NormalizedConfig(
        path_map=config.build_path_map(),
        locale_names=dict(config.locale_names),
        rewrites=dict(config.rewrites),
        switcher_position=config.switcher_position,
    )


class Settings(BaseSettings):
    # Application settings
    app_name: str = "i18n Router"
    app_version: str = "0.3.0"
    debug: bool = False
    environment: str = "development"

    # Locale settings (JSON in the environment, e.g. I18N_ROUTER_LOCALES='{"zh-CN": "zh", "en-US": "en"}')
    locales: list[str] | dict[str, str] = ["en"]
    default_locale: str = "en"
    locale_names: dict[str, str] = {}
    switcher_position: SwitcherPosition = "nav"

    # Preference persistence
    cookie_name: str = COOKIE_NAME
    storage_key: str = STORAGE_KEY
    cookie_max_age: int = COOKIE_MAX_AGE

    # Static site served by the app, if any
    site_dir: str | None = None

    # Logging settings
    log_level: str = "INFO"
    json_logs: bool = True

    model_config = SettingsConfigDict(
        env_prefix="I18N_ROUTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def router_config(self) -> I18nRouterConfig:
        return I18nRouterConfig.parse(
            {
                "locales": self.locales,
                "default_locale": self.default_locale,
                "locale_names": self.locale_names,
                "switcher_position": self.switcher_position,
            }
        )


settings = Settings()
