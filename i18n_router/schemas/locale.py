"""
Locale Schemas

Pydantic models for the client config artifact and the /__i18n endpoints.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from i18n_router.constants import COOKIE_NAME, STORAGE_KEY

SwitcherPosition = Literal["nav", "sidebar", "none"]


class LocaleRoute(BaseModel):
    """One language switcher entry for the current page"""

    model_config = ConfigDict(frozen=True)

    locale: str = Field(..., description="Configured locale id")
    name: str = Field(..., description="Display name of the locale")
    url: str = Field(..., description="URL of the current page in this locale")
    active: bool = Field(False, description="Whether this is the locale of the current page")


class ClientConfigSnapshot(BaseModel):
    """Normalized locale config handed to the client-side tracker.

    Serialized with camelCase keys (``model_dump(by_alias=True)``) so the
    emitted artifact reads naturally from page scripts.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    locales: list[str]
    path_to_locale: dict[str, str] = Field(..., alias="pathToLocale")
    locale_to_path: dict[str, str] = Field(..., alias="localeToPath")
    default_locale: str = Field(..., alias="defaultLocale")
    locale_names: dict[str, str] = Field(default_factory=dict, alias="localeNames")
    switcher_position: SwitcherPosition = Field("nav", alias="switcherPosition")
    cookie_name: str = Field(COOKIE_NAME, alias="cookieName")
    storage_key: str = Field(STORAGE_KEY, alias="storageKey")


class AlternatesResponse(BaseModel):
    """Cross-language links for one page"""

    url: str
    locale: str = Field("", description="Locale decoded from the requested URL, empty when none")
    alternates: dict[str, str]


class SwitchResponse(BaseModel):
    """Target URL of a language switch"""

    url: str
    locale: str
