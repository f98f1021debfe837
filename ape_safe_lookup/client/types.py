from typing import Annotated, Optional, Union

from ape.types import AddressType
from pydantic import AliasChoices, BaseModel, BeforeValidator, Field, field_validator


def clean_api_address(data: Union[AddressType, dict]) -> AddressType:
    # NOTE: Safe API returns `{'value':'<addr>', ...}` object
    if isinstance(data, dict):
        if "value" not in data:
            raise ValueError(f"Expected an address or an object with 'value', got: {data}")

        return data["value"]
    return data


Address = Annotated[AddressType, BeforeValidator(clean_api_address)]


def _none_to_list(value):
    if not value:
        return []
    return value


class SafeInfo(BaseModel):
    """A Safe as listed by ``/v2/owners/{owner}/safes/``."""

    address: Address
    owners: list[Address]
    threshold: int
    nonce: Optional[int] = None
    master_copy: Optional[Address] = Field(
        default=None,
        alias="masterCopy",
        validation_alias=AliasChoices("masterCopy", "implementation"),
    )
    fallback_handler: Optional[Address] = Field(default=None, alias="fallbackHandler")
    guard: Optional[Address] = None
    enabled_modules: list[Address] = Field(default=[], alias="enabledModules")

    @field_validator("enabled_modules", mode="before")
    def convert_none_to_empty_list(cls, value):
        return _none_to_list(value)


class OwnerSafesPage(BaseModel):
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: list[SafeInfo] = []


class SafeDetails(BaseModel):
    address: Address
    nonce: int
    threshold: int
    owners: list[Address]
    master_copy: Optional[Address] = Field(
        default=None,
        alias="masterCopy",
        validation_alias=AliasChoices("masterCopy", "implementation"),
    )
    modules: list[Address] = []
    fallback_handler: Optional[Address] = Field(default=None, alias="fallbackHandler")
    guard: Optional[Address] = None
    version: Optional[str] = None

    @field_validator("modules", mode="before")
    def convert_none_to_empty_list(cls, value):
        return _none_to_list(value)
