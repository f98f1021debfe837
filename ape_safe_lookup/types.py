from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar, Union

from ape.types import AddressType
from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ape_safe_lookup.networks import NetworkDescriptor

T = TypeVar("T")


class QueryType(str, Enum):
    SAFES = "safes"
    """Owner address in, Safes it signs for out."""

    OWNERS = "owners"
    """Safe address in, its owners and threshold out."""


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class SafeRecord(_Record):
    address: AddressType
    threshold: int
    total_owners: int = Field(alias="totalOwners")
    name: Optional[str] = None


class OwnerRecord(_Record):
    address: AddressType
    name: Optional[str] = None


class SafeOwnershipResult(_Record):
    address: AddressType
    name: Optional[str] = None
    threshold: int
    owners: list[OwnerRecord] = []


SafesByNetwork = dict[str, list[SafeRecord]]
OwnersByNetwork = dict[str, SafeOwnershipResult]
QueryResult = Union[SafesByNetwork, OwnersByNetwork]


class OutcomeStatus(str, Enum):
    FOUND = "found"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass(frozen=True)
class NetworkOutcome(Generic[T]):
    """What a single network contributed to a query."""

    network: "NetworkDescriptor"
    status: OutcomeStatus
    data: Optional[T] = None
    error: Optional[Exception] = None


def serialize_result(result: Mapping[str, Any]) -> dict[str, Any]:
    """
    Convert a query result into plain JSON-compatible data, using the
    camelCase field names.
    """

    def _dump(value: Any) -> Any:
        if isinstance(value, BaseModel):
            return value.model_dump(by_alias=True, mode="json")

        elif isinstance(value, Sequence) and not isinstance(value, str):
            return [_dump(v) for v in value]

        return value

    return {network: _dump(value) for network, value in result.items()}
