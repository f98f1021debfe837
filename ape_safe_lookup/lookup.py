from collections.abc import Callable, Iterable, Iterator, Sequence
from functools import cached_property
from typing import Optional, TypeVar

import requests
from ape.logging import logger
from pydantic import ValidationError

from ape_safe_lookup.address import normalize_address
from ape_safe_lookup.address_book import AddressBook, load_address_book
from ape_safe_lookup.client import SafeClient, SafeDetails, SafeInfo
from ape_safe_lookup.client.base import create_session
from ape_safe_lookup.config import SafeLookupConfig
from ape_safe_lookup.exceptions import ConfigurationError, FetchExhaustedError, NotFoundError
from ape_safe_lookup.networks import SAFE_NETWORKS, NetworkDescriptor
from ape_safe_lookup.types import (
    NetworkOutcome,
    OutcomeStatus,
    OwnerRecord,
    OwnersByNetwork,
    QueryResult,
    QueryType,
    SafeOwnershipResult,
    SafeRecord,
    SafesByNetwork,
)

T = TypeVar("T")

# NOTE: Failures that only cost us the one network they happened on. `ValueError`
#   covers payload validation and undecodable JSON.
NETWORK_FAILURES = (FetchExhaustedError, ValueError, KeyError, TypeError)


class SafeLookup:
    """
    Find Safe ownership relationships across every configured network.

    Each network is queried independently: a network that has nothing (404)
    or that keeps failing is left out of the result, and never stops the
    other networks from being reported.

    Usage example::

        lookup = SafeLookup()
        lookup.get_safes_by_owner("0x...")
        # {"ethereum": [SafeRecord(address=..., threshold=2, total_owners=3, name=None)]}
    """

    def __init__(
        self,
        networks: Optional[Iterable[NetworkDescriptor]] = None,
        address_book: Optional[AddressBook] = None,
        config: Optional[SafeLookupConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        self.networks: list[NetworkDescriptor] = list(
            SAFE_NETWORKS if networks is None else networks
        )
        self.config = config
        self._address_book = address_book

        if session is not None:
            self.session = session

    @cached_property
    def session(self) -> requests.Session:
        # NOTE: Shared by the clients of every network.
        return create_session()

    def load_config(self) -> SafeLookupConfig:
        # NOTE: Re-read every query so changes to the environment are picked up.
        if self.config is not None:
            config = self.config
        else:
            try:
                config = SafeLookupConfig()
            except ValidationError as err:
                raise ConfigurationError(f"Invalid configuration: {err}") from err

        if not config.api_key:
            raise ConfigurationError()

        return config

    def get_address_book(self, config: SafeLookupConfig) -> AddressBook:
        if self._address_book is None:
            self._address_book = load_address_book(config.address_book)

        return self._address_book

    def lookup(self, query_type: QueryType, address: str) -> QueryResult:
        if QueryType(query_type) is QueryType.OWNERS:
            return self.get_owners_by_safe(address)

        return self.get_safes_by_owner(address)

    def get_safes_by_owner(self, owner: str) -> SafesByNetwork:
        config = self.load_config()
        owner_address = normalize_address(owner)
        address_book = self.get_address_book(config)

        def records(network: NetworkDescriptor, safes: list[SafeInfo]) -> list[SafeRecord]:
            return [
                SafeRecord(
                    address=safe.address,
                    threshold=safe.threshold,
                    total_owners=len(safe.owners),
                    name=address_book.resolve(network.chain_id, safe.address),
                )
                for safe in safes
            ]

        result: SafesByNetwork = {}
        for outcome in self._fan_out(
            config, lambda client: client.get_owner_safes(owner_address)
        ):
            if outcome.status is OutcomeStatus.FOUND and outcome.data:
                result[outcome.network.name] = records(outcome.network, outcome.data)

        return result

    def get_owners_by_safe(self, safe: str) -> OwnersByNetwork:
        config = self.load_config()
        safe_address = normalize_address(safe)
        address_book = self.get_address_book(config)

        def ownership(network: NetworkDescriptor, details: SafeDetails) -> SafeOwnershipResult:
            chain_id = network.chain_id
            return SafeOwnershipResult(
                address=details.address,
                name=address_book.resolve(chain_id, details.address),
                threshold=details.threshold,
                owners=[
                    OwnerRecord(address=owner, name=address_book.resolve(chain_id, owner))
                    for owner in details.owners
                ],
            )

        result: OwnersByNetwork = {}
        for outcome in self._fan_out(
            config, lambda client: client.get_safe_details(safe_address)
        ):
            if outcome.status is OutcomeStatus.FOUND and outcome.data is not None:
                result[outcome.network.name] = ownership(outcome.network, outcome.data)

        return result

    def _fan_out(
        self, config: SafeLookupConfig, query: Callable[[SafeClient], T]
    ) -> Iterator[NetworkOutcome[T]]:
        for network in self.networks:
            client = SafeClient.from_config(network, config, session=self.session)
            yield self._query_network(client, query)

    def _query_network(
        self, client: SafeClient, query: Callable[[SafeClient], T]
    ) -> NetworkOutcome[T]:
        network = client.network
        name = network.name
        logger.debug(f"Querying {name} ({client.base_url}).")
        try:
            data = query(client)

        except NotFoundError:
            return NetworkOutcome(network, OutcomeStatus.ABSENT)

        except NETWORK_FAILURES as err:
            logger.error(f"{name}: {err}")
            return NetworkOutcome(network, OutcomeStatus.FAILED, error=err)

        if isinstance(data, Sequence) and len(data) == 0:
            return NetworkOutcome(network, OutcomeStatus.ABSENT)

        return NetworkOutcome(network, OutcomeStatus.FOUND, data=data)

