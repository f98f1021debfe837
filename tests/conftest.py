from typing import Optional

import pytest

from ape_safe_lookup.address_book import AddressBook
from ape_safe_lookup.config import SafeLookupConfig
from ape_safe_lookup.lookup import SafeLookup
from ape_safe_lookup.networks import NetworkDescriptor
from tests.utils import API_KEY, OWNER, OWNER_2, OWNER_3, SAFE, FakeSession


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    # NOTE: Keep a developer's real key (env or `.env`) out of the tests.
    for name in (
        "SAFE_API_KEY",
        "SAFE_MAX_RETRIES",
        "SAFE_RETRY_DELAY",
        "SAFE_REQUEST_TIMEOUT",
        "SAFE_ADDRESS_BOOK",
    ):
        monkeypatch.delenv(name, raising=False)

    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def sleeps(monkeypatch):
    delays: list[float] = []
    monkeypatch.setattr("backoff._sync.time.sleep", delays.append)
    return delays


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def network1():
    return NetworkDescriptor(
        name="network1", base_url="https://safe.test/n1", chain_id=1, app_slug="eth"
    )


@pytest.fixture
def network2():
    return NetworkDescriptor(
        name="network2", base_url="https://safe.test/n2", chain_id=137, app_slug="matic"
    )


@pytest.fixture
def networks(network1, network2):
    return [network1, network2]


@pytest.fixture
def address_book():
    return AddressBook(
        {
            1: {SAFE: "Treasury", OWNER_2: "Alice"},
            137: {SAFE: "Polygon Treasury"},
        }
    )


@pytest.fixture
def config():
    return SafeLookupConfig(api_key=API_KEY)


@pytest.fixture
def lookup(networks, address_book, config, session):
    return SafeLookup(networks=networks, address_book=address_book, config=config, session=session)


@pytest.fixture
def owner_safes_url():
    def url(network: NetworkDescriptor, owner: str = OWNER) -> str:
        return f"{network.base_url}/api/v2/owners/{owner}/safes/"

    return url


@pytest.fixture
def safe_details_url():
    def url(network: NetworkDescriptor, safe: str = SAFE) -> str:
        return f"{network.base_url}/api/v1/safes/{safe}/"

    return url


@pytest.fixture
def safe_info():
    def info(address: str = SAFE, owners: Optional[list[str]] = None, threshold: int = 2) -> dict:
        return {
            "address": address,
            "owners": owners or [OWNER, OWNER_2, OWNER_3],
            "threshold": threshold,
            "nonce": 7,
            "masterCopy": "0xd9Db270c1B5E3Bd161E8c8503c55cEABeE709552",
            "fallbackHandler": "0xf48f2B2d2a534e402487b3ee7C18c33Aec0Fe5e4",
            "guard": None,
            "enabledModules": None,
        }

    return info


@pytest.fixture
def owner_safes_page(safe_info):
    def page(*safes: dict, next_url: Optional[str] = None) -> dict:
        results = list(safes) or [safe_info()]
        return {"count": len(results), "next": next_url, "previous": None, "results": results}

    return page


@pytest.fixture
def safe_details(safe_info):
    def details(address: str = SAFE, owners: Optional[list[str]] = None, threshold=2) -> dict:
        info = safe_info(address=address, owners=owners, threshold=threshold)
        return {
            "address": info["address"],
            "nonce": info["nonce"],
            "threshold": info["threshold"],
            "owners": info["owners"],
            "masterCopy": info["masterCopy"],
            "modules": [],
            "fallbackHandler": info["fallbackHandler"],
            "guard": "0x0000000000000000000000000000000000000000",
            "version": "1.3.0",
        }

    return details
