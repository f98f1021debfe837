from typing import TYPE_CHECKING, Optional

from ape.logging import logger

from ape_safe_lookup.client.base import BaseClient
from ape_safe_lookup.client.types import OwnerSafesPage, SafeDetails, SafeInfo

if TYPE_CHECKING:
    import requests
    from ape.types import AddressType

    from ape_safe_lookup.config import SafeLookupConfig
    from ape_safe_lookup.networks import NetworkDescriptor


class SafeClient(BaseClient):
    """
    Safe Transaction Service client bound to one network.
    """

    def __init__(
        self,
        network: "NetworkDescriptor",
        api_key: Optional[str] = None,
        **kwargs,
    ) -> None:
        self.network = network
        super().__init__(network.base_url, api_key=api_key, **kwargs)

    @classmethod
    def from_config(
        cls,
        network: "NetworkDescriptor",
        config: "SafeLookupConfig",
        session: Optional["requests.Session"] = None,
    ) -> "SafeClient":
        return cls(
            network,
            api_key=config.api_key,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            timeout=config.request_timeout,
            session=session,
        )

    def get_owner_safes(self, owner: "AddressType") -> list[SafeInfo]:
        """
        All Safes ``owner`` signs for, in the order the service returns them.
        """
        safes: list[SafeInfo] = []
        seen: set[str] = set()
        url: Optional[str] = f"/owners/{owner}/safes/"
        while url:
            page_url = self.api_url(url, api_version="v2")
            if page_url in seen:
                logger.warning(f"{self.network.name}: page '{url}' was already fetched.")
                break

            seen.add(page_url)
            page = self.fetch(url, OwnerSafesPage, api_version="v2")
            safes.extend(page.results)
            url = page.next

        return safes

    def get_safe_details(self, safe: "AddressType") -> SafeDetails:
        return self.fetch(f"/safes/{safe}/", SafeDetails)


__all__ = [
    "BaseClient",
    "OwnerSafesPage",
    "SafeClient",
    "SafeDetails",
    "SafeInfo",
]
