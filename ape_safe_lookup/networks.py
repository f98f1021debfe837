from collections.abc import Iterable, Sequence
from typing import Optional

from pydantic import BaseModel, ConfigDict

# URL for the multichain Safe Transaction Service gateway
SAFE_CLIENT_GATEWAY_URL = "https://api.safe.global/tx-service"
SAFE_APP_URL = "https://app.safe.global"


class NetworkDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    """Key used for this network in query results."""

    base_url: str
    """Root of the Safe Transaction Service for this network (without ``/api``)."""

    chain_id: int

    app_slug: str
    """EIP-3770 short name the Safe web app uses in its URLs."""

    def safe_app_url(self, address: str) -> str:
        return f"{SAFE_APP_URL}/home?safe={self.app_slug}:{address}"


def _gateway(name: str, short_name: str, chain_id: int, app_slug: str) -> NetworkDescriptor:
    return NetworkDescriptor(
        name=name,
        base_url=f"{SAFE_CLIENT_GATEWAY_URL}/{short_name}",
        chain_id=chain_id,
        app_slug=app_slug,
    )


SAFE_NETWORKS: tuple[NetworkDescriptor, ...] = (
    _gateway("ethereum", "eth", 1, "eth"),
    _gateway("polygon", "pol", 137, "matic"),
    _gateway("optimism", "oeth", 10, "oeth"),
    _gateway("bnb", "bnb", 56, "bnb"),
    _gateway("arbitrum", "arb1", 42161, "arb1"),
    _gateway("gnosis", "gno", 100, "gno"),
    _gateway("xlaychain", "okb", 196, "okb"),
)


def get_networks(
    names: Optional[Iterable[str]] = None,
    networks: Sequence[NetworkDescriptor] = SAFE_NETWORKS,
) -> list[NetworkDescriptor]:
    """
    Select networks by name, keeping configuration order. ``None`` or an empty
    selection means all of them.
    """
    if not (selected := set(names or ())):
        return list(networks)

    known = {n.name for n in networks}
    if unknown := selected - known:
        raise ValueError(f"Unknown network(s): {', '.join(sorted(unknown))}.")

    return [n for n in networks if n.name in selected]
