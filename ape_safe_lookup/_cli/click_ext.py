from collections.abc import Sequence
from typing import TYPE_CHECKING

import click
from ape.cli import ApeCliContextObject, ape_cli_context

from ape_safe_lookup.networks import SAFE_NETWORKS, get_networks

if TYPE_CHECKING:
    # perf: Keep the CLI module loading fast as possible.
    from ape_safe_lookup.lookup import SafeLookup
    from ape_safe_lookup.networks import NetworkDescriptor


class SafeLookupCliContext(ApeCliContextObject):
    def get_lookup(self, networks: Sequence["NetworkDescriptor"]) -> "SafeLookup":
        from ape_safe_lookup.lookup import SafeLookup

        return SafeLookup(networks=networks)


def safe_lookup_cli_ctx():
    return ape_cli_context(obj_type=SafeLookupCliContext)


def _networks_callback(ctx, param, value) -> list["NetworkDescriptor"]:
    return get_networks(value)


network_option = click.option(
    "--network",
    "networks",
    multiple=True,
    type=click.Choice([n.name for n in SAFE_NETWORKS]),
    callback=_networks_callback,
    help="Only query this network (repeatable). Defaults to all networks.",
)
json_option = click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
