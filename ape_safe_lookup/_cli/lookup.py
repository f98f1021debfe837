import json

import click

from ape_safe_lookup._cli.click_ext import (
    SafeLookupCliContext,
    json_option,
    network_option,
    safe_lookup_cli_ctx,
)
from ape_safe_lookup.exceptions import AddressBookError, ConfigurationError, InvalidAddressError
from ape_safe_lookup.networks import SAFE_NETWORKS
from ape_safe_lookup.types import serialize_result


def _display_name(name) -> str:
    return f" ({name})" if name else ""


@click.command()
@safe_lookup_cli_ctx()
@network_option
@json_option
@click.argument("owner")
def safes(cli_ctx: SafeLookupCliContext, networks, as_json, owner):
    """
    Find the Safes OWNER signs for on every network
    """
    lookup = cli_ctx.get_lookup(networks)
    cli_ctx.logger.info(f"Scanning Safes for owner: {owner}")

    try:
        result = lookup.get_safes_by_owner(owner)
    except (AddressBookError, ConfigurationError, InvalidAddressError) as err:
        cli_ctx.abort(str(err))

    if as_json:
        click.echo(json.dumps(serialize_result(result), indent=2))
        return

    elif not result:
        cli_ctx.logger.warning("No Safes found.")
        return

    for network in lookup.networks:
        if network.name not in result:
            continue

        click.echo(f"\n{network.name.upper()}")
        for safe in result[network.name]:
            click.echo(
                f"  - {safe.address}{_display_name(safe.name)} "
                f"({safe.threshold}/{safe.total_owners})"
            )
            click.echo(f"    {network.safe_app_url(safe.address)}")


@click.command()
@safe_lookup_cli_ctx()
@network_option
@json_option
@click.argument("safe")
def owners(cli_ctx: SafeLookupCliContext, networks, as_json, safe):
    """
    Show the owners and threshold of SAFE on every network it exists on
    """
    lookup = cli_ctx.get_lookup(networks)
    cli_ctx.logger.info(f"Scanning owners of Safe: {safe}")

    try:
        result = lookup.get_owners_by_safe(safe)
    except (AddressBookError, ConfigurationError, InvalidAddressError) as err:
        cli_ctx.abort(str(err))

    if as_json:
        click.echo(json.dumps(serialize_result(result), indent=2))
        return

    elif not result:
        cli_ctx.logger.warning("No Safes found.")
        return

    for network in lookup.networks:
        if not (ownership := result.get(network.name)):
            continue

        click.echo(
            f"\n{network.name.upper()}: {ownership.address}{_display_name(ownership.name)}"
            f" ({ownership.threshold}/{len(ownership.owners)})"
        )
        for owner in ownership.owners:
            click.echo(f"  - {owner.address}{_display_name(owner.name)}")

        click.echo(f"  {network.safe_app_url(ownership.address)}")


@click.command(name="networks")
def list_networks():
    """
    List the networks that get queried
    """
    for network in SAFE_NETWORKS:
        click.echo(f"{network.name} (chain ID {network.chain_id}): {network.base_url}")


@click.command()
@click.option("--host", default="127.0.0.1")
@click.option("--port", type=int, default=8000)
def serve(host, port):
    """
    Run the lookup HTTP API
    """
    # perf: Only load the web stack when it is actually served.
    import uvicorn

    from ape_safe_lookup._cli.host_api import app

    uvicorn.run(app, host=host, port=port)
