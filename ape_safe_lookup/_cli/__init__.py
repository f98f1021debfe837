import click

from ape_safe_lookup._cli.lookup import list_networks, owners, safes, serve


@click.group(short_help="Look up Safe owners and Safes across networks")
def cli():
    """
    Command-line helper for finding which Safes an address signs for, or who
    signs for a Safe, across every network the Safe Transaction Service covers.
    """


cli.add_command(safes)
cli.add_command(owners)
cli.add_command(list_networks)
cli.add_command(serve)
