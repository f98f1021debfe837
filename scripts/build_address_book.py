from pathlib import Path

import click
from ape.logging import logger

from ape_safe_lookup.address_book import dedupe_entries, dump_entries, parse_csv

PACKAGE_DATA_FOLDER = Path(__file__).parent.parent / "ape_safe_lookup" / "data"
BUNDLED_ADDRESS_BOOK = PACKAGE_DATA_FOLDER / "address_book.json"


def build_address_book(csv_file: Path, output: Path, override: bool):
    if not override and output.is_file():
        logger.info(f"'{output}' already exists, skipping. Use '--override' to replace it.")
        return

    entries = parse_csv(csv_file.read_text())
    unique = dedupe_entries(entries)
    if skipped := len(entries) - len(unique):
        logger.warning(f"Dropped {skipped} duplicate entries.")

    logger.info(f"Writing {len(unique)} entries to '{output}'")
    output.write_text(f"{dump_entries(unique)}\n")


@click.command()
@click.option("--override", is_flag=True)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=BUNDLED_ADDRESS_BOOK,
    show_default=True,
)
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def cli(override, output, csv_file):
    """Build the bundled address book from an `address,name,chainId` CSV"""

    build_address_book(csv_file, output, override)


if __name__ == "__main__":
    cli()
