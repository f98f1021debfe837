import csv
import io
import json
from collections.abc import Iterable, Mapping
from functools import lru_cache
from importlib.resources import files as get_pkg_resources
from pathlib import Path
from typing import Optional

from ape.logging import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ape_safe_lookup.exceptions import AddressBookError

AddressBookIndex = dict[int, dict[str, str]]


class AddressBookEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str
    name: str
    chain_id: int = Field(alias="chainId")


class AddressBook:
    """
    Read-only index of display names, keyed by chain ID and then by lowercase
    address.
    """

    def __init__(self, index: Optional[Mapping[int, Mapping[str, str]]] = None):
        self._index: AddressBookIndex = {
            chain_id: {address.lower(): name for address, name in names.items()}
            for chain_id, names in (index or {}).items()
        }

    @classmethod
    def from_entries(cls, entries: Iterable[AddressBookEntry]) -> "AddressBook":
        index: AddressBookIndex = {}
        for entry in dedupe_entries(entries):
            index.setdefault(entry.chain_id, {})[entry.address.lower()] = entry.name

        return cls(index)

    @classmethod
    def from_file(cls, path: Path) -> "AddressBook":
        try:
            text = path.read_text()
        except OSError as err:
            raise AddressBookError(f"Cannot read address book '{path}': {err}") from err

        if path.suffix.lower() == ".csv":
            return cls.from_entries(parse_csv(text))

        try:
            entries = TypeAdapter(list[AddressBookEntry]).validate_json(text)
        except ValueError as err:
            raise AddressBookError(f"Invalid address book '{path}': {err}") from err

        return cls.from_entries(entries)

    def resolve(self, chain_id: int, address: str) -> Optional[str]:
        """
        Look up the display name for ``address`` on ``chain_id``, ignoring case.
        """
        return self._index.get(chain_id, {}).get(address.lower())

    def __len__(self) -> int:
        return sum(len(names) for names in self._index.values())


def parse_csv(text: str) -> list[AddressBookEntry]:
    """
    Parse ``address,name,chainId`` rows. The first row is a header and must
    mention ``address``; incomplete rows are skipped.
    """
    rows = csv.reader(io.StringIO(text.strip()))
    header = next(rows, None)
    if not header or not any("address" in column.lower() for column in header):
        raise AddressBookError("CSV must start with: address,name,chainId")

    entries = []
    for line_number, row in enumerate(rows, start=2):
        fields = [field.strip() for field in row[:3]]
        if len(fields) < 3 or not all(fields):
            continue

        address, name, chain_id = fields
        if not chain_id.isdigit():
            logger.warning(f"Skipping address book line {line_number}: bad chainId '{chain_id}'.")
            continue

        entries.append(AddressBookEntry(address=address, name=name, chain_id=int(chain_id)))

    return entries


def dedupe_entries(entries: Iterable[AddressBookEntry]) -> list[AddressBookEntry]:
    """
    Drop entries whose address (ignoring case) and chain ID were already seen,
    keeping the first one.
    """
    seen: set[tuple[str, int]] = set()
    unique = []
    for entry in entries:
        key = (entry.address.lower(), entry.chain_id)
        if key not in seen:
            seen.add(key)
            unique.append(entry)

    return unique


def dump_entries(entries: Iterable[AddressBookEntry]) -> str:
    return json.dumps(
        [entry.model_dump(by_alias=True) for entry in entries],
        indent=2,
    )


@lru_cache(maxsize=None)
def load_address_book(path: Optional[Path] = None) -> AddressBook:
    """
    Load (once per path) the address book at ``path``, or the one shipped
    with this package.
    """
    if path is not None:
        return AddressBook.from_file(path)

    bundled = get_pkg_resources("ape_safe_lookup") / "data" / "address_book.json"
    entries = TypeAdapter(list[AddressBookEntry]).validate_json(bundled.read_text())
    return AddressBook.from_entries(entries)
