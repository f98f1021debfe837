from importlib import import_module
from typing import Any

_LAZY_IMPORTS = {
    "AddressBook": "ape_safe_lookup.address_book",
    "NetworkDescriptor": "ape_safe_lookup.networks",
    "QueryType": "ape_safe_lookup.types",
    "SAFE_NETWORKS": "ape_safe_lookup.networks",
    "SafeLookup": "ape_safe_lookup.lookup",
    "SafeLookupConfig": "ape_safe_lookup.config",
    "normalize_address": "ape_safe_lookup.address",
}


def __getattr__(name: str) -> Any:
    if module := _LAZY_IMPORTS.get(name):
        return getattr(import_module(module), name)

    raise AttributeError(name)


__all__ = list(_LAZY_IMPORTS)
