from typing import Any, cast

from ape.types import AddressType
from cchecksum import to_checksum_address
from eth_typing import HexStr
from eth_utils import is_checksum_address, is_hex_address, remove_0x_prefix

from ape_safe_lookup.exceptions import InvalidAddressError


def normalize_address(value: Any) -> AddressType:
    """
    Convert ``value`` into its checksummed form.

    Both ``0x``-prefixed and bare hex are accepted. Single-case input is taken
    as-is, mixed-case input must already carry a valid EIP-55 checksum.

    Raises:
        :class:`~ape_safe_lookup.exceptions.InvalidAddressError`: When ``value``
          is not a 20-byte hex address.
    """
    if not isinstance(value, str) or not is_hex_address(value):
        raise InvalidAddressError(value)

    digits = remove_0x_prefix(cast(HexStr, value))
    prefixed = f"0x{digits}"

    # NOTE: Mixed case means the caller is asserting a checksum.
    if digits not in (digits.lower(), digits.upper()) and not is_checksum_address(prefixed):
        raise InvalidAddressError(value)

    return cast(AddressType, to_checksum_address(prefixed.lower()))
