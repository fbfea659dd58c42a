"""Input validation for pair identifiers and token addresses."""

import re

from ..utils import to_checksum_address
from .error import InvalidAddressError, InvalidPairError

PAIR_ID_PATTERN = re.compile("^0x[0-9a-fA-F]{40}_0x[0-9a-fA-F]{40}$")
ADDRESS_PATTERN = re.compile("^(0x)?[0-9a-fA-F]{40}$")
# Both lower and upper case letters present
MIXED_CASE_PATTERN = re.compile("([A-F].*[a-f])|([a-f].*[A-F])")

INVALID_PAIR_MESSAGE = (
    "Invalid pair identifier: must be of format tokenAddress_tokenAddress"
)


def validate_address(value: str, field_name: str) -> str:
    """Validate a token address and return its checksummed form.

    All-lowercase and all-uppercase hex are accepted as-is. Mixed-case input
    must already carry a correct EIP-55 checksum.

    Raises:
        InvalidAddressError: If not a valid address
    """
    if not value or not value.strip():
        raise InvalidAddressError(f"{field_name} cannot be empty")
    if not ADDRESS_PATTERN.match(value):
        raise InvalidAddressError(f"{field_name} is not a valid address")

    if not value.startswith("0x"):
        value = "0x" + value
    checksummed = to_checksum_address(value)
    if MIXED_CASE_PATTERN.search(value[2:]) and checksummed != value:
        raise InvalidAddressError(f"{field_name} has a bad address checksum")
    return checksummed


def parse_pair_id(pair: str) -> tuple[str, str]:
    """Split ``tokenA_tokenB`` into two checksummed addresses.

    Raises:
        InvalidPairError: If the identifier is malformed
        InvalidAddressError: If either address is invalid
    """
    if not isinstance(pair, str) or not PAIR_ID_PATTERN.match(pair):
        raise InvalidPairError(INVALID_PAIR_MESSAGE)

    token_a, token_b = pair.split("_")
    return (
        validate_address(token_a, "tokenA"),
        validate_address(token_b, "tokenB"),
    )
