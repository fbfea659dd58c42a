"""Address helpers for EVM token and pair identifiers."""

from Crypto.Hash import keccak


def keccak256(data: bytes) -> bytes:
    """Compute keccak256 hash of data."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def to_checksum_address(address: str) -> str:
    """Apply EIP-55 mixed-case checksum encoding to a hex address.

    The address must already be 40 hex digits, with or without ``0x``.
    """
    hex_part = address[2:] if address[:2] in ("0x", "0X") else address
    lowered = hex_part.lower()
    digest = keccak256(lowered.encode("ascii")).hex()

    # A letter is uppercased when the matching hash nibble is >= 8
    chars = [
        c.upper() if c.isalpha() and int(digest[i], 16) >= 8 else c
        for i, c in enumerate(lowered)
    ]
    return "0x" + "".join(chars)


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Order two token addresses the way a V2 pair stores them (token0, token1)."""
    if token_a.lower() < token_b.lower():
        return token_a, token_b
    return token_b, token_a
