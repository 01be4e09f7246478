"""
Offline verification of a found key pair.

Re-derives the address from the private key alone and compares it with
what the search reported, so a bad result never reaches the user silently.
"""

from ethvanity.core import checksum_address, keypair_from_private_key


def verify_keypair(private_key: str, expected_address: str) -> dict:
    """Check that private_key really controls expected_address.

    Args:
        private_key: 64-char hex private key.
        expected_address: Checksummed address reported by the search.

    Returns dict with:
        address_match, checksum_match, derived_address, error
    """
    result = {
        "address_match": False,
        "checksum_match": False,
        "derived_address": None,
        "error": None,
    }

    try:
        derived = checksum_address(keypair_from_private_key(private_key).address)
    except ValueError as e:
        result["error"] = str(e)
        return result

    expected = expected_address.removeprefix("0x")
    result["derived_address"] = derived
    result["address_match"] = derived.lower() == expected.lower()
    result["checksum_match"] = derived == expected
    if not result["address_match"]:
        result["error"] = f"Derived address {derived} differs from {expected}"
    elif not result["checksum_match"]:
        result["error"] = f"Checksum casing differs: expected {derived}"
    return result
