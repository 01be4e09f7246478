"""
Core key and address computation for Ethereum-style accounts.

  - Curve: secp256k1, 32-byte private scalar
  - Address: last 20 bytes of Keccak-256(uncompressed public point minus 0x04)
  - Checksum: EIP-55 mixed-case hex
"""

from dataclasses import dataclass

from Crypto.Hash import keccak
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives import serialization

PRIVATE_KEY_LENGTH = 32        # bytes
ADDRESS_LENGTH = 20            # bytes (40 hex chars)

# Serialization constants cached at module level for performance
_X962 = serialization.Encoding.X962
_UNCOMPRESSED = serialization.PublicFormat.UncompressedPoint
_CURVE = ec.SECP256K1()


@dataclass(frozen=True)
class KeyPair:
    """A private key and the address derived from it, both as hex strings."""
    private_key: str
    address: str

    def as_tuple(self) -> tuple[str, str]:
        """Return (address, private_key)."""
        return self.address, self.private_key


def keccak256(data: bytes) -> bytes:
    """Keccak-256 digest (the pre-standard SHA-3 variant used by Ethereum).

    Note: hashlib.sha3_256 uses different padding and is NOT a substitute.
    """
    return keccak.new(digest_bits=256, data=data).digest()


def address_from_public_key(public_point: bytes) -> str:
    """Derive the 40-char lowercase hex address from a public key.

    Args:
        public_point: 65-byte uncompressed SEC1 point (0x04 || X || Y),
            or the bare 64-byte X || Y.
    """
    if len(public_point) == 65:
        public_point = public_point[1:]
    if len(public_point) != 64:
        raise ValueError(f"Expected a 64 or 65 byte public key, got {len(public_point)}")
    return keccak256(public_point)[-ADDRESS_LENGTH:].hex()


def _keypair_from_ec_key(private_key: ec.EllipticCurvePrivateKey) -> KeyPair:
    scalar = private_key.private_numbers().private_value
    point = private_key.public_key().public_bytes(_X962, _UNCOMPRESSED)
    return KeyPair(
        private_key=scalar.to_bytes(PRIVATE_KEY_LENGTH, "big").hex(),
        address=address_from_public_key(point),
    )


def generate_keypair() -> KeyPair:
    """Generate one random key pair and its raw (lowercase) address.

    This is the hot-path function called in the inner loop of each worker.
    """
    return _keypair_from_ec_key(ec.generate_private_key(_CURVE))


def keypair_from_private_key(private_key_hex: str) -> KeyPair:
    """Rebuild a KeyPair from a known hex private key."""
    scalar = int(private_key_hex.removeprefix("0x"), 16)
    return _keypair_from_ec_key(ec.derive_private_key(scalar, _CURVE))


def checksum_address(address: str) -> str:
    """Apply EIP-55 checksum casing to a 40-char hex address.

    Each letter is uppercased when the matching hex digit of
    Keccak-256(lowercase address) is greater than 7. The result carries
    no 0x prefix, even if the input did.
    """
    address = address.lower().removeprefix("0x")
    address_hash = keccak256(address.encode("ascii")).hex()

    return "".join(
        char.upper() if int(address_hash[i], 16) > 7 else char
        for i, char in enumerate(address)
    )
