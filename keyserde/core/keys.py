from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed
from coincurve import PrivateKey, PublicKey, PublicKeyXOnly

from keyserde.core.models.keyset import KeyMaterial, KeyMaterialError

SEED: bytes = bytes(range(1, 33))
"""Secret key and signed message shared by every run: the bytes 1..32."""


def derive_key_material(seed: bytes = SEED) -> KeyMaterial:
    """
    Build the key material from a 32-byte seed.

    The seed doubles as the message. ECDSA signs it as-is (RFC 6979 nonce,
    low-S, DER output) and BIP-340 signs it without auxiliary randomness,
    so the whole bundle is reproducible.
    """
    if len(seed) != 32:
        raise KeyMaterialError(f"Seed must be 32 bytes, got {len(seed)}")

    try:
        seckey = PrivateKey(seed)
    except ValueError as ex:
        raise KeyMaterialError(f"Seed is not a valid secp256k1 scalar: {ex}") from ex

    return KeyMaterial(
        seckey=seckey.secret,
        pubkey=seckey.public_key.format(compressed=True),
        schnorr_pubkey=seckey.public_key_xonly.format(),
        sig=seckey.sign(seed, hasher=None),
        schnorr_sig=seckey.sign_schnorr(seed, aux_randomness=None),
    )


def check_consistency(material: KeyMaterial, message: bytes = SEED) -> None:
    """
    Check that restored key material still belongs together.

    libsecp256k1 (through coincurve) checks key derivation and both
    signatures; OpenSSL (through cryptography) re-checks the public key
    and the ECDSA signature on its own.
    """
    try:
        seckey = PrivateKey(material.seckey)
        pubkey = PublicKey(material.pubkey)
        xonly = PublicKeyXOnly(material.schnorr_pubkey)
    except ValueError as ex:
        raise KeyMaterialError(f"Invalid key encoding: {ex}") from ex

    if seckey.public_key.format(compressed=True) != material.pubkey:
        raise KeyMaterialError("pubkey does not match seckey")

    if material.pubkey[1:] != material.schnorr_pubkey:
        raise KeyMaterialError("schnorr_pubkey is not the x-coordinate of pubkey")

    try:
        ecdsa_ok = pubkey.verify(material.sig, message, hasher=None)
    except ValueError as ex:
        raise KeyMaterialError(f"Malformed ECDSA signature: {ex}") from ex
    if not ecdsa_ok:
        raise KeyMaterialError("ECDSA signature does not verify")

    if not xonly.verify(material.schnorr_sig, message):
        raise KeyMaterialError("Schnorr signature does not verify")

    _openssl_cross_check(material, message)


def _openssl_cross_check(material: KeyMaterial, message: bytes) -> None:
    curve = ec.SECP256K1()
    private = ec.derive_private_key(int.from_bytes(material.seckey, "big"), curve)
    compressed = private.public_key().public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.CompressedPoint,
    )
    if compressed != material.pubkey:
        raise KeyMaterialError("OpenSSL derives a different pubkey from seckey")

    public = ec.EllipticCurvePublicKey.from_encoded_point(curve, material.pubkey)
    try:
        public.verify(material.sig, message, ec.ECDSA(Prehashed(hashes.SHA256())))
    except InvalidSignature as ex:
        raise KeyMaterialError("OpenSSL rejects the ECDSA signature") from ex
