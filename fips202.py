"""
SHA-3 and SHAKE constructors (FIPS 202) over the Keccak sponge, plus a
hashlib.new()-style registry of every supported family.
"""

from keccak import (
    DomainSHA3,
    DomainSHAKE,
    KECCAK_224,
    KECCAK_256,
    KECCAK_384,
    KECCAK_512,
    KeccakHash,
    KeccakParams,
)

# --------------------------------------------------------------------
#                          SHA-3
# --------------------------------------------------------------------

SHA3_224 = KeccakParams("sha3-224", 224 * 2, 224, DomainSHA3)
SHA3_256 = KeccakParams("sha3-256", 256 * 2, 256, DomainSHA3)
SHA3_384 = KeccakParams("sha3-384", 384 * 2, 384, DomainSHA3)
SHA3_512 = KeccakParams("sha3-512", 512 * 2, 512, DomainSHA3)


def sha3_224(data=b""):
    return KeccakHash(SHA3_224, data)


def sha3_256(data=b""):
    return KeccakHash(SHA3_256, data)


def sha3_384(data=b""):
    return KeccakHash(SHA3_384, data)


def sha3_512(data=b""):
    return KeccakHash(SHA3_512, data)

# --------------------------------------------------------------------
#                          SHAKE
# --------------------------------------------------------------------

SHAKE128 = KeccakParams("shake128", 128 * 2, 0, DomainSHAKE)
SHAKE256 = KeccakParams("shake256", 256 * 2, 0, DomainSHAKE)


def _shake(params, data, length):
    if length < 0:
        raise ValueError("output length must be non-negative, got %r" % (length,))
    return KeccakHash(KeccakParams(params.name, params.capacity_bits, length * 8, params.domain), data)


def shake_128(data=b"", length=0):
    """SHAKE128 producing `length` bytes by default (0 leaves the length to digest())."""
    return _shake(SHAKE128, data, length)


def shake_256(data=b"", length=0):
    """SHAKE256 producing `length` bytes by default (0 leaves the length to digest())."""
    return _shake(SHAKE256, data, length)

# --------------------------------------------------------------------
#                          Registry
# --------------------------------------------------------------------

Algorithms = {
    params.name: params
    for params in (
        KECCAK_224, KECCAK_256, KECCAK_384, KECCAK_512,
        SHA3_224, SHA3_256, SHA3_384, SHA3_512,
        SHAKE128, SHAKE256,
    )
}


def normalize_name(name: str) -> str:
    name = name.strip().lower().replace("_", "-")
    if name.startswith("shake-"):
        name = "shake" + name[len("shake-"):]
    return name


def lookup(name: str) -> KeccakParams:
    try:
        return Algorithms[normalize_name(name)]
    except KeyError:
        raise ValueError("unsupported hash type %s" % (name,)) from None


def new(name: str, data=b"", length=None) -> KeccakHash:
    """Construct a hash object by family name, e.g. new("sha3-256", b"abc")."""
    params = lookup(name)
    if params.xof:
        return _shake(params, data, length or 0)
    if length is not None:
        raise ValueError("%s has a fixed digest size of %d bytes"
                         % (params.name, params.digest_size))
    return KeccakHash(params, data)
