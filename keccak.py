"""
Python implementation of the Keccak-f[1600] permutation and the Keccak sponge.

Provides the streaming KeccakHash object shared by every family (legacy
Keccak, SHA-3, SHAKE) and the legacy Keccak constructors, including the
Ethereum-style keccak256 (domain byte 0x01, not NIST SHA3-256).
"""

import logging
from copy import deepcopy
from dataclasses import dataclass

__version__ = "0.1.0"

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
#                          Constants & Helpers
# --------------------------------------------------------------------

RoundConstants = [
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000,
    0x000000000000808B, 0x0000000080000001, 0x8000000080008081, 0x8000000000008009,
    0x000000000000008A, 0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089, 0x8000000000008003,
    0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
    0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
]

# Rho offsets listed in the order the Pi cycle visits the lanes.
RotationConstants = [
    1, 3, 6, 10, 15, 21, 28, 36,
    45, 55, 2, 14, 27, 41, 56, 8,
    25, 43, 62, 18, 39, 61, 20, 44,
]

# Destination lane of each step of the Pi cycle, starting from lane 1.
PiLanes = [
    10, 7, 11, 17, 18, 3, 5, 16,
    8, 21, 24, 4, 15, 23, 19, 13,
    12, 2, 20, 14, 22, 9, 6, 1,
]

DomainNone = 0x01
DomainSHA3 = 0x06
DomainSHAKE = 0x1F

LaneMask = (1 << 64) - 1
StateBytes = 200


def rol64(value, left):
    return ((value << left) | (value >> (64 - left))) & LaneMask


def multirate_padding(used_bytes, align_bytes, domain):
    """Pad bytes completing a block: domain byte first, 0x80 OR'd into the last."""
    padding = bytearray(align_bytes - used_bytes)
    padding[0] = domain
    padding[-1] |= 0x80
    return padding


def _as_bytes(data):
    if isinstance(data, str):
        raise TypeError("Strings must be encoded before hashing")
    try:
        return memoryview(data).cast("B")
    except TypeError:
        raise TypeError("object supporting the buffer API required, got %s"
                        % type(data).__name__) from None

# --------------------------------------------------------------------
#                          Keccak Permutation
# --------------------------------------------------------------------

def keccak_f(lanes):
    """Apply the 24 rounds of Keccak-f[1600] in place.

    `lanes` holds the 25 64-bit lanes of the state, lane (x, y) at index
    x + 5 * y.
    """
    assert len(lanes) == 25

    for rc in RoundConstants:
        # Theta
        c = [lanes[x] ^ lanes[x + 5] ^ lanes[x + 10] ^ lanes[x + 15] ^ lanes[x + 20]
             for x in range(5)]
        for x in range(5):
            d = c[(x + 4) % 5] ^ rol64(c[(x + 1) % 5], 1)
            for y in range(0, 25, 5):
                lanes[x + y] ^= d

        # Rho & Pi
        carry = lanes[1]
        for dest, rot in zip(PiLanes, RotationConstants):
            lanes[dest], carry = rol64(carry, rot), lanes[dest]

        # Chi
        for y in range(0, 25, 5):
            row = lanes[y : y + 5]
            for x in range(5):
                lanes[y + x] = row[x] ^ (~row[(x + 1) % 5] & row[(x + 2) % 5])

        # Iota
        lanes[0] ^= rc

# --------------------------------------------------------------------
#                          Keccak State & Sponge
# --------------------------------------------------------------------

class KeccakState:
    W = 5
    H = 5

    @staticmethod
    def zero():
        return [0] * (KeccakState.W * KeccakState.H)

    @staticmethod
    def lane2bytes(s):
        return s.to_bytes(8, "little")

    @staticmethod
    def bytes2lane(bb):
        return int.from_bytes(bb, "little")

    def __init__(self, rate):
        assert 0 < rate <= StateBytes and rate % 8 == 0
        self.rate = rate
        self.lanes = KeccakState.zero()

    def absorb(self, block):
        assert len(block) == self.rate
        for i in range(self.rate // 8):
            self.lanes[i] ^= KeccakState.bytes2lane(block[i * 8 : i * 8 + 8])

    def get_bytes(self):
        return b"".join(KeccakState.lane2bytes(lane) for lane in self.lanes)

    def reset(self):
        self.lanes = KeccakState.zero()


class KeccakSponge:
    def __init__(self, rate, domain, permfn=keccak_f):
        self.state = KeccakState(rate)
        self.domain = domain
        self.permfn = permfn
        self.buffer = bytearray()
        self.squeezing = False

    @property
    def rate(self):
        return self.state.rate

    def copy(self):
        return deepcopy(self)

    def reset(self):
        self.state.reset()
        self.buffer = bytearray()
        self.squeezing = False

    def absorb_block(self, block):
        assert len(block) == self.rate, "absorb_block() called with invalid block size"
        self.state.absorb(block)
        self.permfn(self.state.lanes)

    def absorb(self, data):
        if self.squeezing:
            raise RuntimeError("cannot absorb into a finalized sponge")
        data = _as_bytes(data)
        rate = self.rate

        if self.buffer:
            take = min(rate - len(self.buffer), len(data))
            self.buffer += data[:take]
            data = data[take:]
            if len(self.buffer) < rate:
                return
            self.absorb_block(self.buffer)
            self.buffer = bytearray()

        while len(data) >= rate:
            self.absorb_block(data[:rate])
            data = data[rate:]

        self.buffer += data

    def absorb_final(self):
        if self.squeezing:
            raise RuntimeError("sponge already finalized")
        padded = self.buffer + multirate_padding(len(self.buffer), self.rate, self.domain)
        self.absorb_block(padded)
        self.buffer = bytearray()
        self.squeezing = True

    def squeeze(self, length):
        """Read `length` bytes, permuting again each time a full rate is consumed."""
        if not self.squeezing:
            raise RuntimeError("squeeze() requires a finalized sponge")
        rate = self.rate
        out = bytearray()
        while True:
            block = self.state.get_bytes()
            if length <= rate:
                out += block[:length]
                return bytes(out)
            out += block[:rate]
            length -= rate
            self.permfn(self.state.lanes)

# --------------------------------------------------------------------
#                          Parameters
# --------------------------------------------------------------------

@dataclass(frozen=True)
class KeccakParams:
    name: str
    capacity_bits: int
    output_bits: int
    domain: int

    def __post_init__(self):
        if self.capacity_bits % 64 or not 0 <= self.capacity_bits < StateBytes * 8:
            raise ValueError("capacity must be a multiple of 64 bits below 1600, got %r"
                             % (self.capacity_bits,))
        if self.output_bits < 0 or self.output_bits % 8:
            raise ValueError("output length must be a non-negative multiple of 8 bits, got %r"
                             % (self.output_bits,))
        if not 0x01 <= self.domain <= 0xFF:
            raise ValueError("domain byte must be in [0x01, 0xff], got %r" % (self.domain,))

    @property
    def rate(self) -> int:
        return StateBytes - self.capacity_bits // 8

    @property
    def digest_size(self) -> int:
        return self.output_bits // 8

    @property
    def xof(self) -> bool:
        return self.domain == DomainSHAKE

# --------------------------------------------------------------------
#                          Keccak Hash Class
# --------------------------------------------------------------------

class KeccakHash:
    """Streaming hash over a Keccak sponge, hashlib-style.

    The sponge stays in its absorbing phase for the lifetime of the object:
    digest() and sum() finalize a private copy, so more data may be written
    after reading a digest.
    """

    def __init__(self, params: KeccakParams, data=b""):
        self.params = params
        self.name = params.name
        self.digest_size = params.digest_size
        self.block_size = params.rate
        self.sponge = KeccakSponge(params.rate, params.domain)
        log.debug("new %s: rate=%d capacity=%d domain=0x%02x",
                  self.name, params.rate, params.capacity_bits, params.domain)
        if data:
            self.update(data)

    def update(self, data):
        self.sponge.absorb(data)

    def write(self, data) -> int:
        data = _as_bytes(data)
        self.sponge.absorb(data)
        return len(data)

    def size(self) -> int:
        return self.digest_size

    def blocksize(self) -> int:
        return self.block_size

    def _output_length(self, length):
        if length is None:
            return self.digest_size
        if length < 0:
            raise ValueError("digest length must be non-negative, got %r" % (length,))
        if not self.params.xof and length != self.digest_size:
            raise ValueError("%s has a fixed digest size of %d bytes"
                             % (self.name, self.digest_size))
        return length

    def digest(self, length=None) -> bytes:
        length = self._output_length(length)
        final = self.sponge.copy()
        final.absorb_final()
        return final.squeeze(length)

    def hexdigest(self, length=None) -> str:
        return self.digest(length).hex()

    def sum(self, extra=b"") -> bytes:
        return bytes(_as_bytes(extra)) + self.digest()

    def reset(self):
        log.debug("reset %s", self.name)
        self.sponge.reset()

    def copy(self):
        other = KeccakHash.__new__(KeccakHash)
        other.__dict__.update(self.__dict__)
        other.sponge = self.sponge.copy()
        return other

    def __repr__(self):
        return "<%s HASH object @ %#x>" % (self.name, id(self))

# --------------------------------------------------------------------
#                          Legacy Keccak
# --------------------------------------------------------------------

KECCAK_224 = KeccakParams("keccak-224", 224 * 2, 224, DomainNone)
KECCAK_256 = KeccakParams("keccak-256", 256 * 2, 256, DomainNone)
KECCAK_384 = KeccakParams("keccak-384", 384 * 2, 384, DomainNone)
KECCAK_512 = KeccakParams("keccak-512", 512 * 2, 512, DomainNone)


def keccak_224(data=b""):
    return KeccakHash(KECCAK_224, data)


def keccak_256(data=b""):
    return KeccakHash(KECCAK_256, data)


def keccak_384(data=b""):
    return KeccakHash(KECCAK_384, data)


def keccak_512(data=b""):
    return KeccakHash(KECCAK_512, data)


def keccak256(data: bytes) -> bytes:
    return keccak_256(data).digest()


def keccak256_hex(data: bytes) -> str:
    return keccak256(data).hex()
