import pytest

from keccak import (
    DomainSHA3,
    DomainSHAKE,
    KeccakSponge,
    KeccakState,
    keccak_f,
    multirate_padding,
)


def _recording_sponge(rate, domain=DomainSHA3):
    calls = []

    def permfn(lanes):
        calls.append(list(lanes))
        keccak_f(lanes)

    return KeccakSponge(rate, domain, permfn), calls


def test_padding_multi_byte():
    pad = multirate_padding(3, 8, DomainSHA3)
    assert bytes(pad) == b"\x06\x00\x00\x00\x80"


def test_padding_single_byte_combines_domain_and_terminator():
    assert bytes(multirate_padding(135, 136, DomainSHA3)) == b"\x86"
    assert bytes(multirate_padding(167, 168, DomainSHAKE)) == b"\x9f"
    assert bytes(multirate_padding(71, 72, 0x01)) == b"\x81"


def test_padding_full_block():
    pad = multirate_padding(0, 136, DomainSHAKE)
    assert len(pad) == 136
    assert pad[0] == 0x1F and pad[-1] == 0x80
    assert not any(pad[1:-1])


def test_absorb_buffers_partial_blocks():
    sponge, calls = _recording_sponge(72)
    sponge.absorb(b"x" * 71)
    assert calls == []
    assert len(sponge.buffer) == 71
    sponge.absorb(b"y")
    assert len(calls) == 1
    assert sponge.buffer == bytearray()


def test_absorb_many_blocks_at_once():
    sponge, calls = _recording_sponge(72)
    sponge.absorb(bytes(72 * 3 + 5))
    assert len(calls) == 3
    assert len(sponge.buffer) == 5


def test_absorb_xors_little_endian_lanes():
    sponge, calls = _recording_sponge(72)
    block = bytes(range(72))
    sponge.absorb(block)
    lanes = calls[0]
    assert lanes[0] == int.from_bytes(block[:8], "little")
    assert lanes[8] == int.from_bytes(block[64:72], "little")
    assert lanes[9:] == [0] * 16


def test_absorb_block_rejects_wrong_size():
    sponge = KeccakSponge(136, DomainSHA3)
    with pytest.raises(AssertionError):
        sponge.absorb_block(bytes(135))


def test_state_rejects_bad_rate():
    with pytest.raises(AssertionError):
        KeccakState(0)
    with pytest.raises(AssertionError):
        KeccakState(100)
    with pytest.raises(AssertionError):
        KeccakState(208)


def test_squeeze_permutes_once_per_extra_block():
    sponge, calls = _recording_sponge(168, DomainSHAKE)
    sponge.absorb_final()
    assert len(calls) == 1
    out = sponge.squeeze(168)
    assert len(out) == 168
    assert len(calls) == 1
    assert len(sponge.squeeze(0)) == 0


def test_squeeze_long_output():
    sponge, calls = _recording_sponge(168, DomainSHAKE)
    sponge.absorb_final()
    first = sponge.state.get_bytes()[:168]
    out = sponge.squeeze(400)
    assert len(out) == 400
    assert out[:168] == first
    # 400 = 168 + 168 + 64
    assert len(calls) == 3


def test_finalized_sponge_rejects_more_input():
    sponge = KeccakSponge(136, DomainSHA3)
    sponge.absorb(b"abc")
    sponge.absorb_final()
    with pytest.raises(RuntimeError):
        sponge.absorb(b"more")
    with pytest.raises(RuntimeError):
        sponge.absorb_final()


def test_squeeze_requires_finalize():
    sponge = KeccakSponge(136, DomainSHA3)
    with pytest.raises(RuntimeError):
        sponge.squeeze(32)


def test_copy_is_independent():
    sponge = KeccakSponge(136, DomainSHA3)
    sponge.absorb(b"a" * 200)
    clone = sponge.copy()
    clone.absorb(b"b")
    clone.absorb_final()
    assert not sponge.squeezing
    assert sponge.buffer == bytearray(b"a" * 64)
    assert sponge.state.lanes != clone.state.lanes


def test_reset():
    sponge = KeccakSponge(136, DomainSHA3)
    sponge.absorb(b"a" * 200)
    sponge.absorb_final()
    sponge.reset()
    assert sponge.state.lanes == [0] * 25
    assert sponge.buffer == bytearray()
    assert not sponge.squeezing
