import pytest

import eddsa_poseidon.blake512 as blake512_module
from eddsa_poseidon.blake512 import Blake512, blake512


def test_empty_message():
    assert blake512(b"").hex() == (
        "a8cfbbd73726062df0c6864dda65defe58ef0cc52a5625090fa17601e1eecd1b"
        "628e94f396ae402a00acc9eab77b4d4c2e852aaaa25a636d80af3fc7913ef5b8"
    )


def test_quick_brown_fox():
    data = b"The quick brown fox jumps over the lazy dog"
    assert blake512(data).hex() == (
        "1f7e26f63b6ad25a0896fd978fd050a1766391d2fd0471a77afb975e5034b7ad"
        "2d9ccf8dfb47abbbe656e1b82fbc634ba42ce186e8dc5e1ce09a885d41f43451"
    )


def test_incremental_update_matches_one_shot():
    data = bytes(range(256)) * 2
    h = Blake512()
    for i in range(0, len(data), 37):
        h.update(data[i:i + 37])
    assert h.digest() == blake512(data)
    assert h.hexdigest() == blake512(data).hex()


def test_copy_is_independent():
    h = Blake512(b"abc")
    clone = h.copy()
    clone.update(b"def")
    assert h.digest() == blake512(b"abc")
    assert clone.digest() == blake512(b"abcdef")


def test_digest_size_across_block_boundaries():
    # 111 and 112 bytes straddle the single-block padding limit
    digests = {blake512(b"\x00" * n) for n in (0, 1, 110, 111, 112, 127, 128, 129, 256)}
    assert len(digests) == 9
    assert all(len(d) == 64 for d in digests)


def test_single_zero_byte():
    assert blake512(b"\x00").hex() == (
        "97961587f6d970faba6d2478045de6d1fabd09b61ae50932054d52bc29d31be4"
        "ff9102b9f69e2bbdb83be13d4b9c06091e5fa0b48bd081b634058be0ec49beb3"
    )


def test_two_block_zero_message():
    assert blake512(b"\x00" * 144).hex() == (
        "313717d608e9cf758dcb1eb0f0c3cf9fc150b2d500fb33f51c52afc99d358a2f"
        "1374b8a38bba7974e7f6ef79cab16f22ce1e649d6e01ad9589c213045d545dde"
    )


@pytest.mark.parametrize(
    "size, counters",
    [
        (0, [0]),
        (1, [8]),
        (111, [888]),
        # no room for the length field, so padding spills into a block of its own
        (112, [896, 0]),
        (128, [1024, 0]),
        (144, [1024, 1152]),
    ],
)
def test_counter_per_block(monkeypatch, size, counters):
    seen = []
    compress = blake512_module._compress

    def recording_compress(h, block, counter):
        seen.append(counter)
        return compress(h, block, counter)

    monkeypatch.setattr(blake512_module, "_compress", recording_compress)
    blake512(b"\x00" * size)
    assert seen == counters
