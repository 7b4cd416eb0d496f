import pytest

from eddsa_poseidon.babyjub import IDENTITY, Base8, mul_point_escalar, sub_order, x_squared
from eddsa_poseidon.codec import pack_point, pack_scalar, unpack_point, unpack_scalar
from eddsa_poseidon.exceptions import InvalidPointError, LengthError
from eddsa_poseidon.field import HALF, p


def _first_y_without_x():
    y = 2
    while x_squared(y).is_square():
        y += 1
    return y


@pytest.mark.parametrize("k", [1, 2, 3, 1000, sub_order - 1])
def test_round_trip(k):
    point = mul_point_escalar(Base8, k)
    assert unpack_point(pack_point(point)) == point


def test_round_trip_negative_x():
    point = (p - Base8[0], Base8[1])
    packed = pack_point(point)
    assert unpack_point(packed) == point
    assert unpack_point(pack_point(Base8)) == Base8
    # same y, opposite sign bit
    assert packed ^ pack_point(Base8) == 1 << 255


def test_sign_bit_follows_upper_half():
    point = mul_point_escalar(Base8, 5)
    packed = pack_point(point)
    assert bool(packed >> 255) == (point[0] > HALF)
    assert packed & ((1 << 255) - 1) == point[1]


def test_unpack_from_raw_bytes():
    packed = pack_point(Base8)
    assert unpack_point(packed.to_bytes(32, "little")) == Base8


def test_unpack_recovers_x_from_y_alone():
    # Base8.x is in the lower half, so its encoding is just y
    assert not Base8[0] > HALF
    x, y = unpack_point(Base8[1])
    assert (x, y) == Base8
    assert isinstance(x, int) and isinstance(y, int)


def test_identity_and_order_two_point():
    assert pack_point(IDENTITY) == 1
    assert unpack_point(1) == IDENTITY
    assert unpack_point(pack_point((0, p - 1))) == (0, p - 1)


def test_pack_off_curve():
    with pytest.raises(InvalidPointError):
        pack_point((Base8[0], 3))


def test_unpack_y_not_in_field():
    with pytest.raises(InvalidPointError):
        unpack_point(p + 1)


def test_unpack_y_without_square_root():
    with pytest.raises(InvalidPointError):
        unpack_point(_first_y_without_x())


def test_unpack_sign_bit_with_zero_x():
    with pytest.raises(InvalidPointError):
        unpack_point(1 | (1 << 255))


@pytest.mark.parametrize("packed", [-1, 1 << 256, b"\x01" * 31])
def test_unpack_out_of_range(packed):
    with pytest.raises(InvalidPointError):
        unpack_point(packed)


def test_scalar_encoding_has_no_subgroup_bound():
    for scalar in (0, 3, sub_order - 1, sub_order, (1 << 256) - 1):
        data = pack_scalar(scalar)
        assert len(data) == 32
        assert unpack_scalar(data) == scalar


def test_scalar_encoding_limits():
    with pytest.raises(ValueError):
        pack_scalar(1 << 256)
    with pytest.raises(ValueError):
        pack_scalar(-1)
    with pytest.raises(LengthError):
        unpack_scalar(b"\x00" * 31)
