import pytest

from voxstream.morton import decode_morton10, encode_morton10


def test_unit_axes():
    assert encode_morton10(1, 0, 0) == 1
    assert encode_morton10(0, 1, 0) == 2
    assert encode_morton10(0, 0, 1) == 4


def test_origin_is_zero():
    assert encode_morton10(0, 0, 0) == 0
    assert decode_morton10(0) == (0, 0, 0)


@pytest.mark.parametrize(
    "coords",
    [(0, 0, 0), (1, 2, 3), (1023, 0, 512), (1023, 1023, 1023), (7, 300, 999), (512, 511, 256)],
)
def test_round_trip(coords):
    assert decode_morton10(encode_morton10(*coords)) == coords


def test_full_range_fits_in_30_bits():
    code = encode_morton10(1023, 1023, 1023)
    assert code < (1 << 30)
    assert code >= (1 << 29)


def test_axes_interleave_independently():
    x, y, z = 345, 678, 901
    combined = encode_morton10(x, 0, 0) | encode_morton10(0, y, 0) | encode_morton10(0, 0, z)
    assert combined == encode_morton10(x, y, z)


def test_axes_do_not_overlap():
    assert encode_morton10(1023, 0, 0) & encode_morton10(0, 1023, 0) == 0
    assert encode_morton10(0, 1023, 0) & encode_morton10(0, 0, 1023) == 0


def test_decode_ignores_bits_above_30():
    code = encode_morton10(12, 34, 56)
    assert decode_morton10(code | (1 << 30) | (1 << 31)) == (12, 34, 56)


def test_ordering_along_single_axis():
    codes = [encode_morton10(i, 0, 0) for i in range(64)]
    assert codes == sorted(codes)
    assert len(set(codes)) == 64