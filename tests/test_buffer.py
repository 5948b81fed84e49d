import numpy as np
import pytest

from serikagl.buffer import Buffer, FilterMode


def _gradient(width=4, height=3):
    buf = Buffer(width, height, (0.0, 0.0))
    for y in range(height):
        for x in range(width):
            buf.set(x, y, (x, y))
    return buf


def test_new_buffer_is_filled_with_default():
    buf = Buffer(3, 2, (1.0, 2.0, 3.0, 4.0))
    assert buf.width == 3
    assert buf.height == 2
    assert buf.components == 4
    assert buf.size == 6
    assert buf.raw_data().tolist() == [[[1.0, 2.0, 3.0, 4.0]] * 3] * 2


def test_dtype_follows_default():
    buf = Buffer(1, 1, np.zeros(4, dtype=np.uint8))
    assert buf.dtype == np.uint8
    assert Buffer(1, 1, 0.5).dtype == np.float64


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Buffer(-1, 2)


def test_calc_index_matches_flat_layout():
    buf = _gradient()
    flat = buf.raw_data().reshape(-1, buf.components)
    for y in range(buf.height):
        for x in range(buf.width):
            assert buf.index(x, y) == Buffer.calc_index(x, y, buf.width)
            assert tuple(flat[buf.index(x, y)]) == (x, y)


def test_set_get_round_trip():
    buf = Buffer(2, 2, np.zeros(4, dtype=np.uint8))
    buf.set(1, 0, (10, 20, 30, 40))
    assert buf.get_pixel(1, 0).tolist() == [10, 20, 30, 40]
    assert buf.get_pixel(0, 1).tolist() == [0, 0, 0, 0]


def test_set_outside_raises():
    buf = Buffer(2, 2)
    with pytest.raises(IndexError):
        buf.set(2, 0, 1.0)
    with pytest.raises(IndexError):
        buf.set(0, -1, 1.0)


def test_get_pixel_outside_is_zero():
    buf = Buffer(2, 2, (5.0, 5.0))
    assert buf.get_pixel(-1, 0).tolist() == [0.0, 0.0]
    assert buf.get_pixel(0, 2).tolist() == [0.0, 0.0]


def test_get_pixel_returns_copy():
    buf = Buffer(1, 1, (1.0,))
    pixel = buf.get_pixel(0, 0)
    pixel[0] = 9.0
    assert buf.get_pixel(0, 0)[0] == 1.0


def test_pixel_clamped_clamps_and_writes_through():
    buf = _gradient()
    corner = buf.pixel_clamped(-5, 100)
    assert corner.tolist() == buf.get_pixel(0, buf.height - 1).tolist()
    corner += 7
    assert buf.get_pixel(0, buf.height - 1).tolist() == (
        np.array([0, buf.height - 1]) + 7
    ).tolist()


def test_sample_nearest_matches_pixel():
    buf = _gradient()
    for u, v in [(0.0, 0.0), (0.3, 0.5), (0.99, 0.99)]:
        expected = buf.get_pixel(int(u * buf.width), int(v * buf.height))
        assert buf.sample_2d(u, v).tolist() == expected.tolist()


def test_sample_linear_at_pixel_corner_is_pixel():
    buf = _gradient()
    result = buf.sample_2d(1 / buf.width, 1 / buf.height, FilterMode.LINEAR)
    assert result.tolist() == buf.get_pixel(1, 1).tolist()


def test_sample_linear_interpolates_between_pixels():
    buf = Buffer(2, 1, 0.0)
    buf.set(1, 0, 10.0)
    result = buf.sample_2d(0.25, 0.0, FilterMode.LINEAR)
    assert result[0] == pytest.approx(5.0)


def test_sample_linear_keeps_dtype():
    buf = Buffer(2, 2, np.array([100, 100, 100, 255], dtype=np.uint8))
    result = buf.sample_2d(0.0, 0.0, FilterMode.LINEAR)
    assert result.dtype == np.uint8
    assert result.tolist() == [100, 100, 100, 255]


def test_clear_zeroes_everything():
    buf = Buffer(3, 3, (1.0, 2.0))
    buf.clear()
    assert buf.raw_data().tolist() == [[[0.0, 0.0]] * 3] * 3


def test_copy_from_takes_size_and_casts():
    src = Buffer(3, 2, (12.7, 0.0, 255.0, 1.9))
    dst = Buffer(0, 0, np.zeros(4, dtype=np.uint8))
    result = dst.copy_from(src)
    assert result is dst
    assert (dst.width, dst.height) == (3, 2)
    assert dst.get_pixel(2, 1).tolist() == [12, 0, 255, 1]


def test_copy_from_with_converter():
    src = _gradient(3, 2)
    dst = Buffer(0, 0, 0.0)
    dst.copy_from(src, lambda pixel: pixel[0] + pixel[1])
    assert dst.components == 1
    for y in range(2):
        for x in range(3):
            assert dst.get_pixel(x, y)[0] == x + y


def test_raw_data_is_read_only():
    buf = Buffer(2, 2)
    with pytest.raises(ValueError):
        buf.raw_data()[0, 0, 0] = 1.0


def test_from_array_round_trip():
    pixels = np.arange(24, dtype=np.uint8).reshape(2, 3, 4)
    buf = Buffer.from_array(pixels)
    assert (buf.width, buf.height, buf.components) == (3, 2, 4)
    assert np.array_equal(buf.raw_data(), pixels)
    assert buf.get_pixel(2, 1).tolist() == pixels[1, 2].tolist()