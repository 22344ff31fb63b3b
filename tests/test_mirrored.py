import numpy as np
import pytest

from imgconv.kernel import Kernel, KernelError
from imgconv.mirrored import aligned_layout, convolve_mirrored, mirror_pad


def _image(h=5, w=6, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8)


def _kernel_with(size, row, col, weight=1.0):
    values = [0.0] * (size * size)
    values[row * size + col] = weight
    return Kernel(size, tuple(values))


@pytest.mark.parametrize("width", [0, 1, 7, 16, 31, 100])
@pytest.mark.parametrize("margin", [0, 1, 7, 15, 16, 17])
def test_aligned_layout_invariants(width, margin):
    layout = aligned_layout(width, margin)
    assert layout.left % 16 == 0
    assert layout.stride % 16 == 0
    assert layout.left >= margin
    assert layout.right >= margin
    assert layout.left + width + layout.right == layout.stride


def test_aligned_layout_small_margin_aligns_to_sixteen():
    assert aligned_layout(10, 1).left == 16


def test_aligned_layout_rejects_negative():
    with pytest.raises(ValueError):
        aligned_layout(10, -1)
    with pytest.raises(ValueError):
        aligned_layout(-1, 1)


def test_mirror_pad_shape_and_centre():
    img = _image()
    padded = mirror_pad(img, 2)
    assert padded.shape == (5 + 4, 6 + 4, 4)
    assert np.array_equal(padded[2:-2, 2:-2], img)


def test_mirror_pad_repeats_edges():
    img = _image()
    padded = mirror_pad(img, 2)
    assert np.array_equal(padded[1, 2:-2], img[0])
    assert np.array_equal(padded[0, 2:-2], img[1])
    assert np.array_equal(padded[-1, 2:-2], img[-2])
    assert np.array_equal(padded[2:-2, 1], img[:, 0])
    assert np.array_equal(padded[2:-2, -1], img[:, -2])
    assert np.array_equal(padded[0, 0], img[1, 1])


def test_mirror_pad_zero_margin_is_copy():
    img = _image()
    padded = mirror_pad(img, 0)
    assert np.array_equal(padded, img)
    padded[0, 0, 0] ^= 1
    assert not np.array_equal(padded, img)


def test_mirror_pad_margin_too_large():
    with pytest.raises(ValueError):
        mirror_pad(_image(2, 6), 3)


def test_identity_kernel_keeps_image():
    img = _image()
    out = convolve_mirrored(img, _kernel_with(3, 1, 1))
    assert np.array_equal(out, img)


def test_single_value_kernel_keeps_image():
    img = _image()
    out = convolve_mirrored(img, Kernel(1, (1.0,)))
    assert np.array_equal(out, img)


def test_kernel_is_flipped():
    img = _image()
    out = convolve_mirrored(img, _kernel_with(3, 0, 0))
    rows = np.r_[1:5, 4]
    cols = np.r_[1:6, 5]
    assert np.array_equal(out[..., :3], img[rows][:, cols, :3])
    assert np.array_equal(out[..., 3], img[..., 3])


def test_alpha_preserved_and_input_untouched():
    img = _image()
    before = img.copy()
    out = convolve_mirrored(img, Kernel(3, tuple([0.1] * 9)))
    assert np.array_equal(out[..., 3], img[..., 3])
    assert np.array_equal(img, before)


def test_clamping():
    img = np.full((4, 4, 4), 200, dtype=np.uint8)
    high = convolve_mirrored(img, _kernel_with(3, 1, 1, 2.0))
    low = convolve_mirrored(img, _kernel_with(3, 1, 1, -1.0))

    expected_high = np.full((4, 4, 4), 255, dtype=np.uint8)
    expected_high[..., 3] = 200
    expected_low = np.zeros((4, 4, 4), dtype=np.uint8)
    expected_low[..., 3] = 200

    assert high.shape == (4, 4, 4)
    assert np.array_equal(high, expected_high)
    assert np.array_equal(low, expected_low)
    assert int(high[2, 1, 0]) == 255
    assert int(low[2, 1, 0]) == 0


def test_even_kernel_rejected():
    with pytest.raises(KernelError):
        convolve_mirrored(_image(), Kernel(2, (1.0, 0.0, 0.0, 0.0)))


def test_bad_image_shape_rejected():
    with pytest.raises(ValueError):
        convolve_mirrored(np.zeros((4, 4, 3), dtype=np.uint8), _kernel_with(3, 1, 1))


def test_image_smaller_than_margin_rejected():
    with pytest.raises(ValueError):
        convolve_mirrored(_image(1, 1), _kernel_with(5, 2, 2))