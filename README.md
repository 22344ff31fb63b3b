# imgconv

A Python library for filtering RGBA images with a square convolution kernel.
The kernel is applied to the red, green and blue channels. The alpha channel
is kept as it is. Each result is clamped to the range 0–255 and then truncated
to an integer.

## Installation

```
pip install .
```

To also install the test dependencies, use `pip install .[test]`.

## Kernel files

A kernel file is plain text. The first value is the kernel size `N`. After it
come the `N × N` weights, one row after another.

```
3
0 -1 0
-1 5 -1
0 -1 0
```

There are two readers:

- `parse_kernel(text)` and `load_kernel(path)` are strict. Values may be
  separated by any whitespace. The size must be odd and between 3 and 255, and
  all `N × N` values must be present. Otherwise they raise `KernelError`.
  `load_kernel` also raises `KernelError` when the file cannot be opened.
- `parse_loose_kernel(text)` and `load_loose_kernel(path)` are lenient. Tokens
  are separated by spaces and newlines. Each token is read by its leading
  numeric part, and a token with no number counts as zero. If values are
  missing, they count as zero too. They raise `KernelError` only for a negative
  size or, in `load_loose_kernel`, a file that cannot be opened.

Both readers return a `Kernel`. It is a frozen dataclass with a `size` and a
tuple of float `values` in row-major order. `Kernel.at(row, col)` returns one
value and raises `IndexError` outside the kernel. `Kernel.as_array()` returns
a `size × size` float64 NumPy array.

## Filtering

Images are NumPy arrays of shape `(height, width, 4)`. Both filters return a
new uint8 array and leave their input untouched. A kernel of even size has no
centre, so both filters raise `KernelError` for it.

### Whole image, mirrored margins

`imgconv.mirrored.convolve_mirrored(image, kernel)` filters every pixel. The
image is extended by `N // 2` pixels on every side, reflected symmetrically
with the edge pixel repeated. The kernel is flipped, as in a true convolution.
It raises `ValueError` when the margin is larger than the image.

The helpers it uses are also available:

- `mirror_pad(image, margin)` returns the image extended by `margin`
  mirrored pixels on every side.
- `aligned_layout(width, margin)` returns a `Layout(left, stride, right)`.
  `left` is the margin rounded up to a multiple of 16 pixels. `stride` is
  `left` plus `width + margin` rounded up to a multiple of 16. `right` is the
  padding after the image columns.

### Interior only

`imgconv.interior.convolve_interior(image, kernel)` filters only the pixels
where the whole kernel fits inside the image. A border of `N // 2` pixels is
copied unchanged. The kernel is applied as it is stored, without flipping.
If the image is too small to have an interior, it is returned unchanged.

## Reading and writing PNG files

- `imgconv.pngio.load_rgba(path)` reads an image and converts it to a
  `(height, width, 4)` uint8 array.
- `save_rgba(path, image)` writes such an array as a PNG file. It also
  accepts integer arrays with values in 0–255.

Both raise `ImageError` on failure.

## Example

```python
from imgconv.kernel import load_kernel
from imgconv.pngio import load_rgba, save_rgba
from imgconv.mirrored import convolve_mirrored

image = load_rgba("photo.png")
kernel = load_kernel("sharpen.txt")
save_rgba("sharpened.png", convolve_mirrored(image, kernel))
```

## What it does not do

The package has no command-line program. To filter an image file, call the
functions above from Python, as in the example.