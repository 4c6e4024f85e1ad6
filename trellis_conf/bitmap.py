# Chip bitmaps and their export as portable bitmap (PBM) images.
#
# A bitmap is stored as two byte planes of pitch * height bytes: the bits
# themselves and a mask marking which bits are valid.  Pixel x of row y is
# bit x & 7 of byte y * pitch + (x >> 3), least significant bit first.  PBM
# stores the leftmost pixel in the most significant bit, so bytes are bit
# reversed on export.

import os

import numpy


class Bitmap:
    def __init__(self, width, height, pitch = None, bits = None, mask = None):
        if pitch is None:
            pitch = (width + 7) // 8
        assert 8 * pitch >= width, 'Pitch too small for width'

        self.width = width
        self.height = height
        self.pitch = pitch
        size = pitch * height
        if bits is None:
            self.bits = numpy.zeros(size, dtype = numpy.uint8)
        else:
            self.bits = numpy.asarray(bits, dtype = numpy.uint8)
        if mask is None:
            self.mask = numpy.full(size, 0xFF, dtype = numpy.uint8)
        else:
            self.mask = numpy.asarray(mask, dtype = numpy.uint8)
        assert self.bits.size == size and self.mask.size == size, \
            'Bitmap planes must hold pitch * height bytes'

    def locate(self, x, y):
        assert 0 <= x < self.width and 0 <= y < self.height
        return y * self.pitch + (x >> 3), 1 << (x & 7)

    def set(self, x, y, value = True):
        i, bit = self.locate(x, y)
        if value:
            self.bits[i] |= bit
        else:
            self.bits[i] &= ~bit & 0xFF
        self.mask[i] |= bit

    def get(self, x, y):
        i, bit = self.locate(x, y)
        return bool(self.bits[i] & self.mask[i] & bit)


# Reverses the bit order of each byte without a loop: the multiply fans the
# byte out into spaced copies, the mask picks one reversed bit from each, and
# the second multiply gathers them into bits 32 to 39.
def reverse_bits(data):
    data = numpy.asarray(data, dtype = numpy.uint64)
    spread = (data * numpy.uint64(0x80200802)) & numpy.uint64(0x0884422110)
    gathered = (spread * numpy.uint64(0x0101010101)) >> numpy.uint64(32)
    return (gathered & numpy.uint64(0xFF)).astype(numpy.uint8)


def export_pbm(bitmap, path):
    row_bytes = (bitmap.width + 7) // 8
    planes = (bitmap.bits & bitmap.mask).reshape(bitmap.height, bitmap.pitch)
    image = reverse_bits(planes[:, :row_bytes])

    out = open(path, 'wb')
    try:
        with out:
            out.write(b'P4\n%d %d\n' % (bitmap.width, bitmap.height))
            out.write(image.tobytes())
    except OSError:
        os.remove(path)
        raise
