import errno
import io
import os

import numpy
import pytest

from trellis_conf import bitmap
from trellis_conf.bitmap import Bitmap, export_pbm, reverse_bits


def test_reverse_bits():
    data = numpy.arange(256, dtype = numpy.uint8)
    expected = [int('{:08b}'.format(n)[::-1], 2) for n in range(256)]
    assert reverse_bits(data).tolist() == expected
    assert reverse_bits([0x01, 0x12, 0xF0]).tolist() == [0x80, 0x48, 0x0F]


def test_set_and_get():
    b = Bitmap(10, 3, bits = numpy.zeros(6), mask = numpy.zeros(6))
    assert b.pitch == 2
    assert not b.get(9, 2)
    b.set(9, 2)
    assert b.get(9, 2)
    assert b.bits[5] == 0x02
    assert b.mask[5] == 0x02
    b.set(9, 2, False)
    assert not b.get(9, 2)
    assert b.mask[5] == 0x02


def test_export(tmp_path):
    b = Bitmap(10, 2)
    b.set(0, 0)
    b.set(9, 0)
    b.set(1, 1)
    path = tmp_path / 'out.pbm'
    export_pbm(b, str(path))
    assert path.read_bytes() == b'P4\n10 2\n' + bytes([0x80, 0x40, 0x40, 0x00])


def test_export_wide_pitch(tmp_path):
    b = Bitmap(8, 2, pitch = 3)
    b.set(7, 1)
    path = tmp_path / 'out.pbm'
    export_pbm(b, str(path))
    assert path.read_bytes() == b'P4\n8 2\n\x00\x01'


def test_export_applies_mask(tmp_path):
    b = Bitmap(8, 1, bits = [0xFF], mask = [0x0F])
    path = tmp_path / 'out.pbm'
    export_pbm(b, str(path))
    assert path.read_bytes() == b'P4\n8 1\n\xf0'


class FullDisk(io.FileIO):
    def write(self, data):
        raise OSError(errno.ENOSPC, os.strerror(errno.ENOSPC))


def test_failed_export_removes_file(tmp_path, monkeypatch):
    monkeypatch.setattr(
        bitmap, 'open', lambda path, mode: FullDisk(path, 'w'),
        raising = False)
    path = tmp_path / 'out.pbm'
    with pytest.raises(OSError):
        export_pbm(Bitmap(8, 8), str(path))
    assert not path.exists()


def test_unwritable_path(tmp_path):
    with pytest.raises(OSError):
        export_pbm(Bitmap(8, 8), str(tmp_path / 'missing' / 'out.pbm'))
