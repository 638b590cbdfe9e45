import pytest

from dirac_inspector.enum import IntegerWidth
from dirac_inspector.exceptions import UnrecognizedFormat
from dirac_inspector.streams import RecordStream
from dirac_inspector.width import detect_integer_width, get_header_size


def test_header_sizes():
    assert get_header_size(IntegerWidth.INT4) == 40
    assert get_header_size(IntegerWidth.INT8) == 64


@pytest.mark.parametrize('width', list(IntegerWidth))
def test_detect_integer_width(width, mrconee_bytes):
    stream = RecordStream(mrconee_bytes(width))

    assert detect_integer_width(stream) == width
    # nothing is consumed and the stream doesn't know yet
    assert stream.tell() == 0
    assert stream.width is None


def test_detect_unrecognized(fortran_record):
    stream = RecordStream(fortran_record(b'\x00' * 48))

    with pytest.raises(UnrecognizedFormat):
        detect_integer_width(stream)
