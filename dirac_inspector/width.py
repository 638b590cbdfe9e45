'''
Detection of the size of the integers used by the program that wrote the file.

Nothing in the file says it explicitly, but the first record always holds
the same fields: 6 integers and 2 reals, so its length tells us.
'''
import logging

from .enum import IntegerWidth
from .exceptions import UnrecognizedFormat


logger = logging.getLogger(__name__)

HEADER_INTEGERS = 6
HEADER_REALS = 2
REAL_SIZE = 8


def get_header_size(width):
    return HEADER_INTEGERS * width.value + HEADER_REALS * REAL_SIZE


def detect_integer_width(stream):
    '''Peek the first record of the stream and return the IntegerWidth matching its length.

    The stream is left where it was and its width is not touched.'''
    rec_size = stream.peek_next_size()

    for width in IntegerWidth:
        if rec_size == get_header_size(width):
            logger.debug('header record of %d bytes: %d-byte integers' % (rec_size, width.value))
            return width

    raise UnrecognizedFormat('header record of %d bytes matches neither %s' % (
        rec_size,
        ' nor '.join('%d (%d-byte integers)' % (get_header_size(_), _.value) for _ in IntegerWidth),
    ))
