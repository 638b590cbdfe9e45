"""
A Field is the "fundamental" datatype of a record, something directly
unpackable from the raw bytes without needing anything else than the
integer width in use and, for arrays, the number of elements.

Records are described by a compact format specification, a comma separated
list of items like

    'nsymrpa:i, repanames:c4[#nnames]'

where each item is

    [NAME ':'] [REPEAT] TYPE ['[' COUNT ']']

with TYPE one of

 - i:  integer with the width of the producing program
 - i4: 4-byte integer
 - i8: 8-byte integer
 - r8: 8-byte real
 - z8: 16-byte complex
 - cN: block of N characters (c alone means c1)

REPEAT expands the item into that many scalar fields of the same type, COUNT
turns the item into an array: it can be a literal, a reference to a field
decoded before in the same record ('.name') or a value passed by the caller
('#name'), see properties.Dependency.
"""
import logging
import re
import struct
from functools import lru_cache

import numpy as np

from .enum import IntegerWidth
from .exceptions import FormatException, LengthMismatch
from .properties import Dependency, resolve_count


logger = logging.getLogger(__name__)


class Field(object):
    """Base class to subclass from"""

    def __init__(self, name=None, count=None):
        self.name = name
        self.count = count

    def __repr__(self):
        count = '' if self.count is None else '[%s]' % (self.count.expression if isinstance(self.count, Dependency) else self.count)
        return '<%s(%s%s)>' % (self.__class__.__name__, self.name or '', count)

    @property
    def is_array(self):
        return self.count is not None

    def get_item_size(self, width):
        raise NotImplementedError(f"method {self.__class__.__name__}.get_item_size() not implemented")

    def get_size(self, width, n=None):
        return self.get_item_size(width) * (1 if n is None else n)

    def unpack(self, raw, width, n=None):
        raise NotImplementedError(f"method {self.__class__.__name__}.unpack() not implemented")


class StructField(Field):
    """
    Numeric field: mimic the behaviour of the struct module for scalars and
    use numpy for arrays, so that big blocks are decoded in one go.

    The byte order is the native one, the files are read on the same kind
    of machine that produced them.
    """
    # code -> (struct format, numpy dtype)
    CODES = {
        'i4': ('i', 'i4'),
        'i8': ('q', 'i8'),
        'r8': ('d', 'f8'),
        'z8': ('2d', 'c16'),
    }

    def __init__(self, code, **kw):
        if code != 'i' and code not in self.CODES:
            raise FormatException('unknown numeric type \'%s\'' % code)

        self.code = code
        super().__init__(**kw)

    def _get_code(self, width):
        if self.code != 'i':
            return self.code

        if not isinstance(width, IntegerWidth):
            raise FormatException('the integer width must be known to decode field \'%s\'' % (self.name or self.code))

        return 'i%d' % width.value

    def get_format(self, width):
        return '=%s' % self.CODES[self._get_code(width)][0]

    def get_dtype(self, width):
        return np.dtype('=%s' % self.CODES[self._get_code(width)][1])

    def get_item_size(self, width):
        return struct.calcsize(self.get_format(width))

    def unpack(self, raw, width, n=None):
        if n == 0:
            return np.empty(0, dtype=self.get_dtype(width))

        if n is not None:
            return np.frombuffer(raw, dtype=self.get_dtype(width), count=n).copy()

        value = struct.unpack(self.get_format(width), raw)

        return complex(*value) if len(value) == 2 else value[0]


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    An array of strings is unpacked as a single run of bytes: splitting it
    and terminating the names is up to the caller."""

    def __init__(self, length=1, **kw):
        if length <= 0:
            raise FormatException('a character block must have a positive length')

        self.length = length
        super().__init__(**kw)

    def get_item_size(self, width):
        return self.length

    def unpack(self, raw, width, n=None):
        return bytes(raw)


class FieldSpec(object):
    '''Ordered list of fields describing the content of a single record.'''

    def __init__(self, fields, spec=None):
        self.fields = fields
        self.spec = spec

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.spec)

    def __len__(self):
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    def unpack(self, raw, width=None, prefix=False, **bound):
        values, _ = self.unpack_from(raw, width=width, prefix=prefix, **bound)

        return values

    def unpack_from(self, raw, width=None, prefix=False, **bound):
        '''Decode the fields left to right from the raw bytes of a record and
        return the values together with the number of bytes consumed.

        All the bytes of the record must be consumed, unless prefix is True:
        in that case we are reading only the first part of the record, like a
        Fortran READ with fewer items than the record holds.
        '''
        raw = memoryview(raw)
        decoded = {}
        values = []
        offset = 0

        for field in self.fields:
            n = resolve_count(field.count, decoded, bound) if field.is_array else None
            size = field.get_size(width, n)

            if offset + size > len(raw):
                raise LengthMismatch('field %r needs %d bytes at offset %d but the record is %d bytes long' % (
                    field, size, offset, len(raw)))

            value = field.unpack(raw[offset:offset + size], width, n)
            logger.debug('unpacked %r at offset %d (%d bytes)' % (field, offset, size))

            offset += size
            values.append(value)

            if field.name:
                decoded[field.name] = value

        if not prefix and offset != len(raw):
            raise LengthMismatch('format \'%s\' consumed %d bytes but the record is %d bytes long' % (
                self.spec, offset, len(raw)))

        return values, offset


ITEM_RE = re.compile(r'''
    ^(?:(?P<name>[A-Za-z_]\w*):)?
    (?P<repeat>\d+)?
    (?P<type>i4|i8|i|r8|z8|c\d*)
    (?:\[(?P<count>[^\]]+)\])?$
''', re.VERBOSE)


def _parse_count(count):
    if count.isdigit():
        return int(count)

    return Dependency(count)


def _build_field(type_, name, count):
    if type_.startswith('c'):
        return StringField(int(type_[1:] or 1), name=name, count=count)

    return StructField(type_, name=name, count=count)


@lru_cache(maxsize=None)
def parse_format(spec):
    '''Build the FieldSpec described by the string passed as argument.'''
    fields = []
    names = set()

    for item in spec.split(','):
        item = ''.join(item.split())
        match = ITEM_RE.match(item)
        if not match:
            raise FormatException('cannot parse \'%s\' in format \'%s\'' % (item, spec))

        name = match.group('name')
        repeat = match.group('repeat')
        count = match.group('count')

        if name and repeat:
            raise FormatException('a repeated item cannot be named (\'%s\')' % item)

        if repeat is not None and int(repeat) == 0:
            raise FormatException('repeat of zero in \'%s\'' % item)

        if name in names:
            raise FormatException('field \'%s\' defined twice in format \'%s\'' % (name, spec))

        count = _parse_count(count) if count is not None else None

        if isinstance(count, Dependency) and not count.is_external and count.name not in names:
            raise FormatException('\'%s\' refers to a field not decoded before it' % item)

        for _ in range(int(repeat or 1)):
            fields.append(_build_field(match.group('type'), name, count))

        if name:
            names.add(name)

    logger.debug('parsed format \'%s\' into %d fields' % (spec, len(fields)))

    return FieldSpec(fields, spec=spec)
