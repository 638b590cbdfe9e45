import io
import logging
import struct

from .exceptions import (
    InspectorException,
    NotFound,
    NotUnformatted,
    ShortRead,
    Eof,
    NoPriorRecord,
)
from .fields import FieldSpec, parse_format


logger = logging.getLogger(__name__)


class RecordStream(object):
    '''Sequential access to the unformatted records written by a Fortran program.

    Each record is framed by a marker containing the length of the payload,
    placed both before and after it. Records too long for a marker are split
    into subrecords: a negative leading marker means that the record continues
    in the next subrecord.

    The source can be a path or raw bytes, like for the other streams the
    initialization is dispatched on the type of the object passed.'''
    MARKERS = {
        4: 'i',
        8: 'q',
    }

    def __init__(self, obj, record_marker=4, width=None):
        if record_marker not in self.MARKERS:
            raise ValueError('record markers can be 4 or 8 bytes long, not %s' % record_marker)

        self._type = type(obj)
        self.obj = obj
        self.record_marker = record_marker
        self.width = width
        self.history = []  # at most one record to backspace over
        self.record_length = None
        self.consumed = 0
        self.error = False

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of source to use' % self._type.__name__)

        init_method()

        self.size = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(0)

        try:
            self._check_framing()
        except NotUnformatted:
            self.close()
            raise

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, getattr(self.obj, 'name', self._type.__name__))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

        return False

    def __del__(self):
        self.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        try:
            self.obj = open(self.obj, 'rb')
        except OSError as e:
            raise NotFound('cannot open \'%s\': %s' % (self.obj, e.strerror))

    def init_PosixPath(self):
        self.obj = str(self.obj)
        self.init_str()

    init_WindowsPath = init_PosixPath

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def _check_framing(self):
        '''The first record must be consistent with the marker convention,
        otherwise this is not a sequential unformatted file.'''
        if self.size == 0:
            return

        m = self.record_marker
        if self.size < 2 * m:
            raise NotUnformatted('%d bytes are not enough for a record' % self.size)

        lead = self._unpack_marker(self.obj.read(m))
        length = abs(lead)

        if length + 2 * m > self.size:
            raise NotUnformatted('first marker declares %d bytes but the file is %d bytes long' % (length, self.size))

        self.obj.seek(m + length)
        trail = self._unpack_marker(self.obj.read(m))
        self.obj.seek(0)

        if abs(trail) != length:
            raise NotUnformatted('first record has markers that disagree (%d != %d)' % (lead, trail))

    def _unpack_marker(self, raw):
        return struct.unpack('=%s' % self.MARKERS[self.record_marker], raw)[0]

    def _read_marker(self):
        raw = self.obj.read(self.record_marker)

        if len(raw) == 0:
            return None

        if len(raw) < self.record_marker:
            raise ShortRead('truncated record marker at offset %d' % (self.obj.tell() - len(raw)))

        return self._unpack_marker(raw)

    def _walk_record(self, read=True):
        '''Walk the markers of the record at the cursor leaving the cursor after it.

        It returns the length of the record and, if asked, its payload.'''
        m = self.record_marker
        chunks = []
        length = 0

        while True:
            start = self.obj.tell()
            lead = self._read_marker()

            if lead is None:
                if length or chunks:
                    raise ShortRead('record continues past the end of the file')
                raise Eof('no more records at offset %d' % start)

            sublength = abs(lead)
            if start + sublength + 2 * m > self.size:
                raise ShortRead('record at offset %d declares %d bytes but only %d are available' % (
                    start, sublength, max(self.size - start - 2 * m, 0)))

            if read:
                chunks.append(self.obj.read(sublength))
            else:
                self.obj.seek(sublength, io.SEEK_CUR)

            trail = self._read_marker()
            if abs(trail) != sublength:
                raise ShortRead('record at offset %d has markers that disagree (%d != %d)' % (start, lead, trail))

            length += sublength

            if lead >= 0:
                break

        return length, b''.join(chunks) if read else None

    def tell(self):
        return self.obj.tell()

    def peek_next_size(self):
        '''Return the length of the next record without consuming it.'''
        position = self.obj.tell()
        try:
            length, _ = self._walk_record(read=False)
        except InspectorException:
            self.error = True
            raise
        finally:
            self.obj.seek(position)

        logger.debug('next record at offset %d is %d bytes long' % (position, length))

        return length

    def read(self, spec, prefix=False, **bound):
        '''Decode the next record following the format specification and
        return the list of values, one for each field.

        The keyword arguments are the values the '#name' counts of the
        specification refer to.'''
        field_spec = spec if isinstance(spec, FieldSpec) else parse_format(spec)

        position = self.obj.tell()
        # a read that doesn't reach a record leaves nothing to backspace over
        self.history = []
        try:
            length, raw = self._walk_record()
            # even a record that fails decoding can be backspaced over
            self.history = [position]
            self.record_length = length
            self.consumed = 0

            values, self.consumed = field_spec.unpack_from(raw, width=self.width, prefix=prefix, **bound)

            if len(values) < len(field_spec):
                raise ShortRead('decoded %d fields out of %d' % (len(values), len(field_spec)))
        except InspectorException:
            self.error = True
            raise

        logger.debug('read record at offset %d with format \'%s\' (%d bytes)' % (position, field_spec.spec, length))

        return values

    def backspace(self):
        '''Rewind exactly one record, the one just read.'''
        if not self.history:
            raise NoPriorRecord('there is no record to backspace over')

        offset = self.history.pop()
        self.obj.seek(offset)
        self.record_length = None
        self.consumed = 0

        logger.debug('backspaced to offset %d' % offset)

    def close(self):
        obj = getattr(self, 'obj', None)
        if obj is not None and hasattr(obj, 'close') and not obj.closed:
            obj.close()
