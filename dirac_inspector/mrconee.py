"""
Decoder of the MRCONEE file, where DIRAC stores the header of the transformed
integrals: energies, symmetry data, spinors and the Fock matrix.

The file is made of six sequential unformatted records:

 1. header: number of spinors, SCF and nuclear repulsion energy,
    inversion symmetry, point group type, spinfree
 2. number of electrons in each fermion irrep
 3. irreps of the Abelian subgroup
 4. irrep multiplication table
 5. information about spinors
 6. Fock matrix

Every integer has the width of the integers of the DIRAC build that wrote
the file, this is detected from the length of the first record.
"""
import logging

import numpy as np
from bitstring import BitArray

from .enum import GroupArithmetic
from .exceptions import InspectorException, UnrecognizedFormat
from .streams import RecordStream
from .symmetry import classify_irreps
from .width import detect_integer_width, REAL_SIZE


logger = logging.getLogger(__name__)

HEADER_FORMAT = 'num_spinors:i, breit:i, enuc:r8, invsym:i, nz_arith:i, is_spinfree:i, norb_total:i, scf_energy:r8'
FERMION_IRREPS_FORMAT = (
    'nsymrp:i, repnames:c14[.nsymrp], nactive:i[.nsymrp],'
    'nstr:i[#invsym], nfrozen:i[#invsym], nfrozen_positive:i[#invsym], nfrozen_negative:i[#invsym],'
    'ndelete:i[#invsym]'
)
ABELIAN_COUNT_FORMAT = 'nsymrpa:i'
ABELIAN_IRREPS_FORMAT = 'nsymrpa:i, repanames:c4[#nnames]'
MULTIPLICATION_TABLE_FORMAT = 'multb:i[#nelems]'
SPINORS_FORMAT = 'spinors:c[#nbytes]'
FOCK_FORMAT = 'fock:z8[#nelems]'

REPANAME_LENGTH = 4
IRREP_COUNTS = (2, 4, 8, 16, 32, 64)


class MrconeeData(object):
    """Content of a MRCONEE file.

    Irreps of the spinors are 0-based indices into irrep_names, the values of
    the multiplication table are kept as they are in the file.
    """

    def __init__(self, width, num_spinors, breit, nuc_rep_energy, invsym, nz_arith, group_arith, is_spinfree,
                 norb_total, scf_energy, irrep_names, point_group, totally_sym_irrep, mult_table,
                 spinor_irreps, occ_numbers, spinor_energies, fock):
        self.width = width
        self.num_spinors = num_spinors
        self.breit = breit
        self.nuc_rep_energy = nuc_rep_energy
        self.invsym = invsym
        self.nz_arith = nz_arith
        self.group_arith = group_arith
        self.is_spinfree = is_spinfree
        self.norb_total = norb_total
        self.scf_energy = scf_energy
        self.irrep_names = irrep_names
        self.point_group = point_group
        self.totally_sym_irrep = totally_sym_irrep
        self.mult_table = mult_table
        self.spinor_irreps = spinor_irreps
        self.occ_numbers = occ_numbers
        self.spinor_energies = spinor_energies
        self.fock = fock

    def __repr__(self):
        return '<%s(num_spinors=%d, num_irreps=%d, point_group=%s, scf_energy=%r)>' % (
            self.__class__.__name__, self.num_spinors, self.num_irreps, self.point_group, self.scf_energy)

    @property
    def num_irreps(self):
        return len(self.irrep_names)

    @property
    def has_inversion(self):
        return self.invsym == 2


def get_element_size(width):
    '''Bytes for each spinor in record 5: two integers and a real'''
    return 2 * width.value + REAL_SIZE


def element_at(buffer, index, width):
    '''Decode the spinor at the given index of the raw block of record 5.

    It returns the fermion irrep, the irrep of the Abelian subgroup (both
    1-based, as in the file) and the one-electron energy.'''
    element_size = get_element_size(width)

    if not 0 <= index < len(buffer) // element_size:
        raise IndexError('spinor %d is out of a block of %d bytes' % (index, len(buffer)))

    bits = 8 * width.value
    element = BitArray(bytes=buffer, offset=8 * element_size * index, length=8 * element_size)

    fermion_irrep, irrep, energy = element.unpack(['intne:%d' % bits, 'intne:%d' % bits, 'floatne:64'])

    return fermion_irrep, irrep, energy


def assign_occupations(fermion_irreps, electron_counts):
    '''The spinors are filled in the order they appear in the file: each
    spinor is occupied while its fermion irrep has electrons left.'''
    remaining = [int(_) for _ in electron_counts]
    occupations = []

    for irp in fermion_irreps:
        if not 1 <= irp <= len(remaining):
            raise UnrecognizedFormat('fermion irrep %d of a spinor is not in 1..%d' % (irp, len(remaining)))

        if remaining[irp - 1] > 0:
            remaining[irp - 1] -= 1
            occupations.append(1)
        else:
            occupations.append(0)

    return occupations


def unflatten_multiplication_table(flat, num_irreps):
    '''The table is stored column by column: entry (i, j) is at j * num_irreps + i'''
    return np.asarray(flat, dtype=np.int64).reshape(num_irreps, num_irreps).T.copy()


def irrep_name(raw):
    '''Names are blocks of characters with no terminator'''
    return raw.split(b'\x00', 1)[0].decode('latin-1')


def read_header(stream):
    num_spinors, breit, enuc, invsym, nz_arith, is_spinfree, norb_total, scf_energy = stream.read(HEADER_FORMAT)

    if num_spinors < 0 or invsym < 0:
        raise UnrecognizedFormat('negative counts in the header (%d spinors, invsym %d)' % (num_spinors, invsym))

    try:
        group_arith = GroupArithmetic(nz_arith)
    except ValueError:
        logger.warning('unknown group arithmetic %d' % nz_arith)
        group_arith = None

    return {
        'num_spinors': num_spinors,
        'breit': breit,
        'nuc_rep_energy': enuc,
        'invsym': invsym,
        'nz_arith': nz_arith,
        'group_arith': group_arith,
        'is_spinfree': bool(is_spinfree),
        'norb_total': norb_total,
        'scf_energy': scf_energy,
    }


def read_fermion_irrep_occs(stream, invsym):
    '''Return the number of active electrons in each fermion irrep of the parent group'''
    nsymrp, repnames, nactive, *_ = stream.read(FERMION_IRREPS_FORMAT, invsym=invsym)

    logger.debug('fermion irreps %r with active electrons %s' % (repnames, nactive))

    return [int(_) for _ in nactive]


def read_abelian_irreps(stream):
    '''The number of irreps must be known to read their names: read it alone,
    go back and read the whole record.'''
    nsymrpa, = stream.read(ABELIAN_COUNT_FORMAT, prefix=True)
    stream.backspace()

    num_irreps = 2 * nsymrpa
    if num_irreps not in IRREP_COUNTS:
        raise UnrecognizedFormat('%d irreps in the Abelian subgroup, it must be one of %s' % (num_irreps, IRREP_COUNTS))

    _, repanames = stream.read(ABELIAN_IRREPS_FORMAT, nnames=num_irreps)

    return [irrep_name(repanames[REPANAME_LENGTH * _:REPANAME_LENGTH * (_ + 1)]) for _ in range(num_irreps)]


def read_multiplication_table(stream, num_irreps):
    multb, = stream.read(MULTIPLICATION_TABLE_FORMAT, nelems=num_irreps * num_irreps)

    return unflatten_multiplication_table(multb, num_irreps)


def read_spinor_info(stream, num_spinors, num_irreps, fermion_irrep_occs):
    '''The data are read as a chunk of raw bytes and then decoded element
    by element depending on the size of the integers.'''
    element_size = get_element_size(stream.width)
    buf, = stream.read(SPINORS_FORMAT, nbytes=num_spinors * element_size)

    fermion_irreps = []
    spinor_irreps = np.zeros(num_spinors, dtype=np.int64)
    spinor_energies = np.zeros(num_spinors, dtype=np.float64)

    for idx in range(num_spinors):
        fermion_irrep, irrep, energy = element_at(buf, idx, stream.width)

        if not 1 <= irrep <= num_irreps:
            raise UnrecognizedFormat('spinor %d has irrep %d, not in 1..%d' % (idx + 1, irrep, num_irreps))

        fermion_irreps.append(fermion_irrep)
        spinor_irreps[idx] = irrep - 1
        spinor_energies[idx] = energy

    occ_numbers = np.array(assign_occupations(fermion_irreps, fermion_irrep_occs), dtype=np.int64)

    return spinor_irreps, occ_numbers, spinor_energies


def read_fock(stream, num_spinors):
    fock, = stream.read(FOCK_FORMAT, nelems=num_spinors * num_spinors)

    return fock.reshape(num_spinors, num_spinors)


def _read_record(name, function, *args):
    '''Call the function reading a record adding its name to the chain of a failure'''
    logger.debug('reading record \'%s\'' % name)
    try:
        return function(*args)
    except InspectorException as e:
        e.chain.append(name)
        raise


def read_mrconee(source, record_marker=4):
    '''Decode the MRCONEE file at source (a path or the raw bytes).

    Any failure is raised as an InspectorException, nothing partially decoded
    is returned.'''
    with RecordStream(source, record_marker=record_marker) as stream:
        stream.width = _read_record('header', detect_integer_width, stream)

        header = _read_record('header', read_header, stream)
        num_spinors = header['num_spinors']

        fermion_irrep_occs = _read_record('fermion irreps', read_fermion_irrep_occs, stream, header['invsym'])
        irrep_names = _read_record('abelian irreps', read_abelian_irreps, stream)
        mult_table = _read_record('multiplication table', read_multiplication_table, stream, len(irrep_names))
        spinor_irreps, occ_numbers, spinor_energies = _read_record(
            'spinors', read_spinor_info, stream, num_spinors, len(irrep_names), fermion_irrep_occs)
        fock = _read_record('fock', read_fock, stream, num_spinors)

        width = stream.width

    point_group, totally_sym_irrep, irrep_names = classify_irreps(irrep_names)

    return MrconeeData(
        width=width,
        irrep_names=irrep_names,
        point_group=point_group,
        totally_sym_irrep=totally_sym_irrep,
        mult_table=mult_table,
        spinor_irreps=spinor_irreps,
        occ_numbers=occ_numbers,
        spinor_energies=spinor_energies,
        fock=fock,
        **header,
    )
