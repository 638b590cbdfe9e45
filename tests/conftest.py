import struct

import numpy as np
import pytest

from dirac_inspector.enum import IntegerWidth


MARKER_FORMATS = {
    4: '=i',
    8: '=q',
}

DEFAULT_CONTENT = {
    'num_spinors': 6,
    'breit': 0,
    'enuc': 1.2345,
    'invsym': 1,
    'nz_arith': 2,
    'is_spinfree': 0,
    'norb_total': 12,
    'scf_energy': -7.89,
    'repnames': [b'Eg', b'Eu', b'E'],
    'nactive': [2, 0, 1],
    'repanames': [b'A  a', b'A  b', b'A  3', b'A  3', b'A  0', b'A  4', b'A  2', b'A  2'],
    'multb': list(range(1, 65)),
    # (fermion irrep, abelian irrep, energy)
    'spinors': [
        (1, 1, -1.5),
        (1, 2, -1.25),
        (1, 1, -0.5),
        (2, 3, 0.25),
        (3, 1, 0.5),
        (3, 2, 1.0),
    ],
}


def default_fock(n):
    return (np.arange(n * n) + 1j * np.arange(n * n)[::-1]).reshape(n, n)


def make_fortran_record(payload, record_marker=4):
    marker = struct.pack(MARKER_FORMATS[record_marker], len(payload))
    return marker + payload + marker


def make_ints(width, values):
    code = 'i' if width == IntegerWidth.INT4 else 'q'
    return struct.pack('=%d%s' % (len(values), code), *values)


def make_mrconee_records(width=IntegerWidth.INT4, **content):
    '''Payloads of the six records of a MRCONEE file, in order'''
    c = dict(DEFAULT_CONTENT)
    c.update(content)
    fock = c.get('fock', default_fock(c['num_spinors']))

    header = (
        make_ints(width, [c['num_spinors'], c['breit']]) +
        struct.pack('=d', c['enuc']) +
        make_ints(width, [c['invsym'], c['nz_arith'], c['is_spinfree'], c['norb_total']]) +
        struct.pack('=d', c['scf_energy'])
    )
    fermion_irreps = (
        make_ints(width, [len(c['repnames'])]) +
        b''.join(_.ljust(14) for _ in c['repnames']) +
        make_ints(width, c['nactive']) +
        make_ints(width, [c['norb_total']] * c['invsym']) +
        make_ints(width, [0] * c['invsym']) * 4
    )
    abelian_irreps = make_ints(width, [len(c['repanames']) // 2]) + b''.join(c['repanames'])
    multiplication_table = make_ints(width, c['multb'])
    spinors = b''.join(make_ints(width, [_[0], _[1]]) + struct.pack('=d', _[2]) for _ in c['spinors'])

    return [
        header,
        fermion_irreps,
        abelian_irreps,
        multiplication_table,
        spinors,
        np.asarray(fock, dtype='=c16').tobytes(),
    ]


def make_mrconee_bytes(width=IntegerWidth.INT4, record_marker=4, **content):
    return b''.join(make_fortran_record(_, record_marker) for _ in make_mrconee_records(width, **content))


@pytest.fixture
def fortran_record():
    return make_fortran_record


@pytest.fixture
def mrconee_records():
    return make_mrconee_records


@pytest.fixture
def mrconee_bytes():
    return make_mrconee_bytes


@pytest.fixture
def mrconee_path(tmp_path):
    path = tmp_path / 'MRCONEE'
    path.write_bytes(make_mrconee_bytes())

    return path
