import io

from dirac_inspector.mrconee import read_mrconee
from dirac_inspector.report import print_mrconee_data


def test_print_mrconee_data(mrconee_bytes):
    out = io.StringIO()

    print_mrconee_data(read_mrconee(mrconee_bytes()), out=out)

    lines = out.getvalue().splitlines()

    assert ' size of integers in DIRAC                          4 bytes' in lines
    assert ' number of spinors                                  6' in lines
    assert ' core energy (inactive energy + nuclear repulsion)  1.234500000000 a.u.' in lines
    assert ' total SCF energy                                   -7.890000000000 a.u.' in lines
    assert ' double group type                                  complex' in lines
    assert ' spin-free                                          no' in lines
    assert ' Abelian subgroup                                   C1' in lines
    assert ' totally symmetric irrep                            A_0' in lines
    assert ' number of irreps in the Abelian subgroup           8' in lines

    assert ' %4d%12s%8d%25.8f' % (1, 'A_a', 1, -1.5) in lines
    assert ' %4d%12s%8d%25.8f' % (4, 'A_-3/2', 0, 0.25) in lines


def test_print_unknown_arithmetic(mrconee_bytes):
    out = io.StringIO()

    print_mrconee_data(read_mrconee(mrconee_bytes(nz_arith=7, is_spinfree=1)), out=out)

    assert ' double group type                                  unknown' in out.getvalue()
    assert ' spin-free                                          yes' in out.getvalue()
