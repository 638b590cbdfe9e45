import pytest

from dirac_inspector.symmetry import (
    CATALOG,
    UNDETECTED,
    classify_irreps,
    match_signature,
    rename_irreps,
)


def test_c1_spin_separated():
    names = ['A  a', 'A  b', 'A  3', 'A  3', 'A  0', 'A  4', 'A  2', 'A  2']

    point_group, totally_sym_irrep, renamed = classify_irreps(names)

    assert point_group == 'C1'
    assert totally_sym_irrep == 4
    assert renamed == ['A_a', 'A_b', 'A_-3/2', 'A_+3/2', 'A_0', 'A_2', 'A_+1', 'A_-1']
    # the input is left alone
    assert names[0] == 'A  a'


def test_undetected():
    names = ['XX a', 'XX b']

    classification = classify_irreps(names)

    assert classification.point_group == UNDETECTED
    assert classification.totally_symmetric_irrep == 0
    assert classification.irrep_names == names


@pytest.mark.parametrize('names,point_group,totally_sym_irrep', [
    (['Ag a', 'Au a'], 'Ci', 8),
    (['A  a', 'B  a'], 'C2', 8),
    (['A\' a', 'A" a'], 'Cs', 8),
    (['A1 a', 'B2 a'], 'C2v', 16),
    (['A  a', 'B3 a'], 'D2', 16),
    (['Ag a', 'Bg a'], 'C2h', 16),
    (['Ag a', 'B1ua'], 'D2h', 32),
    (['   A', '   a'], 'C1', 1),
    (['  AG', '  AU', '  ag', '  au'], 'Ci', 2),
    (['  1E', '  2E', '   a', '   b'], 'C2, Cs, C2v or D2', 2),
    ([' 1Eg', ' 2Eg'], 'C2h or D2h', 4),
    (['   1', '  -1'], 'Cinfv', 32),
    (['  1g', ' -1g'], 'Dinfh', 32),
])
def test_detect_point_group(names, point_group, totally_sym_irrep):
    classification = classify_irreps(names)

    assert classification.point_group == point_group
    assert classification.totally_symmetric_irrep == totally_sym_irrep


def test_matching_is_exact():
    """Spacing and case are part of the name"""
    assert match_signature(['A a', 'A b']) is None
    assert match_signature(['  ag', '  au']) is None


def test_double_group_renaming():
    names = ['  1E', '  2E', '   a', '   b']

    assert classify_irreps(names).irrep_names == ['1E', '2E', 'a', 'b']


def test_d2h_spin_separated_renaming():
    names = ['Ag a', 'B1ua', 'B2ua', 'B3ga', 'B3ua', 'B2ga', 'B1ga', 'Au a'] * 8

    renamed = classify_irreps(names).irrep_names

    assert len(renamed) == 64
    assert renamed[:8] == ['Ag_a', 'B1u_a', 'B2u_a', 'B3g_a', 'B3u_a', 'B2g_a', 'B1g_a', 'Au_a']
    assert renamed[-1] == 'Au_-1'


def test_linear_renaming():
    names = ['   1', '  -1'] + ['    '] * 62

    renamed = classify_irreps(names).irrep_names

    assert renamed[:4] == ['1/2+', '1/2-', '3/2+', '3/2-']
    assert renamed[30:35] == ['31/2+', '31/2-', '0', '1+', '1-']
    assert renamed[-1] == '16+'

    names = ['  1g', ' -1g'] + ['    '] * 62

    renamed = classify_irreps(names).irrep_names

    assert renamed[14:18] == ['15/2g+', '15/2g-', '1/2u+', '1/2u-']
    assert renamed[32:35] == ['0g', '1g+', '1g-']
    assert renamed[47:49] == ['8g+', '0u']
    assert renamed[-1] == '8u+'


def test_catalog_translations():
    assert len(CATALOG) == 14

    for signature in CATALOG:
        assert len(signature.translation) in (2, 4, 8, 16, 32, 64)
        assert len(set(signature.translation)) == len(signature.translation)


def test_rename_irreps_shorter_translation():
    assert rename_irreps(['x', 'y', 'z'], ('a', 'b')) == ['a', 'b', 'z']
