'''
Detection of the point group from the names of the irreps of the Abelian subgroup.

The program writes the names of the irreps with its own conventions, the first
one or two names are enough to recognize the group. Once the group is known the
names are rewritten in a more readable notation: for the spin-separated
(non-relativistic) groups the suffix is the Ms projection

    a -> a
    b -> b
    3 -> -3/2, +3/2
    0 -> 0
    4 -> 2
    2 -> +1, -1
'''
import logging
from collections import namedtuple


logger = logging.getLogger(__name__)


GroupSignature = namedtuple('GroupSignature', [
    'prefix',                   # leading irrep names to match exactly
    'point_group',
    'totally_symmetric_irrep',
    'translation',              # new name for the irrep at each position
])

Classification = namedtuple('Classification', [
    'point_group',
    'totally_symmetric_irrep',
    'irrep_names',
])

UNDETECTED = 'undetected'

MS_PROJECTIONS = ('a', 'b', '-3/2', '+3/2', '0', '2', '+1', '-1')


def _spin_separated(*irreps):
    return tuple('%s_%s' % (irrep, ms) for ms in MS_PROJECTIONS for irrep in irreps)


def _linear(parities=('',)):
    '''Omega projections of the linear groups: half-integers first, then integers.'''
    top = 16 // len(parities)
    half = tuple('%d/2%s%s' % (2 * k + 1, parity, sign)
                 for parity in parities for k in range(top) for sign in '+-')
    whole = ()
    for parity in parities:
        whole += ('0%s' % parity,)
        whole += tuple('%d%s%s' % (k, parity, sign) for k in range(1, top) for sign in '+-')
        whole += ('%d%s+' % (top, parity),)

    return half + whole


# the order matters: the first matching signature wins
CATALOG = (
    # single groups
    GroupSignature(('A  a', 'A  b'), 'C1', 4, _spin_separated('A')),
    GroupSignature(('Ag a', 'Au a'), 'Ci', 8, _spin_separated('Ag', 'Au')),
    GroupSignature(('A  a', 'B  a'), 'C2', 8, _spin_separated('A', 'B')),
    GroupSignature(('A\' a', 'A" a'), 'Cs', 8, _spin_separated('A\'', 'A"')),
    GroupSignature(('A1 a',), 'C2v', 16, _spin_separated('A1', 'B2', 'B1', 'A2')),
    GroupSignature(('A  a',), 'D2', 16, _spin_separated('A', 'B3', 'B1', 'B2')),
    GroupSignature(('Ag a', 'Bg a'), 'C2h', 16, _spin_separated('Ag', 'Bg', 'Bu', 'Au')),
    GroupSignature(('Ag a',), 'D2h', 32, _spin_separated('Ag', 'B1u', 'B2u', 'B3g', 'B3u', 'B2g', 'B1g', 'Au')),
    # double groups
    GroupSignature(('   A', '   a'), 'C1', 1, ('A', 'a')),
    GroupSignature(('  AG', '  AU'), 'Ci', 2, ('AG', 'AU', 'ag', 'au')),
    GroupSignature(('  1E', '  2E'), 'C2, Cs, C2v or D2', 2, ('1E', '2E', 'a', 'b')),
    GroupSignature((' 1Eg', ' 2Eg'), 'C2h or D2h', 4, ('1Eg', '2Eg', '1Eu', '2Eu', 'ag', 'bg', 'au', 'bu')),
    GroupSignature(('   1', '  -1'), 'Cinfv', 32, _linear()),
    GroupSignature(('  1g', ' -1g'), 'Dinfh', 32, _linear(('g', 'u'))),
)


def match_signature(irrep_names, catalog=CATALOG):
    '''Return the first signature of the catalog whose prefix is the one of the names, if any'''
    for signature in catalog:
        if tuple(irrep_names[:len(signature.prefix)]) == signature.prefix:
            return signature

    return None


def rename_irreps(irrep_names, translation):
    '''Rewrite the names position by position; positions not covered by the translation are kept.'''
    return [translation[idx] if idx < len(translation) else name for idx, name in enumerate(irrep_names)]


def classify_irreps(irrep_names, catalog=CATALOG):
    '''Detect the point group and rename the irreps.

    The input is not modified, the renamed table is part of the result. Not
    recognizing the group is not an error: the label is "undetected", the
    totally symmetric irrep is the first and the names are unchanged.'''
    signature = match_signature(irrep_names, catalog)

    if signature is None:
        logger.warning('cannot detect the point group from irreps %r' % (list(irrep_names[:2]),))
        return Classification(UNDETECTED, 0, list(irrep_names))

    logger.debug('irreps %r identify point group %s' % (list(signature.prefix), signature.point_group))

    return Classification(
        signature.point_group,
        signature.totally_symmetric_irrep,
        rename_irreps(irrep_names, signature.translation),
    )
