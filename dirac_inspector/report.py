'''Human readable dump of the decoded files.'''
import sys


SEPARATOR = ' -----------------------------------------------------'


def get_irrep_name(data, index):
    if 0 <= index < data.num_irreps:
        return data.irrep_names[index]

    return 'n/a'


def dump_header(data, out=sys.stdout):
    group_arith = data.group_arith.name.lower() if data.group_arith else 'unknown'

    out.write(f'''
 size of integers in DIRAC                          {data.width.value} bytes
 number of spinors                                  {data.num_spinors}
 core energy (inactive energy + nuclear repulsion)  {data.nuc_rep_energy:.12f} a.u.
 total SCF energy                                   {data.scf_energy:.12f} a.u.
 double group type                                  {group_arith}
 spin-free                                          {"yes" if data.is_spinfree else "no"}
 Abelian subgroup                                   {data.point_group}
 totally symmetric irrep                            {get_irrep_name(data, data.totally_sym_irrep)}
 number of irreps in the Abelian subgroup           {data.num_irreps}

''')


def dump_spinors(data, out=sys.stdout):
    out.write(' spinors info:\n')
    out.write(SEPARATOR + '\n')
    out.write('   no       irrep     occ      one-electron energy    \n')
    out.write(SEPARATOR + '\n')
    for idx in range(data.num_spinors):
        irrep = get_irrep_name(data, data.spinor_irreps[idx])
        out.write(' %4d%12s%8d%25.8f\n' % (idx + 1, irrep, data.occ_numbers[idx], data.spinor_energies[idx]))
    out.write(SEPARATOR + '\n')
    out.write('\n')


def print_mrconee_data(data, out=sys.stdout):
    dump_header(data, out=out)
    dump_spinors(data, out=out)
