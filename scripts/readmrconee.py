#!/usr/bin/env python3
import sys
import os
import logging

from dirac_inspector.exceptions import InspectorException
from dirac_inspector.mrconee import read_mrconee
from dirac_inspector.report import print_mrconee_data

if 'DEBUG' in os.environ:
    logging.basicConfig()
    logging.getLogger('dirac_inspector').setLevel(logging.DEBUG)


def usage(progname):
    print('usage: %s <MRCONEE file> [<MRCONEE file> ...]' % progname)
    sys.exit(1)


def main(paths):
    status = 0
    for path in paths:
        try:
            data = read_mrconee(path)
        except InspectorException as e:
            print('%s: %s: %s' % (path, e.__class__.__name__, e), file=sys.stderr)
            status = 1
            continue

        print_mrconee_data(data)

    return status


if __name__ == '__main__':
    if len(sys.argv) < 2:
        usage(sys.argv[0])

    sys.exit(main(sys.argv[1:]))
