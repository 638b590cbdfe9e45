"""
# DIRAC inspector

Read-only inspection of the binary files written by the DIRAC relativistic
quantum chemistry program, the ones containing the transformed molecular
integrals consumed by correlation codes.

These files are sequences of Fortran unformatted records and there is nothing
in them describing what's inside: each record is decoded following a compact
format specification (see fields.py) telling the type of each field and
how many elements the arrays have. The layers are

 1. streams: sequential access to the records, with the possibility of peeking
    the size of the next record and of going back by one record
 2. fields: interpretation of the bytes of a record following a specification
 3. width: detection of the size of the integers of the program that wrote the file
 4. mrconee: the schema of the MRCONEE file, the one with energies, symmetry,
    spinors and Fock matrix
 5. symmetry: recognition of the point group from the names of the irreps

A decode either returns the whole content of a file or raises one of the
exceptions in exceptions.py.
"""
