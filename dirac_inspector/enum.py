from enum import Enum


class IntegerWidth(Enum):
    '''Size in bytes of the native integers of the program that produced the file'''
    INT4 = 4
    INT8 = 8


class GroupArithmetic(Enum):
    '''Kind of algebra of the double group (nz in DIRAC parlance)'''
    REAL       = 1
    COMPLEX    = 2
    QUATERNION = 4
