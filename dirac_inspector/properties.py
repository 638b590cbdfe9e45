import logging

from .exceptions import FormatException, UnrecognizedFormat


logger = logging.getLogger(__name__)


class Dependency:
    '''This makes the relation between the count of an array and another value possible.

    The syntax for defining the expression is inspired from the module resolution
    with the first char of the expression indicating where to look:

     - '.' indicates we refer to a field decoded earlier in the same record
     - '#' indicates a value bound by the caller of the read

    In practice this class allows to write something like

        'nsymrp:i, repnames:c14[.nsymrp]'

    and have the length of the block named 'repnames' strictly connected to the
    integer decoded just before it.
    '''
    PREFIXES = ('.', '#')

    def __init__(self, expression):
        if len(expression) < 2 or expression[0] not in self.PREFIXES:
            raise FormatException('\'%s\' is not a valid reference' % expression)

        self.expression = expression

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def __eq__(self, other):
        return isinstance(other, Dependency) and other.expression == self.expression

    def __hash__(self):
        return hash(self.expression)

    @property
    def name(self):
        return self.expression[1:]

    @property
    def is_external(self):
        return self.expression[0] == '#'

    def resolve(self, decoded, bound):
        '''With this method we resolve the count with respect to the values
        already decoded and the ones passed by the caller.'''
        scope = bound if self.is_external else decoded

        if self.name not in scope:
            raise FormatException('reference \'%s\' cannot be resolved' % self.expression)

        value = scope[self.name]

        try:
            count = int(value)
        except (TypeError, ValueError):
            raise FormatException('reference \'%s\' resolved to %r that is not a count' % (self.expression, value))

        # a negative count decoded from the record means a corrupt file
        if count < 0 and not self.is_external:
            raise UnrecognizedFormat('field \'%s\' holds the negative count %d' % (self.name, count))

        if count < 0:
            raise FormatException('reference \'%s\' resolved to the negative count %d' % (self.expression, count))

        logger.debug(' resolved \'%s\' with value %d' % (self.expression, count))

        return count


def resolve_count(count, decoded, bound):
    '''The count of an array is either a literal or a Dependency'''
    if isinstance(count, Dependency):
        return count.resolve(decoded, bound)

    return count
