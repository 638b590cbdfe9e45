class InspectorException(Exception):
    '''Base class to extend in order to throw exception in dirac_inspector.

    Other than the message it takes an argument that represents the chain of
    the layers (usually record names) the exception passed through.
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        if not self.chain:
            return self.message

        return '%s (in %s)' % (self.message, ' <- '.join(self.chain))


class NotFound(InspectorException):
    pass


class NotUnformatted(InspectorException):
    '''The source doesn't look like a sequential unformatted file.'''
    pass


class UnrecognizedFormat(InspectorException):
    '''The file is framed correctly but its content doesn't fit the schema.'''
    pass


class ShortRead(InspectorException):
    pass


class LengthMismatch(InspectorException):
    pass


class Eof(InspectorException):
    pass


class NoPriorRecord(InspectorException):
    pass


class FormatException(InspectorException):
    '''The format specification itself is broken: this is a bug of the caller
    and not a problem with the file.'''
    pass
