class LisperError(Exception):
    """ Base class for all Lisper errors"""
    pass

class LisperLexError(LisperError):
    """ Raised when the source text cannot be tokenized"""

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message)
        self.offset = offset

class LisperParseError(LisperError):
    """ Raised when the token stream is not a well-formed S-expression"""

    def __init__(self, message: str, offset: int | None = None):
        super().__init__(message)
        self.offset = offset

class LisperUnexpectedEOF(LisperParseError):
    """ Raised when input ends inside an unclosed list"""

class LisperUnexpectedToken(LisperParseError):
    """ Raised on a stray ')' or a malformed literal"""

class LisperNameError(LisperError):
    """ Raised when a name cannot be resolved"""

class LisperUnboundSymbol(LisperNameError):
    """ Raised when a symbol is used before it is bound"""

class LisperInvalidSymbol(LisperError):
    """ Raised when a non-symbol is used where a name is required"""

class LisperTypeError(LisperError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class LisperNotCallable(LisperTypeError):
    """ Raised when a value in head position is not a procedure"""

class LisperArityError(LisperError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class LisperArithmeticError(LisperError):
    """ Raised on integer division or modulo by zero"""

class LisperResourceError(LisperError):
    """ Raised when evaluation exhausts the host stack"""
