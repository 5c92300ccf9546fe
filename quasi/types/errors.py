
class QuasiError(Exception):
    """ Base class for all quasi errors"""
    pass

class ShapeError(QuasiError):
    """ Raised when an expression does not match a required structural shape"""
    pass

class ConfigError(QuasiError):
    """ Raised when a configuration value (naming width, env setting) is invalid"""
    pass

class QuasiInvalidSymbol(QuasiError):
    """ Raised when an invalid symbol is used"""
    pass

class QuasiUnboundSymbol(QuasiError):
    """ Raised when a symbol is used before it is bound"""
    pass

class QuasiArityError(QuasiError):
    """ Raised when the arguments of a call cannot be matched to the callee's formals"""

class QuasiTypeError(QuasiError):
    """ Raised when a value of the wrong type is used, e.g. calling a non-function"""


class ConflictWarning(UserWarning):
    """ Issued when an explicit argument name is overridden by a definition LHS"""
