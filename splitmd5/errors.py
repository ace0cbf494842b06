class Md5Error(Exception):
    """Base class for splitmd5 errors."""


# Context lifecycle
class ContextStateError(Md5Error):
    pass


# Argument validation
class InvalidLengthError(Md5Error, ValueError):
    pass


# Reference cross-checks
class DigestMismatch(Md5Error):
    pass
