import errno


class RedshirtError(Exception):
    """Base class for Redshirt-specific errors."""


class RedshirtIOError(RedshirtError, OSError):
    """The wrapped stream failed while a header was read or written."""


class InvalidSeekError(RedshirtIOError):
    def __init__(self, message: str = "invalid seek to a negative or overflowing position"):
        super().__init__(errno.EINVAL, message)


# Header/checksum validation
class BadHeaderError(RedshirtError):
    def __init__(self, message: str = "bad header"):
        super().__init__(message)


class BadChecksumError(RedshirtError):
    def __init__(self, message: str = "bad checksum"):
        super().__init__(message)
