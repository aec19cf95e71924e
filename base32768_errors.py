class Base32768Error(ValueError):
    """Base class for malformed base32768 input and stream state errors."""


class BadPaddingError(Base32768Error):
    """Padding requested on flush does not fit the buffered bits."""


class InvalidByteError(Base32768Error):
    """A byte falls inside one of the excluded alphabet ranges."""


class OddLengthError(Base32768Error):
    """Encoded stream ends in the middle of a symbol."""


class InvalidSequenceError(Base32768Error):
    """A symbol decodes to an integer below the padding floor."""


class TrailingDataError(Base32768Error):
    """Bytes follow the terminal padding symbol."""
