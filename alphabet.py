from typing import Tuple

from base32768_errors import InvalidByteError, InvalidSequenceError, OddLengthError

DM = 181  #: Radix of one output byte
BITS = 15  #: Data bits carried by one symbol
NBASE = DM * DM - (1 << BITS)  #: Offset that maps 0x7FFF to the top symbol

#: ``(threshold, skip)`` ranges removed from the output alphabet, ascending.
EXCLUSION_TABLE: Tuple[Tuple[int, int], ...] = (
    (0, 37),  # control characters, space, '!' through '$'
    (43, 1),  # '+'
    (61, 1),  # '='
    (127, 34),  # DEL and the next 33 bytes
    (173, 1),  # soft hyphen
)

MAX_DIGIT = DM  #: Largest value accepted by ``encode_byte``
MIN_INTEGER = 1 - BITS  #: Smallest padding signal
MAX_INTEGER = (1 << BITS) - 1  #: Largest data chunk


def encode_byte(value: int) -> bytes:
    """Map a digit in ``0..181`` to its output byte.

    :param value: Digit to encode.
    :type value: int
    :returns: A single byte outside every excluded range.
    :rtype: bytes
    :raises ValueError: If ``value`` is outside ``0..181``.
    """
    if not 0 <= value <= MAX_DIGIT:
        raise ValueError(f"Digit out of range: {value}")
    for threshold, skip in EXCLUSION_TABLE:
        if value >= threshold:
            value += skip
    return bytes((value,))


def decode_byte(byte: int) -> int:
    """Map an output byte back to its digit.

    :param byte: Byte value (0-255).
    :type byte: int
    :returns: Digit in ``0..181``.
    :rtype: int
    :raises InvalidByteError: If ``byte`` lies in an excluded range.
    """
    result = byte
    for threshold, skip in reversed(EXCLUSION_TABLE):
        if result >= threshold + skip:
            result -= skip
        elif result >= threshold:
            raise InvalidByteError(f"Invalid byte value 0x{byte:02x}")
    return result


#: Every byte that can appear in encoded output, in digit order.
ALPHABET = b"".join(encode_byte(v) for v in range(MAX_DIGIT + 1))


def encode_integer(value: int) -> bytes:
    """Encode an integer in ``-14..32767`` as a two byte symbol.

    Non-negative values are data chunks, negative values announce how many
    bits of the last chunk are padding. The low radix digit comes first.
    Both digits are stored with a +1 bias.

    :param value: Integer to encode.
    :type value: int
    :returns: Two byte symbol.
    :rtype: bytes
    :raises ValueError: If ``value`` is outside ``-14..32767``.
    """
    if not MIN_INTEGER <= value <= MAX_INTEGER:
        raise ValueError(f"Integer out of range: {value}")
    high, low = divmod(value + NBASE, DM)
    return encode_byte(low + 1) + encode_byte(high + 1)


def decode_integer(symbol: bytes) -> int:
    """Decode a two byte symbol produced by ``encode_integer``.

    :param symbol: Exactly two encoded bytes.
    :type symbol: bytes
    :returns: Integer in ``-14..32767``.
    :rtype: int
    :raises OddLengthError: If ``symbol`` is not two bytes long.
    :raises InvalidByteError: If either byte is excluded.
    :raises InvalidSequenceError: If the result is below ``-14``.
    """
    if len(symbol) != 2:
        raise OddLengthError("Non-even char count")
    low = decode_byte(symbol[0])
    high = decode_byte(symbol[1])
    result = (high - 1) * DM + (low - 1) - NBASE
    if result <= -BITS:
        raise InvalidSequenceError(
            f"Invalid byte sequence: 0x{symbol[0]:02x} 0x{symbol[1]:02x}"
        )
    return result
