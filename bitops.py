from typing import BinaryIO, Tuple

from base32768_errors import BadPaddingError


class BitReader:
    """Bit-unpacking reader over a binary stream.

    Pulls one byte at a time from ``stream`` and hands out arbitrary-width
    bit runs, least significant bit first.

    :ivar stream: Source stream, read with ``read(1)``.
    :type stream: BinaryIO
    :ivar value: Unconsumed bits of the current source byte.
    :type value: int
    :ivar count: Number of valid bits in ``value`` (0-8).
    :type count: int
    """

    def __init__(self, stream: BinaryIO):
        """Create a bit reader for ``stream``.

        :param stream: Readable binary stream.
        :type stream: BinaryIO
        :returns: None
        :rtype: None
        """
        self.stream = stream
        self.value = 0
        self.count = 0

    def read_bits(self, nbits: int) -> Tuple[int, int]:
        """Read up to ``nbits`` bits from the stream.

        Earlier bits land in the less significant positions of the result.
        A short read only happens at end of data.

        :param nbits: Number of bits requested.
        :type nbits: int
        :returns: Tuple ``(value, actual_bits)`` with ``actual_bits <= nbits``;
            ``(0, 0)`` once the stream is exhausted.
        :rtype: Tuple[int, int]
        """
        result = 0
        shift = 0
        while nbits > 0:
            if self.count == 0:
                byte = self.stream.read(1)
                if not byte:
                    break
                self.value = byte[0]
                self.count = 8
            take = min(nbits, self.count)
            result |= (self.value & ((1 << take) - 1)) << shift
            shift += take
            nbits -= take
            self.value >>= take
            self.count -= take
        return result, shift


class BitWriter:
    """Bit-packing writer over a binary stream.

    Bits are appended above the ones already buffered and whole bytes are
    emitted from the low end once more than ``buffer_size`` bits are held.

    :ivar stream: Destination stream, written one byte at a time.
    :type stream: BinaryIO
    :ivar buffer_size: Number of bits kept back before emitting bytes.
    :type buffer_size: int
    :ivar value: Bit accumulator.
    :type value: int
    :ivar count: Number of valid bits in ``value``.
    :type count: int
    """

    def __init__(self, stream: BinaryIO, buffer_size: int = 0):
        """Initialize an empty bit writer.

        :param stream: Writable binary stream.
        :type stream: BinaryIO
        :param buffer_size: Bits to hold back between writes; negative values
            are treated as 0.
        :type buffer_size: int
        :returns: None
        :rtype: None
        """
        self.stream = stream
        self.buffer_size = max(buffer_size, 0)
        self.value = 0
        self.count = 0

    def write_bits(self, value: int, nbits: int):
        """Append the lowest ``nbits`` of ``value``.

        :param value: Integer whose bits will be written.
        :type value: int
        :param nbits: Number of bits from ``value`` to write.
        :type nbits: int
        :returns: None
        :rtype: None
        """
        self.value |= (value & ((1 << nbits) - 1)) << self.count
        self.count += nbits
        self._emit(self.buffer_size)

    def flush(self, pad: int = 0):
        """Terminate the stream, dropping the last ``pad`` written bits.

        Everything left after dropping ``pad`` bits must form whole bytes.
        The writer is empty afterwards, so flushing again with a nonzero
        ``pad`` fails.

        :param pad: Number of trailing padding bits to discard.
        :type pad: int
        :returns: None
        :rtype: None
        :raises BadPaddingError: If ``pad`` is not smaller than the buffered
            bit count or the remainder is not byte aligned.
        """
        if pad == 0 and self.count == 0:
            return
        if pad >= self.count or (self.count - pad) % 8 != 0:
            raise BadPaddingError(
                f"Bad padding: {pad} of {self.count} buffered bits"
            )
        self.count -= pad
        self._emit(0)
        self.value = 0
        self.count = 0

    def _emit(self, keep: int):
        """Write low-end bytes while at least ``keep + 8`` bits are buffered.

        :param keep: Bits that must remain buffered.
        :type keep: int
        :returns: None
        :rtype: None
        """
        while self.count >= keep + 8:
            self.stream.write(bytes((self.value & 0xFF,)))
            self.value >>= 8
            self.count -= 8
