import io
import logging
from typing import BinaryIO

from alphabet import BITS, decode_integer, encode_integer
from bitops import BitReader, BitWriter
from base32768_errors import TrailingDataError

logger = logging.getLogger(__name__)


class Base32768:
    """Stream encoder/decoder packing 15-bit chunks into 2-byte symbols.

    Encoded data is a sequence of symbols with no header. A short final
    chunk is followed by a padding symbol carrying the number of unused
    bits; when the input length is a multiple of 15 bits no padding symbol
    is written.

    :ivar buffer_size: Bits the decoder's writer holds back before
        emitting bytes.
    :type buffer_size: int
    """

    def __init__(self, buffer_size: int = BITS):
        """Configure the codec.

        :param buffer_size: Bits the decoder keeps buffered. A padding
            symbol can drop up to ``BITS - 1`` bits, all of which must still
            be buffered alongside at least one more bit.
        :type buffer_size: int
        :returns: None
        :rtype: None
        :raises ValueError: If ``buffer_size`` is smaller than ``BITS``.
        """
        if buffer_size < BITS:
            raise ValueError(
                f"Decoder buffer must hold at least {BITS} bits, got {buffer_size}"
            )
        self.buffer_size = buffer_size

    def encode(self, source: BinaryIO, target: BinaryIO) -> None:
        """Encode all bytes of ``source`` into ``target``.

        :param source: Readable binary stream with raw data.
        :type source: BinaryIO
        :param target: Writable binary stream for encoded symbols.
        :type target: BinaryIO
        :returns: None
        :rtype: None
        """
        reader = BitReader(source)
        symbols = 0
        while True:
            value, nbits = reader.read_bits(BITS)
            if nbits > 0:
                target.write(encode_integer(value))
                symbols += 1
            if 0 < nbits < BITS:
                target.write(encode_integer(nbits - BITS))
                symbols += 1
                logger.debug("Padding last chunk with %d bits", BITS - nbits)
            if nbits < BITS:
                break
        logger.debug("Encoded %d symbols", symbols)

    def decode(self, source: BinaryIO, target: BinaryIO) -> None:
        """Decode symbols from ``source`` and write raw bytes to ``target``.

        Output already written when an error is raised is left in
        ``target``.

        :param source: Readable binary stream with encoded symbols.
        :type source: BinaryIO
        :param target: Writable binary stream for decoded data.
        :type target: BinaryIO
        :returns: None
        :rtype: None
        :raises OddLengthError: If the input ends in the middle of a symbol.
        :raises InvalidByteError: If an excluded byte is encountered.
        :raises InvalidSequenceError: If a symbol is below the padding floor.
        :raises BadPaddingError: If a padding symbol does not match the
            buffered bits.
        :raises TrailingDataError: If bytes follow the padding symbol.
        """
        writer = BitWriter(target, self.buffer_size)
        symbols = 0
        while True:
            symbol = source.read(2)
            if not symbol:
                writer.flush(0)
                break
            value = decode_integer(symbol)
            symbols += 1
            if value >= 0:
                writer.write_bits(value, BITS)
                continue
            writer.flush(-value)
            logger.debug("Dropped %d padding bits", -value)
            if source.read(1):
                raise TrailingDataError("Data remaining after padding")
            break
        logger.debug("Decoded %d symbols", symbols)

    def encode_bytes(self, data: bytes) -> bytes:
        """Encode an in-memory buffer.

        :param data: Raw bytes.
        :type data: bytes
        :returns: Encoded symbols; empty for empty ``data``.
        :rtype: bytes
        """
        out = io.BytesIO()
        self.encode(io.BytesIO(data), out)
        return out.getvalue()

    def decode_bytes(self, data: bytes) -> bytes:
        """Decode an in-memory buffer produced by ``encode_bytes``.

        :param data: Encoded symbols.
        :type data: bytes
        :returns: Original raw bytes.
        :rtype: bytes
        """
        out = io.BytesIO()
        self.decode(io.BytesIO(data), out)
        return out.getvalue()


def encode(source: BinaryIO, target: BinaryIO) -> None:
    """Encode ``source`` into ``target`` with default settings."""
    Base32768().encode(source, target)


def decode(source: BinaryIO, target: BinaryIO) -> None:
    """Decode ``source`` into ``target`` with default settings."""
    Base32768().decode(source, target)
