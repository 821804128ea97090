# filename: huffman_tally.py

from collections import Counter

from loguru import logger

import huffman_config
from huffman_errors import HuffmanIOError, InvalidSymbolError

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _read_chunks(stream, chunk_size):
    while True:
        try:
            chunk = stream.read(chunk_size)
        except ValueError as exc:
            # io raises ValueError for reads on a closed stream
            raise OSError(str(exc)) from exc
        if not chunk:
            return
        if not isinstance(chunk, _BYTES_LIKE):
            raise OSError(f"stream returned {type(chunk).__name__}, expected bytes")
        yield chunk


def _iter_items(source):
    # Iterables may mix single byte values and whole chunks
    for item in source:
        if isinstance(item, _BYTES_LIKE):
            yield item
        elif isinstance(item, int) and not isinstance(item, bool) and 0 <= item <= 255:
            yield (item,)
        else:
            raise InvalidSymbolError(item)


def tally(stream, chunk_size=None):
    """
    Count how often each byte value occurs in ``stream``.

    ``stream`` may be a binary file-like object (anything with ``read``), a
    bytes-like object, or an iterable of byte values / bytes chunks. The stream
    is drained. Returns ``(frequencies, original_byte_count)`` where
    ``frequencies`` maps each observed symbol to its positive count.
    """
    if chunk_size is None:
        chunk_size = huffman_config.READ_CHUNK_SIZE
    huffman_config.check_chunk_size(chunk_size)

    freqs = Counter()
    try:
        if isinstance(stream, _BYTES_LIKE):
            freqs.update(bytes(stream))
        elif hasattr(stream, "read"):
            for chunk in _read_chunks(stream, chunk_size):
                freqs.update(bytes(chunk))
        else:
            for chunk in _iter_items(stream):
                freqs.update(chunk)
    except OSError as exc:
        logger.error(f"[Tally] Stream read failed after {sum(freqs.values())} bytes: {exc}")
        raise HuffmanIOError(f"failed to read input stream: {exc}") from exc

    frequencies = dict(freqs)
    total = sum(frequencies.values())
    logger.debug(f"[Tally] Counted {total} bytes, {len(frequencies)} distinct symbols")
    return frequencies, total
