# filename: huffman_service.py

from types import MappingProxyType

from loguru import logger

import huffman_config
from huffman_core import HuffmanLeaf, HuffmanLogic
from huffman_errors import InvalidBitError, InvalidSymbolError, UninitializedError
from huffman_tally import tally


class HuffmanService:
    """
    Static Huffman codec for byte symbols.

    Build it from a stream (``generate_code``) or from a frequency mapping
    (``build``), then use ``encode``/``decode`` and the single-symbol lookups.
    Encoded text is a ``str`` of '0' and '1'; decoded text is ``bytes``.

    Characters other than '0'/'1' handed to ``symbol_of`` or ``decode`` are
    skipped under the "stall" decode policy and raise ``InvalidBitError`` under
    "reject".
    """

    def __init__(self, decode_policy=None):
        self.logic = HuffmanLogic()
        if decode_policy is None:
            decode_policy = huffman_config.DECODE_POLICY
        self.decode_policy = huffman_config.check_decode_policy(decode_policy)
        self._built = False
        self._tree = None
        self._codebook = {}
        self._frequencies = {}
        self._bit_length = 0
        self._original_size = 0

    @classmethod
    def from_bytes(cls, data, decode_policy=None):
        return cls(decode_policy=decode_policy).generate_code(data)

    def generate_code(self, stream):
        """Tally ``stream`` and build the code from the observed frequencies."""
        frequencies, original_size = tally(stream)
        return self.build(frequencies, original_size=original_size)

    def build(self, frequencies, original_size=None):
        frequencies = dict(frequencies)
        total = sum(frequencies.values())
        if original_size is None:
            original_size = total
        elif original_size != total:
            raise ValueError(
                f"original size {original_size} does not match the {total} symbols counted"
            )
        tree, codebook, bit_length = self.logic.build(frequencies)
        self._tree = tree
        self._codebook = codebook
        self._frequencies = frequencies
        self._bit_length = bit_length
        self._original_size = original_size
        self._built = True
        logger.info(
            f"[Codec] Built code for {self._original_size} bytes: "
            f"{len(codebook)} symbols, {bit_length} bits"
        )
        return self

    def _require_built(self, operation):
        if not self._built:
            raise UninitializedError(operation)

    @property
    def tree(self):
        self._require_built("tree")
        return self._tree

    @property
    def codebook(self):
        self._require_built("codebook")
        return MappingProxyType(self._codebook)

    @property
    def frequencies(self):
        self._require_built("frequencies")
        return MappingProxyType(self._frequencies)

    @staticmethod
    def _as_bit_string(bits):
        # Bytes such as b"0101" carry the bits as ASCII characters
        if isinstance(bits, (bytes, bytearray, memoryview)):
            return bytes(bits).decode("latin-1")
        return bits

    def _reject_bit(self, char, position):
        if self.decode_policy == huffman_config.DECODE_POLICY_REJECT:
            raise InvalidBitError(char, position)

    def codeword_of(self, symbol):
        self._require_built("codeword_of")
        if isinstance(symbol, (bytes, str)):
            if len(symbol) != 1:
                raise InvalidSymbolError(symbol)
            symbol = ord(symbol)
        return self._codebook.get(symbol, "")

    def symbol_of(self, codeword):
        """Return the symbol whose codeword is exactly ``codeword``, else -1."""
        self._require_built("symbol_of")
        codeword = self._as_bit_string(codeword)
        node = self.logic.walk(self._tree, codeword, on_invalid=self._reject_bit)
        if isinstance(node, HuffmanLeaf):
            return node.symbol
        return -1

    def encode(self, text):
        self._require_built("encode")
        if isinstance(text, str):
            symbols = (ord(char) for char in text)
        elif isinstance(text, (bytearray, memoryview)):
            symbols = bytes(text)
        else:
            symbols = text
        codes = self._codebook
        return "".join(codes.get(symbol, "") for symbol in symbols)

    def decode(self, bits):
        """
        Greedy left-to-right parse of ``bits`` back into bytes.

        A trailing run of bits that does not complete a codeword is dropped,
        as is everything after a bit that leads off the tree.
        """
        self._require_built("decode")
        bits = self._as_bit_string(bits)
        root = self._tree
        out = bytearray()
        node = root
        fallen = root is None
        for position, bit in enumerate(bits):
            if bit != "0" and bit != "1":
                self._reject_bit(bit, position)
                continue
            if fallen:
                continue
            node = node.left if bit == "0" else node.right
            if node is None:
                fallen = True
            elif isinstance(node, HuffmanLeaf):
                out.append(node.symbol)
                node = root
        if fallen and root is not None:
            logger.warning(f"[Codec] Bit string left the decoding tree, kept {len(out)} symbols")
        return bytes(out)

    def original_size(self):
        self._require_built("original_size")
        return self._original_size

    def compressed_bit_length(self):
        self._require_built("compressed_bit_length")
        return self._bit_length

    def compressed_size(self):
        self._require_built("compressed_size")
        return self._bit_length // 8
