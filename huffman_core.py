# filename: huffman_core.py

import heapq
from enum import Enum
from typing import Dict, NamedTuple, Optional, Union

from loguru import logger

from huffman_errors import InvalidSymbolError


class HuffmanLeaf:
    def __init__(self, symbol, weight):
        self.symbol = symbol
        self.weight = weight

    def __repr__(self):
        return f"HuffmanLeaf(symbol={self.symbol}, weight={self.weight})"


class HuffmanInternal:
    # right is None only under the synthetic root of a one-symbol code
    def __init__(self, weight, left, right=None):
        self.weight = weight
        self.left = left
        self.right = right

    def __repr__(self):
        return f"HuffmanInternal(weight={self.weight})"


HuffmanNode = Union[HuffmanLeaf, HuffmanInternal]


class HuffmanCode(NamedTuple):
    tree: Optional[HuffmanNode]
    codebook: Dict[int, str]
    bit_length: int


class BuildState(Enum):
    EMPTY = "empty"
    SEEDED = "seeded"
    MERGING = "merging"
    ROOTED = "rooted"
    INDEXED = "indexed"


class HuffmanLogic:
    def __init__(self):
        self.state = BuildState.EMPTY

    def _advance(self, state):
        self.state = state
        logger.debug(f"[Builder] -> {state.value}")

    def _seed(self, frequencies):
        # Heap entries carry an insertion sequence so equal weights pop FIFO
        for symbol, count in frequencies.items():
            if isinstance(symbol, bool) or not isinstance(symbol, int) or not 0 <= symbol <= 255:
                raise InvalidSymbolError(symbol)
            if count < 1:
                raise ValueError(f"frequency of symbol {symbol} must be positive, got {count}")

        priority_queue = [
            (frequencies[symbol], seq, HuffmanLeaf(symbol, frequencies[symbol]))
            for seq, symbol in enumerate(sorted(frequencies))
        ]
        heapq.heapify(priority_queue)
        return priority_queue

    def build_tree(self, frequencies):
        """Merge the two lightest nodes until a single root remains."""
        self._advance(BuildState.EMPTY)
        if not frequencies:
            return None

        priority_queue = self._seed(frequencies)
        self._advance(BuildState.SEEDED)
        seq = len(priority_queue)

        self._advance(BuildState.MERGING)
        while len(priority_queue) > 1:
            first_weight, _, first = heapq.heappop(priority_queue)
            second_weight, _, second = heapq.heappop(priority_queue)
            # First-removed takes bit 1, second-removed bit 0
            merged = HuffmanInternal(first_weight + second_weight, left=second, right=first)
            heapq.heappush(priority_queue, (merged.weight, seq, merged))
            seq += 1

        root = priority_queue[0][2]
        if isinstance(root, HuffmanLeaf):
            root = HuffmanInternal(root.weight, left=root)
        self._advance(BuildState.ROOTED)
        return root

    def generate_codes(self, node, current_code="", codes=None):
        """Depth-first walk collecting ``symbol -> codeword`` for every leaf."""
        if codes is None:
            codes = {}
        if node is None:
            return codes
        if isinstance(node, HuffmanLeaf):
            codes[node.symbol] = current_code
            return codes
        self.generate_codes(node.left, current_code + "0", codes)
        self.generate_codes(node.right, current_code + "1", codes)
        return codes

    def build(self, frequencies):
        """
        Build the decoding tree and codeword table for ``frequencies``.

        Returns a ``HuffmanCode(tree, codebook, bit_length)``; ``bit_length`` is
        the length in bits of the whole text encoded with this code.
        """
        tree = self.build_tree(frequencies)
        codebook = self.generate_codes(tree)
        bit_length = sum(frequencies[symbol] * len(code) for symbol, code in codebook.items())
        self._advance(BuildState.INDEXED)
        logger.debug(
            f"[Builder] Indexed {len(codebook)} codewords, {bit_length} bits for "
            f"{sum(frequencies.values())} symbols"
        )
        return HuffmanCode(tree, codebook, bit_length)

    @staticmethod
    def walk(root, codeword, on_invalid=None):
        """
        Follow ``codeword`` from ``root``: '0' goes left, '1' goes right.

        Returns the node reached, or None when the walk falls off the tree.
        Any other character calls ``on_invalid(char, position)`` if given and is
        otherwise skipped.
        """
        node = root
        for position, bit in enumerate(codeword):
            if bit == "0" or bit == "1":
                if node is None or isinstance(node, HuffmanLeaf):
                    return None
                node = node.left if bit == "0" else node.right
            elif on_invalid is not None:
                on_invalid(bit, position)
        return node
