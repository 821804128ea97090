import os
import sys
import io

import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from huffman_errors import HuffmanIOError, InvalidSymbolError
from huffman_tally import tally


class _BrokenStream:
	def __init__(self, good_chunks):
		self.good_chunks = list(good_chunks)

	def read(self, n):
		if self.good_chunks:
			return self.good_chunks.pop(0)
		raise OSError("device unplugged")


class _TextStream:
	def read(self, n):
		return "abc"


def test_tally_bytes():
	freqs, total = tally(b"abracadabra")
	assert freqs == {ord('a'): 5, ord('b'): 2, ord('r'): 2, ord('c'): 1, ord('d'): 1}
	assert total == 11


def test_tally_empty_stream():
	assert tally(b"") == ({}, 0)
	assert tally(io.BytesIO(b"")) == ({}, 0)
	assert tally([]) == ({}, 0)


def test_tally_file_like_in_small_chunks():
	data = bytes(range(256)) * 3
	freqs, total = tally(io.BytesIO(data), chunk_size=7)
	assert total == len(data)
	assert freqs == {b: 3 for b in range(256)}


def test_tally_drains_the_stream():
	stream = io.BytesIO(b"hello")
	tally(stream)
	assert stream.read() == b""


def test_tally_iterable_of_ints_and_chunks():
	freqs, total = tally([0, 255, b"\x00\x01", bytearray(b"\xff")])
	assert freqs == {0: 2, 1: 1, 255: 2}
	assert total == 5


def test_tally_counts_sum_to_total():
	data = b"The quick brown fox jumps over the lazy dog" * 7
	freqs, total = tally(memoryview(data))
	assert sum(freqs.values()) == total == len(data)


def test_tally_read_failure_raises_io_error():
	with pytest.raises(HuffmanIOError) as excinfo:
		tally(_BrokenStream([b"abc"]))
	assert isinstance(excinfo.value.__cause__, OSError)
	assert isinstance(excinfo.value, OSError)


def test_tally_closed_stream_raises_io_error():
	stream = io.BytesIO(b"abc")
	stream.close()
	with pytest.raises(HuffmanIOError) as excinfo:
		tally(stream)
	assert isinstance(excinfo.value.__cause__, OSError)
	assert isinstance(excinfo.value.__cause__.__cause__, ValueError)


def test_tally_text_stream_is_an_io_error():
	with pytest.raises(HuffmanIOError):
		tally(_TextStream())


@pytest.mark.parametrize("item", [256, -3, "a", 1.5])
def test_tally_rejects_non_byte_items(item):
	with pytest.raises(InvalidSymbolError):
		tally([1, item])


def test_tally_rejects_bad_chunk_size():
	with pytest.raises(ValueError):
		tally(b"abc", chunk_size=0)
