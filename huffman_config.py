# filename: huffman_config.py

import os

from dotenv import load_dotenv

load_dotenv()

DECODE_POLICY_STALL = "stall"
DECODE_POLICY_REJECT = "reject"
DECODE_POLICIES = (DECODE_POLICY_STALL, DECODE_POLICY_REJECT)

# Bytes pulled per read() when tallying a file-like stream
READ_CHUNK_SIZE = int(os.getenv("HUFFMAN_READ_CHUNK_SIZE", "2048"))

# What decode/symbol_of do with characters other than '0' and '1'
DECODE_POLICY = os.getenv("HUFFMAN_DECODE_POLICY", DECODE_POLICY_STALL).strip().lower()


def check_decode_policy(policy):
    if isinstance(policy, str):
        policy = policy.strip().lower()
    if policy not in DECODE_POLICIES:
        raise ValueError(
            f"unknown decode policy {policy!r}, expected one of {', '.join(DECODE_POLICIES)}"
        )
    return policy


def check_chunk_size(size):
    if size <= 0:
        raise ValueError(f"read chunk size must be positive, got {size}")
    return size
