# Copyright (C) 2025-2026 The python-templatehash developers
#
# This file is part of python-templatehash
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-templatehash, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.


import struct
from typing import Any, Union

from bitcoinutils.script import Script
from bitcoinutils.transactions import TxOutput
from bitcoinutils.utils import b_to_h, h_to_b, prepend_compact_size
from bitcoinutils.utils import encode_varint as _encode_varint
from bitcoinutils.utils import parse_compact_size as _parse_compact_size

from templatehash.constants import (
    MAX_UINT32,
    MIN_INT32,
    COMPACT_SIZE_UINT16,
    COMPACT_SIZE_UINT32,
    COMPACT_SIZE_UINT64,
)

# bytes taken by a compact size, including its marker byte
COMPACT_SIZE_LENGTHS = {
    COMPACT_SIZE_UINT16: 3,
    COMPACT_SIZE_UINT32: 5,
    COMPACT_SIZE_UINT64: 9,
}


def encode_varint(i: int) -> bytes:
    """Encodes a compact size, rejecting negative integers.

    bitcoinutils' encode_varint does the encoding and raises for values that
    do not fit in 8 bytes.
    """
    if i < 0:
        raise ValueError("Integer cannot be negative: %d" % i)
    return _encode_varint(i)


def parse_compact_size(data: bytes) -> tuple[int, int]:
    """
    Parse variable integer. Returns (count, size)

    Raises ValueError when data is empty or shorter than its marker byte
    requires.
    """
    if not data:
        raise ValueError("Cannot parse compact size from empty data")

    size = COMPACT_SIZE_LENGTHS.get(data[0], 1)
    if len(data) < size:
        raise ValueError(
            "Truncated compact size: expected %d bytes, got %d" % (size, len(data))
        )
    return _parse_compact_size(data)


def _fixed_width_bytes(value: Union[bytes, bytearray, str], width: int) -> bytes:
    # callers may hold already serialized values, e.g. Transaction.version
    if isinstance(value, str):
        value = h_to_b(value)
    if len(value) != width:
        raise ValueError(
            "Expected %d bytes, got %d: %s" % (width, len(value), b_to_h(bytes(value)))
        )
    return bytes(value)


def encode_uint32(value: Union[int, bytes, str]) -> bytes:
    """Serializes an unsigned 32-bit value (locktime, sequence, input index)
    in little-endian. Already serialized 4 bytes (or their hex) pass through
    unchanged."""
    if isinstance(value, (bytes, bytearray, str)):
        return _fixed_width_bytes(value, 4)
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("Expected int or bytes, got %s" % type(value).__name__)
    if value < 0 or value > MAX_UINT32:
        raise ValueError("Value does not fit in 4 unsigned bytes: %d" % value)
    return struct.pack("<I", value)


def encode_int32(value: Union[int, bytes, str]) -> bytes:
    """Serializes a 32-bit transaction version in little-endian.

    The version is signed in consensus serialization but commonly handled as
    unsigned, so both ranges are accepted; the resulting bytes are the same.
    """
    if isinstance(value, (bytes, bytearray, str)):
        return _fixed_width_bytes(value, 4)
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("Expected int or bytes, got %s" % type(value).__name__)
    if value < MIN_INT32 or value > MAX_UINT32:
        raise ValueError("Value does not fit in 4 bytes: %d" % value)
    if value < 0:
        return struct.pack("<i", value)
    return struct.pack("<I", value)


def encode_int64(amount: int) -> bytes:
    """Serializes an output amount (satoshis) as 8 bytes little-endian"""
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise TypeError("Amount needs to be in satoshis as an integer")
    try:
        return struct.pack("<q", amount)
    except struct.error:
        raise ValueError("Amount does not fit in 8 bytes: %d" % amount)


def script_to_bytes(script: Any) -> bytes:
    """Returns the serialized form of a script; accepts a bitcoinutils
    Script (or anything with to_bytes()) and raw bytes."""
    if isinstance(script, (bytes, bytearray)):
        return bytes(script)
    if hasattr(script, "to_bytes") and not isinstance(script, int):
        return script.to_bytes()
    raise TypeError("Cannot serialize script of type %s" % type(script).__name__)


def serialize_txout(txout: Any) -> bytes:
    """Serializes a transaction output: amount followed by the compact size
    prefixed script pubkey.

    A bitcoinutils TxOutput with a Script serializes itself; raw bytes
    script pubkeys and other objects with `amount` and `script_pubkey`
    attributes are handled here.
    """
    # range checks the amount in both cases
    amount_bytes = encode_int64(txout.amount)
    if isinstance(txout, TxOutput) and isinstance(txout.script_pubkey, Script):
        return txout.to_bytes()

    script_bytes = script_to_bytes(txout.script_pubkey)
    return amount_bytes + prepend_compact_size(script_bytes)
