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


"""Digests of the transaction fields committed to by the template hash.

These are the same intermediate digests BIP-341 uses for taproot signature
hashes: single (untagged) SHA-256 over the concatenated serializations.
They are exposed so that callers building many templates that share inputs
and outputs can compute them once.
"""

import hashlib
from typing import Any, Iterable, Union

from templatehash.serialize import (
    encode_uint32,
    h_to_b,
    prepend_compact_size,
    serialize_txout,
)


def sequence_to_bytes(sequence: Any) -> bytes:
    """Serializes a single input sequence.

    Accepts ints, 4 raw bytes (as held by bitcoinutils' TxInput), hex strings
    and bitcoinutils' Sequence helper objects.
    """
    if hasattr(sequence, "for_input_sequence"):
        seq_bytes = sequence.for_input_sequence()
        if seq_bytes is None:
            raise ValueError("Sequence does not produce an input sequence")
        return encode_uint32(seq_bytes)
    return encode_uint32(sequence)


def sha_sequences(sequences: Iterable[Any]) -> bytes:
    """Compute sha_sequences as defined in BIP-341: the SHA-256 of the
    serialized sequences of all inputs, in order."""
    engine = hashlib.sha256()
    for sequence in sequences:
        engine.update(sequence_to_bytes(sequence))
    return engine.digest()


def sha_outputs(outputs: Iterable[Any]) -> bytes:
    """Compute sha_outputs as defined in BIP-341: the SHA-256 of all
    serialized outputs (amount and script pubkey), in order."""
    engine = hashlib.sha256()
    for txout in outputs:
        engine.update(serialize_txout(txout))
    return engine.digest()


def sha_annex(annex: Union[bytes, str]) -> bytes:
    """Compute sha_annex as defined in BIP-341.

    The provided annex must include the 0x50 annex prefix byte; its content
    is hashed as given.
    """
    if annex is None:
        raise TypeError("sha_annex requires an annex, got None")
    if isinstance(annex, str):
        annex = h_to_b(annex)
    return hashlib.sha256(prepend_compact_size(bytes(annex))).digest()
