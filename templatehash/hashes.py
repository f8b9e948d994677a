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

from __future__ import annotations

import hashlib
from functools import lru_cache

from bitcoinutils.utils import tagged_hash

from templatehash.constants import HASH_SIZE, TEMPLATEHASH_TAG
from templatehash.serialize import b_to_h, h_to_b


def sha256(data: bytes) -> bytes:
    """Computes SHA-256 hash of the given bytes."""
    return hashlib.sha256(data).digest()


@lru_cache(maxsize=32)
def _tag_midstate(tag: str) -> "hashlib._Hash":
    # the state after absorbing SHA256(tag) || SHA256(tag); never updated
    # directly, only copied
    tag_digest = sha256(tag.encode())
    return hashlib.sha256(tag_digest + tag_digest)


class TaggedHashEngine:
    """Incremental tagged hash.

    A tagged hash is: SHA256( SHA256(tag) ||
                              SHA256(tag) ||
                              data
                            )

    The two tag digests fill exactly one SHA-256 block, so the seeded state
    of recently used tags is cached and copied for every new engine.

    Methods
    -------
    update(data)
        appends data to the hashed message
    digest()
        returns the 32-byte tagged hash of the data appended so far
    hexdigest()
        returns digest() as a hexadecimal string
    copy()
        returns an independent engine with the same state
    """

    def __init__(self, tag: str) -> None:
        self.tag = tag
        self._engine = _tag_midstate(tag).copy()

    def update(self, data: bytes) -> None:
        self._engine.update(data)

    def digest(self) -> bytes:
        return self._engine.digest()

    def hexdigest(self) -> str:
        return self._engine.hexdigest()

    def copy(self) -> "TaggedHashEngine":
        other = TaggedHashEngine.__new__(TaggedHashEngine)
        other.tag = self.tag
        other._engine = self._engine.copy()
        return other


class TemplateHash:
    """The 32-byte template hash pushed by OP_TEMPLATEHASH.

    Renders as (and parses from) 64 lowercase hexadecimal characters in
    byte order, which is also the form a bitcoinutils Script expects for a
    data push.

    Attributes
    ----------
    digest : bytes
        the raw 32 bytes

    Methods
    -------
    to_bytes()
        returns the raw 32 bytes
    to_hex()
        returns the hash as a hexadecimal string
    from_hex(hex_str)
        instantiates a TemplateHash from a hexadecimal string (classmethod)
    engine()
        returns a tagged hash engine for the TemplateHash tag (classmethod)
    from_transaction(tx, input_index, annex)
        calculates the template hash of a transaction (classmethod)
    """

    __slots__ = ("_digest",)

    TAG = TEMPLATEHASH_TAG

    def __init__(self, digest: bytes) -> None:
        if not isinstance(digest, (bytes, bytearray)):
            raise TypeError("TemplateHash requires bytes")
        if len(digest) != HASH_SIZE:
            raise ValueError(
                "TemplateHash requires %d bytes, got %d" % (HASH_SIZE, len(digest))
            )
        self._digest = bytes(digest)

    @property
    def digest(self) -> bytes:
        return self._digest

    @classmethod
    def engine(cls) -> TaggedHashEngine:
        return TaggedHashEngine(cls.TAG)

    @classmethod
    def from_engine(cls, engine: TaggedHashEngine) -> "TemplateHash":
        if engine.tag != cls.TAG:
            raise ValueError("Engine is tagged with %r, not %r" % (engine.tag, cls.TAG))
        return cls(engine.digest())

    @classmethod
    def from_hex(cls, hex_str: str) -> "TemplateHash":
        if len(hex_str) != 2 * HASH_SIZE:
            raise ValueError(
                "TemplateHash hex must be %d characters, got %d"
                % (2 * HASH_SIZE, len(hex_str))
            )
        return cls(h_to_b(hex_str))

    @classmethod
    def from_transaction(cls, tx, input_index: int, annex: bytes | None = None):
        """Calculates the template hash of a bitcoinutils Transaction"""
        # avoid a circular import; template builds on this module
        from templatehash.template import to_templatehash

        return to_templatehash(tx, input_index, annex)

    def to_bytes(self) -> bytes:
        return self._digest

    def to_hex(self) -> str:
        return b_to_h(self._digest)

    def __bytes__(self) -> bytes:
        return self._digest

    def __len__(self) -> int:
        return HASH_SIZE

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TemplateHash):
            return self._digest == other._digest
        if isinstance(other, (bytes, bytearray)):
            return self._digest == bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._digest)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return "TemplateHash(%s)" % self.to_hex()
