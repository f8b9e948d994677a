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


"""Reads and checks template hash test vectors.

Vectors are stored as a JSON array of objects:

    {
        "tx": "<hex of the consensus serialized transaction>",
        "input_index": <unsigned integer>,
        "templatehash": "<64 hex characters>",
        "annex": "<hex, including the 0x50 prefix>" | null,   (optional)
        "comment": "<free text>"
    }
"""

import json
import logging
from typing import Any, Optional

from bitcoinutils.transactions import Transaction

from templatehash.constants import HASH_SIZE, MAX_UINT32
from templatehash.errors import VectorFormatError
from templatehash.hashes import TemplateHash
from templatehash.template import to_templatehash

logger = logging.getLogger(__name__)


def parse_hex(value: Any, field: str) -> bytes:
    """Converts a vector's hexadecimal field to bytes"""
    if not isinstance(value, str):
        raise VectorFormatError("%s must be a hex string" % field)
    if len(value) % 2 != 0:
        raise VectorFormatError(
            "%s must have an even number of hex characters, got %d"
            % (field, len(value))
        )
    try:
        return bytes.fromhex(value)
    except ValueError as e:
        raise VectorFormatError("%s is not valid hex: %s" % (field, e)) from e


class TemplateHashVector:
    """A single template hash test vector

    Attributes
    ----------
    tx : bytes
        the consensus serialized transaction
    input_index : int
        the index of the input executing OP_TEMPLATEHASH
    templatehash : TemplateHash
        the expected template hash
    annex : bytes or None
        the input's annex
    comment : str
        informational text
    """

    def __init__(
        self,
        tx: bytes,
        input_index: int,
        templatehash: TemplateHash,
        annex: Optional[bytes] = None,
        comment: str = "",
    ) -> None:
        self.tx = tx
        self.input_index = input_index
        self.templatehash = templatehash
        self.annex = annex
        self.comment = comment

    @classmethod
    def from_dict(cls, data: dict) -> "TemplateHashVector":
        """Instantiates a vector from its decoded JSON object"""
        if not isinstance(data, dict):
            raise VectorFormatError("Test vector must be an object")

        for field in ("tx", "input_index", "templatehash"):
            if field not in data:
                raise VectorFormatError("Test vector is missing '%s'" % field)

        input_index = data["input_index"]
        if (
            not isinstance(input_index, int)
            or isinstance(input_index, bool)
            or not 0 <= input_index <= MAX_UINT32
        ):
            raise VectorFormatError("input_index must be an unsigned 32-bit integer")

        templatehash = parse_hex(data["templatehash"], "templatehash")
        if len(templatehash) != HASH_SIZE:
            raise VectorFormatError("templatehash must be %d bytes" % HASH_SIZE)

        annex = data.get("annex")

        return cls(
            tx=parse_hex(data["tx"], "tx"),
            input_index=input_index,
            templatehash=TemplateHash(templatehash),
            annex=None if annex is None else parse_hex(annex, "annex"),
            comment=data.get("comment", ""),
        )

    def transaction(self) -> Transaction:
        return Transaction.from_raw(self.tx.hex())

    def compute(self) -> TemplateHash:
        """Calculates the template hash of the vector's transaction"""
        return to_templatehash(self.transaction(), self.input_index, self.annex)

    def check(self) -> bool:
        """Returns whether the calculated template hash matches the expected"""
        computed = self.compute()
        matches = computed == self.templatehash
        logger.debug(
            "vector %r: expected %s, computed %s", self.comment, self.templatehash, computed
        )
        return matches

    def __repr__(self) -> str:
        return "TemplateHashVector(%r)" % self.comment


def parse_vectors(data: Any) -> list[TemplateHashVector]:
    """Instantiates vectors from a decoded JSON array"""
    if not isinstance(data, list):
        raise VectorFormatError("Test vectors must be a JSON array")
    return [TemplateHashVector.from_dict(item) for item in data]


def load_vectors(path: str) -> list[TemplateHashVector]:
    """Reads test vectors from a JSON file"""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise VectorFormatError("Invalid JSON in %s: %s" % (path, e)) from e
    return parse_vectors(data)
