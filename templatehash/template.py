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

import logging
from typing import Any, Iterable, Optional, Union

from bitcoinutils.transactions import Transaction, TxOutput

from templatehash.constants import (
    ANNEX_ABSENT,
    ANNEX_PRESENT,
    DEFAULT_TX_LOCKTIME,
    DEFAULT_TX_VERSION,
    HASH_SIZE,
)
from templatehash.digests import sequence_to_bytes, sha_annex, sha_outputs, sha_sequences
from templatehash.errors import InputIndexOutOfRangeError, UnsupportedTemplateError
from templatehash.hashes import TemplateHash
from templatehash.serialize import encode_int32, encode_uint32, serialize_txout
from templatehash.setup import get_check_input_index

logger = logging.getLogger(__name__)


def _encode_locktime(lock_time: Any) -> bytes:
    # bitcoinutils' Locktime helper serializes itself
    if hasattr(lock_time, "for_transaction"):
        lock_time = lock_time.for_transaction()
    return encode_uint32(lock_time)


def _digest_bytes(digest: Any, name: str) -> bytes:
    if isinstance(digest, TemplateHash):
        digest = digest.to_bytes()
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != HASH_SIZE:
        raise ValueError("%s must be a %d-byte digest" % (name, HASH_SIZE))
    return bytes(digest)


def templatehash(
    version: Union[int, bytes],
    lock_time: Union[int, bytes],
    sha_sequences: bytes,
    sha_outputs: bytes,
    input_index: int,
    sha_annex: Optional[bytes] = None,
) -> TemplateHash:
    """Calculate a template hash from the components of a transaction
    template, for a given input.

    The tagged ("TemplateHash") message is:

        version || lock_time || sha_sequences || sha_outputs ||
        annex_present || input_index [|| sha_annex]

    where annex_present is a single byte, 1 if sha_annex is given, 0
    otherwise. The annex digest is omitted entirely when absent so that no
    annex value can produce the message of an annex-less spend.

    No range check is done on input_index here since the number of inputs is
    not known; use a template view for that.
    """
    engine = TemplateHash.engine()

    engine.update(encode_int32(version))
    engine.update(_encode_locktime(lock_time))
    engine.update(_digest_bytes(sha_sequences, "sha_sequences"))
    engine.update(_digest_bytes(sha_outputs, "sha_outputs"))
    engine.update(ANNEX_ABSENT if sha_annex is None else ANNEX_PRESENT)
    engine.update(encode_uint32(input_index))

    if sha_annex is not None:
        engine.update(_digest_bytes(sha_annex, "sha_annex"))

    return TemplateHash.from_engine(engine)


class TemplateView:
    """Anything that can be reduced to the fields committed to by a template
    hash: version, locktime, the sequences of all inputs and all outputs.

    Subclasses only provide template_fields(); digesting and combining is
    shared.

    Methods
    -------
    template_fields()
        returns (version, locktime, sequences, outputs)
    digests(annex)
        returns (sha_sequences, sha_outputs, sha_annex)
    to_templatehash(input_index, annex)
        calculates the template hash for an input
    """

    def template_fields(self) -> tuple[Any, Any, list[Any], list[Any]]:
        raise NotImplementedError

    def digests(
        self, annex: Optional[bytes] = None
    ) -> tuple[bytes, bytes, Optional[bytes]]:
        """Returns the intermediate digests, sha_annex is None without an
        annex"""
        _, _, sequences, outputs = self.template_fields()
        return (
            sha_sequences(sequences),
            sha_outputs(outputs),
            None if annex is None else sha_annex(annex),
        )

    def to_templatehash(
        self, input_index: int, annex: Optional[bytes] = None
    ) -> TemplateHash:
        """Calculate the template hash for the input at input_index.

        Parameters
        ----------
        input_index : int
            the index of the input whose script executes OP_TEMPLATEHASH
        annex : bytes
            the annex of that input, including the 0x50 prefix byte, if any

        Raises
        ------
        InputIndexOutOfRangeError
            if input_index is not the index of one of the sequences (unless
            disabled with setup(check_input_index=False))
        """
        version, lock_time, sequences, outputs = self.template_fields()

        if get_check_input_index() and not 0 <= input_index < len(sequences):
            raise InputIndexOutOfRangeError(input_index, len(sequences))

        result = templatehash(
            version,
            lock_time,
            sha_sequences(sequences),
            sha_outputs(outputs),
            input_index,
            None if annex is None else sha_annex(annex),
        )

        logger.debug(
            "template hash for input %d (annex %s): %s",
            input_index,
            "absent" if annex is None else "present",
            result,
        )
        return result


class TransactionTemplate(TemplateView):
    """Represents a transaction from which a template can be generated.

    A convenience so that users don't need to provide dummy values (inputs'
    outpoints, scripts, witnesses) for data that the template hash does not
    commit to.

    Attributes
    ----------
    version : bytes
        the serialized transaction version
    lock_time : bytes
        the serialized transaction locktime
    sequences : tuple (bytes)
        the serialized sequence of every input
    outputs : tuple (TxOutput)
        all the transaction outputs

    Methods
    -------
    templatehash(input_index, annex)
        calculates a template hash for a given input
    from_transaction(tx)
        instantiates a template from a Transaction (classmethod)
    """

    def __init__(
        self,
        version: Union[int, bytes, str] = DEFAULT_TX_VERSION,
        lock_time: Any = DEFAULT_TX_LOCKTIME,
        sequences: Optional[Iterable[Any]] = None,
        outputs: Optional[Iterable[TxOutput]] = None,
    ) -> None:
        """See TransactionTemplate description

        version and lock_time accept ints, 4 serialized bytes or their hex;
        lock_time also accepts a Locktime. sequences accept the same forms
        as well as Sequence objects.
        """

        self._version = encode_int32(version)
        self._lock_time = _encode_locktime(lock_time)
        self._sequences = tuple(sequence_to_bytes(seq) for seq in (sequences or []))
        self._outputs = tuple(outputs or [])

    @property
    def version(self) -> bytes:
        return self._version

    @property
    def lock_time(self) -> bytes:
        return self._lock_time

    @property
    def sequences(self) -> tuple[bytes, ...]:
        return self._sequences

    @property
    def outputs(self) -> tuple[TxOutput, ...]:
        return self._outputs

    @classmethod
    def from_transaction(cls, tx: Transaction) -> "TransactionTemplate":
        """Creates a template with the committed fields of tx"""
        return cls(
            version=tx.version,
            lock_time=tx.locktime,
            sequences=[txin.sequence for txin in tx.inputs],
            outputs=tx.outputs,
        )

    def template_fields(self) -> tuple[Any, Any, list[Any], list[Any]]:
        return self._version, self._lock_time, list(self._sequences), list(self._outputs)

    def templatehash(
        self, input_index: int, annex: Optional[bytes] = None
    ) -> TemplateHash:
        """Calculate a template hash from a transaction template, for a given
        input"""
        return self.to_templatehash(input_index, annex)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransactionTemplate):
            return NotImplemented
        return (
            self._version == other._version
            and self._lock_time == other._lock_time
            and self._sequences == other._sequences
            and [serialize_txout(o) for o in self._outputs]
            == [serialize_txout(o) for o in other._outputs]
        )

    def __hash__(self) -> int:
        return hash((self._version, self._lock_time, self._sequences))

    def __str__(self) -> str:
        return str(
            {
                "version": self._version.hex(),
                "lock_time": self._lock_time.hex(),
                "sequences": [seq.hex() for seq in self._sequences],
                "outputs": list(self._outputs),
            }
        )

    def __repr__(self) -> str:
        return self.__str__()


class TransactionView(TemplateView):
    """Presents a bitcoinutils Transaction as a template. Fields are read
    from the transaction on every call, nothing is copied.

    Attributes
    ----------
    tx : Transaction
        the viewed transaction
    """

    def __init__(self, tx: Transaction) -> None:
        self.tx = tx

    def template_fields(self) -> tuple[Any, Any, list[Any], list[Any]]:
        tx = self.tx
        return (
            tx.version,
            tx.locktime,
            [txin.sequence for txin in tx.inputs],
            tx.outputs,
        )

    def __repr__(self) -> str:
        return "TransactionView(%r)" % (self.tx,)


def as_template(template_like: Any) -> TemplateView:
    """Returns a template view of a TemplateView (itself) or a Transaction"""
    if isinstance(template_like, TemplateView):
        return template_like
    if isinstance(template_like, Transaction):
        return TransactionView(template_like)
    raise UnsupportedTemplateError(
        "Cannot create a template from %s" % type(template_like).__name__
    )


def to_templatehash(
    template_like: Any, input_index: int, annex: Optional[bytes] = None
) -> TemplateHash:
    """Calculate the template hash of a Transaction or TransactionTemplate
    for the input at input_index, with the input's annex if it has one.

    Example:

        template = TransactionTemplate(
            version=2,
            lock_time=0,
            sequences=[0, 42],
            outputs=[TxOutput(424242, Script(["OP_RETURN", b"hi".hex()]))],
        )
        templatehash = to_templatehash(template, 1)

        # very similar to OP_CHECKTEMPLATEVERIFY usage
        script = templatehash_script(templatehash, verify=True)
    """
    return as_template(template_like).to_templatehash(input_index, annex)
