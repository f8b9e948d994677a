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


import logging
from typing import Union

import bitcoinutils.script as bu_script
from bitcoinutils.script import Script

from templatehash.constants import HASH_SIZE, OP_TEMPLATEHASH, OP_TEMPLATEHASH_NAME
from templatehash.hashes import TemplateHash
from templatehash.serialize import b_to_h

logger = logging.getLogger(__name__)


def activate_templatehash() -> None:
    """
    Registers OP_TEMPLATEHASH (0xbb, previously OP_SUCCESS187) in
    bitcoinutils' op code tables so that Script objects can serialize and
    parse it. Calling it again is a no-op.
    """
    opcode = bytes([OP_TEMPLATEHASH])
    if bu_script.OP_CODES.get(OP_TEMPLATEHASH_NAME) == opcode:
        return

    bu_script.OP_CODES[OP_TEMPLATEHASH_NAME] = opcode
    bu_script.CODE_OPS[opcode] = OP_TEMPLATEHASH_NAME
    logger.debug("registered %s as 0x%02x", OP_TEMPLATEHASH_NAME, OP_TEMPLATEHASH)


def templatehash_script(
    templatehash: Union[TemplateHash, bytes, str], verify: bool = False
) -> Script:
    """Returns a script that commits to a transaction template.

    Without verify the script is <templatehash> OP_TEMPLATEHASH OP_EQUAL and
    leaves the comparison result on the stack. With verify it is
    OP_TEMPLATEHASH <templatehash> OP_EQUALVERIFY, to be followed by other
    conditions (similar to OP_CHECKTEMPLATEVERIFY usage).
    """
    activate_templatehash()

    if isinstance(templatehash, TemplateHash):
        templatehash_hex = templatehash.to_hex()
    elif isinstance(templatehash, (bytes, bytearray)):
        templatehash_hex = b_to_h(bytes(templatehash))
    else:
        templatehash_hex = templatehash

    if len(templatehash_hex) != 2 * HASH_SIZE:
        raise ValueError("Template hash must be %d bytes" % HASH_SIZE)

    if verify:
        return Script([OP_TEMPLATEHASH_NAME, templatehash_hex, "OP_EQUALVERIFY"])
    return Script([templatehash_hex, OP_TEMPLATEHASH_NAME, "OP_EQUAL"])
