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

# Tag of the tagged hash that produces the template hash
TEMPLATEHASH_TAG = "TemplateHash"

# OP_TEMPLATEHASH redefines OP_SUCCESS187
OP_TEMPLATEHASH = 0xBB
OP_TEMPLATEHASH_NAME = "OP_TEMPLATEHASH"

# First byte of a taproot annex, as defined in BIP-341
ANNEX_TAG = 0x50

# Size of all digests (sha256 and tagged) in bytes
HASH_SIZE = 32

# Flag byte written before the input index
ANNEX_ABSENT = b"\x00"
ANNEX_PRESENT = b"\x01"


# Limits of the fixed width and compact size encodings
MAX_UINT32 = 0xFFFFFFFF
MIN_INT32 = -0x80000000

COMPACT_SIZE_UINT16 = 0xFD
COMPACT_SIZE_UINT32 = 0xFE
COMPACT_SIZE_UINT64 = 0xFF


# TX version 2 was introduced in BIP-68 with relative locktime
DEFAULT_TX_VERSION = b"\x02\x00\x00\x00"
DEFAULT_TX_LOCKTIME = b"\x00\x00\x00\x00"
