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


__version__ = "0.1.0"

from templatehash.setup import setup, get_check_input_index, set_check_input_index

from templatehash.constants import ANNEX_TAG, OP_TEMPLATEHASH, TEMPLATEHASH_TAG

from templatehash.errors import (
    TemplateHashError,
    InputIndexOutOfRangeError,
    UnsupportedTemplateError,
    VectorFormatError,
)

from templatehash.hashes import TaggedHashEngine, TemplateHash, tagged_hash

from templatehash.digests import sha_sequences, sha_outputs, sha_annex

from templatehash.template import (
    TemplateView,
    TransactionTemplate,
    TransactionView,
    as_template,
    templatehash,
    to_templatehash,
)

from templatehash.script import activate_templatehash, templatehash_script

__all__ = [
    'setup',
    'get_check_input_index',
    'set_check_input_index',
    'ANNEX_TAG',
    'OP_TEMPLATEHASH',
    'TEMPLATEHASH_TAG',
    'TemplateHashError',
    'InputIndexOutOfRangeError',
    'UnsupportedTemplateError',
    'VectorFormatError',
    'TaggedHashEngine',
    'TemplateHash',
    'tagged_hash',
    'sha_sequences',
    'sha_outputs',
    'sha_annex',
    'TemplateView',
    'TransactionTemplate',
    'TransactionView',
    'as_template',
    'templatehash',
    'to_templatehash',
    'activate_templatehash',
    'templatehash_script',
]
