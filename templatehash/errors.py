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


class TemplateHashError(Exception):
    """Base class of all errors raised by templatehash"""


class InputIndexOutOfRangeError(TemplateHashError, IndexError):
    """Raised when an input index does not refer to one of the template's
    sequences.

    Attributes
    ----------
    input_index : int
        the requested input index
    input_count : int
        the number of inputs (sequences) of the template
    """

    def __init__(self, input_index: int, input_count: int) -> None:
        self.input_index = input_index
        self.input_count = input_count
        super().__init__(
            f"Input index {input_index} out of range for template with "
            f"{input_count} input(s)"
        )


class UnsupportedTemplateError(TemplateHashError, TypeError):
    """Raised when an object cannot be reduced to a transaction template"""


class VectorFormatError(TemplateHashError, ValueError):
    """Raised when a test vector is malformed"""
