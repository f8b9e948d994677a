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


CHECK_INPUT_INDEX = True


def setup(check_input_index: bool = True) -> bool:
    """Setup the templatehash library with the specified options.

    Args:
        check_input_index: Whether template views verify that the input index
                           is within range of their sequences before hashing
                           (default: True)
    """
    global CHECK_INPUT_INDEX
    CHECK_INPUT_INDEX = check_input_index
    return CHECK_INPUT_INDEX


def get_check_input_index() -> bool:
    """Returns whether template views validate the input index"""
    global CHECK_INPUT_INDEX
    return CHECK_INPUT_INDEX


def set_check_input_index(value: bool) -> None:
    """Sets whether template views validate the input index"""
    global CHECK_INPUT_INDEX
    CHECK_INPUT_INDEX = value
