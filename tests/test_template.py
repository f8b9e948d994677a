# Copyright (C) 2025-2026 The python-templatehash developers
#
# This file is part of python-templatehash
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-templatehash, including this file, may be copied,
# modified, propagated, or distributed except according to the terms contained
# in the LICENSE file.

import unittest

from bitcoinutils.script import Script
from bitcoinutils.transactions import Locktime, Transaction, TxInput, TxOutput

from templatehash.digests import sha_annex, sha_outputs, sha_sequences
from templatehash.errors import InputIndexOutOfRangeError, UnsupportedTemplateError
from templatehash.hashes import TemplateHash
from templatehash.setup import setup, get_check_input_index, set_check_input_index
from templatehash.template import (
    TransactionTemplate,
    TransactionView,
    as_template,
    templatehash,
    to_templatehash,
)


class TestCombiner(unittest.TestCase):
    def test_without_annex(self):
        th = templatehash(2, 0xFFFFFFFF, bytes(32), b"\x11" * 32, 0)
        self.assertEqual(
            th.to_hex(),
            "b52fb36dcbfdf4eb0ea32dfb205463433ed3099eac5440d5c11e5da161ce4a5b",
        )

    def test_with_annex(self):
        th = templatehash(-1, 0, bytes(32), b"\x11" * 32, 3, b"\x22" * 32)
        self.assertEqual(
            th.to_hex(),
            "b874e0b0f791beb5a7b0e669c349101da7eaf0f38a889d56eb035cef42c2b789",
        )

    def test_serialized_fields(self):
        """bitcoinutils keeps version and locktime serialized"""
        self.assertEqual(
            templatehash(b"\xff\xff\xff\xff", Locktime(0).for_transaction(),
                         bytes(32), b"\x11" * 32, 3, b"\x22" * 32),
            templatehash(0xFFFFFFFF, Locktime(0), bytes(32), b"\x11" * 32, 3, b"\x22" * 32),
        )

    def test_zero_annex_digest_differs_from_absent(self):
        without = templatehash(2, 0, bytes(32), bytes(32), 0)
        with_zero = templatehash(2, 0, bytes(32), bytes(32), 0, bytes(32))
        self.assertNotEqual(without, with_zero)

    def test_invalid_digests(self):
        self.assertRaises(ValueError, templatehash, 2, 0, bytes(31), bytes(32), 0)
        self.assertRaises(ValueError, templatehash, 2, 0, bytes(32), None, 0)
        self.assertRaises(ValueError, templatehash, 2, 0, bytes(32), bytes(32), 0, b"")

    def test_input_index_must_fit_four_bytes(self):
        self.assertRaises(ValueError, templatehash, 2, 0, bytes(32), bytes(32), -1)
        self.assertRaises(ValueError, templatehash, 2, 0, bytes(32), bytes(32), 2**32)


class TestTransactionTemplate(unittest.TestCase):
    def setUp(self):
        self.outputs = [
            TxOutput(424242, Script(["OP_RETURN", b"hello, world".hex()])),
            TxOutput(42, Script(["OP_RETURN", b"goodbye, world".hex()])),
        ]
        self.template = TransactionTemplate(
            version=2,
            lock_time=0,
            sequences=[0, 42],
            outputs=self.outputs,
        )
        self.expected = TemplateHash.from_hex(
            "219570656edeb86b99ba8f26d04e3c7814a29b80d40f1d5442e25ec5b6c2db0f"
        )

    def test_known_hash(self):
        self.assertEqual(self.template.to_templatehash(1), self.expected)
        self.assertEqual(self.template.templatehash(1), self.expected)
        self.assertEqual(to_templatehash(self.template, 1), self.expected)

    def test_matches_combiner(self):
        th = templatehash(
            2, 0, sha_sequences([0, 42]), sha_outputs(self.outputs), 1, None
        )
        self.assertEqual(th, self.expected)

    def test_deterministic(self):
        rebuilt = TransactionTemplate(
            version=b"\x02\x00\x00\x00",
            lock_time="00000000",
            sequences=[b"\x00\x00\x00\x00", "2a000000"],
            outputs=self.outputs,
        )
        self.assertEqual(rebuilt, self.template)
        for _ in range(3):
            self.assertEqual(rebuilt.to_templatehash(1), self.expected)

    def test_fields_are_normalized(self):
        self.assertEqual(self.template.version, b"\x02\x00\x00\x00")
        self.assertEqual(self.template.lock_time, b"\x00\x00\x00\x00")
        self.assertEqual(self.template.sequences, (b"\x00\x00\x00\x00", b"\x2a\x00\x00\x00"))
        self.assertEqual(self.template.outputs, tuple(self.outputs))

    def test_outputs_list_is_copied(self):
        outputs = list(self.outputs)
        template = TransactionTemplate(2, 0, [0, 42], outputs)
        outputs.pop()
        self.assertEqual(template.to_templatehash(1), self.expected)

    def test_digests(self):
        sequences, outputs, annex = self.template.digests()
        self.assertEqual(sequences, sha_sequences([0, 42]))
        self.assertEqual(outputs, sha_outputs(self.outputs))
        self.assertIsNone(annex)
        self.assertEqual(self.template.digests(b"\x50")[2], sha_annex(b"\x50"))

    def test_annex_presence(self):
        """Any annex, including one that is 32 zero bytes, changes the hash"""
        without = self.template.to_templatehash(0)
        annexes = [b"\x50", b"\x50\x00", bytes(32), b"\x50" + bytes(31), bytes(1)]
        hashes = {self.template.to_templatehash(0, annex) for annex in annexes}
        self.assertNotIn(without, hashes)
        self.assertEqual(len(hashes), len(annexes))

    def test_index_sensitivity(self):
        template = TransactionTemplate(2, 0, [0, 1, 2, 3], self.outputs)
        hashes = [template.to_templatehash(i) for i in range(4)]
        self.assertEqual(len(set(hashes)), 4)

    def test_every_field_is_committed(self):
        base = self.template.to_templatehash(1)
        variants = [
            TransactionTemplate(1, 0, [0, 42], self.outputs),
            TransactionTemplate(2, 1, [0, 42], self.outputs),
            TransactionTemplate(2, 0, [0, 43], self.outputs),
            TransactionTemplate(2, 0, [0, 42, 0], self.outputs),
            TransactionTemplate(2, 0, [0, 42], self.outputs[:1]),
            TransactionTemplate(
                2, 0, [0, 42],
                [TxOutput(424243, self.outputs[0].script_pubkey), self.outputs[1]],
            ),
        ]
        for variant in variants:
            self.assertNotEqual(variant.to_templatehash(1), base, str(variant))

    def test_zero_outputs(self):
        template = TransactionTemplate(2, 0, [0xFFFFFFFF])
        self.assertEqual(
            template.to_templatehash(0),
            templatehash(2, 0, sha_sequences([0xFFFFFFFF]), sha_outputs([]), 0),
        )


class TestInputIndexCheck(unittest.TestCase):
    def setUp(self):
        self.template = TransactionTemplate(2, 0, [0, 42], [])

    def tearDown(self):
        setup(check_input_index=True)

    def test_out_of_range(self):
        with self.assertRaises(InputIndexOutOfRangeError) as cm:
            self.template.to_templatehash(2)
        self.assertEqual(cm.exception.input_index, 2)
        self.assertEqual(cm.exception.input_count, 2)
        self.assertRaises(IndexError, self.template.to_templatehash, -1)

    def test_no_inputs(self):
        self.assertRaises(
            InputIndexOutOfRangeError, TransactionTemplate().to_templatehash, 0
        )

    def test_check_disabled(self):
        self.assertTrue(get_check_input_index())
        setup(check_input_index=False)
        self.assertFalse(get_check_input_index())
        self.assertEqual(
            self.template.to_templatehash(5),
            templatehash(2, 0, sha_sequences([0, 42]), sha_outputs([]), 5),
        )
        # still needs to be serializable
        self.assertRaises(ValueError, self.template.to_templatehash, -1)

    def test_set_check_input_index(self):
        set_check_input_index(False)
        self.assertFalse(get_check_input_index())
        self.assertEqual(
            self.template.to_templatehash(2),
            templatehash(2, 0, sha_sequences([0, 42]), sha_outputs([]), 2),
        )
        set_check_input_index(True)
        self.assertRaises(InputIndexOutOfRangeError, self.template.to_templatehash, 2)


class TestTransactionView(unittest.TestCase):
    def setUp(self):
        self.txin1 = TxInput("11" * 32, 0, sequence=b"\xff\xff\xff\xff")
        self.txin2 = TxInput("22" * 32, 1, sequence=b"\xfd\xff\xff\xff")
        self.txout = TxOutput(100000, Script(["OP_1", "aa" * 32]))
        self.tx = Transaction([self.txin1, self.txin2], [self.txout])
        self.expected = TemplateHash.from_hex(
            "465e5b9b594000789c594227cbb6f83ae9ab33a7bfc14e0997a934ae90b08e08"
        )

    def test_known_hash(self):
        self.assertEqual(to_templatehash(self.tx, 1), self.expected)
        self.assertEqual(TemplateHash.from_transaction(self.tx, 1), self.expected)
        self.assertEqual(TransactionView(self.tx).to_templatehash(1), self.expected)

    def test_same_as_template(self):
        template = TransactionTemplate.from_transaction(self.tx)
        for index in range(2):
            for annex in (None, b"\x50", b"\x50\x01\x02"):
                self.assertEqual(
                    to_templatehash(template, index, annex),
                    to_templatehash(self.tx, index, annex),
                )

    def test_uncommitted_fields(self):
        """Outpoints, script sigs and witnesses are not committed to"""
        other = Transaction(
            [
                TxInput("33" * 32, 5, Script(["OP_1"]), sequence=b"\xff\xff\xff\xff"),
                TxInput("44" * 32, 6, sequence=b"\xfd\xff\xff\xff"),
            ],
            [self.txout],
        )
        self.assertEqual(to_templatehash(other, 1), self.expected)

    def test_view_reads_current_fields(self):
        view = TransactionView(self.tx)
        before = view.to_templatehash(0)
        self.tx.locktime = b"\x01\x00\x00\x00"
        self.assertNotEqual(view.to_templatehash(0), before)

    def test_out_of_range(self):
        self.assertRaises(InputIndexOutOfRangeError, to_templatehash, self.tx, 2)

    def test_as_template(self):
        template = TransactionTemplate()
        self.assertIs(as_template(template), template)
        self.assertIsInstance(as_template(self.tx), TransactionView)
        self.assertRaises(UnsupportedTemplateError, as_template, self.tx.to_hex())
        self.assertRaises(TypeError, to_templatehash, None, 0)


if __name__ == "__main__":
    unittest.main()
