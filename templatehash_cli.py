#!/usr/bin/env python3
"""
TemplateHash CLI - Command line interface for python-templatehash

Calculates OP_TEMPLATEHASH template hashes of raw transactions, prints the
intermediate digests, builds committing scripts and checks test vector files.
"""

import argparse
import json
import logging
import struct
import sys

from bitcoinutils.transactions import Transaction

from templatehash.errors import TemplateHashError
from templatehash.hashes import TemplateHash
from templatehash.script import templatehash_script
from templatehash.serialize import h_to_b
from templatehash.setup import setup
from templatehash.template import TransactionView, to_templatehash
from templatehash.vectors import load_vectors


def _annex_bytes(args):
    return None if args.annex is None else h_to_b(args.annex)


def compute_hash(args):
    """Calculate the template hash of a raw transaction"""
    try:
        tx = Transaction.from_raw(args.hex)
        templatehash = to_templatehash(tx, args.input_index, _annex_bytes(args))
    except (TemplateHashError, ValueError, IndexError, struct.error) as e:
        print(f"Error computing template hash: {str(e)}")
        return 1
    print(templatehash.to_hex())
    return 0


def show_digests(args):
    """Print the intermediate digests of a raw transaction"""
    try:
        tx = Transaction.from_raw(args.hex)
        sequences, outputs, annex = TransactionView(tx).digests(_annex_bytes(args))
    except (TemplateHashError, ValueError, IndexError, struct.error) as e:
        print(f"Error computing digests: {str(e)}")
        return 1

    result = {
        "sha_sequences": sequences.hex(),
        "sha_outputs": outputs.hex(),
        "sha_annex": None if annex is None else annex.hex(),
    }
    print(json.dumps(result, indent=2))
    return 0


def verify_vectors(args):
    """Check every vector of a test vector file"""
    try:
        vectors = load_vectors(args.file)
    except (OSError, TemplateHashError) as e:
        print(f"Error loading test vectors: {str(e)}")
        return 1

    failures = 0
    for i, vector in enumerate(vectors):
        try:
            ok = vector.check()
        except (TemplateHashError, ValueError, IndexError, struct.error) as e:
            print(f"[{i}] ERROR {vector.comment}: {str(e)}")
            failures += 1
            continue
        print(f"[{i}] {'OK' if ok else 'FAIL'} {vector.comment}")
        if not ok:
            failures += 1

    print(f"{len(vectors) - failures}/{len(vectors)} vectors passed")
    return 1 if failures else 0


def commitment_script(args):
    """Print the script committing to a template hash"""
    try:
        script = templatehash_script(TemplateHash.from_hex(args.templatehash), args.verify)
    except ValueError as e:
        print(f"Error building script: {str(e)}")
        return 1
    print(script.to_hex())
    return 0


def main(argv=None):
    """Main entry point for the CLI"""
    parser = argparse.ArgumentParser(
        description='TemplateHash CLI - OP_TEMPLATEHASH template hash tools'
    )

    parser.add_argument('--no-index-check', action='store_true',
                        help='Do not verify that the input index is in range')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log debug messages')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    hash_parser = subparsers.add_parser('hash', help='Calculate the template hash of a raw transaction')
    hash_parser.add_argument('hex', help='Raw transaction in hexadecimal format')
    hash_parser.add_argument('--input-index', '-i', type=int, default=0,
                             help='Index of the input executing OP_TEMPLATEHASH')
    hash_parser.add_argument('--annex', help='Annex of the input in hex, including the 0x50 prefix')

    digests_parser = subparsers.add_parser('digests', help='Print the intermediate digests of a raw transaction')
    digests_parser.add_argument('hex', help='Raw transaction in hexadecimal format')
    digests_parser.add_argument('--annex', help='Annex in hex, including the 0x50 prefix')

    verify_parser = subparsers.add_parser('verify', help='Check a JSON test vector file')
    verify_parser.add_argument('file', help='Path to the test vector file')

    script_parser = subparsers.add_parser('script', help='Build a script committing to a template hash')
    script_parser.add_argument('templatehash', help='Template hash in hexadecimal format')
    script_parser.add_argument('--verify', action='store_true',
                               help='Use OP_EQUALVERIFY instead of OP_EQUAL')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    setup(check_input_index=not args.no_index_check)

    if args.command == 'hash':
        return compute_hash(args)
    elif args.command == 'digests':
        return show_digests(args)
    elif args.command == 'verify':
        return verify_vectors(args)
    elif args.command == 'script':
        return commitment_script(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
