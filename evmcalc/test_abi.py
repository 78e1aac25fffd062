#!/usr/bin/env python3
"""
Unit tests for hashing, signatures and the static ABI codec.

Run with: python3 -m pytest evmcalc/test_abi.py
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest

from evmcalc import evaluate, evaluate_line
from evmcalc.abi import (
    decode_calldata,
    encode_arguments,
    keccak256,
    parse_signature,
    selector,
    to_checksum_address,
)
from evmcalc.errors import (
    AbiMalformedCalldataError,
    AbiSelectorMismatchError,
    ArityMismatchError,
    InvalidLiteralError,
    TypeMismatchError,
)
from evmcalc.values import Bool, Bytes, Text, Uint


VITALIK = '0xd8da6bf26964af9d7eed9e03e53415d37aa96045'
VITALIK_CHECKSUM = '0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045'
TRANSFER = 'transfer(address,uint256)'


def word(value: int) -> str:
    return format(value, '064x')


class TestHashing(unittest.TestCase):
    """Test keccak-256 and EIP-55 checksums."""

    def test_keccak_known_vectors(self):
        self.assertEqual(
            keccak256(b'').hex(),
            'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470',
        )
        self.assertEqual(
            evaluate('keccak256("hello world")'),
            '0x47173285a8d7341e5e972fc677286384f802f8ef42a5ec5f03bbfa254cb01fad',
        )

    def test_keccak_of_number_hashes_its_word(self):
        expected = '0x' + keccak256((1).to_bytes(32, 'big')).hex()
        self.assertEqual(evaluate('keccak256(1)'), expected)

    def test_checksum(self):
        self.assertEqual(evaluate(f'checksum("{VITALIK}")'), VITALIK_CHECKSUM)
        self.assertEqual(evaluate(f'checksum({VITALIK})'), VITALIK_CHECKSUM)
        self.assertEqual(to_checksum_address(VITALIK_CHECKSUM), VITALIK_CHECKSUM)

    def test_checksum_rejects_bad_input(self):
        with self.assertRaises(InvalidLiteralError):
            to_checksum_address('0x1234')

    def test_address(self):
        self.assertEqual(evaluate('address(1)'), '0x' + '0' * 39 + '1')
        self.assertEqual(evaluate(f'address({VITALIK})'), VITALIK)
        self.assertEqual(evaluate(f'address("{VITALIK_CHECKSUM}")'), VITALIK)
        self.assertEqual(evaluate_line('address(2 ** 160)').error.kind, 'OutOfRange')

    def test_address_text_must_be_plain_hex(self):
        for text in ('-1', '0x-1', '+ff', ' 1 2 '):
            with self.subTest(text=text):
                self.assertEqual(evaluate_line(f'address("{text}")').error.kind, 'InvalidLiteral')
        self.assertEqual(evaluate('address(" 0xff ")'), '0x' + '0' * 38 + 'ff')


class TestSignatures(unittest.TestCase):
    """Test signature parsing and selectors."""

    def test_transfer_selector(self):
        self.assertEqual(evaluate(f'selector("{TRANSFER}")'), '0xa9059cbb')

    def test_canonicalization(self):
        signature = parse_signature('transfer(address to, uint amount)')
        self.assertEqual(signature.canonical, TRANSFER)
        self.assertEqual(signature.param_names(), ['to', 'amount'])
        self.assertEqual(selector(signature).hex(), 'a9059cbb')

    def test_data_location_is_ignored(self):
        signature = parse_signature('f(bytes32 calldata data, bool)')
        self.assertEqual(signature.canonical, 'f(bytes32,bool)')
        self.assertEqual(signature.param_names(), ['data', 'arg1'])

    def test_bare_parameter_lists(self):
        self.assertEqual(parse_signature('(uint, int8)').types, ['uint256', 'int8'])
        self.assertEqual(parse_signature('address, bool').types, ['address', 'bool'])

    def test_selector_needs_a_name(self):
        self.assertEqual(evaluate_line('selector("(uint256)")').error.kind, 'InvalidLiteral')


class TestEncoding(unittest.TestCase):
    """Test abi_encode and abi_encode_with_selector."""

    def test_encode_from_argument_string(self):
        expected = '0x' + word(int(VITALIK, 16)) + word(100)
        self.assertEqual(evaluate(f'abi_encode("{TRANSFER}", "{VITALIK}, 100")'), expected)

    def test_encode_from_separate_arguments(self):
        expected = '0xa9059cbb' + word(int(VITALIK, 16)) + word(10**18)
        line = f'abi_encode_with_selector("{TRANSFER}", {VITALIK}, 1 ether)'
        self.assertEqual(evaluate(line), expected)

    def test_signed_integers_use_twos_complement(self):
        self.assertEqual(evaluate('abi_encode("f(int256)", "-1")'), '0x' + 'f' * 64)
        self.assertEqual(evaluate('abi_encode("f(int8)", "-128")'), '0x' + word(2**256 - 128))

    def test_bool_and_bytes(self):
        self.assertEqual(evaluate('abi_encode("f(bool)", "true")'), '0x' + word(1))
        self.assertEqual(
            evaluate('abi_encode("f(bytes4)", "0xa9059cbb")'),
            '0xa9059cbb' + '0' * 56,
        )

    def test_no_arguments(self):
        self.assertEqual(evaluate('abi_encode_with_selector("totalSupply()")'), '0x18160ddd')

    def test_arity_mismatch(self):
        with self.assertRaises(ArityMismatchError):
            encode_arguments(parse_signature('f(uint256,uint256)'), ['1'])

    def test_out_of_range_values(self):
        with self.assertRaises(InvalidLiteralError):
            encode_arguments(parse_signature('f(uint8)'), ['256'])
        with self.assertRaises(InvalidLiteralError):
            encode_arguments(parse_signature('f(int8)'), ['128'])
        with self.assertRaises(InvalidLiteralError):
            encode_arguments(parse_signature('f(bytes2)'), ['0x010203'])

    def test_unsupported_types(self):
        with self.assertRaises(TypeMismatchError):
            encode_arguments(parse_signature('f(string)'), ['a'])
        with self.assertRaises(TypeMismatchError):
            encode_arguments(parse_signature('f(uint256[])'), ['1'])


class TestDecoding(unittest.TestCase):
    """Test abi_decode and debug."""

    def test_round_trip(self):
        calldata = f'abi_encode_with_selector("{TRANSFER}", "{VITALIK}, 100")'
        result = evaluate(f'abi_decode("transfer(address to, uint256 amount)", {calldata})')
        self.assertEqual(result, f'to (address): {VITALIK}\namount (uint256): 100')

    def test_decoded_values(self):
        signature = parse_signature('f(uint8,int16,bool,bytes2,address)')
        calldata = selector(signature) + encode_arguments(
            signature, ['7', '-2', 'false', '0xbeef', VITALIK]
        )
        values = [entry.value for entry in decode_calldata(signature, calldata).entries]
        self.assertEqual(values[0], Uint(7))
        self.assertEqual(values[1], Text('-2'))
        self.assertEqual(values[2], Bool(False))
        self.assertEqual(values[3], Bytes(b'\xbe\xef'))
        self.assertEqual(values[4], Uint(int(VITALIK, 16), hex_width=20))

    def test_short_calldata(self):
        self.assertEqual(
            evaluate_line(f'abi_decode("{TRANSFER}", "0x1234")').error.kind,
            'AbiMalformedCalldata',
        )

    def test_wrong_selector(self):
        calldata = '0x095ea7b3' + word(1) + word(2)
        self.assertEqual(
            evaluate_line(f'abi_decode("{TRANSFER}", "{calldata}")').error.kind,
            'AbiSelectorMismatch',
        )

    def test_wrong_length(self):
        signature = parse_signature(TRANSFER)
        with self.assertRaises(AbiMalformedCalldataError):
            decode_calldata(signature, selector(signature) + bytes(32))
        with self.assertRaises(AbiMalformedCalldataError):
            decode_calldata(signature, selector(signature) + bytes(65))

    def test_dirty_padding(self):
        signature = parse_signature('f(bool)')
        with self.assertRaises(AbiMalformedCalldataError):
            decode_calldata(signature, selector(signature) + (2).to_bytes(32, 'big'))
        signature = parse_signature('f(address)')
        with self.assertRaises(AbiMalformedCalldataError):
            decode_calldata(signature, selector(signature) + (2**160).to_bytes(32, 'big'))

    def test_selector_mismatch_from_module(self):
        signature = parse_signature(TRANSFER)
        with self.assertRaises(AbiSelectorMismatchError):
            decode_calldata(signature, bytes(4 + 64))

    def test_debug(self):
        result = evaluate(f'debug(abi_encode_with_selector("{TRANSFER}", "{VITALIK}, 100"))')
        self.assertEqual(result.split('\n'), [
            '0xa9059cbb',
            '[0] 0x' + word(int(VITALIK, 16)),
            '[1] 0x' + word(100),
        ])

    def test_debug_rejects_partial_words(self):
        self.assertEqual(
            evaluate_line('debug("0xa9059cbb0000")').error.kind,
            'AbiMalformedCalldata',
        )


if __name__ == '__main__':
    unittest.main(verbosity=2)
