from decimal import Decimal

import pytest
from eth_abi import decode

from abi_forms.core.calldata import (
    build_calldata,
    parse_arguments,
    parse_literal,
    split_arguments,
)
from abi_forms.core.errors import EncodingError, SignatureParseError

RANDOM_USER_0 = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class TestSplitArguments:
    def test_top_level_only(self):
        assert split_arguments('"a, b", (1, 2), [3, 4], 5') == [
            '"a, b"',
            "(1, 2)",
            "[3, 4]",
            "5",
        ]

    def test_empty(self):
        assert split_arguments("") == []
        assert split_arguments("   ") == []

    def test_trailing_empty_argument_is_kept(self):
        assert split_arguments("1, ") == ["1", ""]


class TestParseLiteral:
    @pytest.mark.parametrize(
        "token,expected",
        [
            ("100", 100),
            ("-5", -5),
            ("1.25", Decimal("1.25")),
            ("true", True),
            ("false", False),
            ('"hello, world"', "hello, world"),
            (RANDOM_USER_0, RANDOM_USER_0),
            ("0xdeadbeef", "0xdeadbeef"),
        ],
    )
    def test_scalars(self, token, expected):
        assert parse_literal(token) == expected

    def test_big_integers_keep_precision(self):
        big = str(2**256 - 1)
        assert parse_literal(big) == 2**256 - 1

    def test_tuple_and_array(self):
        assert parse_literal("(1, (true, [2, 3]))") == (1, (True, [2, 3]))
        assert parse_literal(f"[{RANDOM_USER_0}, {ZERO_ADDRESS}]") == [
            RANDOM_USER_0,
            ZERO_ADDRESS,
        ]
        assert parse_literal("[(1), (2)]") == [(1,), (2,)]

    def test_parse_arguments(self):
        assert parse_arguments('"x", [], (1)') == ["x", [], (1,)]


class TestBuildCalldata:
    def test_transfer(self):
        data = build_calldata(
            "transfer(address to, uint256 amount)", f"{ZERO_ADDRESS}, 100"
        )
        assert data.startswith("0xa9059cbb")
        to, amount = decode(["address", "uint256"], bytes.fromhex(data[10:]))
        assert to == ZERO_ADDRESS
        assert amount == 100

    def test_uint256_max(self):
        data = build_calldata("function f(uint256 x)", str(2**256 - 1))
        assert data.endswith("f" * 64)

    def test_tuple_array_and_string(self):
        data = build_calldata(
            "function f((uint256 a, bool b) s, address[] xs, string note)",
            f'(1, true), [{RANDOM_USER_0}], "hi, there"',
        )
        s, xs, note = decode(
            ["(uint256,bool)", "address[]", "string"], bytes.fromhex(data[10:])
        )
        assert s == (1, True)
        assert xs == (RANDOM_USER_0.lower(),)
        assert note == "hi, there"

    def test_bytes(self):
        data = build_calldata("function f(bytes4 sig, bytes data)", "0x12345678, 0x")
        sig, payload = decode(["bytes4", "bytes"], bytes.fromhex(data[10:]))
        assert sig == bytes.fromhex("12345678")
        assert payload == b""

    @pytest.mark.parametrize(
        "signature,preview",
        [
            ("function f(uint8 x)", "256"),
            ("function f(uint256 x)", "1.5"),
            ("function f(uint256 x, uint256 y)", "1"),
            ("function f(address a)", "0x1234"),
        ],
    )
    def test_encoding_failures(self, signature, preview):
        with pytest.raises(EncodingError, match="Failed to generate calldata"):
            build_calldata(signature, preview)

    def test_oversized_integer_literal(self):
        with pytest.raises(EncodingError, match="more than 256 bits"):
            build_calldata("function f(uint256 x)", "1" * 5000)
        with pytest.raises(EncodingError, match="Failed to generate calldata"):
            build_calldata("function f(uint256[] xs)", "[" + "1" * 5000 + "]")

    def test_zero_padded_integer_literal(self):
        data = build_calldata("function f(uint256 x)", "0" * 5000 + "7")
        assert data.endswith("0" * 63 + "7")

    def test_bad_signature(self):
        with pytest.raises(EncodingError) as excinfo:
            build_calldata("event E(uint256 x)", "1")
        assert isinstance(excinfo.value.cause, SignatureParseError)
