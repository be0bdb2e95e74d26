"""
XDR primitives, schema combinators and the XDR-JSON codec.
"""

import base64
import json

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import ZERO_ADDRESS, assert_hex_equal, mk_address, mk_muxed_address

from stellar_txbuild.canonjson import dumps_canonical, loads_lossless
from stellar_txbuild.codec.reader import XdrReader
from stellar_txbuild.codec.writer import XdrWriter
from stellar_txbuild.codec.xdr_json import XdrJsonCodec, from_base64, json_to_xdr, xdr_to_json
from stellar_txbuild.runtime.errors import DecodeError


class TestWriterReader:

    def test_integers_big_endian(self):
        w = XdrWriter()
        w.int32(-1)
        w.uint32(1)
        w.int64(2)
        w.uint64(2 ** 64 - 1)
        assert_hex_equal(w.to_bytes(), "ffffffff 00000001 0000000000000002 ffffffffffffffff", "ints")

        r = XdrReader(w.to_bytes())
        assert r.int32() == -1
        assert r.uint32() == 1
        assert r.int64() == 2
        assert r.uint64() == 2 ** 64 - 1
        assert r.eof

    def test_opaque_padding(self):
        w = XdrWriter()
        w.var_opaque(b"\x01\x02\x03\x04\x05")
        assert_hex_equal(w.to_bytes(), "00000005 0102030405000000", "var opaque")
        assert XdrReader(w.to_bytes()).var_opaque() == b"\x01\x02\x03\x04\x05"

    def test_string(self):
        w = XdrWriter()
        w.string("abc")
        assert_hex_equal(w.to_bytes(), "00000003 61626300", "string")
        assert XdrReader(w.to_bytes()).string() == "abc"

    def test_truncated_input(self):
        with pytest.raises(DecodeError, match="Unexpected end"):
            XdrReader(b"\x00\x00").int32()

    def test_nonzero_padding_rejected(self):
        with pytest.raises(DecodeError, match="padding"):
            XdrReader(b"\x00\x00\x00\x01\xaa\x01\x00\x00").var_opaque()

    def test_invalid_boolean(self):
        with pytest.raises(DecodeError, match="boolean"):
            XdrReader(b"\x00\x00\x00\x02").boolean()


class TestCanonicalJson:

    def test_sorted_and_compact(self):
        assert dumps_canonical({"b": 1, "a": [True, None]}) == '{"a":[true,null],"b":1}'

    def test_big_integers_exact(self):
        text = dumps_canonical({"v": 9223372036854775807})
        assert text == '{"v":9223372036854775807}'
        assert loads_lossless(text)["v"] == 9223372036854775807

    def test_float_rejected(self):
        with pytest.raises(TypeError):
            dumps_canonical({"amount": 1.5})


@pytest.mark.codec
@pytest.mark.unit
class TestSchemaCodec:

    def test_asset_native(self, codec):
        assert_hex_equal(codec.pack("Asset", "native"), "00000000", "native asset")
        assert codec.unpack("Asset", bytes(4)) == "native"

    def test_asset_alphanum4(self, codec):
        tree = {"credit_alphanum4": {"asset_code": "USD", "issuer": ZERO_ADDRESS}}
        data = codec.pack("Asset", tree)
        assert_hex_equal(data, "00000001 55534400 00000000" + "00" * 32, "alphanum4")
        assert codec.unpack("Asset", data) == tree

    def test_muxed_account(self, codec):
        muxed = mk_muxed_address(1, 42)
        data = codec.pack("MuxedAccount", muxed)
        assert data[:4] == b"\x00\x00\x01\x00"
        assert codec.unpack("MuxedAccount", data) == muxed
        assert codec.unpack("MuxedAccount", codec.pack("MuxedAccount", mk_address(1))) == mk_address(1)

    def test_price_range(self, codec):
        with pytest.raises(DecodeError, match="out of range"):
            codec.pack("Price", {"n": 2 ** 31, "d": 1})

    def test_unknown_struct_field(self, codec):
        with pytest.raises(DecodeError, match="unknown field"):
            codec.pack("Price", {"n": 1, "d": 1, "x": 0})

    def test_missing_struct_field(self, codec):
        with pytest.raises(DecodeError, match="missing field 'd'"):
            codec.pack("Price", {"n": 1})

    def test_union_void_arm_takes_no_value(self, codec):
        with pytest.raises(DecodeError, match="takes no value"):
            codec.pack("Memo", {"none": 1})

    def test_unknown_union_arm(self, codec):
        with pytest.raises(DecodeError, match="unknown Memo arm"):
            codec.pack("Memo", "hash_x")

    def test_memo_text_limit(self, codec):
        codec.pack("Memo", {"text": "x" * 28})
        with pytest.raises(DecodeError, match="exceeds maximum 28"):
            codec.pack("Memo", {"text": "x" * 29})

    def test_recursive_predicate(self, codec):
        tree = {"and": [{"not": {"before_relative_time": 60}}, "unconditional"]}
        assert codec.unpack("ClaimPredicate", codec.pack("ClaimPredicate", tree)) == tree

    def test_predicate_and_bound(self, codec):
        with pytest.raises(DecodeError, match="exceeds maximum 2"):
            codec.pack("ClaimPredicate", {"or": ["unconditional"] * 3})

    def test_error_path(self, codec):
        tree = {"credit_alphanum4": {"asset_code": "USD", "issuer": "GBAD"}}
        with pytest.raises(DecodeError) as exc_info:
            codec.pack("Asset", tree)
        assert exc_info.value.details["path"] == "credit_alphanum4.issuer"

    def test_trailing_bytes(self, codec):
        with pytest.raises(DecodeError, match="trailing"):
            codec.unpack("Asset", bytes(8))

    def test_unknown_type(self, codec):
        with pytest.raises(DecodeError, match="Unknown XDR type"):
            codec.pack("Nope", {})

    def test_types_listed(self, codec):
        types = codec.types()
        for tag in ("TransactionEnvelope", "Transaction", "Asset", "ClaimPredicate", "LedgerKey"):
            assert tag in types


@pytest.mark.codec
class TestTextInterface:

    def test_json_to_xdr_and_back(self):
        text = '{"n": 3, "d": 2}'
        xdr = json_to_xdr("Price", text)
        assert base64.b64decode(xdr) == b"\x00\x00\x00\x03\x00\x00\x00\x02"
        assert xdr_to_json("Price", xdr) == '{"d":2,"n":3}'

    def test_invalid_json(self):
        with pytest.raises(DecodeError, match="^Invalid JSON"):
            json_to_xdr("Price", "{n: 3")

    def test_fractional_number_rejected(self):
        with pytest.raises(DecodeError, match="expected int32"):
            json_to_xdr("Price", '{"n": 1.5, "d": 1}')

    def test_large_integer_exact(self):
        text = json.dumps({"min_time": 0, "max_time": 18446744073709551615})
        xdr = json_to_xdr("TimeBounds", text)
        assert json.loads(xdr_to_json("TimeBounds", xdr))["max_time"] == 18446744073709551615

    @pytest.mark.parametrize("bad", ["", "   ", "not base64!"])
    def test_invalid_base64(self, bad):
        with pytest.raises(DecodeError):
            from_base64(bad)

    def test_whitespace_tolerated(self):
        assert from_base64(" AAAA\nAAAA ") == bytes(6)

    def test_custom_type_table(self):
        from stellar_txbuild.codec.stellar_types import WIRE_TYPES
        codec = XdrJsonCodec({"Price": WIRE_TYPES["Price"]})
        assert codec.types() == ["Price"]
        with pytest.raises(DecodeError):
            codec.encode("Asset", '"native"')
