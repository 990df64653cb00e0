import pytest
from solders.pubkey import Pubkey

from anchorgen.analysis import IdlArg, ConstSeed, AccountSeed, ArgSeed, UnknownSeed
from anchorgen.core.derivation import (
    derive_address,
    derive_account_address,
    encode_value,
    seed_to_bytes,
)
from anchorgen.errors import InvalidSchemaError

PROGRAM = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
CREATOR = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")


@pytest.mark.parametrize("value,arg_type,expected", [
    ("board", "string", b"board"),
    (b"\x01\x02", "bytes", b"\x01\x02"),
    (7, "u8", b"\x07"),
    (-1, "i8", b"\xff"),
    (0x0102, "u16", b"\x02\x01"),
    (-2, "i16", b"\xfe\xff"),
    (1, "u32", b"\x01\x00\x00\x00"),
    (-1, "i32", b"\xff\xff\xff\xff"),
    (5, "u64", b"\x05" + b"\x00" * 7),
    (-1, "i64", b"\xff" * 8),
    (True, "bool", b"\x01"),
    ("false", "bool", b"\x00"),
    ("12", "u128", b"\x0c\x00\x00\x00"),
])
def test_encode_value(value, arg_type, expected):
    assert encode_value(value, arg_type) == expected


def test_pubkey_args_accept_strings():
    assert encode_value(str(CREATOR), "publicKey") == bytes(CREATOR)


def test_derive_matches_solders():
    seeds = [ConstSeed(value=b"vault"), AccountSeed(path="board.creator"), ArgSeed(path="amount")]
    args = [IdlArg(name="amount", arg_type="u64")]

    address, bump = derive_address(PROGRAM, seeds, {"creator": CREATOR, "amount": 5}, args)

    expected = Pubkey.find_program_address(
        [b"vault", bytes(CREATOR), (5).to_bytes(8, "little")], PROGRAM
    )
    assert (address, bump) == expected
    assert 0 <= bump <= 255


def test_seed_order_changes_address():
    values = {"creator": CREATOR}
    a = derive_address(PROGRAM, [ConstSeed(value=b"x"), AccountSeed(path="creator")], values)
    b = derive_address(PROGRAM, [AccountSeed(path="creator"), ConstSeed(value=b"x")], values)
    assert a[0] != b[0]


def test_unknown_seed_kind():
    with pytest.raises(InvalidSchemaError):
        seed_to_bytes(UnknownSeed(kind="weird"), {}, [])


def test_missing_value():
    with pytest.raises(KeyError):
        seed_to_bytes(ArgSeed(path="amount"), {}, [])


def test_derive_account_address(feedana_idl):
    address, bump = derive_account_address(
        feedana_idl, "feedback_board", PROGRAM, {"creator": str(CREATOR), "board_id": "b1"}
    )
    expected = Pubkey.find_program_address([b"feedback_board", bytes(CREATOR), b"b1"], PROGRAM)
    assert (address, bump) == expected


def test_derive_unknown_account(feedana_idl):
    with pytest.raises(InvalidSchemaError):
        derive_account_address(feedana_idl, "nope", PROGRAM, {})


def test_malformed_const_seed_is_rejected():
    with pytest.raises(InvalidSchemaError, match="not a byte array"):
        seed_to_bytes(ConstSeed(value=(1, 999)), {}, [])
