import copy
import json

import pytest

from anchorgen.analysis import IDLParser, ProgramMetadata

PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

BOARD_SEEDS = [
    {"kind": "const", "value": list(b"feedback_board")},
    {"kind": "account", "path": "creator"},
    {"kind": "arg", "path": "board_id"},
]

FEEDANA_IDL = {
    "address": PROGRAM_ID,
    "metadata": {"name": "feedana", "version": "0.1.0", "spec": "0.1.0"},
    "instructions": [
        {
            "name": "create_feedback_board",
            "accounts": [
                {"name": "feedback_board", "writable": True, "pda": {"seeds": BOARD_SEEDS}},
                {"name": "creator", "writable": True, "signer": True},
                {"name": "system_program", "address": "11111111111111111111111111111111"},
            ],
            "args": [
                {"name": "board_id", "type": "string"},
                {"name": "ipfs_cid", "type": "string"},
            ],
        },
        {
            "name": "submit_feedback",
            "accounts": [
                {"name": "feedback_board", "writable": True, "pda": {"seeds": BOARD_SEEDS}},
                {"name": "user", "writable": True, "signer": True},
                {"name": "system_program", "address": "11111111111111111111111111111111"},
            ],
            "args": [
                {"name": "board_id", "type": "string"},
            ],
        },
    ],
    "accounts": [{"name": "FeedbackBoard"}],
    "events": [],
    "errors": [],
    "types": [],
}

LEGACY_IDL = {
    "version": "0.1.0",
    "name": "vaults",
    "instructions": [
        {
            "name": "deposit",
            "accounts": [
                {"name": "vault", "isMut": True, "isSigner": False},
                {"name": "owner", "isMut": False, "isSigner": True},
                {"name": "treasury", "isMut": True, "isSigner": False,
                 "address": "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"},
                {"name": "price_feed", "isMut": False, "isSigner": False},
            ],
            "args": [{"name": "amount", "type": "u64"}],
        }
    ],
}


@pytest.fixture
def feedana_idl_data():
    return copy.deepcopy(FEEDANA_IDL)


@pytest.fixture
def legacy_idl_data():
    return copy.deepcopy(LEGACY_IDL)


@pytest.fixture
def parser():
    return IDLParser()


@pytest.fixture
def feedana_idl(parser, feedana_idl_data):
    return parser.parse(feedana_idl_data)


@pytest.fixture
def feedana_program():
    return ProgramMetadata(name="feedana", program_id=PROGRAM_ID, network="devnet")


@pytest.fixture
def write_json(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data))
        return path
    return _write
