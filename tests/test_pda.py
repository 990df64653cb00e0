import logging

import pytest

from anchorgen.analysis import IDLParser
from anchorgen.codegen.pda import PdaRegistry, emit_pda_functions
from anchorgen.errors import InvalidSchemaError


def config_idl(second_seeds=None):
    seeds = [{"kind": "const", "value": list(b"config")}]
    return IDLParser().parse({
        "instructions": [
            {
                "name": "initialize",
                "accounts": [{"name": "config", "writable": True, "pda": {"seeds": seeds}}],
                "args": [],
            },
            {
                "name": "update",
                "accounts": [{"name": "config", "writable": True,
                              "pda": {"seeds": second_seeds or seeds}}],
                "args": [],
            },
        ]
    })


def test_emits_one_function_per_account_name():
    registry = PdaRegistry()
    code = emit_pda_functions(config_idl(), registry)

    assert code.count("export const getConfigPDA") == 1
    assert registry.function_names == ["getConfigPDA"]
    assert registry.get("config").instruction == "initialize"


def test_function_shape(feedana_idl):
    code = emit_pda_functions(feedana_idl)

    assert code == (
        "// Get feedback_board PDA\n"
        "export const getFeedbackBoardPDA = (creator, board_id) => {\n"
        "  return PublicKey.findProgramAddressSync(\n"
        "    [\n"
        "      Buffer.from('feedback_board'),\n"
        "      creator.toBuffer(),\n"
        "      Buffer.from(board_id),\n"
        "    ],\n"
        "    PROGRAM_ID\n"
        "  );\n"
        "};\n"
        "\n"
    )


def test_seed_order_is_preserved():
    idl = IDLParser().parse({
        "instructions": [{
            "name": "open",
            "accounts": [{"name": "position", "pda": {"seeds": [
                {"kind": "arg", "path": "id"},
                {"kind": "account", "path": "owner"},
                {"kind": "const", "value": list(b"position")},
            ]}}],
            "args": [{"name": "id", "type": "u8"}],
        }]
    })
    code = emit_pda_functions(idl)
    assert code.index("Buffer.from([id])") < code.index("owner.toBuffer()") < code.index("Buffer.from('position')")


def test_conflicting_definitions_keep_first_and_warn(caplog):
    other = [{"kind": "const", "value": list(b"settings")}]
    with caplog.at_level(logging.WARNING):
        code = emit_pda_functions(config_idl(second_seeds=other))

    assert code.count("export const getConfigPDA") == 1
    assert "Buffer.from('config')" in code
    assert "Buffer.from('settings')" not in code
    assert "different seeds" in caplog.text


def test_registry_is_not_shared_between_calls():
    first, second = PdaRegistry(), PdaRegistry()
    emit_pda_functions(config_idl(), first)
    assert "getConfigPDA" in emit_pda_functions(config_idl(), second)


def test_unknown_seed_kind_aborts():
    idl = IDLParser().parse({
        "instructions": [{
            "name": "ix",
            "accounts": [{"name": "weird", "pda": {"seeds": [{"kind": "weird"}]}}],
            "args": [],
        }]
    })
    with pytest.raises(InvalidSchemaError, match="weird"):
        emit_pda_functions(idl)
