from anchorgen.analysis import IDLParser
from anchorgen.codegen.instructions import emit_instruction_function, plan_instruction


def test_create_feedback_board_wrapper(feedana_idl):
    code = emit_instruction_function(feedana_idl.instructions[0])

    assert code == (
        "// createFeedbackBoard on-chain\n"
        "export const createFeedbackBoard = async (wallet, board_id, ipfs_cid) => {\n"
        "  const program = getProgram(wallet);\n"
        "  const [feedbackBoardPda] = getFeedbackBoardPDA(wallet.publicKey, board_id);\n"
        "\n"
        "  const tx = await program.methods\n"
        "    .createFeedbackBoard(board_id, ipfs_cid)\n"
        "    .accounts({\n"
        "      feedbackBoard: feedbackBoardPda, // writable\n"
        "      creator: wallet.publicKey, // writable // signer\n"
        "      systemProgram: anchor.web3.SystemProgram.programId,\n"
        "    })\n"
        "    .rpc();\n"
        "\n"
        "  return { tx, pda: feedbackBoardPda };\n"
        "};\n"
        "\n"
    )


def test_legacy_accounts_without_pdas(parser, legacy_idl_data):
    idl = parser.parse(legacy_idl_data)
    code = emit_instruction_function(idl.instructions[0])

    assert "export const deposit = async (wallet, amount) => {" in code
    assert "    .deposit(amount)\n" in code
    assert "      vault: vault, // TODO: Add proper account // writable\n" in code
    assert "      owner: wallet.publicKey, // signer\n" in code
    assert "      treasury: new PublicKey('ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL'), // writable\n" in code
    assert "      priceFeed: priceFeed, // TODO: Add proper account\n" in code
    assert "  return tx;\n" in code


def test_params_args_first_then_derivation_params():
    idl = IDLParser().parse({
        "instructions": [{
            "name": "open_position",
            "accounts": [
                {"name": "position", "pda": {"seeds": [
                    {"kind": "account", "path": "pool.mint"},
                    {"kind": "account", "path": "creator"},
                    {"kind": "arg", "path": "size"},
                ]}},
                {"name": "ticket", "pda": {"seeds": [
                    {"kind": "account", "path": "oracle"},
                    {"kind": "account", "path": "mint"},
                ]}},
            ],
            "args": [{"name": "size", "type": "u64"}, {"name": "side", "type": "u8"}],
        }]
    })
    plan = plan_instruction(idl.instructions[0])

    assert plan.params == ["size", "side", "mint", "oracle"]
    assert plan.pda_calls == [
        ("position", "positionPda", ["mint", "wallet.publicKey", "size"]),
        ("ticket", "ticketPda", ["oracle", "mint"]),
    ]
    assert plan.primary_pda == "positionPda"

    code = emit_instruction_function(idl.instructions[0])
    assert "async (wallet, size, side, mint, oracle) =>" in code
    assert "  return { tx, pda: positionPda };\n" in code


def test_pda_binding_wins_over_signer():
    idl = IDLParser().parse({
        "instructions": [{
            "name": "ix",
            "accounts": [{"name": "escrow", "signer": True,
                          "pda": {"seeds": [{"kind": "const", "value": [1]}]}}],
            "args": [],
        }]
    })
    code = emit_instruction_function(idl.instructions[0])
    assert "      escrow: escrowPda, // signer\n" in code


def test_signer_wins_over_fixed_address():
    idl = IDLParser().parse({
        "instructions": [{
            "name": "ix",
            "accounts": [{"name": "payer", "signer": True,
                          "address": "11111111111111111111111111111111"}],
            "args": [],
        }]
    })
    code = emit_instruction_function(idl.instructions[0])
    assert "      payer: wallet.publicKey, // signer\n" in code
