"""
Shared constants: file locations, cluster endpoints and well-known programs.
"""

# Project layout
SOLANA_PROGRAMS_FILE = "SolanaPrograms.json"
PROGRAM_CLIENT_DIR = "./program/client"
PROGRAM_IDL_DIR = "./program/idl"

# Cluster RPC endpoints
MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"
DEVNET_RPC_URL = "https://api.devnet.solana.com"

# Known program IDs
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

# Seed path that is always bound to the caller's wallet
CREATOR_PARAM = "creator"
