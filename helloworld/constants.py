"""helloworld constants and defaults."""

from pathlib import Path

DEFAULT_RPC_URL = "http://localhost:8899"

CLUSTER_URLS = {
    "localnet": "http://127.0.0.1:8899",
    "devnet": "https://api.devnet.solana.com",
    "mainnet": "https://api.mainnet-beta.solana.com",
}

CLI_CONFIG_ENV_VARS = ("SOLANA_CONFIG", "SOLANA_CONFIG_FILE")
CLI_CONFIG_RELPATH = Path(".config") / "solana" / "cli" / "config.yml"

# Seed for the greeting account address, see `solana create-address-with-seed`.
GREETING_SEED = "hello"
MAX_SEED_LEN = 32

# Build output of the on-chain program.
PROGRAM_PATH = Path("dist") / "program"
PROGRAM_SO_PATH = PROGRAM_PATH / "helloworld.so"
PROGRAM_KEYPAIR_PATH = PROGRAM_PATH / "helloworld-keypair.json"

# Fee budget: rent exemption plus this many signatures, enough for repeated runs.
FEE_SIGNATURE_MULTIPLIER = 100
DEFAULT_LAMPORTS_PER_SIGNATURE = 5000

KEYPAIR_BYTES = 64
U32_MAX = 2**32 - 1

DEFAULT_MESSAGE = "Hello1234567"
