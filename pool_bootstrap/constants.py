from __future__ import annotations

from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent
PACKAGE_PATH = BASE_DIR / "move_dex"
CONFIG_PATH = BASE_DIR / "frontend" / "src" / "config.ts"
LOG_FILE = BASE_DIR / "deploy.log"
DEFAULT_ENV_FILE = BASE_DIR / ".env"

# Left behind by `sui client publish`; the CLI refuses to republish while it exists
PUBLISHED_RECORD = "Published.toml"
MOVE_MANIFEST = "Move.toml"

SUI_BIN = "sui"
SUCCESS_STATUS = "success"

SUI_FRAMEWORK = "0x2"
SUI_TYPE = "0x2::sui::SUI"
SUI_COIN_TYPE = f"{SUI_FRAMEWORK}::coin::Coin<{SUI_TYPE}>"

TOKEN_MODULE = "faucet_coin"
TOKEN_STRUCT = "FAUCET_COIN"
AMM_MODULE = "amm"
CAPABILITY_MARKER = "TreasuryCap"

# Amounts are in MIST / token base units
MINT_AMOUNT = 1_000_000_000
SPLIT_AMOUNT = 1_000_000_000
GAS_BUDGET = 200_000_000
MERGE_GAS_BUDGET = 50_000_000
SPLIT_GAS_BUDGET = 50_000_000

MAX_MERGE_BATCH = 50
U64_MAX = 2**64 - 1

PROPAGATION_ATTEMPTS = 6
PROPAGATION_DELAY = 0.5
PROPAGATION_BACKOFF = 2.0
FIXED_PUBLISH_DELAY = 2.0

CONFIG_NAMES = ("PACKAGE_ID", "POOL_ID", "CUSTOM_TOKEN_TYPE")
PLACEHOLDER_MARKERS = ("YOUR", "REPLACE", "<", ">")


__all__ = [
    "BASE_DIR",
    "PACKAGE_PATH",
    "CONFIG_PATH",
    "LOG_FILE",
    "DEFAULT_ENV_FILE",
    "PUBLISHED_RECORD",
    "MOVE_MANIFEST",
    "SUI_BIN",
    "SUCCESS_STATUS",
    "SUI_FRAMEWORK",
    "SUI_TYPE",
    "SUI_COIN_TYPE",
    "TOKEN_MODULE",
    "TOKEN_STRUCT",
    "AMM_MODULE",
    "CAPABILITY_MARKER",
    "MINT_AMOUNT",
    "SPLIT_AMOUNT",
    "GAS_BUDGET",
    "MERGE_GAS_BUDGET",
    "SPLIT_GAS_BUDGET",
    "MAX_MERGE_BATCH",
    "U64_MAX",
    "PROPAGATION_ATTEMPTS",
    "PROPAGATION_DELAY",
    "PROPAGATION_BACKOFF",
    "FIXED_PUBLISH_DELAY",
    "CONFIG_NAMES",
    "PLACEHOLDER_MARKERS",
]
