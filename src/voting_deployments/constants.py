"""Configuration constants for voting-deployments library."""

# Gas units added on top of the node's estimate before submission
GAS_BUFFER = 50_000

# Below this deployer balance (in wei) preflight warns: 0.01 ether
MIN_BALANCE_WEI = 10**16

# Contracts deployed by default, in deployment order
SIMPLE_VOTING = "SimpleVoting"
ENCRYPTED_VOTING = "EncryptedSimpleVotingSimplified"

# Default constructor parameters (ignition module "VotingContracts")
IGNITION_MODULE = "VotingContracts"
DEFAULT_PARAMETERS = {
    "description": "FHEVM Implementation Vote",
    "encryptedDescription": "FHEVM Vote (Encrypted)",
    "votingDurationMinutes": 60,
}

# Read-only accessor exposed by both voting contracts
STATUS_FUNCTION = "getVotingInfo"
# getVotingInfo() returns (description, endTime, isActive, ...)
STATUS_ACTIVE_INDEX = 2

# BIP-44 path of the first Ethereum account
DEFAULT_ACCOUNT_PATH = "m/44'/60'/0'/0/0"

# Public endpoint used by the key provisioner when $SEP_RPC_URL is not set
DEFAULT_BALANCE_RPC_URL = "https://ethereum-sepolia-rpc.publicnode.com"

# Network configuration based on ethereum-lists/chains
NETWORK_CONFIG = {
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "short_name": "sep",  # EIP-3770
        "block_explorer_url": "https://sepolia.etherscan.io",
        "default_rpc_env": "SEP_RPC_URL",
        "faucets": [
            "https://sepoliafaucet.com/",
            "https://faucet.sepolia.dev/",
        ],
    },
    "localhost": {
        "chain_id": 31337,
        "chain_name": "Hardhat",
        "short_name": "hh",
        "block_explorer_url": None,
        "default_rpc_env": "LOCAL_RPC_URL",
        "default_rpc_url": "http://127.0.0.1:8545",
        "faucets": [],
    },
}
