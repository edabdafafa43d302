"""Configuration constants for hyperlane-fuel-deploy."""

# Local fuel-core node started with default settings
DEFAULT_NODE_URL = "http://127.0.0.1:4000/graphql"

# First default account of a local fuel-core node:
#   Address: 0x6b63804cfbf9856e68e5b6e7aef238dc8311ec55bec04df774003a2c96e0418e
DEFAULT_PRIVATE_KEY = "0xde97d8624a438121b86a1956544bd72ed68cd69f2c99555b08b1e8c51ffd511c"

# Fixed salt so the contract ID only changes when bytecode or storage changes
DEFAULT_CONTRACT_SALT = "0x" + "00" * 32

# Base asset, used to pay fees
BASE_ASSET_ID = "0x" + "00" * 32

DEFAULT_CONTRACTS_DIR = "../contracts"
DEFAULT_BUILD_PROFILE = "debug"
DEFAULT_FORC_BINARY = "forc"
DEFAULT_TIMEOUT = 30

# Positional command that enables the dispatch step
SEND_MESSAGE_COMMAND = "send-message"

# Known contracts, keyed by role
# project_dir is relative to the contracts directory; artifact is the forc
# package name used for out/<profile>/<artifact>.bin
CONTRACT_CONFIG = {
    "mailbox": {
        "project_dir": "hyperlane-mailbox",
        "artifact": "hyperlane-mailbox",
    },
    "test_recipient": {
        "project_dir": "hyperlane-msg-recipient-test",
        "artifact": "hyperlane-msg-recipient-test",
    },
}

# Test message dispatched in send-message mode
TEST_DESTINATION_DOMAIN = 420
TEST_RECIPIENT = "0x6900000000000000000000000000000000000000000000000000000000000069"
TEST_MESSAGE_BODY = [1, 2, 3, 5, 6]
