"""Test configuration and utilities for deploy-profiles."""

import logging
import sys
from pathlib import Path

# Add the src directory to the path so we can import the package modules
test_dir = Path(__file__).parent
project_dir = test_dir.parent
src_dir = project_dir / "src"
sys.path.insert(0, str(src_dir))

# Configure logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

# Suppress noisy logs during testing
logging.getLogger('aiohttp').setLevel(logging.WARNING)
logging.getLogger('asyncio').setLevel(logging.WARNING)

# Well-known development mnemonic and its first account (m/44'/60'/0'/0/0)
TEST_MNEMONIC = 'test test test test test test test test test test test junk'
TEST_MNEMONIC_ADDRESS = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'
TEST_MNEMONIC_ADDRESS_1 = '0x70997970C51812dc3A010C7d01b50e0d17dc79C8'
TEST_PRIVATE_KEY = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'

TEST_ADDRESSES = {
    'sender': '0xdfffc978720962e2770bc7ea5c1d304b99862e20',
    'other': '0x1111111111111111111111111111111111111111',
    'invalid': '0xinvalid'
}
