"""
Unit Tests for the Transaction Builder and Wallet Manager
"""

import pytest
from decimal import Decimal
from unittest.mock import MagicMock, Mock
from eth_account import Account

from blockchain.exceptions import InsufficientFundsError
from blockchain.transaction_builder import TransactionBuilder
from deployer.wallet_manager import WalletManager

# Hardhat's first well-known development key
HARDHAT_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
HARDHAT_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture
def sender():
    wallet = Mock()
    wallet.address = HARDHAT_ADDRESS
    return wallet


@pytest.fixture
def constructor():
    constructor = Mock()
    constructor.estimate_gas.return_value = 100000
    constructor.build_transaction.side_effect = lambda params: dict(params, data='0x6080')
    return constructor


class TestTransactionBuilder:
    """Test deployment transaction construction"""

    def test_legacy_gas_price(self, sender, constructor):
        w3 = MagicMock()
        w3.eth.get_transaction_count.return_value = 7
        w3.eth.get_block.return_value = {'number': 1}
        w3.eth.gas_price = 30000000000

        builder = TransactionBuilder(w3, sender, chain_id=31337, gas_buffer=1.5)
        tx = builder.build_deploy_tx(constructor)

        w3.eth.get_transaction_count.assert_called_once_with(HARDHAT_ADDRESS, 'pending')
        assert tx['nonce'] == 7
        assert tx['gas'] == 150000
        assert tx['gasPrice'] == 30000000000
        assert tx['chainId'] == 31337
        assert 'maxFeePerGas' not in tx

    def test_eip1559_fees(self, sender, constructor):
        w3 = MagicMock()
        w3.eth.get_transaction_count.return_value = 0
        w3.eth.get_block.return_value = {'baseFeePerGas': 10}
        w3.eth.max_priority_fee = 2

        tx = TransactionBuilder(w3, sender, chain_id=137).build_deploy_tx(constructor)

        assert tx['maxFeePerGas'] == 22
        assert tx['maxPriorityFeePerGas'] == 2
        assert 'gasPrice' not in tx

    def test_gas_estimate_failure_uses_default(self, sender, constructor):
        w3 = MagicMock()
        w3.eth.get_block.return_value = {}
        w3.eth.gas_price = 1
        constructor.estimate_gas.side_effect = ValueError("execution reverted")

        builder = TransactionBuilder(w3, sender, chain_id=1, default_gas_limit=2500000)

        assert builder.build_deploy_tx(constructor)['gas'] == 2500000

    def test_chain_id_from_node(self, sender, constructor):
        w3 = MagicMock()
        w3.eth.get_block.return_value = {}
        w3.eth.gas_price = 1
        w3.eth.chain_id = 80002

        tx = TransactionBuilder(w3, sender).build_deploy_tx(constructor)

        assert tx['chainId'] == 80002


class TestWalletManager:
    """Test deploying account selection"""

    def test_private_key_account(self):
        wallet = WalletManager(MagicMock(), HARDHAT_KEY)

        assert wallet.can_sign
        assert wallet.address == HARDHAT_ADDRESS

    def test_node_account(self):
        w3 = MagicMock()
        w3.eth.accounts = ["0x70997970C51812dc3A010C7d01b50e0d17dc79C8"]

        wallet = WalletManager(w3)

        assert not wallet.can_sign
        assert wallet.address == "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

    def test_no_key_and_no_node_accounts(self):
        w3 = MagicMock()
        w3.eth.accounts = []

        with pytest.raises(ValueError):
            WalletManager(w3)

    def test_node_account_cannot_sign(self):
        w3 = MagicMock()
        w3.eth.accounts = [HARDHAT_ADDRESS]

        with pytest.raises(ValueError):
            WalletManager(w3).sign_transaction({'nonce': 0})

    def test_signed_transaction_recovers_sender(self):
        wallet = WalletManager(MagicMock(), HARDHAT_KEY)
        tx = {
            'nonce': 0,
            'gas': 100000,
            'gasPrice': 1000000000,
            'value': 0,
            'data': '0x6080',
            'chainId': 31337
        }

        signed = wallet.sign_transaction(tx)

        assert Account.recover_transaction(signed.raw_transaction) == HARDHAT_ADDRESS

    def test_balance_check_disabled_by_default(self):
        w3 = MagicMock()
        w3.eth.accounts = [HARDHAT_ADDRESS]
        w3.eth.get_balance.return_value = 0
        w3.from_wei.return_value = Decimal('0')

        assert WalletManager(w3).ensure_balance(0) == Decimal('0')

    def test_insufficient_balance(self):
        w3 = MagicMock()
        w3.eth.accounts = [HARDHAT_ADDRESS]
        w3.eth.get_balance.return_value = 10 ** 16
        w3.from_wei.return_value = Decimal('0.01')

        with pytest.raises(InsufficientFundsError):
            WalletManager(w3).ensure_balance(0.1)
