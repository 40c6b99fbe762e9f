"""
Wallet Manager
Selects the deploying account: a private key from the environment, or the
node's first unlocked account (local Hardhat/Ganache nodes)
"""

from typing import Dict, Optional
from decimal import Decimal
from web3 import Web3
from eth_account import Account
from loguru import logger

from blockchain.exceptions import InsufficientFundsError


class WalletManager:
    """
    Holds the account that signs or sends the deployment transaction
    """

    def __init__(self, w3: Web3, private_key: Optional[str] = None):
        """
        Initialize wallet manager

        Args:
            w3: Web3 instance
            private_key: Hex private key; None to use the node's unlocked account
        """
        self.w3 = w3

        if private_key:
            self.account = Account.from_key(private_key)
            self.address = self.account.address
        else:
            accounts = w3.eth.accounts
            if not accounts:
                raise ValueError("No private key configured and the node exposes no unlocked accounts")
            self.account = None
            self.address = accounts[0]

        logger.info(f"Deploying from: {self.address}")

    @property
    def can_sign(self) -> bool:
        """True when transactions are signed locally"""
        return self.account is not None

    def sign_transaction(self, transaction: Dict):
        """
        Sign a transaction with the deploying key

        Args:
            transaction: Transaction dict

        Returns:
            Signed transaction
        """
        if not self.can_sign:
            raise ValueError("Node-managed account cannot sign locally")

        try:
            return self.account.sign_transaction(transaction)
        except Exception as e:
            logger.error(f"Error signing transaction: {e}")
            raise

    def get_balance(self) -> Decimal:
        """Native balance of the deploying account in ether units"""
        balance_wei = self.w3.eth.get_balance(self.address)
        return Decimal(str(self.w3.from_wei(balance_wei, 'ether')))

    def ensure_balance(self, min_balance_eth: float) -> Decimal:
        """
        Check the deploying account can pay for deployment

        Args:
            min_balance_eth: Minimum balance; 0 disables the check

        Returns:
            Current balance
        """
        balance = self.get_balance()
        logger.info(f"Account balance: {balance}")

        if min_balance_eth and balance < Decimal(str(min_balance_eth)):
            raise InsufficientFundsError(
                f"Insufficient balance for deployment: {balance} (need at least {min_balance_eth})"
            )

        return balance
