"""
Transaction Builder
Constructs contract deployment transactions
"""

from typing import Dict, Optional
from web3 import Web3
from loguru import logger


class TransactionBuilder:
    """
    Builds signed-deployment transactions: nonce, gas limit, fees, chain id
    """

    def __init__(
        self,
        w3: Web3,
        wallet_manager,
        chain_id: Optional[int] = None,
        gas_buffer: float = 1.2,
        default_gas_limit: int = 3000000
    ):
        """
        Initialize Transaction Builder

        Args:
            w3: Web3 instance
            wallet_manager: Wallet manager for the sender address
            chain_id: Target chain id (read from the node if None)
            gas_buffer: Multiplier applied to the gas estimate
            default_gas_limit: Gas limit used when estimation fails
        """
        self.w3 = w3
        self.wallet_manager = wallet_manager
        self.chain_id = chain_id
        self.gas_buffer = gas_buffer
        self.default_gas_limit = default_gas_limit

    def build_deploy_tx(self, constructor) -> Dict:
        """
        Build transaction for a contract constructor call

        Args:
            constructor: web3 ContractConstructor (Contract.constructor(*args))

        Returns:
            Transaction dict ready for signing
        """
        sender = self.wallet_manager.address

        nonce = self.w3.eth.get_transaction_count(sender, 'pending')
        gas_limit = self._estimate_gas(constructor, sender)

        tx_params = {
            'from': sender,
            'nonce': nonce,
            'gas': gas_limit,
            'chainId': self.chain_id if self.chain_id is not None else self.w3.eth.chain_id
        }
        tx_params.update(self._fee_params())

        transaction = constructor.build_transaction(tx_params)

        logger.info(f"Gas limit: {gas_limit}")
        return transaction

    def _estimate_gas(self, constructor, sender: str) -> int:
        """Gas estimate with buffer; default limit if the node cannot estimate"""
        try:
            gas_estimate = constructor.estimate_gas({'from': sender})
            return int(gas_estimate * self.gas_buffer)
        except Exception as e:
            logger.warning(f"Gas estimation failed: {e}, using default")
            return self.default_gas_limit

    def _fee_params(self) -> Dict[str, int]:
        """
        EIP-1559 fee fields when the chain reports a base fee,
        legacy gasPrice otherwise
        """
        latest = self.w3.eth.get_block('latest')
        base_fee = latest.get('baseFeePerGas')

        if base_fee is None:
            gas_price = self.w3.eth.gas_price
            logger.info(f"Gas price: {self.w3.from_wei(gas_price, 'gwei')} gwei")
            return {'gasPrice': gas_price}

        priority_fee = self.w3.eth.max_priority_fee
        max_fee = base_fee * 2 + priority_fee

        logger.info(
            f"Max fee: {self.w3.from_wei(max_fee, 'gwei')} gwei "
            f"(priority {self.w3.from_wei(priority_fee, 'gwei')} gwei)"
        )
        return {
            'maxFeePerGas': max_fee,
            'maxPriorityFeePerGas': priority_fee
        }
