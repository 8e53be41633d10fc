"""
Client helpers - Centralized creation of GenLayer SDK client instances.
"""

import logging
from typing import Optional

from eth_account import Account

from genlayer_cli.commands.config_store import ConfigFileManager
from genlayer_cli.commands.constants import NETWORK_KEY
from genlayer_cli.commands.keypair import KeypairManager
from genlayer_cli.commands.networks import NetworkDescriptor, network_from_config

logger = logging.getLogger(__name__)


def get_network(config: ConfigFileManager) -> NetworkDescriptor:
    """Return the network selected with ``genlayer network`` (localnet by default)."""
    return network_from_config(config.get_config_by_key(NETWORK_KEY))


def get_client(config: ConfigFileManager, rpc_url: Optional[str] = None):
    """Create a GenLayer client signed with the stored keypair.

    Args:
        config: Config store holding the keypair path and selected network.
        rpc_url: Optional endpoint overriding the network default.

    Raises:
        ConfigurationError: If no keypair has been generated.
    """
    from genlayer_py import chains, create_client

    network = get_network(config)
    private_key = KeypairManager(config).require_private_key()
    account = Account.from_key(private_key)

    endpoint = rpc_url or network.rpc_url
    logger.debug("Creating GenLayer client for %s at %s", network.alias, endpoint)
    return create_client(
        chain=getattr(chains, network.sdk_chain),
        endpoint=endpoint,
        account=account,
    )


def get_transaction_status(name: str):
    """Resolve a TransactionStatus member by name (e.g. "ACCEPTED")."""
    from genlayer_py.types import TransactionStatus

    return TransactionStatus[name]
