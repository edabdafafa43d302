"""Main API for hyperlane-fuel-deploy."""

import logging
from typing import Optional

from .artifacts import load_deployment_target
from .client import ChainClient, FuelClient
from .config import DeployConfig
from .constants import CONTRACT_CONFIG
from .contract_id import parse_hex, storage_root, to_hex
from .exceptions import ContractIdMismatchError, ToolchainError, TransactionFailedError
from .toolchain import Forc
from .types import CallResult, Contract, DeploymentTarget, DeployReport, DispatchMessage
from .wallet import Wallet

logger = logging.getLogger(__name__)


def deploy_or_get_contract(
    client: ChainClient, wallet: Wallet, target: DeploymentTarget
) -> Contract:
    """
    Return a handle to target, deploying it only if it is not on chain yet.

    The contract ID is derived from (bytecode, salt, storage root), so a
    contract that is already deployed is found without submitting anything.

    Args:
        client: Chain client
        wallet: Account paying for a deployment
        target: Contract to deploy

    Returns:
        Contract handle bound to the expected contract ID

    Raises:
        ContractIdMismatchError: If a fresh deployment lands at another ID
    """
    expected_id = to_hex(
        client.compute_contract_id(
            target.bytecode, target.salt, storage_root(target.storage_slots)
        )
    )

    if client.get_contract(expected_id) is not None:
        logger.info("Contract %s already deployed at %s", target.name, expected_id)
        return Contract(
            contract_id=expected_id,
            abi=target.abi,
            abi_path=target.abi_path,
            wallet=wallet,
            name=target.name,
        )

    logger.info("Deploying contract %s...", target.name)
    contract = client.deploy(target, wallet)

    if parse_hex(contract.contract_id, 32) != parse_hex(expected_id, 32):
        raise ContractIdMismatchError(
            f"Contract {target.name} deployed at {contract.contract_id}, "
            f"expected {expected_id}"
        )

    logger.info("Deployed contract %s at %s", target.name, contract.contract_id)
    return contract


def load_known_target(name: str, config: DeployConfig) -> DeploymentTarget:
    """
    Load one of the contracts listed in CONTRACT_CONFIG.

    Raises:
        KeyError: If name is not a known contract
        ArtifactNotFoundError: If its build artifacts are missing
    """
    contract_config = CONTRACT_CONFIG[name]
    return load_deployment_target(
        name,
        config.resolved_contracts_dir() / contract_config["project_dir"],
        contract_config["artifact"],
        config.salt_bytes,
        config.build_profile,
    )


def dispatch_message(
    client: ChainClient,
    mailbox: Contract,
    test_recipient: Optional[Contract] = None,
    message: Optional[DispatchMessage] = None,
) -> CallResult:
    """
    Submit a `dispatch` transaction and wait for it to finalize.

    With a test recipient, the call goes through the recipient's `dispatch`,
    which forwards to the mailbox; the mailbox is declared as a callee so the
    inter-contract call is allowed. Without one, the mailbox is called directly.

    Raises:
        TransactionFailedError: If the transaction does not succeed
    """
    if message is None:
        message = DispatchMessage()

    if test_recipient is not None:
        result = client.submit(
            test_recipient,
            "dispatch",
            [
                list(message.body),
                mailbox.contract_id,
                message.destination_domain,
                message.recipient,
            ],
            callees=[mailbox],
        )
    else:
        result = client.submit(
            mailbox,
            "dispatch",
            [message.destination_domain, message.recipient, list(message.body)],
        )

    if not result.succeeded:
        raise TransactionFailedError(
            f"dispatch transaction {result.transaction_id} failed: {result.raw_output.strip()}"
        )

    logger.info("Dispatched message %s", result.transaction_id or result.value)
    for receipt in result.receipts:
        logger.info("  receipt: %s %s", receipt.get("receiptType"), receipt.get("id") or "")
    return result


def latest_checkpoint(client: ChainClient, mailbox: Contract) -> Optional[str]:
    """
    Read the mailbox's latest checkpoint without submitting a transaction.

    A mailbox that has not seen any message has no checkpoint and the read
    reverts; that case is logged and None is returned.
    """
    try:
        result = client.simulate(mailbox, "latest_checkpoint")
    except (ToolchainError, TransactionFailedError) as e:
        logger.info(
            "Error getting latest checkpoint - this is expected if no messages "
            "have been sent yet (%s)",
            e,
        )
        return None

    logger.info("Current latest checkpoint: %s", result.value)
    return result.value


def run(
    config: DeployConfig,
    client: Optional[ChainClient] = None,
    wallet: Optional[Wallet] = None,
) -> DeployReport:
    """
    Deploy the mailbox and test recipient if needed, optionally dispatch a
    test message, then read back the latest checkpoint.

    Args:
        config: Run configuration
        client: Chain client (defaults to a FuelClient for config.node_url)
        wallet: Signing account (defaults to config.private_key)

    Returns:
        DeployReport
    """
    if client is None:
        client = FuelClient(
            config.node_url,
            forc=Forc(config.node_url, config.forc_binary),
            timeout=config.timeout,
            build_profile=config.build_profile,
        )
    if wallet is None:
        wallet = Wallet.from_private_key(config.private_key)

    client.connect()
    logger.info("Using account %s", wallet.address)
    balance = client.balance(wallet.address)
    if balance is not None:
        logger.info("  balance: %d", balance)

    mailbox = deploy_or_get_contract(client, wallet, load_known_target("mailbox", config))
    test_recipient = deploy_or_get_contract(
        client, wallet, load_known_target("test_recipient", config)
    )

    logger.info("Contract IDs:")
    logger.info("  mailbox: %s", mailbox.contract_id)
    logger.info("  testRecipient: %s", test_recipient.contract_id)

    report = DeployReport(mailbox=mailbox, test_recipient=test_recipient)

    if config.send_message:
        try:
            report.dispatch = dispatch_message(client, mailbox, test_recipient)
        except (ToolchainError, TransactionFailedError) as e:
            logger.error("Error dispatching message: %s", e)

    report.checkpoint = latest_checkpoint(client, mailbox)
    return report
