"""PharmaTracker deployment workflow and command entry point."""

import functools
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from web3 import Web3

from .chain import ChainClient, Web3ChainClient
from .compiler import load_compiled_contract
from .config import DeploySettings, load_settings
from .constants import CONTRACT_NAME, DEFAULT_CONSUMER_DIRS
from .exceptions import DeploymentError, NoSignerAvailableError
from .paths import get_artifact_path, get_consumer_dirs, get_deployments_dir
from .publisher import copy_artifact
from .records import build_deployment_record, format_timestamp, write_deployment_record
from .rpc import detect_network
from .types import (
    CompiledContract,
    DeployedContract,
    DeploymentRecord,
    RunReport,
    Stage,
    StageResult,
    StageStatus,
)
from .verifier import verify_deployment

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RunContext:
    """Explicit inputs of one deployment run."""

    project_root: Path
    network: str
    client: ChainClient
    contract_loader: Callable[[], CompiledContract]
    contract_name: str = CONTRACT_NAME
    consumer_dirs: Sequence[str] = DEFAULT_CONSUMER_DIRS
    confirmation_timeout: Optional[float] = None  # seconds, None waits indefinitely
    clock: Callable[[], datetime] = field(default=_utc_now)

    @property
    def deployments_dir(self) -> Path:
        return get_deployments_dir(self.project_root)

    @property
    def artifact_path(self) -> Path:
        return get_artifact_path(self.project_root, self.contract_name)

    @property
    def consumer_paths(self) -> List[Path]:
        return get_consumer_dirs(self.project_root, self.consumer_dirs)


def resolve_signer(client: ChainClient) -> tuple[str, int]:
    """
    Pick the first signer and look up its balance.

    A zero balance only logs a warning; the deployment is still attempted.

    Returns:
        Tuple of (address, balance_wei)

    Raises:
        NoSignerAvailableError: If the client exposes no signers
    """
    signers = client.get_signers()
    if not signers:
        raise NoSignerAvailableError("No signer available from the chain client")

    deployer = signers[0]
    logger.info("Deploying contracts with account: %s", deployer)

    balance = client.get_balance(deployer)
    logger.info("Account balance: %s ETH", Web3.from_wei(balance, "ether"))
    if balance == 0:
        logger.warning(
            "Account has no ETH. Make sure the node is running with funded accounts."
        )

    return deployer, balance


def deploy_contract(
    client: ChainClient,
    contract: CompiledContract,
    signer: str,
    timeout: Optional[float] = None,
) -> DeployedContract:
    """
    Deploy ``contract`` from ``signer`` and wait for confirmation.

    Raises:
        DeploymentFailedError: If the transaction is rejected, reverts or times out
    """
    logger.info("Deploying %s contract...", contract.name)
    deployed = client.deploy(contract, signer, timeout)
    logger.info("%s deployed to: %s", contract.name, deployed.address)
    return deployed


def log_summary(record: DeploymentRecord) -> None:
    logger.info("Deployment summary:")
    logger.info("  Network: %s", record.network)
    logger.info("  Deployer: %s", record.deployer)
    logger.info("  Timestamp: %s", record.timestamp)
    logger.info("  Contract addresses:")
    for name, address in record.contracts.items():
        logger.info("    %s: %s", name, address)


def _run_fatal(report: RunReport, stage: Stage, func: Callable[..., Any], *args: Any) -> Any:
    """Run a fatal stage, recording its outcome; DeploymentError is re-raised."""
    try:
        value = func(*args)
    except DeploymentError as e:
        report.results.append(StageResult(stage, StageStatus.FAILED, str(e), error=e))
        raise
    report.results.append(StageResult(stage, StageStatus.OK, detail=value))
    return value


def run_deployment(ctx: RunContext) -> RunReport:
    """
    Run the full workflow: load, resolve signer, deploy, record, publish, verify.

    Fatal stages stop the run at their first DeploymentError; the report's
    ``exit_code`` is then 1. Artifact copy and smoke checks only add
    WARNING results. A failed deployment writes no record.

    Returns:
        RunReport with one or more results per stage reached
    """
    report = RunReport()
    logger.info("Starting %s deployment on network '%s'", ctx.contract_name, ctx.network)

    try:
        contract = _run_fatal(report, Stage.LOAD_CONTRACT, ctx.contract_loader)
        deployer, _ = _run_fatal(report, Stage.RESOLVE_SIGNER, resolve_signer, ctx.client)
        deployed = _run_fatal(
            report,
            Stage.DEPLOY,
            deploy_contract,
            ctx.client,
            contract,
            deployer,
            ctx.confirmation_timeout,
        )
        report.contract = deployed

        record = _run_fatal(
            report,
            Stage.BUILD_RECORD,
            functools.partial(
                build_deployment_record,
                network=ctx.network,
                deployer=deployer,
                address=deployed.address,
                abi=contract.abi,
                contract_name=ctx.contract_name,
                timestamp=format_timestamp(ctx.clock()),
            ),
        )
        report.record = record

        paths = _run_fatal(
            report, Stage.WRITE_RECORD, write_deployment_record, record, ctx.deployments_dir
        )
        report.written_paths.extend(paths)
    except DeploymentError as e:
        logger.error("Deployment failed: %s", e)
        return report

    log_summary(record)

    logger.info("Copying ABI to consumer directories...")
    report.results.extend(copy_artifact(ctx.artifact_path, ctx.consumer_paths, ctx.contract_name))
    report.written_paths.extend(
        r.detail for r in report.results_for(Stage.COPY_ARTIFACT) if r.ok
    )

    report.results.extend(verify_deployment(deployed, deployer))

    logger.info("Deployment completed successfully")
    return report


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def build_context(settings: DeploySettings) -> RunContext:
    """
    Connect to the node and assemble the run context.

    Raises:
        RpcError: If the node is unreachable or network detection fails
    """
    client = Web3ChainClient(settings.rpc_url, settings.private_key)
    client.ensure_connected()

    network = settings.network or detect_network(settings.rpc_url)

    return RunContext(
        project_root=settings.project_root,
        network=network,
        client=client,
        contract_loader=functools.partial(
            load_compiled_contract,
            settings.project_root,
            CONTRACT_NAME,
            settings.solc_version,
        ),
        confirmation_timeout=settings.confirmation_timeout,
    )


def main() -> int:
    """Entry point of ``pharbit-deploy``; returns the process exit code."""
    try:
        settings = load_settings()
    except ValueError as e:
        configure_logging()
        logger.error("Invalid configuration: %s", e)
        return 1

    configure_logging(settings.log_level)

    try:
        report = run_deployment(build_context(settings))
    except Exception:
        logger.exception("Deployment script failed")
        return 1

    if report.succeeded:
        logger.info("Deployment script completed successfully")
    else:
        logger.error("Deployment script failed")
    return report.exit_code
