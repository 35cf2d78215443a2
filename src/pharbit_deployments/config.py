"""Runtime settings for the deployment command."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .constants import DEFAULT_NETWORK, DEFAULT_SOLC_VERSION, NETWORK_CONFIG
from .paths import resolve_project_root


@dataclass
class DeploySettings:
    """Settings resolved from arguments, environment and ``.env``."""

    project_root: Path
    rpc_url: str
    network: Optional[str] = None  # None means detect from the node's chain id
    private_key: Optional[str] = None
    confirmation_timeout: Optional[float] = None
    solc_version: str = DEFAULT_SOLC_VERSION
    log_level: str = "INFO"


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    timeout = float(value)
    if timeout <= 0:
        raise ValueError(f"CONFIRMATION_TIMEOUT must be positive, got {value!r}")
    return timeout


def _parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"LOG_LEVEL must be a logging level name, got {value!r}")
    return level


def load_settings(
    project_root: Optional[Union[Path, str]] = None,
    rpc_url: Optional[str] = None,
    network: Optional[str] = None,
    private_key: Optional[str] = None,
) -> DeploySettings:
    """
    Load deployment settings.

    Explicit arguments win over the environment. A ``.env`` file in the
    project root is loaded first without overriding variables already set.

    Args:
        project_root: Project directory (defaults to $PROJECT_ROOT, then cwd)
        rpc_url: RPC endpoint (defaults to $RPC_URL, then the network's default)
        network: Network name (defaults to $DEPLOY_NETWORK, else detected later)
        private_key: Deployer key (defaults to $DEPLOYER_PRIVATE_KEY)

    Raises:
        ValueError: If CONFIRMATION_TIMEOUT is not a positive number or
                    LOG_LEVEL is not a logging level name
    """
    if project_root is None:
        project_root = os.environ.get("PROJECT_ROOT")
    root = resolve_project_root(project_root)

    load_dotenv(root / ".env")

    if network is None:
        network = os.environ.get("DEPLOY_NETWORK") or None

    if rpc_url is None:
        rpc_url = os.environ.get("RPC_URL")
    if rpc_url is None:
        network_config = NETWORK_CONFIG.get(network or DEFAULT_NETWORK, NETWORK_CONFIG[DEFAULT_NETWORK])
        rpc_url = network_config["default_rpc_url"]

    if private_key is None:
        private_key = os.environ.get("DEPLOYER_PRIVATE_KEY") or None

    return DeploySettings(
        project_root=root,
        rpc_url=rpc_url,
        network=network,
        private_key=private_key,
        confirmation_timeout=_parse_timeout(os.environ.get("CONFIRMATION_TIMEOUT")),
        solc_version=os.environ.get("SOLC_VERSION", DEFAULT_SOLC_VERSION),
        log_level=_parse_log_level(os.environ.get("LOG_LEVEL") or "INFO"),
    )
