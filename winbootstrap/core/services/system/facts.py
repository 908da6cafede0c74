"""
Fact gathering — read the host into an ``EnvironmentFacts``.

Every reading is independent and guarded: a failing reading becomes
``None`` (or False) instead of stopping the others.  Nothing here
changes the machine.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import sys

from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.action import Action
from winbootstrap.core.models.check import EnvironmentFacts
from winbootstrap.core.services.system.windows import is_admin, windows_build

logger = logging.getLogger(__name__)

_TTL_RE = re.compile(r"ttl[=:]\s*\d+", re.IGNORECASE)


def system_volume(environ: dict[str, str] | None = None) -> str:
    """Root of the system volume (``C:\\`` on Windows, ``/`` elsewhere)."""
    env = os.environ if environ is None else environ
    if sys.platform == "win32":
        return env.get("SystemDrive", "C:") + "\\"
    return os.path.abspath(os.sep)


def ping_argv(host: str, count: int, timeout_s: int) -> list[str]:
    """Platform ping command: ``count`` echo requests to ``host``."""
    if sys.platform == "win32":
        return ["ping", "-n", str(count), "-w", str(timeout_s * 1000), host]
    return ["ping", "-c", str(count), "-W", str(timeout_s), host]


def ping_replied(output: str) -> bool:
    """Whether ping output contains at least one echo reply."""
    return bool(_TTL_RE.search(output))


def read_free_bytes(volume: str) -> int | None:
    try:
        return shutil.disk_usage(volume).free
    except OSError as e:
        logger.debug("disk_usage(%s) failed: %s", volume, e)
        return None


def read_shell_major(config: BootstrapConfig, registry: AdapterRegistry) -> int | None:
    receipt = registry.execute_action(
        Action(
            id="probe:shell-version",
            adapter="powershell",
            params={"script": "$PSVersionTable.PSVersion.Major", "bypass": False},
        ),
        timeout=config.command_timeout,
    )
    if not receipt.ok:
        return None
    match = re.search(r"\d+", receipt.output)
    return int(match.group()) if match else None


def read_execution_policy(config: BootstrapConfig, registry: AdapterRegistry) -> str | None:
    receipt = registry.execute_action(
        Action(
            id="probe:execution-policy",
            adapter="powershell",
            params={"script": "Get-ExecutionPolicy", "bypass": False},
        ),
        timeout=config.command_timeout,
    )
    if not receipt.ok:
        return None
    policy = receipt.output.strip().splitlines()
    return policy[-1].strip() if policy else None


def read_ping(config: BootstrapConfig, registry: AdapterRegistry) -> bool:
    receipt = registry.execute_action(
        Action(
            id="probe:ping",
            adapter="shell",
            params={"argv": ping_argv(config.network_host, config.ping_count,
                                      config.network_timeout)},
        ),
        timeout=config.network_timeout * (config.ping_count + 1),
    )
    # ping exits non-zero when some requests were lost; look at replies
    return ping_replied(receipt.output)


def gather_facts(config: BootstrapConfig, registry: AdapterRegistry) -> EnvironmentFacts:
    """Read every fact the probe checks need."""
    volume = system_volume()
    facts = EnvironmentFacts(
        is_admin=is_admin(),
        os_build=windows_build(),
        shell_major=read_shell_major(config, registry),
        ping_replied=read_ping(config, registry),
        free_bytes=read_free_bytes(volume),
        execution_policy=read_execution_policy(config, registry),
        system_volume=volume,
    )
    logger.debug("Environment facts: %s", facts.model_dump())
    return facts
