"""
Repository sync — clone the configuration repository, or pull it.

Depends on git having been ensured by the installer.  Failures are
reported in the returned ``RepoState``; nothing is raised.
"""

from __future__ import annotations

import logging

from winbootstrap.adapters.registry import AdapterRegistry
from winbootstrap.core.config.settings import BootstrapConfig
from winbootstrap.core.models.action import Action
from winbootstrap.core.models.repo import RepoState, SyncAction
from winbootstrap.core.observability.logging_config import log_success

logger = logging.getLogger(__name__)


def sync_repository(
    config: BootstrapConfig,
    registry: AdapterRegistry,
    git_available: bool,
) -> RepoState:
    """Clone ``config.repo_url`` into ``config.repo_dir``, or pull it."""
    local_path = config.repo_dir

    if not git_available:
        logger.error("Git is not available — cannot sync %s", config.repo_url)
        return RepoState(
            local_path=local_path,
            present=False,
            sync_action=SyncAction.NONE,
            error="git is not installed",
        )

    if local_path.exists() and not local_path.is_dir():
        logger.error("%s exists but is not a directory", local_path)
        return RepoState(
            local_path=local_path,
            present=False,
            sync_action=SyncAction.NONE,
            error=f"{local_path} is not a directory",
        )

    if local_path.is_dir():
        logger.info("Updating existing repository at %s", local_path)
        receipt = registry.execute_action(
            Action(
                id="git:pull",
                name="Pull configuration repository",
                adapter="git",
                params={"operation": "pull", "remote": "origin",
                        "branch": config.repo_branch},
            ),
            cwd=str(local_path),
            timeout=config.install_timeout,
        )
        if receipt.ok:
            log_success(logger, "Repository updated")
            return RepoState(local_path=local_path, present=True,
                             sync_action=SyncAction.PULL)

        # the existing checkout is still usable
        logger.warning("git pull failed: %s", receipt.error_summary)
        return RepoState(local_path=local_path, present=True,
                         sync_action=SyncAction.PULL, error=receipt.error_summary)

    logger.info("Cloning %s into %s", config.repo_url, local_path)
    try:
        local_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Cannot create %s: %s", local_path.parent, e)
        return RepoState(local_path=local_path, present=False,
                         sync_action=SyncAction.CLONE, error=str(e))

    receipt = registry.execute_action(
        Action(
            id="git:clone",
            name="Clone configuration repository",
            adapter="git",
            params={"operation": "clone", "url": config.repo_url,
                    "dest": str(local_path), "branch": config.repo_branch},
        ),
        cwd=str(local_path.parent),
        timeout=config.install_timeout,
    )
    if receipt.ok:
        log_success(logger, "Repository cloned to %s", local_path)
        return RepoState(local_path=local_path, present=True,
                         sync_action=SyncAction.CLONE)

    logger.error("git clone failed: %s", receipt.error_summary)
    return RepoState(local_path=local_path, present=False,
                     sync_action=SyncAction.CLONE, error=receipt.error_summary)
