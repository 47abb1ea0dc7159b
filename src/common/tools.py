"""Precondition checks for external executables."""
from __future__ import annotations

import logging
import shutil

from common.errors import MissingTool

logger = logging.getLogger(__name__)


def require(tool: str, purpose: str = "") -> str:
    """Return the absolute path of ``tool`` or raise MissingTool."""
    path = shutil.which(tool)
    if path is None:
        raise MissingTool(tool, purpose)
    logger.debug("Found %s at %s", tool, path)
    return path


def available(tool: str) -> bool:
    return shutil.which(tool) is not None
