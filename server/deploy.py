"""Execution of the deployment script."""

import asyncio
import logging
import subprocess
import sys
from pathlib import Path
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)

DEPLOY_PLATFORM = "linux"


class DeployRunner:
    """Runs the fixed deployment script with bash."""

    def __init__(self, script: Union[str, Path] = "deploy.sh", cwd: Optional[Union[str, Path]] = None,
                 platform: Optional[str] = None):
        self.script = str(script)
        self.cwd = str(cwd) if cwd else None
        self.platform = platform or sys.platform
        self._lock: Optional[asyncio.Lock] = None

    @property
    def supported(self) -> bool:
        """Deployments only run on the production host platform."""
        return self.platform.startswith(DEPLOY_PLATFORM)

    def run_sync(self) -> Tuple[int, str, str]:
        """Run the script and return exit code, stdout, stderr."""
        cmd = ["bash", self.script]
        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False
            )
        except OSError as e:
            logger.error(f"Deployment script could not be started: {' '.join(cmd)} - {e}")
            return 1, "", str(e)

        if result.returncode == 0:
            logger.info(f"Deployment script finished: {self.script}")
        else:
            logger.error(f"Deployment script exited with {result.returncode}: {result.stderr.strip()}")
        return result.returncode, result.stdout.strip(), result.stderr.strip()

    async def run(self) -> Tuple[int, str, str]:
        """Run the script in the default executor, one deployment at a time."""
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            return await asyncio.get_running_loop().run_in_executor(None, self.run_sync)
