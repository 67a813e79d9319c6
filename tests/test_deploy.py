"""Tests for the deployment script runner."""

import asyncio
import shutil
import time
import pytest
from unittest.mock import patch

from server.deploy import DeployRunner

needs_bash = pytest.mark.skipif(shutil.which("bash") is None, reason="bash not available")


def test_supported_platforms():
    assert DeployRunner(platform="linux").supported
    assert not DeployRunner(platform="darwin").supported
    assert not DeployRunner(platform="win32").supported


@needs_bash
def test_run_sync_executes_script(tmp_path):
    script = tmp_path / "deploy.sh"
    script.write_text("echo deployed\n")
    code, stdout, stderr = DeployRunner(script, cwd=tmp_path).run_sync()
    assert code == 0
    assert stdout == "deployed"
    assert stderr == ""


@needs_bash
def test_run_sync_reports_failure(tmp_path):
    script = tmp_path / "deploy.sh"
    script.write_text("echo broken >&2\nexit 3\n")
    code, _, stderr = DeployRunner(script, cwd=tmp_path).run_sync()
    assert code == 3
    assert stderr == "broken"


def test_run_sync_when_bash_cannot_start():
    with patch("server.deploy.subprocess.run", side_effect=FileNotFoundError("bash")):
        code, stdout, stderr = DeployRunner("deploy.sh").run_sync()
    assert code == 1
    assert stdout == ""
    assert "bash" in stderr


@needs_bash
@pytest.mark.asyncio
async def test_run_in_executor(tmp_path):
    script = tmp_path / "deploy.sh"
    script.write_text("echo async\n")
    code, stdout, _ = await DeployRunner(script, cwd=tmp_path).run()
    assert (code, stdout) == (0, "async")


@pytest.mark.asyncio
async def test_deployments_never_overlap():
    active = []
    overlaps = []

    def slow_script():
        if active:
            overlaps.append(True)
        active.append(True)
        time.sleep(0.05)
        active.pop()
        return 0, "", ""

    runner = DeployRunner(platform="linux")
    with patch.object(runner, "run_sync", side_effect=slow_script):
        results = await asyncio.gather(runner.run(), runner.run(), runner.run())
    assert results == [(0, "", "")] * 3
    assert overlaps == []
