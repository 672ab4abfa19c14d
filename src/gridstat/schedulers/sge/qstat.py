"""Run qstat and hand its XML output to the parser."""

from __future__ import annotations

import logging
import subprocess

from gridstat.core.config import GridStatConfig, get_config
from gridstat.core.exceptions import UpstreamError
from gridstat.schedulers.sge.parser import JobInfo, parse_qstat_xml

logger = logging.getLogger(__name__)


def run_qstat(config: GridStatConfig | None = None) -> str:
    """Run the configured qstat command and return its stdout.

    Raises:
        UpstreamError: If qstat is missing or exits with an error.
    """
    if config is None:
        config = get_config()
    cmd = config.qstat_command
    logger.debug("Running %s", " ".join(cmd))

    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=True)
    except FileNotFoundError as exc:
        raise UpstreamError(f"{cmd[0]} not found") from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise UpstreamError(
            f"{cmd[0]} exited with status {exc.returncode}: {stderr}"
        ) from exc

    return result.stdout


def fetch_job_info(config: GridStatConfig | None = None) -> JobInfo:
    """Run qstat and parse the result."""
    return parse_qstat_xml(run_qstat(config))
