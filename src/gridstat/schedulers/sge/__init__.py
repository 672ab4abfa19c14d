"""Grid Engine qstat support."""

from gridstat.schedulers.sge.parser import JobInfo, Queue, parse_qstat_xml
from gridstat.schedulers.sge.qstat import fetch_job_info, run_qstat

__all__ = ["JobInfo", "Queue", "parse_qstat_xml", "fetch_job_info", "run_qstat"]
