"""Pytest configuration and fixtures."""

import os
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

QSTAT_FULL_XML = """<?xml version='1.0'?>
<job_info  xmlns:xsd="http://arc.liv.ac.uk/repos/darcs/sge/source/dist/util/resources/schemas/qstat/qstat.xsd">
  <queue_info>
    <Queue-List>
      <name>all.q@node1</name>
      <qtype>BIP</qtype>
      <slots_used>2</slots_used>
      <slots_resv>0</slots_resv>
      <slots_total>8</slots_total>
      <load_avg>0.35000</load_avg>
      <arch>lx-amd64</arch>
      <resource name="load_short" type="hl">0.35</resource>
      <resource name="load_medium" type="hl">0.42</resource>
      <resource name="load_long" type="hl">0.50</resource>
      <resource name="num_proc" type="hl">8</resource>
      <resource name="mem_free" type="hl">10.2G</resource>
      <resource name="mem_total" type="hl">15.6G</resource>
      <resource name="mem_used" type="hl">5.4G</resource>
      <resource name="swap_free" type="hl">512M</resource>
      <resource name="swap_total" type="hl">1.0G</resource>
      <job_list state="running">
        <JB_job_number>101</JB_job_number>
        <JAT_prio>0.55500</JAT_prio>
        <JB_name>align</JB_name>
        <JB_owner>alice</JB_owner>
        <state>r</state>
        <JAT_start_time>2026-02-23T10:00:05</JAT_start_time>
        <queue_name>all.q@node1</queue_name>
        <slots>1</slots>
      </job_list>
      <job_list state="running">
        <JB_job_number>102</JB_job_number>
        <JAT_prio>0.50500</JAT_prio>
        <JB_name>array_sim</JB_name>
        <JB_owner>bob</JB_owner>
        <state>r</state>
        <JAT_start_time>2026-02-23T10:05:00</JAT_start_time>
        <queue_name>all.q@node1</queue_name>
        <slots>1</slots>
        <tasks>3</tasks>
      </job_list>
    </Queue-List>
    <Queue-List>
      <name>gpu.q@node2</name>
      <qtype>BP</qtype>
      <slots_used>1</slots_used>
      <slots_resv>0</slots_resv>
      <slots_total>4</slots_total>
      <load_avg>1.20000</load_avg>
      <arch>lx-amd64</arch>
      <resource name="num_proc" type="hl">4</resource>
      <resource name="mem_free" type="hl">30.0G</resource>
      <job_list state="running">
        <JB_job_number>103</JB_job_number>
        <JAT_prio>0.60000</JAT_prio>
        <JB_name>train</JB_name>
        <JB_owner>alice</JB_owner>
        <state>r</state>
        <JAT_start_time>2026-02-23T11:00:00</JAT_start_time>
        <queue_name>gpu.q@node2</queue_name>
        <slots>4</slots>
      </job_list>
    </Queue-List>
  </queue_info>
  <job_info>
    <job_list state="pending">
      <JB_job_number>104</JB_job_number>
      <JAT_prio>0.00000</JAT_prio>
      <JB_name>array_sim</JB_name>
      <JB_owner>bob</JB_owner>
      <state>qw</state>
      <JB_submission_time>2026-02-23T09:00:00</JB_submission_time>
      <queue_name></queue_name>
      <slots>1</slots>
      <tasks>40-55:5</tasks>
    </job_list>
    <job_list state="pending">
      <JB_job_number>105</JB_job_number>
      <JAT_prio>0.00000</JAT_prio>
      <JB_name>report</JB_name>
      <JB_owner>alice</JB_owner>
      <state>hqw</state>
      <JB_submission_time>2026-02-23T12:30:00</JB_submission_time>
      <queue_name></queue_name>
      <slots>2</slots>
    </job_list>
  </job_info>
</job_info>
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def qstat_xml():
    """Sample ``qstat -xml -f -F`` output."""
    return QSTAT_FULL_XML


@pytest.fixture
def qstat_xml_file(temp_dir):
    """Sample qstat output saved to a file."""
    path = temp_dir / "qstat.xml"
    path.write_text(QSTAT_FULL_XML)
    return path


@pytest.fixture
def mock_qstat():
    """Mock subprocess.run so qstat returns the sample XML."""
    with patch("subprocess.run") as mock_run:
        def side_effect(cmd, *args, **kwargs):
            result = MagicMock()
            result.returncode = 0
            result.stdout = QSTAT_FULL_XML if cmd[0] == "qstat" else ""
            result.stderr = ""
            return result

        mock_run.side_effect = side_effect
        yield mock_run


@pytest.fixture
def isolated_config(temp_dir, monkeypatch):
    """Run from an empty directory with no user config."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("HOME", str(temp_dir / "home"))
    from gridstat.core import config

    monkeypatch.setattr(config, "_cached_config", None)
    yield temp_dir
