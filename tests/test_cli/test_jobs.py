"""Tests for CLI jobs command."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from gridstat.cli.main import cli
from gridstat.core.exceptions import UpstreamError


@pytest.fixture
def runner():
    return CliRunner()


def _json_jobs(runner, *args):
    result = runner.invoke(cli, ["jobs", *args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestJobsHelp:
    def test_help_output(self, runner):
        result = runner.invoke(cli, ["jobs", "--help"])
        assert result.exit_code == 0
        assert "--file" in result.output
        assert "--expand" in result.output
        assert "--json" in result.output


class TestJobsFromFile:
    def test_json_order(self, runner, qstat_xml_file, isolated_config):
        data = _json_jobs(runner, "--file", str(qstat_xml_file))
        assert [d["jb_job_number"] for d in data] == [101, 102, 103, 104, 105]
        assert data[3]["tasks"] == "40-55:5"
        assert data[0]["queue_name"] == "all.q@node1"

    def test_filter_by_state_and_owner(self, runner, qstat_xml_file, isolated_config):
        data = _json_jobs(runner, "--file", str(qstat_xml_file), "--state", "r", "--owner", "alice")
        assert [d["jb_job_number"] for d in data] == [101, 103]

    def test_multiple_states(self, runner, qstat_xml_file, isolated_config):
        data = _json_jobs(runner, "-f", str(qstat_xml_file), "-s", "qw", "-s", "hqw")
        assert [d["jb_job_number"] for d in data] == [104, 105]

    def test_expand(self, runner, qstat_xml_file, isolated_config):
        data = _json_jobs(runner, "--file", str(qstat_xml_file), "--state", "qw", "--expand")
        assert [d["jb_job_number"] for d in data] == [104, 104, 104, 104]
        # Range form is re-serialized verbatim for every expanded task
        assert {d["tasks"] for d in data} == {"40-55:5"}

    def test_expand_from_config(self, runner, qstat_xml_file, isolated_config):
        (isolated_config / "gridstat.toml").write_text("[display]\nexpand_tasks = true\n")
        data = _json_jobs(runner, "--file", str(qstat_xml_file))
        assert len(data) == 4 + 4

    def test_no_expand_overrides_config(self, runner, qstat_xml_file, isolated_config):
        (isolated_config / "gridstat.toml").write_text("[display]\nexpand_tasks = true\n")
        data = _json_jobs(runner, "--file", str(qstat_xml_file), "--no-expand")
        assert len(data) == 5

    def test_submitted_after(self, runner, qstat_xml_file, isolated_config):
        data = _json_jobs(
            runner, "--file", str(qstat_xml_file), "--submitted-after", "2026-02-23T12:00"
        )
        assert [d["jb_job_number"] for d in data] == [105]

    def test_submitted_before(self, runner, qstat_xml_file, isolated_config):
        data = _json_jobs(
            runner, "--file", str(qstat_xml_file), "--submitted-before", "2026-02-23T12:00"
        )
        assert [d["jb_job_number"] for d in data] == [104]

    def test_invalid_time(self, runner, qstat_xml_file, isolated_config):
        result = runner.invoke(
            cli, ["jobs", "--file", str(qstat_xml_file), "--submitted-after", "soon"]
        )
        assert result.exit_code != 0

    def test_table(self, runner, qstat_xml_file, isolated_config):
        result = runner.invoke(cli, ["jobs", "--file", str(qstat_xml_file)])
        assert result.exit_code == 0
        assert "Jobs (5)" in result.output
        assert "101" in result.output
        assert "alice" in result.output

    def test_table_timestamp_format_from_config(self, runner, qstat_xml_file, isolated_config):
        (isolated_config / "gridstat.toml").write_text('[display]\ntimestamp_format = "%Hh%M"\n')
        result = runner.invoke(cli, ["jobs", "--file", str(qstat_xml_file)])
        assert result.exit_code == 0, result.output
        assert "09h00" in result.output
        assert "12h30" in result.output
        assert "2026-02-23T12:30:00" not in result.output

    def test_table_invalid_timestamp_format(self, runner, qstat_xml_file, isolated_config):
        (isolated_config / "gridstat.toml").write_text("[display]\ntimestamp_format = 5\n")
        result = runner.invoke(cli, ["jobs", "--file", str(qstat_xml_file)])
        assert result.exit_code == 1
        assert "timestamp_format" in result.output

    def test_no_jobs(self, runner, qstat_xml_file, isolated_config):
        result = runner.invoke(cli, ["jobs", "--file", str(qstat_xml_file), "--owner", "nobody"])
        assert result.exit_code == 0
        assert "No jobs found" in result.output

    def test_malformed_file(self, runner, temp_dir, isolated_config):
        path = temp_dir / "bad.xml"
        path.write_text("<job_info>")
        result = runner.invoke(cli, ["jobs", "--file", str(path)])
        assert result.exit_code == 1
        assert "Invalid qstat XML" in result.output


class TestJobsFromQstat:
    def test_runs_qstat(self, runner, mock_qstat, isolated_config):
        data = _json_jobs(runner)
        assert len(data) == 5
        assert mock_qstat.call_args[0][0][0] == "qstat"

    def test_qstat_failure(self, runner, isolated_config):
        with patch(
            "gridstat.schedulers.sge.qstat.fetch_job_info",
            side_effect=UpstreamError("qstat not found"),
        ):
            result = runner.invoke(cli, ["jobs"])
        assert result.exit_code == 1
        assert "qstat not found" in result.output
