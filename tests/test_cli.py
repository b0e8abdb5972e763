"""CLI integration tests using Click's CliRunner."""

import json
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from click.testing import CliRunner

from coveragegate import __version__
from coveragegate.cli import main

STATISTICS = {
    "project": {
        "file": {"covered": 3, "missed": 1},
        "line": {"covered": 5, "missed": 5},
        "cyclomatic-complexity": 150,
    },
    "projectDelta": {"file": -10, "line": 5},
}

GATES_YAML = """\
coverage:
  qualityGates:
    - metric: FILE
      threshold: 70
    - metric: LINE
      baseline: projectDelta
      threshold: 0
      criticality: FAILURE
"""


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self._tmp = TemporaryDirectory()
        self.tmp_dir = Path(self._tmp.name)
        self.statistics_file = self._write("statistics.json", json.dumps(STATISTICS))

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name, content):
        path = self.tmp_dir / name
        path.write_text(content, encoding="utf-8")
        return str(path)


class TestMainGroup(CliTestCase):
    def test_help(self):
        result = self.runner.invoke(main, ["--help"])
        self.assertEqual(result.exit_code, 0)
        for command in ("evaluate", "api", "metrics"):
            self.assertIn(command, result.output)

    def test_version(self):
        result = self.runner.invoke(main, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)
        self.assertIn("coveragegate", result.output)


class TestEvaluateCommand(CliTestCase):
    def test_passing_gates(self):
        config = self._write("gates.yaml", GATES_YAML)
        result = self.runner.invoke(main, ["evaluate", self.statistics_file, "-c", config])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Success", result.output)
        self.assertIn("Build result: SUCCESS", result.output)

    def test_failure_exits_with_error(self):
        result = self.runner.invoke(
            main, ["evaluate", self.statistics_file, "-g", "LINE:PROJECT:80:FAILURE"]
        )
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Build result: FAILURE", result.output)

    def test_unstable_only_fails_when_strict(self):
        args = ["evaluate", self.statistics_file, "-g", "FILE:PROJECT:76"]

        result = self.runner.invoke(main, args)
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Build result: UNSTABLE", result.output)

        result = self.runner.invoke(main, args + ["--strict"])
        self.assertEqual(result.exit_code, 1)

    def test_note_does_not_change_build_result(self):
        result = self.runner.invoke(
            main, ["evaluate", self.statistics_file, "-g", "LINE:PROJECT:90:NOTE", "--strict"]
        )
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Build result: SUCCESS", result.output)

    def test_json_output(self):
        config = self._write("gates.yaml", GATES_YAML)
        result = self.runner.invoke(
            main,
            ["evaluate", self.statistics_file, "-c", config, "-g", "BRANCH:MODIFIED_LINES:50", "--json"],
        )

        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data["buildResult"], "SUCCESS")
        self.assertEqual(data["overallResult"], "PASSED")
        self.assertEqual(
            [item["result"] for item in data["resultItems"]], ["PASSED", "PASSED", "INACTIVE"]
        )
        self.assertEqual(
            data["log"][0],
            "-> [Overall project - File Coverage]: «Success» - (Actual value: 75.00%, Quality gate: 70.00)",
        )

    def test_no_gates(self):
        result = self.runner.invoke(main, ["evaluate", self.statistics_file, "--json"])
        self.assertEqual(result.exit_code, 0)
        data = json.loads(result.output)
        self.assertEqual(data["overallResult"], "INACTIVE")
        self.assertEqual(data["log"], ["No quality gates have been set - skipping"])

    def test_verbose_prints_log(self):
        result = self.runner.invoke(
            main, ["evaluate", self.statistics_file, "-g", "LINE", "--verbose"]
        )
        self.assertEqual(result.exit_code, 0)
        self.assertIn("All quality gates have been passed", result.output)

    def test_invalid_gate_option(self):
        result = self.runner.invoke(main, ["evaluate", self.statistics_file, "-g", "LINES:PROJECT"])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Unknown metric", result.output)

    def test_invalid_config(self):
        config = self._write("gates.yaml", "qualityGates:\n  - threshold: 50\n")
        result = self.runner.invoke(main, ["evaluate", self.statistics_file, "-c", config])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("'metric' is required", result.output)

    def test_invalid_statistics(self):
        statistics = self._write("broken.json", json.dumps({"project": {"line": 50}}))
        result = self.runner.invoke(main, ["evaluate", statistics, "-g", "LINE"])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Invalid statistics", result.output)

    def test_statistics_with_invalid_encoding(self):
        path = self.tmp_dir / "latin1.json"
        path.write_bytes(b'{"project": {"line": "\xff"}}')
        result = self.runner.invoke(main, ["evaluate", str(path), "-g", "LINE"])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("Cannot read", result.output)

    def test_config_with_invalid_encoding(self):
        config = self.tmp_dir / "gates.yaml"
        config.write_bytes(b"qualityGates:\n  - metric: \xff\xfe\n")
        result = self.runner.invoke(main, ["evaluate", self.statistics_file, "-c", str(config)])
        self.assertEqual(result.exit_code, 2)

    def test_missing_statistics_file(self):
        result = self.runner.invoke(main, ["evaluate", str(self.tmp_dir / "missing.json")])
        self.assertEqual(result.exit_code, 2)


class TestApiCommand(CliTestCase):
    def test_prints_document(self):
        config = self._write("gates.yaml", GATES_YAML)
        result = self.runner.invoke(main, ["api", self.statistics_file, "-c", config, "-r", "#41"])

        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.output)
        self.assertEqual(data["referenceBuild"], "#41")
        self.assertEqual(data["projectStatistics"]["file"], "75.00%")
        self.assertEqual(data["projectDelta"], {"file": "-10.00%", "line": "+5.00%"})
        self.assertEqual(data["qualityGates"]["overallResult"], "PASSED")
        self.assertEqual(data["modifiedLinesStatistics"], {})

    def test_writes_output_file(self):
        output = self.tmp_dir / "out" / "api.json"
        result = self.runner.invoke(main, ["api", self.statistics_file, "-o", str(output)])

        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(output.read_text(encoding="utf-8"))
        self.assertEqual(data["referenceBuild"], "-")
        self.assertEqual(data["qualityGates"], {"overallResult": "INACTIVE", "resultItems": []})


class TestMetricsCommand(CliTestCase):
    def test_lists_metrics_and_baselines(self):
        result = self.runner.invoke(main, ["metrics"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("CYCLOMATIC_COMPLEXITY", result.output)
        self.assertIn("MODIFIED_LINES_DELTA", result.output)
