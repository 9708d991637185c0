# test_repo_report.py
import os
import tempfile
import unittest

from context import RunContext
from data_sources.base import DataSource
from data_sources.static_text import StaticTextDataSource
from errors import MalformedHeaderError, ProducerError
from models import LogOutput
from repo_report import RepoReport

SAMPLE_LOG = (
    "---88a3f98 2014-04-30\n\n3\t3\tREADME.md\n0\t2\taliases.source\n\n"
    "---aa11bb2 2014-05-01\n\n0\t65\tvimrc\n\n"
)


class FailingDataSource(DataSource):
    def __init__(self, valid=True):
        self.valid = valid
        self.queried = False

    def validate(self) -> bool:
        return self.valid

    def get_log(self) -> LogOutput:
        self.queried = True
        return LogOutput.failure("fatal: bad revision")


def _report(text=SAMPLE_LOG, **overrides):
    context = RunContext.for_repo("/tmp/dotfiles", delimiter="---", **overrides)
    return RepoReport(
        "/tmp/dotfiles", context=context, data_source=StaticTextDataSource(text=text)
    )


class TestRepoReport(unittest.TestCase):
    def test_initial_state(self):
        report = _report()
        self.assertEqual(report.commit_count, 0)
        self.assertEqual(report.results, [])
        self.assertEqual(report.filetype_counts, {})

    def test_run_success(self):
        report = _report()
        received = []
        outcome = report.run(received.append)

        self.assertEqual(received, [outcome])
        self.assertTrue(outcome.success)
        self.assertIs(outcome.report, report)
        self.assertEqual(report.commit_count, 2)
        self.assertEqual(report.commit_count, len(report.results))
        self.assertEqual(report.results[0].hash, "88a3f98")
        self.assertEqual(report.results[0].date, "2014-04-30")
        self.assertEqual(report.results[0].files[1].filetype, "source")
        # aliases.source 新增 0 行；vimrc 没有扩展名，不计入
        self.assertEqual(report.filetype_counts, {"md": 3, "source": 0})

    def test_supplementary_totals(self):
        report = _report()
        report.run(lambda outcome: None)
        self.assertEqual(report.deletions_by_filetype, {"md": 3, "source": 2})
        self.assertEqual(report.files_by_filetype, {"md": 1, "source": 1})
        self.assertEqual(report.total_additions, 3)
        self.assertEqual(report.total_deletions, 70)

    def test_without_deletions(self):
        report = _report(track_deletions=False)
        report.run(lambda outcome: None)
        self.assertIsNone(report.results[0].files[0].deletions)
        self.assertEqual(report.deletions_by_filetype, {})

    def test_malformed_header_fails_whole_run(self):
        report = _report("---badheader\n\n1\t1\ta.md\n\n")
        received = []
        outcome = report.run(received.append)

        self.assertTrue(outcome.failed)
        self.assertIsInstance(outcome.error, MalformedHeaderError)
        self.assertEqual(received, [outcome])
        self.assertEqual(report.commit_count, 0)
        self.assertEqual(report.results, [])
        self.assertEqual(report.filetype_counts, {})

    def test_failed_rerun_keeps_previous_results(self):
        report = _report()
        report.run(lambda outcome: None)
        report.data_source = StaticTextDataSource(
            text=SAMPLE_LOG + "---badheader\n\n"
        )
        outcome = report.run(lambda outcome: None)

        self.assertTrue(outcome.failed)
        self.assertEqual(report.commit_count, 2)
        self.assertEqual(report.filetype_counts, {"md": 3, "source": 0})

    def test_producer_failure_skips_parsing(self):
        source = FailingDataSource()
        report = RepoReport(
            "/tmp/dotfiles",
            context=RunContext.for_repo("/tmp/dotfiles", delimiter="---"),
            data_source=source,
        )
        outcome = report.run(lambda outcome: None)

        self.assertTrue(source.queried)
        self.assertTrue(outcome.failed)
        self.assertIsInstance(outcome.error, ProducerError)
        self.assertIn("bad revision", str(outcome.error))
        self.assertEqual(report.results, [])

    def test_invalid_source_is_not_queried(self):
        source = FailingDataSource(valid=False)
        report = RepoReport(
            "/tmp/missing",
            context=RunContext.for_repo("/tmp/missing"),
            data_source=source,
        )
        outcome = report.run(lambda outcome: None)

        self.assertFalse(source.queried)
        self.assertIsInstance(outcome.error, ProducerError)

    def test_rerun_is_idempotent(self):
        report = _report()
        report.run(lambda outcome: None)
        first = (report.commit_count, list(report.results), dict(report.filetype_counts))
        report.run(lambda outcome: None)
        second = (report.commit_count, list(report.results), dict(report.filetype_counts))
        self.assertEqual(first, second)

    def test_log_file_with_invalid_utf8_reaches_on_complete(self):
        with tempfile.NamedTemporaryFile("wb", suffix=".log", delete=False) as f:
            f.write(b"---88a3f98 2014-04-30\n\n3\t3\tcaf\xe9.md\n\n")
        self.addCleanup(os.remove, f.name)

        report = RepoReport(
            "/tmp/dotfiles",
            context=RunContext.for_repo("/tmp/dotfiles", delimiter="---"),
            data_source=StaticTextDataSource(path=f.name),
        )
        received = []
        outcome = report.run(received.append)

        self.assertEqual(received, [outcome])
        self.assertTrue(outcome.success)
        self.assertEqual(report.results[0].files[0].filename, "caf\ufffd.md")
        self.assertEqual(report.filetype_counts, {"md": 3})

    def test_parse_results_directly(self):
        report = _report()
        report.parse_results("---c0ffee0 2020-02-02\n\n10\t0\tapp.js\n2\t0\tREADME\n\n")
        self.assertEqual(report.commit_count, 1)
        self.assertEqual(report.filetype_counts, {"js": 10})


if __name__ == "__main__":
    unittest.main()
