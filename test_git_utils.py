# test_git_utils.py
import os
import shutil
import subprocess
import tempfile
import unittest
from unittest import mock

import git_utils
from config import GlobalConfig
from context import RunContext
from data_sources.factory import get_data_source
from data_sources.local_git import LocalGitDataSource
from data_sources.static_text import StaticTextDataSource
from repo_report import RepoReport


class TestPrettyFormat(unittest.TestCase):
    def test_record_separator_is_escaped(self):
        self.assertEqual(GlobalConfig().pretty_format("\x1e"), "tformat:%x1e%h %ad")

    def test_plain_delimiter(self):
        self.assertEqual(GlobalConfig().pretty_format("---"), "tformat:---%h %ad")


class TestBuildLogCommand(unittest.TestCase):
    def test_fixed_options(self):
        context = RunContext.for_repo("/repo", author_pattern="tom hood.*")
        args = git_utils.build_log_command(context)

        self.assertEqual(args[0], context.global_config.GIT_BINARY)
        self.assertIn("log", args)
        for option in ("--numstat", "-i", "--all", "--date=short", "--no-merges"):
            self.assertIn(option, args)
        self.assertIn("--author=tom hood.*", args)
        self.assertIn("--pretty=tformat:%x1e%h %ad", args)


class TestRunGitCommand(unittest.TestCase):
    @mock.patch("git_utils.subprocess.run")
    def test_success(self, run):
        run.return_value = subprocess.CompletedProcess([], 0, stdout="a\nb\n", stderr="")
        output = git_utils.run_git_command(["git", "log"], "/repo")
        self.assertTrue(output.ok)
        self.assertEqual(output.text, "a\nb\n")
        self.assertEqual(run.call_args.kwargs["cwd"], "/repo")

    @mock.patch("git_utils.subprocess.run")
    def test_non_zero_exit(self, run):
        run.return_value = subprocess.CompletedProcess(
            [], 128, stdout="", stderr="fatal: not a git repository"
        )
        output = git_utils.run_git_command(["git", "log"], "/repo")
        self.assertFalse(output.ok)
        self.assertEqual(output.text, "")
        self.assertIn("not a git repository", output.error)

    @mock.patch("git_utils.subprocess.run")
    def test_timeout(self, run):
        run.side_effect = subprocess.TimeoutExpired(["git", "log"], 5)
        output = git_utils.run_git_command(["git", "log"], "/repo", timeout=5)
        self.assertFalse(output.ok)

    @mock.patch("git_utils.subprocess.run")
    def test_missing_binary(self, run):
        run.side_effect = FileNotFoundError("git")
        output = git_utils.run_git_command(["git", "log"], "/repo")
        self.assertFalse(output.ok)


class TestDataSourceFactory(unittest.TestCase):
    def test_local_git_by_default(self):
        source = get_data_source(RunContext.for_repo("/repo"))
        self.assertIsInstance(source, LocalGitDataSource)

    def test_log_file(self):
        source = get_data_source(RunContext.for_repo("/repo", log_file="/tmp/log.txt"))
        self.assertIsInstance(source, StaticTextDataSource)

    def test_missing_log_file(self):
        self.assertFalse(StaticTextDataSource(path="/nonexistent/log.txt").validate())


@unittest.skipUnless(shutil.which("git"), "git 不可用")
class TestLocalGitIntegration(unittest.TestCase):
    def setUp(self):
        self.repo = tempfile.mkdtemp()
        self._git("init", "-q")

    def tearDown(self):
        shutil.rmtree(self.repo, ignore_errors=True)

    def _git(self, *args, author="Tom Hood"):
        subprocess.run(
            [
                "git",
                "-c",
                f"user.name={author}",
                "-c",
                "user.email=tom@example.com",
                "-c",
                "commit.gpgsign=false",
                *args,
            ],
            cwd=self.repo,
            check=True,
            capture_output=True,
        )

    def _write(self, name, content):
        mode = "wb" if isinstance(content, bytes) else "w"
        with open(os.path.join(self.repo, name), mode) as f:
            f.write(content)

    def test_report_from_real_repository(self):
        self._write("README.md", "a\nb\nc\n")
        self._write("vimrc", "set nu\n")
        self._git("add", "-A")
        self._git("commit", "-q", "-m", "first")

        self._write("logo.png", b"\x89PNG\x00\x01\x02")
        self._write("main.py", "import os\nprint(os)\n")
        self._git("add", "-A")
        self._git("commit", "-q", "-m", "second")

        self._write("other.py", "x = 1\n")
        self._git("add", "-A")
        self._git("commit", "-q", "-m", "someone else", author="Someone Else")

        context = RunContext.for_repo(self.repo, author_pattern="TOM HOOD")
        report = RepoReport(self.repo, context=context)
        outcome = report.run(lambda outcome: None)

        self.assertTrue(outcome.success, outcome.error)
        self.assertEqual(report.commit_count, 2)
        self.assertEqual(report.filetype_counts, {"md": 3, "py": 2, "png": 0})
        newest = report.results[0]
        binary = [f for f in newest.files if f.filename == "logo.png"][0]
        self.assertTrue(binary.is_binary)

    def test_not_a_repository(self):
        plain_dir = tempfile.mkdtemp()
        try:
            report = RepoReport(plain_dir, context=RunContext.for_repo(plain_dir))
            outcome = report.run(lambda outcome: None)
            self.assertTrue(outcome.failed)
        finally:
            shutil.rmtree(plain_dir, ignore_errors=True)


if __name__ == "__main__":
    unittest.main()
