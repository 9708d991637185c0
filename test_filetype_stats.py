# test_filetype_stats.py
import unittest

import filetype_stats
from models import CommitRecord, FileChange


def _change(additions, filename, filetype, deletions=None):
    return FileChange(
        additions=additions, deletions=deletions, filename=filename, filetype=filetype
    )


class TestFiletypeStats(unittest.TestCase):
    def setUp(self):
        self.commits = [
            CommitRecord(
                hash="88a3f98",
                date="2014-04-30",
                files=(
                    _change(3, "README.md", "md", 3),
                    _change(5, "vimrc", None, 0),
                    _change(4, "install.sh", "sh", 1),
                ),
            ),
            CommitRecord(
                hash="aa11bb2",
                date="2014-05-01",
                files=(_change(2, "docs/usage.md", "md", 7),),
            ),
        ]

    def test_unclassified_files_are_excluded(self):
        counts = filetype_stats.count_additions_by_filetype(
            [_change(3, "README.md", "md"), _change(5, "vimrc", None)]
        )
        self.assertEqual(counts, {"md": 3})

    def test_additions_summed_across_commits(self):
        counts = filetype_stats.count_additions_by_filetype(
            filetype_stats.iter_file_changes(self.commits)
        )
        self.assertEqual(counts, {"md": 5, "sh": 4})

    def test_zero_additions_still_create_key(self):
        counts = filetype_stats.count_additions_by_filetype(
            [_change(0, "aliases.source", "source")]
        )
        self.assertEqual(counts, {"source": 0})

    def test_deletions(self):
        counts = filetype_stats.count_deletions_by_filetype(
            filetype_stats.iter_file_changes(self.commits)
        )
        self.assertEqual(counts, {"md": 10, "sh": 1})

    def test_deletions_skip_untracked(self):
        counts = filetype_stats.count_deletions_by_filetype(
            [_change(1, "a.py", "py"), _change(1, "b.py", "py", 2)]
        )
        self.assertEqual(counts, {"py": 2})

    def test_file_counts(self):
        counts = filetype_stats.count_files_by_filetype(
            filetype_stats.iter_file_changes(self.commits)
        )
        self.assertEqual(counts, {"md": 2, "sh": 1})

    def test_top_filetypes(self):
        counts = {"md": 5, "sh": 4, "js": 5, "py": 1}
        self.assertEqual(
            filetype_stats.top_filetypes(counts),
            [("js", 5), ("md", 5), ("sh", 4), ("py", 1)],
        )
        self.assertEqual(filetype_stats.top_filetypes(counts, 2), [("js", 5), ("md", 5)])


if __name__ == "__main__":
    unittest.main()
