# filetype_stats.py
"""
[V1.0] 按文件类型汇总变更统计
无法推断类型 (filetype 为 None) 的文件不参与任何汇总。
"""
from typing import Dict, Iterable, List, Tuple

from models import CommitRecord, FileChange


def iter_file_changes(commits: Iterable[CommitRecord]) -> Iterable[FileChange]:
    """按顺序展开所有提交中的文件变更"""
    for commit in commits:
        yield from commit.files


def count_additions_by_filetype(files: Iterable[FileChange]) -> Dict[str, int]:
    """每个文件变更的新增行数恰好计入一次"""
    counts: Dict[str, int] = {}
    for file_change in files:
        if file_change.filetype is None:
            continue
        counts[file_change.filetype] = (
            counts.get(file_change.filetype, 0) + file_change.additions
        )
    return counts


def count_deletions_by_filetype(files: Iterable[FileChange]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for file_change in files:
        if file_change.filetype is None or file_change.deletions is None:
            continue
        counts[file_change.filetype] = (
            counts.get(file_change.filetype, 0) + file_change.deletions
        )
    return counts


def count_files_by_filetype(files: Iterable[FileChange]) -> Dict[str, int]:
    """每种类型出现的文件变更次数"""
    counts: Dict[str, int] = {}
    for file_change in files:
        if file_change.filetype is None:
            continue
        counts[file_change.filetype] = counts.get(file_change.filetype, 0) + 1
    return counts


def top_filetypes(counts: Dict[str, int], limit: int = 0) -> List[Tuple[str, int]]:
    """按数量降序排列，数量相同时按类型名排序；limit <= 0 表示不截断"""
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    if limit > 0:
        return ordered[:limit]
    return ordered
