# repo_report.py
"""
[V1.0] 仓库提交统计报告

用法:
    report = RepoReport("/home/vagrant/dotfiles")
    report.run(lambda outcome: print(outcome.report.filetype_counts))

一个 RepoReport 对应一个仓库 + 一组查询配置。
每次 run() 都会整体替换上一次的结果；同一个实例不能并发运行。
"""
import logging
from typing import Any, Callable, Dict, List, Optional

import filetype_stats
from commit_parser import parse_log
from context import RunContext
from data_sources.base import DataSource
from data_sources.factory import get_data_source
from errors import LogFormatError, ProducerError, RepoReportError
from models import CommitRecord, RunOutcome

logger = logging.getLogger(__name__)


class RepoReport:
    """
    解析后的仓库数据
    - results: 按日志顺序排列的 CommitRecord
    - commit_count: 已解析的提交数
    - filetype_counts: 按文件类型汇总的新增行数, 如 {"js": 12, "sh": 28}
    """

    def __init__(
        self,
        repo_path: str,
        context: Optional[RunContext] = None,
        data_source: Optional[DataSource] = None,
    ):
        self.context = context or RunContext.for_repo(repo_path)
        self.repo_path = repo_path
        self.data_source = data_source or get_data_source(self.context)

        self.results: List[CommitRecord] = []
        self.commit_count: int = 0
        self.filetype_counts: Dict[str, int] = {}

    def parse_results(self, text: str) -> "RepoReport":
        """
        把原始日志文本解析为报告，全部成功后才替换当前状态。
        解析失败时抛出 LogFormatError，报告保持不变。
        """
        commits = parse_log(
            text, self.context.delimiter, track_deletions=self.context.track_deletions
        )
        counts = filetype_stats.count_additions_by_filetype(
            filetype_stats.iter_file_changes(commits)
        )

        self.results = commits
        self.commit_count = len(commits)
        self.filetype_counts = counts
        return self

    def run(self, on_complete: Callable[[RunOutcome], Any]) -> RunOutcome:
        """
        执行一次查询 + 解析，完成后调用 on_complete(outcome)。
        查询或解析失败时 outcome.success 为 False，报告不被修改。
        """
        outcome = self._execute()
        on_complete(outcome)
        return outcome

    def _execute(self) -> RunOutcome:
        logger.info(f"🚀 开始生成报告，数据源: {self.data_source.describe()}")

        if not self.data_source.validate():
            return self._fail(ProducerError(f"数据源不可用: {self.repo_path}"))

        output = self.data_source.get_log()
        if not output.ok:
            return self._fail(ProducerError(output.error or "日志查询失败"))

        try:
            self.parse_results(output.text)
        except LogFormatError as e:
            return self._fail(e)

        logger.info(
            f"✅ 报告完成: {self.commit_count} 个提交, "
            f"{len(self.filetype_counts)} 种文件类型"
        )
        return RunOutcome(report=self, success=True)

    def _fail(self, error: RepoReportError) -> RunOutcome:
        logger.error(f"❌ 报告生成失败: {error}")
        return RunOutcome(report=self, success=False, error=error)

    # --- 附加统计 ---

    @property
    def deletions_by_filetype(self) -> Dict[str, int]:
        return filetype_stats.count_deletions_by_filetype(
            filetype_stats.iter_file_changes(self.results)
        )

    @property
    def files_by_filetype(self) -> Dict[str, int]:
        return filetype_stats.count_files_by_filetype(
            filetype_stats.iter_file_changes(self.results)
        )

    @property
    def total_additions(self) -> int:
        return sum(commit.additions for commit in self.results)

    @property
    def total_deletions(self) -> int:
        return sum(commit.deletions for commit in self.results)
