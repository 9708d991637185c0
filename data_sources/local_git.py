# data_sources/local_git.py
import logging
import os

from .base import DataSource
from models import LogOutput
from context import RunContext
import git_utils

logger = logging.getLogger(__name__)


class LocalGitDataSource(DataSource):
    """
    本地 Git 数据源实现。
    通过调用 git 命令行工具查询本地仓库。
    """

    def __init__(self, context: RunContext):
        self.context = context

    def validate(self) -> bool:
        if not os.path.exists(self.context.repo_path):
            logger.error(f"❌ 路径不存在: {self.context.repo_path}")
            return False
        if not git_utils.is_git_repository(
            self.context.repo_path, self.context.global_config.GIT_BINARY
        ):
            logger.error(f"❌ 指定路径不是 Git 仓库: {self.context.repo_path}")
            return False
        return True

    def get_log(self) -> LogOutput:
        return git_utils.get_git_log(self.context)

    def describe(self) -> str:
        return f"Local Git ({self.context.repo_path})"
