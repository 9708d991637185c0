# data_sources/factory.py
import logging
from context import RunContext
from .base import DataSource
from .local_git import LocalGitDataSource
from .static_text import StaticTextDataSource

logger = logging.getLogger(__name__)


def get_data_source(context: RunContext) -> DataSource:
    """
    数据源工厂
    指定了日志文件时读取文件，否则查询本地仓库。
    """
    if context.log_file:
        logger.info(f"🔌 [Factory] 初始化数据源: Log File ({context.log_file})")
        return StaticTextDataSource(path=context.log_file)

    logger.info("🔌 [Factory] 初始化数据源: Local Git")
    return LocalGitDataSource(context)
