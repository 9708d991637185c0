# data_sources/static_text.py
import logging
import os
from typing import Optional

from .base import DataSource
from models import LogOutput

logger = logging.getLogger(__name__)


class StaticTextDataSource(DataSource):
    """
    预先导出的日志数据源。
    直接给出文本，或读取一个用同样 --pretty 格式导出的日志文件。
    """

    def __init__(self, text: Optional[str] = None, path: Optional[str] = None):
        if (text is None) == (path is None):
            raise ValueError("text 和 path 必须且只能提供一个")
        self.text = text
        self.path = path

    def validate(self) -> bool:
        if self.path is not None and not os.path.isfile(self.path):
            logger.error(f"❌ 日志文件不存在: {self.path}")
            return False
        return True

    def get_log(self) -> LogOutput:
        if self.text is not None:
            return LogOutput.success(self.text)
        try:
            # 与 git 输出一致，无法解码的字节替换为 U+FFFD
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            logger.error(f"❌ 读取日志文件失败 ({self.path}): {e}")
            return LogOutput.failure(f"读取日志文件失败: {e}")
        logger.info(f"✅ [DataSource] 成功加载日志文件: {self.path}")
        return LogOutput.success(content)

    def describe(self) -> str:
        return f"Log file ({self.path})" if self.path else "Static text"
