# errors.py
"""
[V1.0] 报告生成过程中的异常类型
"""
from typing import Optional


class RepoReportError(Exception):
    """所有报告相关异常的基类"""


class ProducerError(RepoReportError):
    """git log 查询失败 (非零退出码、I/O 错误、仓库无效等)"""


class LogFormatError(RepoReportError):
    """日志文本不符合预期格式"""

    def __init__(self, message: str, commit_index: Optional[int] = None):
        if commit_index is not None:
            message = f"{message} (第 {commit_index + 1} 个提交)"
        super().__init__(message)
        self.commit_index = commit_index


class MalformedHeaderError(LogFormatError):
    """提交头部不是 '<hash> <date>' 两段"""

    def __init__(self, header: str, commit_index: Optional[int] = None):
        super().__init__(f"Invalid title: {header!r}", commit_index)
        self.header = header


class MalformedFileLineError(LogFormatError):
    """numstat 行缺少文件名字段"""

    def __init__(self, line: str, commit_index: Optional[int] = None):
        super().__init__(f"Invalid file line: {line!r}", commit_index)
        self.line = line
