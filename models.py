# models.py
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Numeric:
    """numstat 中的数值字段"""

    value: int

    @property
    def count(self) -> int:
        return self.value


@dataclass(frozen=True)
class NonNumeric:
    """
    numstat 中的非数值字段 (二进制文件标记 '-')。
    统计时按 0 计入，而不是视为未知。
    """

    raw: str = "-"

    @property
    def count(self) -> int:
        return 0


StatValue = Union[Numeric, NonNumeric]


@dataclass(frozen=True)
class FileChange:
    """单个文件的变更统计数据模型"""

    additions: int
    filename: str
    filetype: Optional[str]
    # 未跟踪删除行数的查询下为 None
    deletions: Optional[int] = None
    is_binary: bool = False


@dataclass(frozen=True)
class CommitRecord:
    """一个提交的解析结果"""

    hash: str
    date: str
    files: Tuple[FileChange, ...] = ()

    @property
    def additions(self) -> int:
        return sum(f.additions for f in self.files)

    @property
    def deletions(self) -> int:
        return sum(f.deletions or 0 for f in self.files)


@dataclass(frozen=True)
class LogOutput:
    """
    [V1.1] 日志查询的结果：成功时携带文本，失败时携带原因。
    """

    ok: bool
    text: str = ""
    error: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "LogOutput":
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, error: str) -> "LogOutput":
        return cls(ok=False, error=error)


@dataclass
class RunOutcome:
    """一次 run() 的结果，交给完成回调"""

    report: object
    success: bool
    error: Optional[Exception] = field(default=None)

    @property
    def failed(self) -> bool:
        return not self.success
