# data_sources/base.py
from abc import ABC, abstractmethod

from models import LogOutput


class DataSource(ABC):
    """
    日志数据源抽象基类
    屏蔽了日志文本来自本地 git 还是预先导出的文件。
    """

    @abstractmethod
    def validate(self) -> bool:
        """
        验证数据源是否可用。
        例如：本地路径是否存在且为 Git 仓库，或者日志文件是否存在。
        """
        pass

    @abstractmethod
    def get_log(self) -> LogOutput:
        """
        执行一次日志查询。
        返回 LogOutput：成功时携带完整文本，失败时携带原因，不抛出异常。
        """
        pass

    def describe(self) -> str:
        return self.__class__.__name__
