# context.py
"""
[V1.0] 运行时配置的数据模型
"""
from dataclasses import dataclass
from typing import Optional

from config import GlobalConfig


@dataclass
class RunContext:
    """
    封装一次运行所需的所有配置。
    这是从 CLI 传递到 RepoReport 的唯一对象。
    """

    # --- 核心路径 ---
    repo_path: str
    project_data_path: str

    # --- 查询参数 ---
    author_pattern: str
    delimiter: str
    track_deletions: bool

    # --- 输出参数 ---
    output_format: str
    output_path: Optional[str]
    show_commits: bool

    # --- 全局配置 ---
    global_config: GlobalConfig

    # 预先导出的日志文件，设置后不再调用 git
    log_file: Optional[str] = None

    @classmethod
    def for_repo(
        cls, repo_path: str, global_config: Optional[GlobalConfig] = None, **overrides
    ) -> "RunContext":
        """用全局默认值构造一个上下文 (测试和脚本调用时使用)"""
        global_config = global_config or GlobalConfig()
        values = dict(
            repo_path=repo_path,
            project_data_path="",
            author_pattern=global_config.AUTHOR_PATTERN,
            delimiter=global_config.LOG_DELIMITER,
            track_deletions=global_config.TRACK_DELETIONS,
            output_format=global_config.DEFAULT_OUTPUT_FORMAT,
            output_path=None,
            show_commits=False,
            global_config=global_config,
        )
        values.update(overrides)
        return cls(**values)
