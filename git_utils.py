# git_utils.py
import subprocess
import logging
from typing import List, Optional

from context import RunContext
from models import LogOutput

logger = logging.getLogger(__name__)


def run_git_command(
    args: List[str],
    repo_path: str,
    context: str = "执行Git命令",
    timeout: Optional[float] = None,
) -> LogOutput:
    """
    统一的Git命令执行函数
    - 在 repo_path 下执行，失败时返回带原因的 LogOutput 而不是 None
    """
    try:
        logger.info(f"在 {repo_path} 中执行命令: {' '.join(args)}")
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            cwd=repo_path,
        )
    except subprocess.TimeoutExpired:
        logger.error(f"{context}超时")
        return LogOutput.failure(f"{context}超时 ({timeout}s)")
    except OSError as e:
        logger.error(f"{context}出错: {e}")
        return LogOutput.failure(f"{context}出错: {e}")

    if result.returncode != 0:
        logger.error(f"{context}失败: {result.stderr}")
        return LogOutput.failure(
            f"{context}失败 (exit {result.returncode}): {result.stderr.strip()}"
        )
    logger.info(f"{context}成功，输出 {len(result.stdout.splitlines())} 行")
    return LogOutput.success(result.stdout)


def is_git_repository(repo_path: str, git_binary: str = "git") -> bool:
    """检查指定路径是否为Git仓库"""
    try:
        result = subprocess.run(
            [git_binary, "rev-parse", "--is-inside-work-tree"],
            capture_output=True,
            text=True,
            cwd=repo_path,
        )
        return result.returncode == 0
    except OSError:
        return False


def build_log_command(context: RunContext) -> List[str]:
    """
    组装 git log 命令:
      git log --pretty=tformat:<分隔符>%h %ad --numstat -i --author=<模式>
              --all --date=short --no-merges
    """
    global_config = context.global_config
    return [
        global_config.GIT_BINARY,
        # numstat 中的非 ASCII 路径不加引号
        "-c",
        "core.quotepath=off",
        "log",
        f"--pretty={global_config.pretty_format(context.delimiter)}",
        "--numstat",
        "-i",
        f"--author={context.author_pattern}",
        "--all",
        "--date=short",
        "--no-merges",
    ]


def get_git_log(context: RunContext) -> LogOutput:
    """获取带 numstat 的提交历史"""
    return run_git_command(
        build_log_command(context),
        context.repo_path,
        "获取Git提交历史",
        timeout=context.global_config.GIT_TIMEOUT,
    )
