# utils.py
import logging
import sys


def setup_logging(level: int = logging.INFO):
    """配置全局日志 (输出到 stderr，stdout 留给报告内容)"""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
