# config.py
"""
[V1.0] 全局配置
- 默认值写在 GlobalConfig 中，可通过环境变量或 .env 覆盖
"""
import codecs
import os
from typing import Optional

from dotenv import load_dotenv


# --- 脚本基础路径 ---
SCRIPT_BASE_PATH = os.path.abspath(os.path.dirname(__file__))
env_path = os.path.join(SCRIPT_BASE_PATH, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
else:
    load_dotenv()


def unescape_delimiter(value: str) -> str:
    """
    展开 "\\x1e" 这样的转义写法 (.env 和命令行中无法直接写控制字符)，
    非 ASCII 字符 (如 '§') 保持不变。
    """
    return codecs.decode(value.encode("latin-1", "backslashreplace"), "unicode_escape")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    return float(value)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    return int(value)


def _env_delimiter(name: str, default: str) -> str:
    value = os.getenv(name)
    if not value:
        return default
    return unescape_delimiter(value)


class GlobalConfig:
    """
    文件类型统计报告的全局配置。
    """

    # --- 路径配置 ---
    SCRIPT_BASE_PATH: str = SCRIPT_BASE_PATH
    DATA_ROOT_DIR_NAME: str = "data"
    TEMPLATES_DIR_NAME: str = "templates"

    # --- 作者过滤 (忽略大小写, 基础正则的 \| 分支) ---
    AUTHOR_PATTERN: str = os.getenv(
        "REPORT_AUTHOR_PATTERN",
        r"\(tom hood.*\)\|\(thomas hood.*\)\|\(networkerror.*\)",
    )

    # --- Git 命令 ---
    GIT_BINARY: str = os.getenv("REPORT_GIT_BINARY", "git")
    # None 表示不设超时
    GIT_TIMEOUT: Optional[float] = _env_float("REPORT_GIT_TIMEOUT")
    # 记录分隔符 (ASCII RS)，由 git 的 %x1e 输出，不会与提交内容冲突
    LOG_DELIMITER: str = _env_delimiter("REPORT_LOG_DELIMITER", "\x1e")
    TRACK_DELETIONS: bool = _env_bool("REPORT_TRACK_DELETIONS", True)

    # --- 输出 ---
    DEFAULT_OUTPUT_FORMAT: str = os.getenv("REPORT_OUTPUT_FORMAT", "text").lower()
    OUTPUT_FORMATS = ("text", "json", "html")
    HTML_TEMPLATE_NAME: str = "report.html.j2"
    # 0 表示显示全部类型
    TOP_FILETYPES: int = _env_int("REPORT_TOP_FILETYPES", 0)

    def pretty_format(self, delimiter: Optional[str] = None) -> str:
        """
        git --pretty 参数。分隔符以 %xNN 形式交给 git 输出，
        这样命令行中不会出现控制字符。
        """
        delimiter = self.LOG_DELIMITER if delimiter is None else delimiter
        encoded = "".join(
            f"%x{ord(ch):02x}" if ord(ch) < 0x20 or ch == "%" else ch
            for ch in delimiter
        )
        return f"tformat:{encoded}%h %ad"
