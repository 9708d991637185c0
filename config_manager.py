# config_manager.py
"""
[V1.0] 配置管理器
- 负责处理全局项目别名 (projects.json)
- 负责处理项目级默认配置 (config.json)，如作者匹配模式
- 包含一个交互式向导 (run_interactive_config_wizard)
"""

import os
import json
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

PROJECTS_JSON_FILE = "projects.json"
CONFIG_JSON_FILE = "config.json"

PROJECT_CONFIG_KEYS = ("author_pattern", "track_deletions", "output_format")


def _load_json(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"❌ 加载配置文件 {path} 失败: {e}")
        return {}
    if not isinstance(data, dict):
        logger.error(f"❌ 配置文件 {path} 的内容不是 JSON 对象")
        return {}
    return data


def _save_json(directory: str, filename: str, data: Dict[str, Any]) -> bool:
    path = os.path.join(directory, filename)
    try:
        os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=4, ensure_ascii=False)
        return True
    except OSError as e:
        logger.error(f"❌ 保存配置文件 {path} 失败: {e}")
        return False


def load_project_aliases(data_root_path: str) -> Dict[str, str]:
    """加载全局别名文件 (data/projects.json)"""
    return _load_json(os.path.join(data_root_path, PROJECTS_JSON_FILE))


def save_project_aliases(data_root_path: str, aliases: Dict[str, str]) -> bool:
    """保存全局别名文件 (data/projects.json)"""
    return _save_json(data_root_path, PROJECTS_JSON_FILE, aliases)


def get_path_from_alias(data_root_path: str, alias: str) -> Optional[str]:
    """通过别名获取仓库的绝对路径"""
    return load_project_aliases(data_root_path).get(alias)


def load_project_config(project_data_path: str) -> Dict[str, Any]:
    """
    加载特定项目的配置文件 (data/<Project>/config.json)
    未知的键会被忽略。
    """
    data = _load_json(os.path.join(project_data_path, CONFIG_JSON_FILE))
    unknown = sorted(set(data) - set(PROJECT_CONFIG_KEYS))
    if unknown:
        logger.warning(f"⚠️ 忽略未知的项目配置项: {', '.join(unknown)}")
    return {k: v for k, v in data.items() if k in PROJECT_CONFIG_KEYS}


def save_project_config(project_data_path: str, config_data: Dict[str, Any]) -> bool:
    """保存特定项目的配置文件 (data/<Project>/config.json)"""
    return _save_json(project_data_path, CONFIG_JSON_FILE, config_data)


def get_project_data_path(data_root_path: str, repo_path: str) -> str:
    """根据仓库路径获取其数据存储路径"""
    repo_path_abs = os.path.abspath(repo_path)
    project_name = os.path.basename(repo_path_abs) or "current_dir_project"
    return os.path.join(data_root_path, project_name)


def _input_with_default(prompt: str, default: str) -> str:
    """获取带默认值的用户输入"""
    return input(f"{prompt} [{default}]: ") or default


def _parse_bool(text: str) -> bool:
    return text.strip().lower() in ("1", "true", "yes", "y", "on")


def run_interactive_config_wizard(
    data_root_path: str, repo_path: str, default_author_pattern: str
) -> Optional[str]:
    """
    运行交互式配置向导，返回保存的别名
    """
    logger.info("--- 🚀 欢迎使用文件类型统计配置向导 ---")
    repo_path_abs = os.path.abspath(repo_path)
    if not os.path.isdir(repo_path_abs):
        logger.error(f"路径 {repo_path_abs} 不是一个有效的目录。")
        return None

    project_data_path = get_project_data_path(data_root_path, repo_path_abs)
    project_name_default = os.path.basename(project_data_path)

    logger.info(f"  [目标仓库]: {repo_path_abs}")
    logger.info(f"  [数据目录]: {project_data_path}")

    aliases = load_project_aliases(data_root_path)
    current_config = load_project_config(project_data_path)

    print("\n--- 1. 项目别名配置 ---")
    current_alias = next(
        (alias for alias, path in aliases.items() if path == repo_path_abs),
        project_name_default,
    )
    alias = _input_with_default("  设置一个简短的别名 (用于 -p ...)", current_alias)
    aliases[alias] = repo_path_abs
    save_project_aliases(data_root_path, aliases)
    logger.info(f"✅ 别名 '{alias}' 已保存至 {PROJECTS_JSON_FILE}")

    print("\n--- 2. 项目默认值配置 ---")
    print("  (提示：保留默认值或直接按 Enter 键跳过)")
    config_data: Dict[str, Any] = {}
    config_data["author_pattern"] = _input_with_default(
        "  作者匹配模式 (git --author, 忽略大小写)",
        current_config.get("author_pattern", default_author_pattern),
    )
    config_data["track_deletions"] = _parse_bool(
        _input_with_default(
            "  统计删除行数 (yes/no)",
            "yes" if current_config.get("track_deletions", True) else "no",
        )
    )
    config_data["output_format"] = _input_with_default(
        "  默认输出格式 (text, json, html)",
        current_config.get("output_format", "text"),
    )

    save_project_config(project_data_path, config_data)
    logger.info(f"✅ 项目配置已保存至 {project_data_path}/{CONFIG_JSON_FILE}")

    print("\n--- ✅ 配置完成！ ---")
    print(f"  现在你可以使用 'python FiletypeReport.py -p {alias}' 来运行报告。")
    return alias
