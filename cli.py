# cli.py
"""
[V1.0] 命令行界面 (Interface) 层
"""
import argparse
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

import config_manager
import report_builder
from config import GlobalConfig, unescape_delimiter
from context import RunContext
from models import RunOutcome
from repo_report import RepoReport

logger = logging.getLogger(__name__)

OUTPUT_FILENAME_PREFIX = "FiletypeReport"


def setup_parser() -> argparse.ArgumentParser:
    """
    负责所有 argparse 的定义。
    """
    parser = argparse.ArgumentParser(
        description="按文件类型统计作者的新增代码行数",
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--configure",
        action="store_true",
        help="运行交互式配置向导。\n" "   (需要 -r 指定要配置的仓库路径)",
    )

    target_group = parser.add_mutually_exclusive_group()
    target_group.add_argument(
        "-p",
        "--project",
        type=str,
        help="使用已配置的项目别名运行报告。\n" "   (与 -r 互斥)",
    )
    target_group.add_argument(
        "-r",
        "--repo-path",
        type=str,
        default=None,
        help="指定要分析的 Git 仓库的根目录路径。",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="解析预先导出的 git log 输出，而不是调用 git。\n"
        "   (导出时必须使用相同的 --pretty 格式和分隔符)",
    )

    # --- 覆盖参数 ---
    parser.add_argument(
        "-a",
        "--author",
        type=str,
        default=None,
        help="(覆盖) git --author 匹配模式 (忽略大小写)。\n"
        "(默认: 使用项目 config.json 或全局 config.py 中的设置)",
    )
    parser.add_argument(
        "--delimiter",
        type=str,
        default=None,
        help="(覆盖) 提交块分隔符 (默认: ASCII 记录分隔符 \\x1e)\n"
        "   以 '-' 开头的值可写成 --delimiter=--- 或 --delimiter ---",
    )
    parser.add_argument(
        "--no-deletions",
        action="store_true",
        help="不统计删除行数",
    )

    # --- 输出 ---
    parser.add_argument(
        "-f",
        "--format",
        type=str,
        choices=list(GlobalConfig.OUTPUT_FORMATS),
        default=None,
        help="输出格式 (默认: text)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="把报告写入文件，而不是打印到终端",
    )
    parser.add_argument(
        "--show-commits", action="store_true", help="在文本报告中列出每个提交"
    )
    parser.add_argument(
        "--top",
        type=int,
        default=GlobalConfig.TOP_FILETYPES,
        help="只显示新增行数最多的 N 种类型 (0 表示全部)",
    )

    # --- 日志 ---
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="只输出警告和错误")

    return parser


def build_context(
    args: argparse.Namespace, global_config: GlobalConfig, data_root_path: str
) -> Optional[RunContext]:
    """
    合并 CLI 参数、项目配置和全局配置，组装 RunContext。
    优先级: CLI > 项目 config.json > GlobalConfig
    """
    project_config: Dict[str, Any] = {}

    if args.project:
        repo_path = config_manager.get_path_from_alias(data_root_path, args.project)
        if not repo_path:
            logger.error(f"❌ 别名 '{args.project}' 未在 projects.json 中找到。")
            logger.error("   请先使用 --configure -r ... 来配置它。")
            return None
        logger.info(f"ℹ️ 使用别名 '{args.project}' (路径: {repo_path})")
    elif args.repo_path:
        repo_path = os.path.abspath(args.repo_path)
        logger.info(f"ℹ️ 使用直接路径 {repo_path}")
    elif args.log_file:
        repo_path = os.getcwd()
    else:
        logger.error("❌ 必须提供 -p (项目别名)、-r (仓库路径) 或 --log-file 之一。")
        return None

    project_data_path = config_manager.get_project_data_path(data_root_path, repo_path)
    project_config = config_manager.load_project_config(project_data_path)

    author_pattern = (
        args.author or project_config.get("author_pattern") or global_config.AUTHOR_PATTERN
    )
    if args.no_deletions:
        track_deletions = False
    else:
        track_deletions = bool(
            project_config.get("track_deletions", global_config.TRACK_DELETIONS)
        )
    output_format = (
        args.format
        or project_config.get("output_format")
        or global_config.DEFAULT_OUTPUT_FORMAT
    )
    if output_format not in global_config.OUTPUT_FORMATS:
        logger.error(f"❌ 不支持的输出格式: {output_format}")
        return None

    delimiter = global_config.LOG_DELIMITER
    if args.delimiter:
        delimiter = unescape_delimiter(args.delimiter)

    return RunContext(
        repo_path=repo_path,
        project_data_path=project_data_path,
        author_pattern=author_pattern,
        delimiter=delimiter,
        track_deletions=track_deletions,
        output_format=output_format,
        output_path=args.output,
        show_commits=args.show_commits,
        global_config=global_config,
        log_file=args.log_file,
    )


def render_report(report: RepoReport, context: RunContext, top: int = 0) -> str:
    if context.output_format == "json":
        return report_builder.generate_json_report(report)
    if context.output_format == "html":
        return report_builder.generate_html_report(report, context.global_config, top)
    return report_builder.generate_text_report(report, context.show_commits, top)


def _default_html_path(context: RunContext) -> str:
    filename = f"{OUTPUT_FILENAME_PREFIX}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.html"
    return os.path.join(context.project_data_path, filename)


def join_delimiter_value(argv: List[str]) -> List[str]:
    """
    argparse 会把 '---' 当成选项，这里把 "--delimiter ---" 合并为 "--delimiter=---"
    """
    joined: List[str] = []
    index = 0
    while index < len(argv):
        arg = argv[index]
        if arg == "--delimiter" and index + 1 < len(argv):
            joined.append(f"--delimiter={argv[index + 1]}")
            index += 2
            continue
        joined.append(arg)
        index += 1
    return joined


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    主入口点，返回进程退出码。
    """
    parser = setup_parser()
    argv = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(join_delimiter_value(argv))

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.WARNING)

    global_config = GlobalConfig()
    data_root_path = os.path.join(
        global_config.SCRIPT_BASE_PATH, global_config.DATA_ROOT_DIR_NAME
    )

    if args.configure:
        if not args.repo_path:
            logger.error("❌ --configure 标志需要 -r / --repo-path 指定目标仓库路径。")
            return 1
        alias = config_manager.run_interactive_config_wizard(
            data_root_path, args.repo_path, global_config.AUTHOR_PATTERN
        )
        return 0 if alias else 1

    context = build_context(args, global_config, data_root_path)
    if context is None:
        return 1

    logger.info("=" * 50)
    logger.info("🚀 文件类型统计启动...")
    logger.info(f"   [目标仓库]: {context.repo_path}")
    logger.info(f"   [作者模式]: {context.author_pattern}")
    logger.info(f"   [输出格式]: {context.output_format}")
    logger.info("=" * 50)

    report = RepoReport(context.repo_path, context=context)
    rendered: List[str] = []

    def on_complete(outcome: RunOutcome):
        if outcome.success:
            rendered.append(render_report(outcome.report, context, args.top))

    outcome = report.run(on_complete)
    if outcome.failed:
        return 1

    content = rendered[0]
    output_path = context.output_path
    if output_path is None and context.output_format == "html":
        output_path = _default_html_path(context)

    if output_path:
        return 0 if report_builder.save_report(content, output_path) else 1

    print(content)
    return 0
