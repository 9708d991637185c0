# report_builder.py
"""
[V1.0] 报告生成器
负责把 RepoReport 渲染为纯文本、JSON 或 HTML (Jinja2 模板)。
"""
import json
import logging
import os
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

import filetype_stats
from config import GlobalConfig
from repo_report import RepoReport

logger = logging.getLogger(__name__)


def report_to_dict(report: RepoReport) -> Dict[str, Any]:
    """转换为可 JSON 序列化的字典"""
    return {
        "repo_path": report.repo_path,
        "commitCount": report.commit_count,
        "filetypeCounts": dict(report.filetype_counts),
        "results": [
            {
                "hash": commit.hash,
                "date": commit.date,
                "files": [asdict(f) for f in commit.files],
            }
            for commit in report.results
        ],
    }


def generate_json_report(report: RepoReport) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False, indent=2)


def generate_text_report(
    report: RepoReport, show_commits: bool = False, top: int = 0
) -> str:
    """
    生成纯文本格式的报告 (用于终端输出)。
    """
    track_deletions = report.context.track_deletions
    lines = [
        "=" * 60,
        "                按文件类型统计的新增行数",
        "=" * 60,
        f"生成时间: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        f"仓库路径: {report.repo_path}",
        f"提交数量: {report.commit_count}",
    ]
    if track_deletions:
        lines.append(f"代码变更: +{report.total_additions} -{report.total_deletions}")
    else:
        lines.append(f"代码变更: +{report.total_additions}")
    lines.append("")
    if not report.filetype_counts:
        lines.append("⚠️  未找到可识别类型的文件变更")
    else:
        deletions = report.deletions_by_filetype if track_deletions else {}
        files = report.files_by_filetype
        header = f" {'类型':<12} | {'新增':>8} | {'文件数':>6}"
        if track_deletions:
            header += f" | {'删除':>8}"
        lines.append(header)
        lines.append("-" * 60)
        for filetype, additions in filetype_stats.top_filetypes(
            report.filetype_counts, top
        ):
            row = f" {filetype:<12} | {additions:>8} | {files.get(filetype, 0):>6}"
            if track_deletions:
                row += f" | {deletions.get(filetype, 0):>8}"
            lines.append(row)
        lines.append("-" * 60)

    if show_commits and report.results:
        lines.append("")
        lines.append("提交明细:")
        for commit in report.results:
            lines.append(
                f"  {commit.hash} ({commit.date}) - {len(commit.files)} 个文件, +{commit.additions}"
            )
            for f in commit.files:
                stat = "-" if f.is_binary else f"+{f.additions}"
                if f.deletions is not None and not f.is_binary:
                    stat += f" -{f.deletions}"
                lines.append(f"      {stat:<12} {f.filename}")
    lines.append("=" * 60)
    return "\n".join(lines)


def generate_html_report(
    report: RepoReport, global_config: GlobalConfig, top: int = 0
) -> str:
    """
    使用 Jinja2 模板引擎生成 HTML 报告。
    """
    templates_dir = os.path.join(
        global_config.SCRIPT_BASE_PATH, global_config.TEMPLATES_DIR_NAME
    )
    env = Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml"]),
    )

    template_context = {
        "title": f"文件类型统计 - {datetime.now().strftime('%Y-%m-%d')}",
        "generation_time": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "repo_path": report.repo_path,
        "commit_count": report.commit_count,
        "total_additions": report.total_additions,
        "total_deletions": report.total_deletions,
        "filetype_rows": filetype_stats.top_filetypes(report.filetype_counts, top),
        "deletions": report.deletions_by_filetype,
        "files": report.files_by_filetype,
        "track_deletions": report.context.track_deletions,
        "commits": report.results,
    }

    template = env.get_template(global_config.HTML_TEMPLATE_NAME)
    logger.info(f"🎨 正在渲染 Jinja2 模板: {global_config.HTML_TEMPLATE_NAME}")
    return template.render(**template_context)


def save_report(content: str, full_path: str) -> Optional[str]:
    """保存报告到文件"""
    try:
        directory = os.path.dirname(full_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(full_path, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info(f"✅ 报告已保存: {full_path}")
        return full_path
    except OSError as e:
        logger.error(f"❌ 保存报告失败 ({full_path}): {e}")
        return None
