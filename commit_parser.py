# commit_parser.py
"""
[V1.0] git log --numstat 输出解析器

日志文本的结构 (分隔符默认为 \\x1e):

    <分隔符>88a3f98 2014-04-30
    <空行>
    3       3       README.md
    0       2       aliases.source
    -       -       configs/windows/WinSplitSettings.export
    <空行>
    <分隔符>aa11bb2 2014-05-01
    ...

每个提交块 -> CommitRecord，每一行 numstat -> FileChange。
解析函数均为纯函数，按类型汇总由 filetype_stats 负责。
"""
import logging
import re
from typing import List, Optional, Tuple

from errors import LogFormatError, MalformedFileLineError, MalformedHeaderError
from models import CommitRecord, FileChange, NonNumeric, Numeric, StatValue

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def parse_stat_field(text: str) -> StatValue:
    """
    解析 numstat 的数值字段。
    去掉所有非数字字符后为空 (如二进制标记 '-') 则为 NonNumeric。
    """
    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return NonNumeric(text)
    return Numeric(int(digits))


def get_filetype(filename: str) -> Optional[str]:
    """
    根据文件名推断类型，无法推断时返回 None
    - 'configs/vimrc'  -> None (没有 '.')
    - '.bashrc'        -> None ('.' 之前为空)
    - 'archive.tar.gz' -> 'gz'
    """
    pieces = filename.split(".")
    if len(pieces) <= 1:
        return None
    if not pieces[0]:
        return None
    return pieces[-1] or None


def parse_commit_file(
    line: str, track_deletions: bool = True, commit_index: Optional[int] = None
) -> FileChange:
    """
    解析一行 numstat: "18\\t0\\tconfigs/StockUbuntuVagrantfile"
    最后一个字段始终是文件名。
    """
    pieces = line.rstrip("\r").split("\t")
    if len(pieces) < 2 or not pieces[-1]:
        raise MalformedFileLineError(line, commit_index)

    filename = pieces[-1]
    additions = parse_stat_field(pieces[0])
    deletions: Optional[StatValue] = None
    if track_deletions and len(pieces) >= 3:
        deletions = parse_stat_field(pieces[1])

    return FileChange(
        additions=additions.count,
        deletions=deletions.count if deletions is not None else None,
        filename=filename,
        filetype=get_filetype(filename),
        is_binary=isinstance(additions, NonNumeric)
        or isinstance(deletions, NonNumeric),
    )


def parse_commit_title(title: str, commit_index: Optional[int] = None) -> Tuple[str, str]:
    """解析提交头部 "88a3f98 2014-04-30" -> (hash, date)"""
    pieces = title.split()
    if len(pieces) != 2:
        raise MalformedHeaderError(title, commit_index)
    return pieces[0], pieces[1]


def _split_block(block: str, commit_index: int) -> Tuple[str, List[str]]:
    """
    把提交块拆成 (头部, numstat 行)。
    头部之后的第一行应为空行；不是空行时记录警告并按 numstat 行处理。
    结尾的空行全部丢弃，没有文件的提交得到空列表。
    """
    lines = block.split("\n")
    title = lines[0]
    body = lines[1:]

    if body and body[0].strip():
        logger.warning(
            f"⚠️ 第 {commit_index + 1} 个提交的头部之后不是空行: {body[0]!r}"
        )
    elif body:
        body = body[1:]

    while body and not body[-1].strip():
        body.pop()

    return title, body


def parse_commit(
    block: str, commit_index: int = 0, track_deletions: bool = True
) -> CommitRecord:
    """把单个提交块转换为 CommitRecord"""
    title, stat_lines = _split_block(block, commit_index)
    commit_hash, date = parse_commit_title(title, commit_index)
    files = tuple(
        parse_commit_file(line, track_deletions, commit_index) for line in stat_lines
    )
    return CommitRecord(hash=commit_hash, date=date, files=files)


def parse_log(
    text: str, delimiter: str, track_deletions: bool = True
) -> List[CommitRecord]:
    """
    解析完整的日志文本，按出现顺序返回所有提交。
    任何一个提交格式错误都会中止整个解析，不返回部分结果。
    """
    if not delimiter:
        raise ValueError("分隔符不能为空")

    blocks = text.split(delimiter)
    # 输出以分隔符开头，第一段必定为空
    leading = blocks.pop(0)
    if leading.strip():
        raise LogFormatError(f"日志未以分隔符开头: {leading[:80]!r}")

    commits = [
        parse_commit(block, index, track_deletions)
        for index, block in enumerate(blocks)
    ]

    missing_trailing_blank = sum(1 for block in blocks if not block.endswith("\n"))
    if missing_trailing_blank:
        logger.warning(f"⚠️ {missing_trailing_blank} 个提交块不以空行结尾")
    logger.info(f"成功解析 {len(commits)} 个提交")
    return commits
