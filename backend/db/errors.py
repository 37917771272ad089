"""
数据库约束错误归类

把驱动抛出的 IntegrityError 归类为关注关系的约束类型：
优先使用驱动提供的结构化信号（SQLSTATE + 约束名），
只有在驱动没有结构化信息时（如 SQLite）才退回到错误信息匹配。
无法识别的错误归为 UNKNOWN，由调用方按内部错误处理。
"""

from enum import Enum
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError

from backend.db.models.follow import UNIQUE_FOLLOW_CONSTRAINT, NO_SELF_FOLLOW_CONSTRAINT

# PostgreSQL SQLSTATE
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"

# SQLite 错误信息片段
SQLITE_UNIQUE_FOLLOW = "UNIQUE constraint failed: user_follows.follower_id, user_follows.followee_id"
SQLITE_FOREIGN_KEY = "FOREIGN KEY constraint failed"
SQLITE_CHECK = "CHECK constraint failed"


class ConstraintViolation(str, Enum):
    """关注关系写入时可能触发的约束"""
    DUPLICATE = "duplicate"
    MISSING_USER = "missing_user"
    SELF_FOLLOW = "self_follow"
    UNKNOWN = "unknown"


def _structured_signal(error: IntegrityError) -> Tuple[Optional[str], Optional[str]]:
    """
    提取 (SQLSTATE, 约束名)

    - asyncpg: SQLAlchemy 适配异常带 sqlstate，原始异常（__cause__）带 constraint_name
    - psycopg / psycopg2: sqlstate 或 pgcode，约束名在 diag.constraint_name
    """
    orig = error.orig
    cause = getattr(orig, "__cause__", None)

    sqlstate = (
        getattr(orig, "sqlstate", None)
        or getattr(orig, "pgcode", None)
        or getattr(cause, "sqlstate", None)
    )

    constraint = getattr(cause, "constraint_name", None) or getattr(orig, "constraint_name", None)
    if constraint is None:
        diag = getattr(orig, "diag", None)
        constraint = getattr(diag, "constraint_name", None)

    return sqlstate, constraint


def _names_constraint(constraint: Optional[str], message: str, expected: str) -> bool:
    """驱动给了约束名就按名称比较，没给时约束名必须出现在错误信息里"""
    if constraint is not None:
        return constraint == expected
    return expected in message


def classify_integrity_error(error: IntegrityError) -> ConstraintViolation:
    """
    归类关注关系写入的约束错误

    Args:
        error: SQLAlchemy IntegrityError

    Returns:
        ConstraintViolation
    """
    sqlstate, constraint = _structured_signal(error)
    message = str(error.orig) if error.orig is not None else str(error)

    if sqlstate:
        if sqlstate == FOREIGN_KEY_VIOLATION:
            return ConstraintViolation.MISSING_USER
        if sqlstate == UNIQUE_VIOLATION:
            # 唯一约束必须是关注关系的 (follower, followee) 约束，主键冲突等不算重复关注
            if _names_constraint(constraint, message, UNIQUE_FOLLOW_CONSTRAINT):
                return ConstraintViolation.DUPLICATE
            return ConstraintViolation.UNKNOWN
        if sqlstate == CHECK_VIOLATION:
            if _names_constraint(constraint, message, NO_SELF_FOLLOW_CONSTRAINT):
                return ConstraintViolation.SELF_FOLLOW
            return ConstraintViolation.UNKNOWN
        return ConstraintViolation.UNKNOWN

    # 没有结构化信号，退回到错误信息匹配
    if SQLITE_UNIQUE_FOLLOW in message or UNIQUE_FOLLOW_CONSTRAINT in message:
        return ConstraintViolation.DUPLICATE
    if SQLITE_FOREIGN_KEY in message:
        return ConstraintViolation.MISSING_USER
    if SQLITE_CHECK in message and NO_SELF_FOLLOW_CONSTRAINT in message:
        return ConstraintViolation.SELF_FOLLOW

    return ConstraintViolation.UNKNOWN
