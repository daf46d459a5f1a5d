import uuid
from datetime import datetime
from typing import Optional

import pytz


def utc_now() -> datetime:
    """获取当前UTC时间"""
    return datetime.now(pytz.utc)


def generate_id(prefix: str) -> str:
    """生成带前缀的唯一ID"""
    return f"{prefix}_{uuid.uuid4().hex}"


def format_timestamp(dt: Optional[datetime]) -> Optional[str]:
    """格式化时间戳，空值原样返回"""
    if dt is None:
        return None
    return dt.isoformat()


def ensure_utc(dt: datetime) -> datetime:
    """无时区的时间按UTC处理"""
    if dt.tzinfo is None:
        return pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc)


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """把数值限制在区间内"""
    return max(lower, min(upper, value))
