from datetime import date, datetime, timedelta

from dateutil import parser

from config.settings import REPAYMENT_PERIOD_DAYS


def parse_date(d) -> date:
    """解析日期，支持 date / datetime / ISO 字符串"""
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    if isinstance(d, str):
        return parser.isoparse(d.strip()).date()
    raise TypeError(f"cannot interpret {d!r} as a date")


def add_days(d: date, days: int) -> date:
    """日期加 N 天"""
    return d + timedelta(days=days)


def get_due_date(start_date: date, period: int, period_days: int = REPAYMENT_PERIOD_DAYS) -> date:
    """计算第 period 期的还款日"""
    return add_days(start_date, period * period_days)


def days_between(d1: date, d2: date) -> int:
    """d2 - d1 的天数，可为负"""
    return (d2 - d1).days
