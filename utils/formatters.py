def fmt_amount(value, unit: str = "元") -> str:
    """格式化金额：1234567.89 -> 1,234,567.89 元"""
    value = float(value)
    if abs(value) >= 1e8:
        return f"{value / 1e8:,.2f} 亿元"
    if abs(value) >= 1e4:
        return f"{value / 1e4:,.2f} 万元"
    return f"{value:,.2f} {unit}"


def fmt_percent(value) -> str:
    """格式化比例：0.15 -> 15.00%"""
    return f"{float(value) * 100:.2f}%"


def fmt_periods(periods: int, period_days: int) -> str:
    """格式化期数：10 期 x 8 天 -> 10期（80天）"""
    return f"{periods}期（{periods * period_days}天）"


def fmt_days(days: int) -> str:
    return f"{days}天"
