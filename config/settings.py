import os

# 还款周期（天）：每 8 天一期
REPAYMENT_PERIOD_DAYS = 8

# 模式1 默认每期还本比例、模式2 默认期数
DEFAULT_PRINCIPAL_RATE_PER_PERIOD = 0.10
DEFAULT_PERIODS = 4

# 逾期罚息：日罚息率 (%) 与固定罚金 (元)
DEFAULT_DAILY_PENALTY_RATE = 0.1
DEFAULT_FIXED_PENALTY = 50

# 客户状态阈值（逾期天数）
DEFAULT_NEGOTIATION_THRESHOLD = 30
DEFAULT_BAD_DEBT_THRESHOLD = 90

# 风险等级阈值：(逾期天数, 历史逾期次数)
RISK_CRITICAL_THRESHOLD = (90, 5)
RISK_HIGH_THRESHOLD = (30, 3)
RISK_MEDIUM_THRESHOLD = (7, 1)

# 信用评分
CREDIT_SCORE_MAX = 100
CREDIT_SCORE_MIN = 0
OVERDUE_COUNT_PENALTY = 10
OVERDUE_DAYS_PENALTY_RATE = 0.5
OVERDUE_DAYS_PENALTY_CAP = 30
SUCCESS_RATE_BONUS = 20

# 逾期统计分段
EARLY_OVERDUE_MAX_DAYS = 30
LATE_OVERDUE_MAX_DAYS = 90

# 日志
LOG_LEVEL = os.environ.get("LOAN_LOG_LEVEL", "INFO")
LOG_FORMAT = os.environ.get("LOAN_LOG_FORMAT", "standard")

# 页面配置
PAGE_TITLE = "贷款后台管理 Dashboard"
PAGE_ICON = "💼"
LAYOUT = "wide"

# 图表配色
COLORS = {
    "primary": "#1f77b4",
    "secondary": "#ff7f0e",
    "success": "#2ca02c",
    "danger": "#d62728",
    "warning": "#bcbd22",
    "info": "#17becf",
    "principal": "#1f77b4",
    "interest": "#ff7f0e",
    "fee": "#9467bd",
    "prepaid": "#17becf",
    "deposit": "#8c564b",
    "low": "#2ca02c",
    "medium": "#bcbd22",
    "high": "#ff7f0e",
    "critical": "#d62728",
}

# 金额精度
AMOUNT_PRECISION = 2
RATE_PRECISION = 4

# 出借方 IRR 求根：每期收益率搜索上限
IRR_SEARCH_MAX_PERIOD_RATE = 1e6
