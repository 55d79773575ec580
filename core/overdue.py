"""逾期计算：逾期天数、罚息、风险等级、催收建议、信用评分、客户状态"""
from decimal import Decimal, ROUND_HALF_UP

from config.constants import (
    RiskLevel, CollectionPriority, CustomerStatus,
    COLLECTION_ADVICE_BUCKETS, URGENT_COLLECTION_METHOD,
)
from config.settings import (
    DEFAULT_DAILY_PENALTY_RATE, DEFAULT_FIXED_PENALTY,
    DEFAULT_NEGOTIATION_THRESHOLD, DEFAULT_BAD_DEBT_THRESHOLD,
    RISK_CRITICAL_THRESHOLD, RISK_HIGH_THRESHOLD, RISK_MEDIUM_THRESHOLD,
    CREDIT_SCORE_MAX, CREDIT_SCORE_MIN, OVERDUE_COUNT_PENALTY,
    OVERDUE_DAYS_PENALTY_RATE, OVERDUE_DAYS_PENALTY_CAP, SUCCESS_RATE_BONUS,
)
from core.exceptions import InvalidDateRangeError, InvalidPaymentError, InvalidOverdueInputError
from core.schema import CollectionAdvice, OverdueAssessment
from utils.date_utils import parse_date, add_days, days_between
from utils.money import to_decimal, to_cents, round2


def _date(name: str, value):
    try:
        return parse_date(value)
    except (TypeError, ValueError) as exc:
        raise InvalidDateRangeError(f"{name}: invalid date {value!r}") from exc


def _amount(name: str, value) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise InvalidPaymentError(f"{name}: {exc}") from exc


def _count(name: str, value) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise InvalidOverdueInputError(f"{name}: {exc}") from exc


def _risk_level(value) -> RiskLevel:
    try:
        return RiskLevel(value)
    except ValueError:
        raise InvalidOverdueInputError(f"unknown risk level: {value!r}") from None


def calc_overdue_days(
    due_date,
    paid_amount,
    required_amount,
    today,
    grace_period_days: int = 0,
) -> int:
    """逾期天数：已还足额为 0，否则为宽限期结束后至今的天数"""
    due = _date("due_date", due_date)
    today = _date("today", today)
    if grace_period_days < 0:
        raise InvalidDateRangeError(f"grace_period_days must not be negative, got {grace_period_days}")

    if to_cents(_amount("paid_amount", paid_amount)) >= to_cents(_amount("required_amount", required_amount)):
        return 0

    grace_date = add_days(due, grace_period_days)
    return max(0, days_between(grace_date, today))


def calc_overdue_fees(
    overdue_days: int,
    overdue_amount,
    daily_penalty_rate=DEFAULT_DAILY_PENALTY_RATE,
    fixed_penalty=DEFAULT_FIXED_PENALTY,
) -> Decimal:
    """逾期费用 = 逾期金额 * 日罚息率(%) * 逾期天数 + 固定罚金"""
    if overdue_days <= 0:
        return round2(0)

    amount = _amount("overdue_amount", overdue_amount)
    rate = _amount("daily_penalty_rate", daily_penalty_rate)
    fixed = _amount("fixed_penalty", fixed_penalty)
    daily_penalty = amount * rate / 100 * overdue_days
    return round2(daily_penalty + fixed)


def calc_risk_level(
    overdue_days: int,
    overdue_count: int = 0,
    is_blacklisted: bool = False,
) -> RiskLevel:
    """风险等级，按顺序首个命中的规则生效"""
    if is_blacklisted:
        return RiskLevel.CRITICAL

    for level, (days, count) in (
        (RiskLevel.CRITICAL, RISK_CRITICAL_THRESHOLD),
        (RiskLevel.HIGH, RISK_HIGH_THRESHOLD),
        (RiskLevel.MEDIUM, RISK_MEDIUM_THRESHOLD),
    ):
        if overdue_days >= days or overdue_count >= count:
            return level
    return RiskLevel.LOW


def generate_collection_advice(overdue_days: int, risk_level) -> CollectionAdvice:
    """按逾期天数分段给出催收建议，极高风险时升级为紧急催收"""
    for max_days, priority, methods, next_action, timeline in COLLECTION_ADVICE_BUCKETS:
        if max_days is None or overdue_days <= max_days:
            break

    methods = list(methods)
    if _risk_level(risk_level) == RiskLevel.CRITICAL:
        priority = CollectionPriority.CRITICAL
        methods.insert(0, URGENT_COLLECTION_METHOD)

    return CollectionAdvice(
        priority=priority,
        methods=tuple(methods),
        next_action=next_action,
        timeline=timeline,
    )


def calc_credit_score(
    overdue_count: int = 0,
    max_overdue_days: int = 0,
    total_loans: int = 0,
    successful_loans: int = 0,
    is_blacklisted: bool = False,
) -> int:
    """客户信用评分 (0-100)"""
    if is_blacklisted:
        return CREDIT_SCORE_MIN

    score = Decimal(CREDIT_SCORE_MAX)
    score -= _count("overdue_count", overdue_count) * OVERDUE_COUNT_PENALTY

    max_days = _count("max_overdue_days", max_overdue_days)
    if max_days > 0:
        score -= min(max_days * to_decimal(OVERDUE_DAYS_PENALTY_RATE),
                     Decimal(OVERDUE_DAYS_PENALTY_CAP))

    total = _count("total_loans", total_loans)
    if total > 0:
        success_rate = _count("successful_loans", successful_loans) / total
        score += success_rate * SUCCESS_RATE_BONUS

    score = int(score.to_integral_value(rounding=ROUND_HALF_UP))
    return max(CREDIT_SCORE_MIN, min(CREDIT_SCORE_MAX, score))


def derive_customer_status(
    overdue_days: int,
    negotiation_threshold: int = DEFAULT_NEGOTIATION_THRESHOLD,
    bad_debt_threshold: int = DEFAULT_BAD_DEBT_THRESHOLD,
) -> CustomerStatus:
    """根据逾期天数更新客户状态"""
    if overdue_days < 0:
        raise InvalidDateRangeError(f"overdue_days must not be negative, got {overdue_days}")

    if overdue_days == 0:
        return CustomerStatus.NORMAL
    if overdue_days <= negotiation_threshold:
        return CustomerStatus.NEGOTIATING
    # 协商阈值与坏账阈值之间仍按协商处理
    if overdue_days <= bad_debt_threshold:
        return CustomerStatus.NEGOTIATING
    return CustomerStatus.BAD_DEBT


def assess_overdue(
    overdue_days: int,
    overdue_amount,
    overdue_count: int = 0,
    max_overdue_days: int = 0,
    total_loans: int = 0,
    successful_loans: int = 0,
    is_blacklisted: bool = False,
    daily_penalty_rate=DEFAULT_DAILY_PENALTY_RATE,
    fixed_penalty=DEFAULT_FIXED_PENALTY,
    negotiation_threshold: int = DEFAULT_NEGOTIATION_THRESHOLD,
    bad_debt_threshold: int = DEFAULT_BAD_DEBT_THRESHOLD,
) -> OverdueAssessment:
    """单笔逾期贷款的综合评估：罚息、风险、催收建议、信用评分、客户状态"""
    risk_level = calc_risk_level(overdue_days, overdue_count, is_blacklisted)
    return OverdueAssessment(
        overdue_days=overdue_days,
        overdue_fee=calc_overdue_fees(overdue_days, overdue_amount, daily_penalty_rate, fixed_penalty),
        risk_level=risk_level,
        collection_advice=generate_collection_advice(overdue_days, risk_level),
        credit_score=calc_credit_score(
            overdue_count, max_overdue_days, total_loans, successful_loans, is_blacklisted,
        ),
        customer_status=derive_customer_status(overdue_days, negotiation_threshold, bad_debt_threshold),
    )
