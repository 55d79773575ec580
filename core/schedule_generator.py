"""
还款计划生成器

根据贷款条款生成每 8 天一期的还款计划。生成时间由调用方传入，
相同输入总是得到相同计划。
"""
from datetime import date
from typing import List, Optional

import pandas as pd

from config.constants import LoanMethod, DEPOSIT_REFUND_NOTE, REPAYMENT_SCHEDULE_COLUMNS
from config.settings import REPAYMENT_PERIOD_DAYS
from core.calculator import calc_loan_amounts, normalize_terms, principal_rate_of
from core.exceptions import InvalidDateRangeError
from core.schema import LoanTerms, LoanComputation, RepaymentInstallment
from utils.date_utils import parse_date, get_due_date
from utils.money import to_cents, from_cents


def _start_date(as_of) -> date:
    try:
        return parse_date(as_of)
    except (TypeError, ValueError) as exc:
        raise InvalidDateRangeError(f"invalid schedule start date {as_of!r}") from exc


def _method1_installments(
    terms: LoanTerms,
    computation: LoanComputation,
    start: date,
    period_days: int,
) -> List[RepaymentInstallment]:
    """模式1：每期固定比例还本，全额利息放在第一期"""
    _, principal, _, _, _ = normalize_terms(terms)
    per_period = to_cents(principal * principal_rate_of(terms))
    interest = to_cents(computation.interest)
    remaining = to_cents(computation.principal_amount)
    n = computation.number_of_periods

    records = []
    for i in range(1, n + 1):
        # 最后一期收尾，保证各期本金之和等于借款金额
        prin = remaining if i == n else min(per_period, remaining)
        remaining = max(0, remaining - prin)
        inst_interest = interest if i == 1 else 0
        records.append(RepaymentInstallment(
            sequence_number=i,
            due_date=get_due_date(start, i, period_days),
            principal_portion=from_cents(prin),
            interest_portion=from_cents(inst_interest),
            total_due=from_cents(prin + inst_interest),
            remaining_balance=from_cents(remaining),
        ))
    return records


def _method2_installments(
    terms: LoanTerms,
    computation: LoanComputation,
    start: date,
    period_days: int,
) -> List[RepaymentInstallment]:
    """模式2：本金、利息均分到每期，每期应还固定"""
    _, principal, rate, _, _ = normalize_terms(terms)
    n = computation.number_of_periods
    prin = to_cents(principal / n)
    interest = to_cents(principal * rate / n)
    payment = to_cents(computation.payment_per_period)
    target = to_cents(computation.target_amount)

    records = []
    for i in range(1, n + 1):
        records.append(RepaymentInstallment(
            sequence_number=i,
            due_date=get_due_date(start, i, period_days),
            principal_portion=from_cents(prin),
            interest_portion=from_cents(interest),
            total_due=from_cents(payment),
            remaining_balance=from_cents(max(0, target - payment * i)),
        ))
    return records


def generate_repayment_schedule(
    terms: LoanTerms,
    as_of,
    computation: Optional[LoanComputation] = None,
    period_days: int = REPAYMENT_PERIOD_DAYS,
) -> List[RepaymentInstallment]:
    """生成还款计划；有抵押金时追加一行负数的退还抵押金"""
    start = _start_date(as_of)
    if computation is None:
        computation = calc_loan_amounts(terms)

    if computation.loan_method == LoanMethod.METHOD1:
        records = _method1_installments(terms, computation, start, period_days)
    else:
        records = _method2_installments(terms, computation, start, period_days)

    deposit = to_cents(computation.deposit_amount)
    if deposit > 0:
        n = computation.number_of_periods
        records.append(RepaymentInstallment(
            sequence_number=n + 1,
            due_date=get_due_date(start, n, period_days),
            principal_portion=from_cents(0),
            interest_portion=from_cents(0),
            total_due=from_cents(-deposit),
            remaining_balance=from_cents(0),
            note=DEPOSIT_REFUND_NOTE,
        ))
    return records


def schedule_to_frame(schedule: List[RepaymentInstallment]) -> pd.DataFrame:
    """还款计划 -> DataFrame（金额为 float，日期为 ISO 字符串）"""
    records = []
    for inst in schedule:
        records.append({
            "sequence_number": inst.sequence_number,
            "due_date": inst.due_date.strftime("%Y-%m-%d"),
            "principal_portion": float(inst.principal_portion),
            "interest_portion": float(inst.interest_portion),
            "total_due": float(inst.total_due),
            "remaining_balance": float(inst.remaining_balance),
            "note": inst.note or "",
        })
    return pd.DataFrame(records, columns=REPAYMENT_SCHEDULE_COLUMNS)
