"""方案对比与逾期统计"""
from datetime import date
from typing import Dict

import numpy as np
import pandas as pd

from config.constants import LoanMethod
from config.settings import (
    DEFAULT_PRINCIPAL_RATE_PER_PERIOD, DEFAULT_PERIODS,
    EARLY_OVERDUE_MAX_DAYS, LATE_OVERDUE_MAX_DAYS,
)
from core.calculator import calc_loan_amounts, calc_lender_irr
from core.schedule_generator import generate_repayment_schedule, schedule_to_frame
from core.schema import LoanTerms


def _method_summary(terms: LoanTerms, as_of: date) -> Dict:
    comp = calc_loan_amounts(terms)
    schedule = generate_repayment_schedule(terms, as_of, comp)
    return {
        "computation": comp,
        "first_installment": schedule[0].total_due,
        "lender_irr": calc_lender_irr(comp, schedule),
        "schedule": schedule_to_frame(schedule),
    }


def compare_loan_methods(
    principal_amount,
    interest_rate,
    as_of: date,
    deposit_amount=0,
    upfront_fees=0,
    principal_rate_per_period=DEFAULT_PRINCIPAL_RATE_PER_PERIOD,
    periods: int = DEFAULT_PERIODS,
) -> Dict:
    """对比模式1（利息前置）vs 模式2（等额分期）"""
    common = dict(
        principal_amount=principal_amount,
        interest_rate=interest_rate,
        deposit_amount=deposit_amount,
        upfront_fees=upfront_fees,
        principal_rate_per_period=principal_rate_per_period,
        periods=periods,
    )
    m1 = _method_summary(LoanTerms(loan_method=LoanMethod.METHOD1, **common), as_of)
    m2 = _method_summary(LoanTerms(loan_method=LoanMethod.METHOD2, **common), as_of)

    return {
        "method1": m1,
        "method2": m2,
        "profit_difference": m1["computation"].profit - m2["computation"].profit,
        "first_installment_difference": m1["first_installment"] - m2["first_installment"],
    }


def summarize_overdue(loans: pd.DataFrame) -> Dict:
    """
    逾期贷款统计。
    loans: 至少包含 overdue_days, overdue_amount 列，可选 overdue_fees, risk_level
    只统计 overdue_days > 0 的记录
    """
    df = loans.copy()
    for col in ["overdue_days", "overdue_amount", "overdue_fees"]:
        if col not in df.columns:
            df[col] = 0
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)
    if "risk_level" not in df.columns:
        df["risk_level"] = "unknown"

    overdue = df[df["overdue_days"] > 0]
    days = overdue["overdue_days"].to_numpy()
    # 0: 早期逾期, 1: 晚期逾期, 2: 坏账
    bucket = np.select(
        [days <= EARLY_OVERDUE_MAX_DAYS, days <= LATE_OVERDUE_MAX_DAYS],
        [0, 1],
        default=2,
    )

    risk_distribution = (
        overdue.groupby("risk_level")
        .agg(count=("overdue_days", "size"), amount=("overdue_amount", "sum"))
        .reset_index()
    )
    risk_distribution["amount"] = risk_distribution["amount"].round(2)

    return {
        "total_overdue": int(len(overdue)),
        "early_overdue": int(np.sum(bucket == 0)),
        "late_overdue": int(np.sum(bucket == 1)),
        "bad_debt": int(np.sum(bucket == 2)),
        "total_overdue_amount": round(float(overdue["overdue_amount"].sum()), 2),
        "total_overdue_fees": round(float(overdue["overdue_fees"].sum()), 2),
        "avg_overdue_days": round(float(overdue["overdue_days"].mean()), 2) if len(overdue) else 0.0,
        "risk_distribution": risk_distribution,
    }
