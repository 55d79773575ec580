"""核心计算：放款金额、两种贷款模式、出借方 IRR"""
from decimal import Decimal, ROUND_CEILING
from typing import List, Tuple

import numpy as np
from scipy import optimize

from config.constants import LoanMethod
from config.settings import REPAYMENT_PERIOD_DAYS, RATE_PRECISION, IRR_SEARCH_MAX_PERIOD_RATE
from core.exceptions import InvalidTermsError, YieldCalculationError
from core.schema import LoanTerms, LoanComputation, RepaymentInstallment
from utils.money import to_decimal, round2


def _decimal_term(name: str, value) -> Decimal:
    try:
        return to_decimal(value)
    except ValueError as exc:
        raise InvalidTermsError(f"{name}: {exc}") from exc


def _loan_method(value) -> LoanMethod:
    try:
        return LoanMethod(value)
    except ValueError:
        raise InvalidTermsError(f"unknown loan method: {value!r}") from None


def normalize_terms(terms: LoanTerms) -> Tuple[LoanMethod, Decimal, Decimal, Decimal, Decimal]:
    """校验并转换公共条款，返回 (模式, 本金, 利率, 抵押金, 前置费用)"""
    method = _loan_method(terms.loan_method)
    principal = _decimal_term("principal_amount", terms.principal_amount)
    rate = _decimal_term("interest_rate", terms.interest_rate)
    deposit = _decimal_term("deposit_amount", terms.deposit_amount)
    fees = _decimal_term("upfront_fees", terms.upfront_fees)

    if principal <= 0:
        raise InvalidTermsError(f"principal_amount must be positive, got {principal}")
    if rate < 0:
        raise InvalidTermsError(f"interest_rate must not be negative, got {rate}")
    if deposit < 0:
        raise InvalidTermsError(f"deposit_amount must not be negative, got {deposit}")
    if fees < 0:
        raise InvalidTermsError(f"upfront_fees must not be negative, got {fees}")
    return method, principal, rate, deposit, fees


def principal_rate_of(terms: LoanTerms) -> Decimal:
    """模式1 每期还本比例"""
    prp = _decimal_term("principal_rate_per_period", terms.principal_rate_per_period)
    if prp <= 0:
        raise InvalidTermsError(f"principal_rate_per_period must be positive, got {prp}")
    return prp


def periods_of(terms: LoanTerms) -> int:
    """模式2 期数"""
    periods = terms.periods
    if isinstance(periods, bool) or not isinstance(periods, int):
        raise InvalidTermsError(f"periods must be an integer, got {periods!r}")
    if periods <= 0:
        raise InvalidTermsError(f"periods must be positive, got {periods}")
    return periods


def calc_loan_amounts(terms: LoanTerms) -> LoanComputation:
    """计算利息、到手金额、每期还款、期数、总还款、利润"""
    method, principal, rate, deposit, fees = normalize_terms(terms)

    interest = principal * rate
    received = max(Decimal(0), round2(principal - interest - deposit - fees))

    prp = None
    periods = None
    if method == LoanMethod.METHOD1:
        # 每期固定比例还本 + 全额利息计入每期应还
        prp = principal_rate_of(terms)
        number_of_periods = int((Decimal(1) / prp).to_integral_value(rounding=ROUND_CEILING))
        payment_per_period = principal * prp + interest
        target = principal
    else:
        periods = periods_of(terms)
        number_of_periods = periods
        payment_per_period = (principal + interest) / periods
        target = principal + interest

    total_repayment = payment_per_period * number_of_periods - deposit
    profit = total_repayment - principal

    return LoanComputation(
        loan_method=method,
        principal_amount=round2(principal),
        interest_rate=rate,
        interest=round2(interest),
        deposit_amount=round2(deposit),
        upfront_fees=round2(fees),
        received_amount=received,
        payment_per_period=round2(payment_per_period),
        number_of_periods=number_of_periods,
        total_repayment=round2(total_repayment),
        profit=round2(profit),
        target_amount=round2(target),
        principal_rate_per_period=prp,
        periods=periods,
    )


def calc_lender_irr(
    computation: LoanComputation,
    schedule: List[RepaymentInstallment],
    period_days: int = REPAYMENT_PERIOD_DAYS,
) -> float:
    """出借方真实年化收益率（%）：放款为现金流出，各期应还（含退还抵押金）为流入"""
    if computation.received_amount <= 0 or not schedule:
        return 0.0

    # 退还抵押金与最后一期同日，按同一期数贴现
    flows = np.zeros(computation.number_of_periods + 1)
    flows[0] = -float(computation.received_amount)
    for inst in schedule:
        idx = min(inst.sequence_number, computation.number_of_periods)
        flows[idx] += float(inst.total_due)
    exponents = np.arange(len(flows))

    def npv(rate):
        with np.errstate(over="ignore"):
            return float(np.sum(flows / (1 + rate) ** exponents))

    # 高收益贷款的每期收益率可远超 1000%，上限倍增直到 NPV 变号
    low, high = -0.5, 10.0
    while npv(high) > 0 and high < IRR_SEARCH_MAX_PERIOD_RATE:
        high *= 2
    if npv(low) * npv(high) > 0:
        raise YieldCalculationError(
            f"no lender yield between {low:.0%} and {high:.0%} per period")

    try:
        period_irr = float(optimize.brentq(npv, low, high))
        annual_irr = (1 + period_irr) ** (365 / period_days) - 1
    except RuntimeError as exc:
        raise YieldCalculationError(f"lender yield did not converge: {exc}") from exc
    except OverflowError as exc:
        raise YieldCalculationError(
            f"annualised lender yield out of range for period rate {period_irr:.4g}") from exc
    return round(annual_irr * 100, RATE_PRECISION)
