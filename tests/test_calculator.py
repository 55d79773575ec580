"""放款计算测试"""
from datetime import date
from decimal import Decimal

import pytest

from config.constants import LoanMethod
from core.calculator import calc_loan_amounts, calc_lender_irr
from core.exceptions import InvalidTermsError, LoanEngineError, YieldCalculationError
from core.schedule_generator import generate_repayment_schedule
from core.schema import LoanTerms


class TestMethod1:
    """模式1：每期固定比例还本 + 利息前置"""

    def test_basic_calculation(self):
        comp = calc_loan_amounts(LoanTerms(
            principal_amount=10000, interest_rate=0.15,
            loan_method=LoanMethod.METHOD1, principal_rate_per_period=0.10,
        ))
        assert comp.interest == Decimal("1500.00")
        assert comp.received_amount == Decimal("8500.00")
        assert comp.number_of_periods == 10
        assert comp.payment_per_period == Decimal("2500.00")
        assert comp.total_repayment == Decimal("25000.00")
        assert comp.profit == Decimal("15000.00")
        assert comp.target_amount == Decimal("10000.00")

    @pytest.mark.parametrize("rate, expected", [
        ("0.10", 10), ("0.3", 4), ("0.07", 15), ("0.25", 4), ("1", 1), ("1.5", 1),
    ])
    def test_number_of_periods_is_ceiling(self, rate, expected):
        comp = calc_loan_amounts(LoanTerms(
            principal_amount=1000, interest_rate=0.1, principal_rate_per_period=rate,
        ))
        assert comp.number_of_periods == expected

    def test_deposit_reduces_received_and_total(self):
        comp = calc_loan_amounts(LoanTerms(
            principal_amount=10000, interest_rate=0.15,
            deposit_amount=2000, upfront_fees=100,
        ))
        assert comp.received_amount == Decimal("6400.00")
        assert comp.total_repayment == Decimal("23000.00")
        assert comp.profit == Decimal("13000.00")

    def test_received_amount_floored_at_zero(self):
        comp = calc_loan_amounts(LoanTerms(
            principal_amount=1000, interest_rate=0.5, deposit_amount=600,
        ))
        assert comp.received_amount == Decimal("0.00")

    def test_non_positive_principal_rate_rejected(self):
        with pytest.raises(InvalidTermsError):
            calc_loan_amounts(LoanTerms(
                principal_amount=1000, interest_rate=0.1, principal_rate_per_period=0,
            ))


class TestMethod2:
    """模式2：等额分期"""

    def test_basic_calculation(self):
        comp = calc_loan_amounts(LoanTerms(
            principal_amount=10000, interest_rate=0.15,
            loan_method=LoanMethod.METHOD2, periods=4,
        ))
        assert comp.number_of_periods == 4
        assert comp.payment_per_period == Decimal("2875.00")
        assert comp.total_repayment == Decimal("11500.00")
        assert comp.profit == Decimal("1500.00")
        assert comp.target_amount == Decimal("11500.00")
        assert comp.periods == 4
        assert comp.principal_rate_per_period is None

    def test_uneven_split_rounds_payment(self):
        comp = calc_loan_amounts(LoanTerms(
            principal_amount=10000, interest_rate=0.15,
            loan_method="method2", periods=3,
        ))
        assert comp.payment_per_period == Decimal("3833.33")
        assert comp.total_repayment == Decimal("11500.00")

    def test_deposit_subtracted_from_total(self):
        comp = calc_loan_amounts(LoanTerms(
            principal_amount=10000, interest_rate=0.15,
            loan_method=LoanMethod.METHOD2, periods=4, deposit_amount=1000,
        ))
        assert comp.total_repayment == Decimal("10500.00")
        assert comp.profit == Decimal("500.00")

    @pytest.mark.parametrize("periods", [0, -3, 2.5, True])
    def test_invalid_periods_rejected(self, periods):
        with pytest.raises(InvalidTermsError):
            calc_loan_amounts(LoanTerms(
                principal_amount=1000, interest_rate=0.1,
                loan_method=LoanMethod.METHOD2, periods=periods,
            ))


class TestInvalidTerms:

    @pytest.mark.parametrize("kwargs", [
        dict(principal_amount=0, interest_rate=0.1),
        dict(principal_amount=-100, interest_rate=0.1),
        dict(principal_amount=100, interest_rate=-0.01),
        dict(principal_amount=100, interest_rate=0.1, deposit_amount=-1),
        dict(principal_amount=100, interest_rate=0.1, upfront_fees=-1),
        dict(principal_amount="abc", interest_rate=0.1),
        dict(principal_amount=float("nan"), interest_rate=0.1),
        dict(principal_amount=100, interest_rate=0.1, loan_method="method3"),
    ])
    def test_rejected(self, kwargs):
        with pytest.raises(InvalidTermsError):
            calc_loan_amounts(LoanTerms(**kwargs))

    def test_error_is_engine_error(self):
        with pytest.raises(LoanEngineError):
            calc_loan_amounts(LoanTerms(principal_amount=0, interest_rate=0.1))

    def test_zero_interest_allowed(self):
        comp = calc_loan_amounts(LoanTerms(principal_amount=100, interest_rate=0))
        assert comp.interest == Decimal("0.00")
        assert comp.received_amount == Decimal("100.00")


class TestLenderIRR:

    def test_positive_for_interest_bearing_loan(self):
        terms = LoanTerms(principal_amount=10000, interest_rate=0.15)
        comp = calc_loan_amounts(terms)
        schedule = generate_repayment_schedule(terms, date(2024, 1, 1), comp)
        assert calc_lender_irr(comp, schedule) > 15

    def test_zero_interest_gives_zero(self):
        terms = LoanTerms(principal_amount=1000, interest_rate=0,
                          loan_method=LoanMethod.METHOD2, periods=4)
        comp = calc_loan_amounts(terms)
        schedule = generate_repayment_schedule(terms, date(2024, 1, 1), comp)
        assert calc_lender_irr(comp, schedule) == pytest.approx(0.0, abs=1e-3)

    def test_nothing_disbursed_returns_zero(self):
        terms = LoanTerms(principal_amount=1000, interest_rate=0.5, deposit_amount=600)
        comp = calc_loan_amounts(terms)
        schedule = generate_repayment_schedule(terms, date(2024, 1, 1), comp)
        assert calc_lender_irr(comp, schedule) == 0.0

    def test_method1_front_loaded_interest_yields_more(self):
        """利息前置时出借方年化更高"""
        m1 = LoanTerms(principal_amount=10000, interest_rate=0.15,
                       loan_method=LoanMethod.METHOD1, principal_rate_per_period=0.25)
        m2 = LoanTerms(principal_amount=10000, interest_rate=0.15,
                       loan_method=LoanMethod.METHOD2, periods=4)
        irr = []
        for terms in (m1, m2):
            comp = calc_loan_amounts(terms)
            irr.append(calc_lender_irr(comp, generate_repayment_schedule(terms, date(2024, 1, 1), comp)))
        assert irr[0] > irr[1]

    def test_high_yield_loan_is_solved(self):
        """到手金额极小时每期收益率远超 1000%"""
        terms = LoanTerms(principal_amount=1000, interest_rate="0.99", upfront_fees=9)
        comp = calc_loan_amounts(terms)
        schedule = generate_repayment_schedule(terms, date(2024, 1, 1), comp)
        assert comp.received_amount == Decimal("1.00")
        assert schedule[0].total_due == Decimal("1090.00")
        assert calc_lender_irr(comp, schedule) > 1e100

    def test_unrepresentable_annual_yield_raises(self):
        terms = LoanTerms(principal_amount=1000, interest_rate="0.99", upfront_fees=9)
        comp = calc_loan_amounts(terms)
        schedule = generate_repayment_schedule(terms, date(2024, 1, 1), comp, period_days=1)
        with pytest.raises(YieldCalculationError):
            calc_lender_irr(comp, schedule, period_days=1)
