"""方案对比与逾期统计测试"""
from decimal import Decimal

import pandas as pd
import pytest

from config.constants import LoanMethod
from core.comparison import compare_loan_methods, summarize_overdue
from core.exceptions import InvalidTermsError


class TestCompareLoanMethods:

    def test_both_methods_present(self, as_of):
        result = compare_loan_methods(10000, 0.15, as_of, periods=4)
        assert result["method1"]["computation"].loan_method == LoanMethod.METHOD1
        assert result["method2"]["computation"].loan_method == LoanMethod.METHOD2

    def test_differences(self, as_of):
        result = compare_loan_methods(10000, 0.15, as_of, periods=4)
        assert result["method1"]["first_installment"] == Decimal("2500.00")
        assert result["method2"]["first_installment"] == Decimal("2875.00")
        assert result["profit_difference"] == Decimal("13500.00")
        assert result["first_installment_difference"] == Decimal("-375.00")

    def test_schedules_are_frames(self, as_of):
        result = compare_loan_methods(10000, 0.15, as_of, deposit_amount=500, periods=4)
        assert isinstance(result["method1"]["schedule"], pd.DataFrame)
        assert len(result["method1"]["schedule"]) == 11
        assert len(result["method2"]["schedule"]) == 5

    def test_lender_irr_positive(self, as_of):
        result = compare_loan_methods(10000, 0.15, as_of, periods=4)
        assert result["method1"]["lender_irr"] > 0
        assert result["method2"]["lender_irr"] > 0

    def test_invalid_terms(self, as_of):
        with pytest.raises(InvalidTermsError):
            compare_loan_methods(-1, 0.15, as_of)


class TestSummarizeOverdue:

    @pytest.fixture
    def loans(self):
        return pd.DataFrame({
            "loan_id": ["L1", "L2", "L3", "L4", "L5", "L6"],
            "overdue_days": [0, 5, 30, 31, 90, 120],
            "overdue_amount": [1000, 2000, 1500, 500, 800, 3000],
            "overdue_fees": [0, 60, 95, 65.5, 122, 410],
            "risk_level": ["low", "low", "high", "high", "critical", "critical"],
        })

    def test_buckets(self, loans):
        stats = summarize_overdue(loans)
        assert stats["total_overdue"] == 5
        assert stats["early_overdue"] == 2
        assert stats["late_overdue"] == 2
        assert stats["bad_debt"] == 1

    def test_totals_exclude_current_loans(self, loans):
        stats = summarize_overdue(loans)
        assert stats["total_overdue_amount"] == 7800.0
        assert stats["total_overdue_fees"] == 752.5
        assert stats["avg_overdue_days"] == 55.2

    def test_risk_distribution(self, loans):
        dist = summarize_overdue(loans)["risk_distribution"].set_index("risk_level")
        assert dist.loc["critical", "count"] == 2
        assert dist.loc["critical", "amount"] == 3800.0
        assert dist.loc["low", "count"] == 1

    def test_empty(self):
        stats = summarize_overdue(pd.DataFrame(columns=["overdue_days", "overdue_amount"]))
        assert stats["total_overdue"] == 0
        assert stats["avg_overdue_days"] == 0.0
        assert stats["risk_distribution"].empty

    def test_missing_optional_columns(self):
        stats = summarize_overdue(pd.DataFrame({"overdue_days": [3], "overdue_amount": ["100.5"]}))
        assert stats["total_overdue_amount"] == 100.5
        assert stats["total_overdue_fees"] == 0.0
