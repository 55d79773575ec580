"""请求校验测试"""
import pytest

from data_manager.data_validator import (
    validate_loan_request, validate_repayment_request, MAX_NOTES_LENGTH,
)


class TestLoanRequest:

    def test_valid_method1(self):
        ok, msg = validate_loan_request(10000, 0.15, "method1", principal_rate_per_period=0.1)
        assert ok and msg == ""

    def test_valid_method2(self):
        ok, _ = validate_loan_request(10000, 0.15, "method2", periods=6)
        assert ok

    def test_unknown_method(self):
        ok, msg = validate_loan_request(10000, 0.15, "method3")
        assert not ok
        assert "method3" in msg

    @pytest.mark.parametrize("kwargs", [
        dict(principal_amount=0, interest_rate=0.15),
        dict(principal_amount=10000, interest_rate=-0.1),
        dict(principal_amount=10000, interest_rate=1.5),
        dict(principal_amount=10000, interest_rate=0.15, deposit_amount=-1),
        dict(principal_amount=10000, interest_rate=0.15, upfront_fees=-1),
        dict(principal_amount=10000, interest_rate=0.15, principal_rate_per_period=0),
    ])
    def test_invalid_method1_terms(self, kwargs):
        ok, msg = validate_loan_request(loan_method="method1", **kwargs)
        assert not ok
        assert msg

    @pytest.mark.parametrize("periods", [0, -2, 2.5])
    def test_invalid_periods(self, periods):
        ok, _ = validate_loan_request(10000, 0.15, "method2", periods=periods)
        assert not ok


class TestRepaymentRequest:

    def test_valid(self):
        ok, _ = validate_repayment_request(100.5, "cash")
        assert ok

    @pytest.mark.parametrize("amount", [0, -5, None])
    def test_non_positive_amount(self, amount):
        ok, _ = validate_repayment_request(amount, "cash")
        assert not ok

    def test_precision(self):
        ok, _ = validate_repayment_request(10.005, "cash")
        assert not ok

    def test_unknown_payment_method(self):
        ok, _ = validate_repayment_request(100, "crypto")
        assert not ok

    def test_notes_length(self):
        ok, _ = validate_repayment_request(100, "check", notes="x" * (MAX_NOTES_LENGTH + 1))
        assert not ok
        ok, _ = validate_repayment_request(100, "check", notes="x" * MAX_NOTES_LENGTH)
        assert ok
