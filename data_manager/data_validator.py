from typing import Tuple

from config.constants import LoanMethod, PaymentMethod
from config.settings import DEFAULT_PRINCIPAL_RATE_PER_PERIOD, DEFAULT_PERIODS

MAX_NOTES_LENGTH = 500


def validate_loan_request(
    principal_amount: float,
    interest_rate: float,
    loan_method: str,
    deposit_amount: float = 0,
    upfront_fees: float = 0,
    principal_rate_per_period: float = DEFAULT_PRINCIPAL_RATE_PER_PERIOD,
    periods: int = DEFAULT_PERIODS,
) -> Tuple[bool, str]:
    """校验放款请求，返回 (是否合法, 错误信息)"""
    if loan_method not in [e.value for e in LoanMethod]:
        return False, f"无效的贷款模式: {loan_method}"

    if principal_amount is None or principal_amount <= 0:
        return False, "本金必须大于0"

    if interest_rate is None or not 0 <= interest_rate <= 1:
        return False, "利息比例必须在0-100%之间"

    if deposit_amount < 0:
        return False, "抵押金额不能小于0"

    if upfront_fees < 0:
        return False, "前置费用不能小于0"

    if loan_method == LoanMethod.METHOD1.value:
        if not 0 < principal_rate_per_period <= 1:
            return False, "每期还本比例必须在0-100%之间且大于0"
    elif loan_method == LoanMethod.METHOD2.value:
        if not isinstance(periods, int) or periods <= 0:
            return False, "分期期数必须是正整数"

    return True, ""


def validate_repayment_request(
    paid_amount: float,
    payment_method: str,
    notes: str = "",
) -> Tuple[bool, str]:
    """校验还款请求"""
    if paid_amount is None or paid_amount <= 0:
        return False, "还款金额必须大于0"

    if round(paid_amount, 2) != paid_amount:
        return False, "还款金额最多保留两位小数"

    if payment_method not in [e.value for e in PaymentMethod]:
        return False, "还款方式必须是：现金、银行转账、支票或其他"

    if notes and len(notes) > MAX_NOTES_LENGTH:
        return False, f"备注不能超过{MAX_NOTES_LENGTH}个字符"

    return True, ""
