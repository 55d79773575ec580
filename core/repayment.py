"""还款处理：还款分配、结清判断、每期状态"""
from datetime import date

from config.constants import InstallmentStatus
from core.exceptions import InvalidPaymentError, InvalidDateRangeError
from core.schema import PaymentAllocation
from utils.date_utils import parse_date
from utils.money import to_decimal, to_cents, from_cents


def _cents(name: str, value) -> int:
    try:
        return to_cents(value)
    except ValueError as exc:
        raise InvalidPaymentError(f"{name}: {exc}") from exc


def allocate_payment(
    paid_amount,
    outstanding_fees=0,
    outstanding_interest=0,
    outstanding_principal=0,
    prepaid_amount=0,
) -> PaymentAllocation:
    """按 费用 -> 利息 -> 本金 -> 预收 的顺序分配实付金额"""
    paid = _cents("paid_amount", paid_amount)
    if paid <= 0:
        if to_decimal(paid_amount) > 0:
            raise InvalidPaymentError(f"paid_amount {paid_amount} rounds to zero at cent precision")
        raise InvalidPaymentError(f"paid_amount must be positive, got {paid_amount}")
    prepaid = _cents("prepaid_amount", prepaid_amount)

    remaining = paid
    portions = []
    for name, outstanding in (
        ("outstanding_fees", outstanding_fees),
        ("outstanding_interest", outstanding_interest),
        ("outstanding_principal", outstanding_principal),
    ):
        owed = _cents(name, outstanding)
        portion = min(remaining, owed) if remaining > 0 and owed > 0 else 0
        remaining -= portion
        portions.append(portion)

    fee, interest, principal = portions
    return PaymentAllocation(
        fee_portion=from_cents(fee),
        interest_portion=from_cents(interest),
        principal_portion=from_cents(principal),
        prepaid_credit=from_cents(remaining),
        updated_prepaid_balance=from_cents(prepaid + remaining),
    )


def check_settlement(outstanding_interest, outstanding_principal) -> bool:
    """应收利息与应收本金均为 0 时结清"""
    return (
        _cents("outstanding_interest", outstanding_interest) == 0
        and _cents("outstanding_principal", outstanding_principal) == 0
    )


def derive_installment_status(total_due, paid_to_date) -> InstallmentStatus:
    """根据累计已还金额确定该期状态"""
    due = _cents("total_due", total_due)
    paid = _cents("paid_to_date", paid_to_date)
    if due - paid <= 0:
        return InstallmentStatus.PAID
    if paid > 0:
        return InstallmentStatus.PARTIAL
    return InstallmentStatus.PENDING


def actual_installment_status(status, due_date, today: date) -> InstallmentStatus:
    """已过还款日仍待还的记为逾期"""
    status = InstallmentStatus(status)
    try:
        due = parse_date(due_date)
        today = parse_date(today)
    except (TypeError, ValueError) as exc:
        raise InvalidDateRangeError(f"invalid date: {exc}") from exc
    if status == InstallmentStatus.PENDING and due < today:
        return InstallmentStatus.OVERDUE
    return status
