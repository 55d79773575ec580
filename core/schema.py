from dataclasses import dataclass, field, asdict
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from config.constants import (
    LoanMethod, RiskLevel, CollectionPriority, CustomerStatus,
)
from config.settings import DEFAULT_PRINCIPAL_RATE_PER_PERIOD, DEFAULT_PERIODS


@dataclass(frozen=True)
class LoanTerms:
    principal_amount: Decimal
    interest_rate: Decimal  # 比例，0.15 = 15%
    loan_method: LoanMethod = LoanMethod.METHOD1
    deposit_amount: Decimal = Decimal("0")  # 抵押金，放款时扣留，最后一期退还
    upfront_fees: Decimal = Decimal("0")
    principal_rate_per_period: Decimal = Decimal(str(DEFAULT_PRINCIPAL_RATE_PER_PERIOD))  # 模式1
    periods: int = DEFAULT_PERIODS  # 模式2


@dataclass(frozen=True)
class LoanComputation:
    loan_method: LoanMethod
    principal_amount: Decimal
    interest_rate: Decimal
    interest: Decimal
    deposit_amount: Decimal
    upfront_fees: Decimal
    received_amount: Decimal
    payment_per_period: Decimal
    number_of_periods: int
    total_repayment: Decimal
    profit: Decimal
    target_amount: Decimal  # 模式1: 本金；模式2: 本金 + 利息
    principal_rate_per_period: Optional[Decimal] = None
    periods: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RepaymentInstallment:
    sequence_number: int
    due_date: date
    principal_portion: Decimal
    interest_portion: Decimal
    total_due: Decimal  # 退还抵押金行为负数
    remaining_balance: Decimal
    note: Optional[str] = None

    @property
    def is_deposit_refund(self) -> bool:
        return self.total_due < 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PaymentAllocation:
    fee_portion: Decimal
    interest_portion: Decimal
    principal_portion: Decimal
    prepaid_credit: Decimal
    updated_prepaid_balance: Decimal

    @property
    def total(self) -> Decimal:
        return self.fee_portion + self.interest_portion + self.principal_portion + self.prepaid_credit

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class CollectionAdvice:
    priority: CollectionPriority
    methods: Tuple[str, ...] = field(default_factory=tuple)
    next_action: str = ""
    timeline: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OverdueAssessment:
    overdue_days: int
    overdue_fee: Decimal
    risk_level: RiskLevel
    collection_advice: CollectionAdvice
    credit_score: int
    customer_status: CustomerStatus

    def to_dict(self) -> dict:
        return asdict(self)
