from enum import Enum


class LoanMethod(str, Enum):
    METHOD1 = "method1"  # 有抵押 + 每期固定比例还本 + 利息前置
    METHOD2 = "method2"  # 等额分期

    @property
    def label(self) -> str:
        return {
            "method1": "模式1（利息前置）",
            "method2": "模式2（等额分期）",
        }[self.value]


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def label(self) -> str:
        return {
            "low": "低风险",
            "medium": "中风险",
            "high": "高风险",
            "critical": "极高风险",
        }[self.value]


class CollectionPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class CustomerStatus(str, Enum):
    NORMAL = "normal"
    NEGOTIATING = "negotiating"
    BAD_DEBT = "bad_debt"

    @property
    def label(self) -> str:
        return {
            "normal": "正常",
            "negotiating": "协商中",
            "bad_debt": "坏账",
        }[self.value]


class InstallmentStatus(str, Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    OVERDUE = "overdue"

    @property
    def label(self) -> str:
        return {
            "pending": "待还",
            "partial": "部分还款",
            "paid": "已还",
            "overdue": "逾期",
        }[self.value]


class PaymentMethod(str, Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"
    OTHER = "other"

    @property
    def label(self) -> str:
        return {
            "cash": "现金",
            "bank_transfer": "银行转账",
            "check": "支票",
            "other": "其他",
        }[self.value]


DEPOSIT_REFUND_NOTE = "deposit refund"
URGENT_COLLECTION_METHOD = "urgent collection"

# 催收建议：(逾期天数上限, 优先级, 催收方式, 下一步, 处理时限)，按上限升序
COLLECTION_ADVICE_BUCKETS = [
    (7, CollectionPriority.LOW,
     ("phone call", "SMS reminder"),
     "Send a gentle repayment reminder", "1-3 days"),
    (30, CollectionPriority.MEDIUM,
     ("phone call", "SMS reminder", "email"),
     "Step up collection and find out the customer's situation", "3-7 days"),
    (60, CollectionPriority.HIGH,
     ("in-person visit", "legal notice", "negotiated settlement"),
     "Consider a negotiated repayment or legal action", "immediate"),
    (None, CollectionPriority.CRITICAL,
     ("litigation", "credit bureau report", "asset seizure"),
     "Start legal proceedings", "immediate"),
]

# 列定义
REPAYMENT_SCHEDULE_COLUMNS = [
    "sequence_number", "due_date", "principal_portion", "interest_portion",
    "total_due", "remaining_balance", "note",
]

OVERDUE_LOAN_COLUMNS = [
    "loan_id", "overdue_days", "overdue_amount", "overdue_fees", "risk_level",
]
