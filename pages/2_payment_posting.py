"""还款处理"""
import logging
from datetime import date

import streamlit as st

from components.charts import create_allocation_pie
from config.constants import PaymentMethod
from core.exceptions import LoanEngineError
from core.repayment import (
    allocate_payment, check_settlement, derive_installment_status, actual_installment_status,
)
from data_manager.data_validator import validate_repayment_request
from utils.formatters import fmt_amount

logger = logging.getLogger(__name__)

st.set_page_config(page_title="还款处理", page_icon="💳", layout="wide")
st.title("💳 还款处理")

with st.form("payment_form"):
    c1, c2 = st.columns(2)
    with c1:
        total_due = st.number_input("本期应还(元)", min_value=0.0, value=2500.0, step=100.0)
        paid_to_date = st.number_input("本期已还(元)", min_value=0.0, value=0.0, step=100.0)
        paid_amount = st.number_input("本次实付(元)", min_value=0.0, value=1200.0, step=100.0)
        payment_method = st.selectbox(
            "还款方式", [m.value for m in PaymentMethod],
            format_func=lambda x: PaymentMethod(x).label,
        )
    with c2:
        outstanding_fees = st.number_input("未付费用(元)", min_value=0.0, value=50.0, step=10.0)
        outstanding_interest = st.number_input("未付利息(元)", min_value=0.0, value=300.0, step=10.0)
        outstanding_principal = st.number_input("未付本金(元)", min_value=0.0, value=1000.0, step=100.0)
        prepaid_amount = st.number_input("现有预收(元)", min_value=0.0, value=0.0, step=10.0)
    c3, c4 = st.columns(2)
    due_date = c3.date_input("本期还款日", value=date.today())
    notes = c4.text_input("备注", value="")
    submitted = st.form_submit_button("分配还款", width='stretch', type="primary")

if not submitted:
    st.stop()

ok, msg = validate_repayment_request(round(paid_amount, 2), payment_method, notes)
if not ok:
    st.error(msg)
    st.stop()

try:
    allocation = allocate_payment(
        paid_amount, outstanding_fees, outstanding_interest,
        outstanding_principal, prepaid_amount,
    )
except LoanEngineError as exc:
    logger.warning("payment allocation failed: %s", exc)
    st.error(f"分配失败：{exc}")
    st.stop()

logger.info("allocated payment of %s via %s", paid_amount, payment_method)

st.divider()
col1, col2 = st.columns([1, 1])
with col1:
    st.subheader("分配结果")
    st.metric("费用", fmt_amount(allocation.fee_portion))
    st.metric("利息", fmt_amount(allocation.interest_portion))
    st.metric("本金", fmt_amount(allocation.principal_portion))
    st.metric("记入预收", fmt_amount(allocation.prepaid_credit))
    st.metric("预收余额", fmt_amount(allocation.updated_prepaid_balance))
with col2:
    st.plotly_chart(create_allocation_pie(allocation), width='stretch')

status = actual_installment_status(
    derive_installment_status(total_due, paid_to_date + paid_amount), due_date, date.today())
st.info(f"本期状态：{status.label}")

remaining_interest = max(0.0, outstanding_interest - float(allocation.interest_portion))
remaining_principal = max(0.0, outstanding_principal - float(allocation.principal_portion))
if check_settlement(remaining_interest, remaining_principal):
    st.success("应收利息与应收本金均已还清，贷款结清。")
else:
    st.warning(f"尚未结清：剩余利息 {fmt_amount(remaining_interest)}，剩余本金 {fmt_amount(remaining_principal)}")
