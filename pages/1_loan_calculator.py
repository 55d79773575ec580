"""放款计算"""
import logging

import streamlit as st

from components.charts import create_installment_bar, create_remaining_balance_line
from components.forms import render_loan_terms_form
from components.metrics import render_loan_metrics
from components.tables import render_schedule_table
from config.constants import LoanMethod
from core.calculator import calc_loan_amounts, calc_lender_irr
from core.exceptions import LoanEngineError
from core.schedule_generator import generate_repayment_schedule, schedule_to_frame
from core.schema import LoanTerms
from data_manager.data_validator import validate_loan_request

logger = logging.getLogger(__name__)

st.set_page_config(page_title="放款计算", page_icon="🧮", layout="wide")
st.title("🧮 放款计算")

form_data = render_loan_terms_form("calc")
if form_data is not None:
    ok, msg = validate_loan_request(
        form_data["principal_amount"], form_data["interest_rate"], form_data["loan_method"],
        form_data["deposit_amount"], form_data["upfront_fees"],
        form_data["principal_rate_per_period"], form_data["periods"],
    )
    if not ok:
        st.error(msg)
        st.stop()
    st.session_state["calc_form"] = form_data

form_data = st.session_state.get("calc_form")
if form_data is None:
    st.info("填写条款后点击「计算」。")
    st.stop()

terms = LoanTerms(
    principal_amount=form_data["principal_amount"],
    interest_rate=form_data["interest_rate"],
    loan_method=LoanMethod(form_data["loan_method"]),
    deposit_amount=form_data["deposit_amount"],
    upfront_fees=form_data["upfront_fees"],
    principal_rate_per_period=form_data["principal_rate_per_period"],
    periods=form_data["periods"],
)

try:
    comp = calc_loan_amounts(terms)
    schedule = generate_repayment_schedule(terms, form_data["as_of"], comp)
    lender_irr = calc_lender_irr(comp, schedule)
except LoanEngineError as exc:
    logger.warning("loan calculation failed: %s", exc)
    st.error(f"计算失败：{exc}")
    st.stop()

if comp.received_amount == 0:
    st.warning("利息、抵押金与前置费用之和不低于借款金额，到手金额为 0。")

st.divider()
st.subheader("计算结果")
render_loan_metrics(comp, lender_irr)

schedule_df = schedule_to_frame(schedule)

st.divider()
col1, col2 = st.columns(2)
with col1:
    st.plotly_chart(create_installment_bar(schedule_df), width='stretch')
with col2:
    st.plotly_chart(create_remaining_balance_line(schedule_df), width='stretch')

st.subheader("还款计划表")
render_schedule_table(schedule_df)
st.download_button(
    "下载 CSV", schedule_df.to_csv(index=False).encode("utf-8-sig"),
    file_name="repayment_schedule.csv", mime="text/csv",
)
