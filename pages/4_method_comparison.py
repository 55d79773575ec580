"""模式对比"""
import logging
from datetime import date

import streamlit as st

from components.charts import create_method_comparison_bar, create_installment_bar
from components.tables import render_method_comparison_table, render_schedule_table
from config.settings import DEFAULT_PRINCIPAL_RATE_PER_PERIOD, DEFAULT_PERIODS
from core.comparison import compare_loan_methods
from core.exceptions import LoanEngineError
from utils.formatters import fmt_amount

logger = logging.getLogger(__name__)

st.set_page_config(page_title="模式对比", page_icon="⚖️", layout="wide")
st.title("⚖️ 模式1 vs 模式2")

c1, c2, c3 = st.columns(3)
with c1:
    principal = st.number_input("借款金额(元)", min_value=100.0, value=10000.0, step=1000.0)
    interest_pct = st.number_input("利息比例(%)", min_value=0.0, max_value=100.0, value=15.0, step=0.5)
with c2:
    deposit = st.number_input("抵押金额(元)", min_value=0.0, value=0.0, step=100.0)
    fees = st.number_input("前置费用(元)", min_value=0.0, value=0.0, step=10.0)
with c3:
    prp_pct = st.number_input("模式1 每期还本比例(%)", min_value=1.0, max_value=100.0,
                              value=DEFAULT_PRINCIPAL_RATE_PER_PERIOD * 100, step=1.0)
    periods = int(st.number_input("模式2 分期期数", min_value=1, max_value=120, value=DEFAULT_PERIODS))

try:
    result = compare_loan_methods(
        principal, round(interest_pct / 100, 6), date.today(),
        deposit, fees, round(prp_pct / 100, 6), periods,
    )
except LoanEngineError as exc:
    logger.warning("method comparison failed: %s", exc)
    st.error(f"计算失败：{exc}")
    st.stop()

st.subheader("关键指标对比")
render_method_comparison_table(result)
st.metric("利润差额（模式1 - 模式2）", fmt_amount(result["profit_difference"]))
st.plotly_chart(create_method_comparison_bar(result), width='stretch')

tab1, tab2 = st.tabs(["模式1 还款计划", "模式2 还款计划"])
for tab, key in ((tab1, "method1"), (tab2, "method2")):
    with tab:
        st.plotly_chart(create_installment_bar(result[key]["schedule"]), width='stretch')
        render_schedule_table(result[key]["schedule"])
