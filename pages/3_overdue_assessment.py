"""逾期评估"""
import logging
from datetime import date, timedelta

import streamlit as st

from components.metrics import render_assessment_metrics
from config.settings import DEFAULT_DAILY_PENALTY_RATE, DEFAULT_FIXED_PENALTY
from core.exceptions import LoanEngineError
from core.overdue import calc_overdue_days, assess_overdue

logger = logging.getLogger(__name__)

st.set_page_config(page_title="逾期评估", page_icon="⚠️", layout="wide")
st.title("⚠️ 逾期评估")

with st.form("overdue_form"):
    st.markdown("**本期还款**")
    c1, c2, c3 = st.columns(3)
    with c1:
        due_date = st.date_input("还款日", value=date.today() - timedelta(days=10))
        grace_days = st.number_input("宽限天数", min_value=0, value=0)
    with c2:
        required_amount = st.number_input("应还金额(元)", min_value=0.0, value=1000.0, step=100.0)
        paid_amount = st.number_input("已还金额(元)", min_value=0.0, value=0.0, step=100.0)
    with c3:
        daily_rate = st.number_input("日罚息率(%)", min_value=0.0, value=float(DEFAULT_DAILY_PENALTY_RATE), step=0.01)
        fixed_penalty = st.number_input("固定罚金(元)", min_value=0.0, value=float(DEFAULT_FIXED_PENALTY), step=10.0)

    st.markdown("**客户历史**")
    c1, c2, c3 = st.columns(3)
    with c1:
        overdue_count = st.number_input("历史逾期次数", min_value=0, value=0)
        max_overdue_days = st.number_input("最大逾期天数", min_value=0, value=0)
    with c2:
        total_loans = st.number_input("总贷款次数", min_value=0, value=1)
        successful_loans = st.number_input("成功还款次数", min_value=0, value=1)
    with c3:
        is_blacklisted = st.checkbox("黑名单客户")
    submitted = st.form_submit_button("评估", width='stretch', type="primary")

if not submitted:
    st.stop()

if successful_loans > total_loans:
    st.error("成功还款次数不能大于总贷款次数")
    st.stop()

try:
    overdue_days = calc_overdue_days(due_date, paid_amount, required_amount, date.today(), grace_days)
    assessment = assess_overdue(
        overdue_days,
        max(0.0, required_amount - paid_amount),
        overdue_count=overdue_count,
        max_overdue_days=max(max_overdue_days, overdue_days),
        total_loans=total_loans,
        successful_loans=successful_loans,
        is_blacklisted=is_blacklisted,
        daily_penalty_rate=daily_rate,
        fixed_penalty=fixed_penalty,
    )
except LoanEngineError as exc:
    logger.warning("overdue assessment failed: %s", exc)
    st.error(f"评估失败：{exc}")
    st.stop()

st.divider()
render_assessment_metrics(assessment)

advice = assessment.collection_advice
st.subheader("催收建议")
st.markdown(f"- **优先级**: {advice.priority.value}")
st.markdown(f"- **催收方式**: {', '.join(advice.methods)}")
st.markdown(f"- **下一步**: {advice.next_action}")
st.markdown(f"- **处理时限**: {advice.timeline}")
