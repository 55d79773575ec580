"""逾期统计"""
import logging

import pandas as pd
import streamlit as st

from components.charts import create_risk_distribution_pie
from config.constants import OVERDUE_LOAN_COLUMNS
from core.comparison import summarize_overdue
from utils.formatters import fmt_amount

logger = logging.getLogger(__name__)

st.set_page_config(page_title="逾期统计", page_icon="📊", layout="wide")
st.title("📊 逾期统计")

st.markdown(f"上传包含 `{', '.join(OVERDUE_LOAN_COLUMNS)}` 列的 CSV 文件。")
uploaded = st.file_uploader("逾期贷款 CSV", type=["csv"])
if uploaded is None:
    st.stop()

try:
    loans = pd.read_csv(uploaded)
except (ValueError, pd.errors.ParserError) as exc:
    logger.warning("could not read uploaded CSV: %s", exc)
    st.error(f"无法读取文件：{exc}")
    st.stop()

missing = [c for c in ("overdue_days", "overdue_amount") if c not in loans.columns]
if missing:
    st.error(f"缺少必需列: {', '.join(missing)}")
    st.stop()

stats = summarize_overdue(loans)

c1, c2, c3, c4 = st.columns(4)
c1.metric("逾期笔数", stats["total_overdue"])
c2.metric("早期逾期(≤30天)", stats["early_overdue"])
c3.metric("晚期逾期(31-90天)", stats["late_overdue"])
c4.metric("坏账(>90天)", stats["bad_debt"])

c5, c6, c7 = st.columns(3)
c5.metric("逾期金额", fmt_amount(stats["total_overdue_amount"]))
c6.metric("逾期费用", fmt_amount(stats["total_overdue_fees"]))
c7.metric("平均逾期天数", f"{stats['avg_overdue_days']:.1f}天")

distribution = stats["risk_distribution"]
if not distribution.empty:
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(create_risk_distribution_pie(distribution), width='stretch')
    with col2:
        st.dataframe(distribution, width='stretch', hide_index=True)
