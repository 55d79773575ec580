"""表单组件"""
from datetime import date

import streamlit as st

from config.constants import LoanMethod
from config.settings import DEFAULT_PRINCIPAL_RATE_PER_PERIOD, DEFAULT_PERIODS


def render_loan_terms_form(key_prefix: str = "loan") -> dict | None:
    """渲染放款条款表单，返回表单数据 dict 或 None（未提交）"""
    # 贷款模式放在 form 外部，使切换时立即触发页面重渲染
    loan_method = st.selectbox(
        "贷款模式",
        options=[m.value for m in LoanMethod],
        format_func=lambda x: LoanMethod(x).label,
        key=f"{key_prefix}_method",
    )

    with st.form(f"{key_prefix}_terms_form"):
        c1, c2 = st.columns(2)
        with c1:
            principal_amount = st.number_input(
                "借款金额(元)", min_value=0.0, value=10000.0, step=1000.0,
                key=f"{key_prefix}_principal")
            deposit_amount = st.number_input(
                "抵押金额(元)", min_value=0.0, value=0.0, step=100.0,
                key=f"{key_prefix}_deposit")
        with c2:
            interest_pct = st.number_input(
                "利息比例(%)", min_value=0.0, max_value=100.0, value=15.0, step=0.5,
                format="%.2f", key=f"{key_prefix}_rate")
            upfront_fees = st.number_input(
                "前置费用(元)", min_value=0.0, value=0.0, step=10.0,
                key=f"{key_prefix}_fees")

        c1, c2 = st.columns(2)
        with c1:
            if loan_method == LoanMethod.METHOD1.value:
                principal_rate_pct = st.number_input(
                    "每期还本比例(%)", min_value=1.0, max_value=100.0,
                    value=DEFAULT_PRINCIPAL_RATE_PER_PERIOD * 100, step=1.0,
                    key=f"{key_prefix}_prp")
                periods = DEFAULT_PERIODS
            else:
                periods = int(st.number_input(
                    "分期期数", min_value=1, max_value=120, value=DEFAULT_PERIODS,
                    key=f"{key_prefix}_periods"))
                principal_rate_pct = DEFAULT_PRINCIPAL_RATE_PER_PERIOD * 100
        with c2:
            as_of = st.date_input("放款日期", value=date.today(), key=f"{key_prefix}_as_of")

        submitted = st.form_submit_button("计算", width='stretch', type="primary")

        if submitted:
            # 百分比输入转为比例
            return {
                "principal_amount": principal_amount,
                "interest_rate": round(interest_pct / 100, 6),
                "loan_method": loan_method,
                "deposit_amount": deposit_amount,
                "upfront_fees": upfront_fees,
                "principal_rate_per_period": round(principal_rate_pct / 100, 6),
                "periods": periods,
                "as_of": as_of,
            }
    return None
