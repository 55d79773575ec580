"""指标卡片组件"""
import streamlit as st

from config.settings import REPAYMENT_PERIOD_DAYS
from core.schema import LoanComputation, OverdueAssessment
from utils.formatters import fmt_amount, fmt_percent, fmt_periods, fmt_days


def render_loan_metrics(comp: LoanComputation, lender_irr: float):
    """渲染放款计算结果"""
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("借款金额", fmt_amount(comp.principal_amount))
    with c2:
        st.metric("到手金额", fmt_amount(comp.received_amount))
    with c3:
        st.metric("利息", fmt_amount(comp.interest))
    with c4:
        st.metric("期数", fmt_periods(comp.number_of_periods, REPAYMENT_PERIOD_DAYS))

    c5, c6, c7, c8 = st.columns(4)
    with c5:
        st.metric("每期还款", fmt_amount(comp.payment_per_period))
    with c6:
        st.metric("总还款额", fmt_amount(comp.total_repayment))
    with c7:
        st.metric("利润", fmt_amount(comp.profit))
    with c8:
        st.metric("年化收益率(IRR)", fmt_percent(lender_irr / 100))


def render_assessment_metrics(assessment: OverdueAssessment):
    """渲染逾期评估结果"""
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("逾期天数", fmt_days(assessment.overdue_days))
    c2.metric("逾期费用", fmt_amount(assessment.overdue_fee))
    c3.metric("风险等级", assessment.risk_level.label)
    c4.metric("信用评分", assessment.credit_score)
    st.metric("客户状态", assessment.customer_status.label)
