"""格式化表格组件"""
import pandas as pd
import streamlit as st


def render_schedule_table(schedule: pd.DataFrame):
    """渲染还款计划表格"""
    if schedule.empty:
        st.info("暂无还款计划数据")
        return

    col_map = {
        "sequence_number": "期数",
        "due_date": "还款日",
        "principal_portion": "本金(元)",
        "interest_portion": "利息(元)",
        "total_due": "应还(元)",
        "remaining_balance": "剩余应还(元)",
        "note": "备注",
    }
    display_cols = [c for c in col_map if c in schedule.columns]
    display_df = schedule[display_cols].rename(columns=col_map)

    for col in ["本金(元)", "利息(元)", "应还(元)", "剩余应还(元)"]:
        if col in display_df.columns:
            display_df[col] = display_df[col].apply(lambda x: f"{x:,.2f}")

    if "备注" in display_df.columns:
        display_df["备注"] = display_df["备注"].replace({"deposit refund": "退还抵押金"})

    st.dataframe(display_df, width='stretch', hide_index=True)


def render_method_comparison_table(comparison: dict):
    """渲染两种模式的关键指标对比"""
    rows = []
    for key in ("method1", "method2"):
        comp = comparison[key]["computation"]
        rows.append({
            "模式": comp.loan_method.label,
            "到手金额": float(comp.received_amount),
            "期数": comp.number_of_periods,
            "首期应还": float(comparison[key]["first_installment"]),
            "每期还款": float(comp.payment_per_period),
            "总还款额": float(comp.total_repayment),
            "利润": float(comp.profit),
            "年化收益率(%)": comparison[key]["lender_irr"],
        })
    display = pd.DataFrame(rows)
    for col in ["到手金额", "首期应还", "每期还款", "总还款额", "利润"]:
        display[col] = display[col].apply(lambda x: f"{x:,.2f} 元")
    st.dataframe(display, width='stretch', hide_index=True)
