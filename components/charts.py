"""Plotly 图表工厂"""
import plotly.graph_objects as go
import plotly.express as px
import plotly.io as pio
import pandas as pd

from config.settings import COLORS
from core.schema import PaymentAllocation

# 自定义 Plotly 主题
pio.templates["loan_backoffice_light"] = go.layout.Template(
    layout=go.Layout(
        font=dict(family="sans-serif", color="#333"),
        title_font=dict(size=20, color="#333"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis=dict(gridcolor="#e0e0e0", linecolor="#e0e0e0", zerolinecolor="#e0e0e0",
                   tickfont=dict(color="#666"), title_font=dict(color="#666")),
        yaxis=dict(gridcolor="#e0e0e0", linecolor="#e0e0e0", zerolinecolor="#999",
                   tickfont=dict(color="#666"), title_font=dict(color="#666")),
        legend=dict(font=dict(color="#666"), bgcolor="rgba(255,255,255,0.5)",
                    bordercolor="#e0e0e0", borderwidth=1),
        colorway=px.colors.qualitative.Plotly,
    )
)
pio.templates.default = "loan_backoffice_light"


def _get_x_labels(schedule: pd.DataFrame) -> list:
    """横轴标签「第N期 MM-DD」"""
    labels = []
    for _, row in schedule.iterrows():
        seq = int(row["sequence_number"])
        due_date = str(row.get("due_date", ""))
        labels.append(f"第{seq}期 {due_date[5:10]}" if due_date else f"第{seq}期")
    return labels


def create_installment_bar(schedule: pd.DataFrame, template: str = "loan_backoffice_light") -> go.Figure:
    """每期应还：本金/利息堆叠柱状图，退还抵押金为负值"""
    x_labels = _get_x_labels(schedule)
    refund = schedule["total_due"] < 0

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=x_labels, y=schedule["principal_portion"], name="本金",
        marker_color=COLORS["principal"],
        hovertemplate="%{x}<br>本金: %{y:,.2f}元<extra></extra>",
    ))
    fig.add_trace(go.Bar(
        x=x_labels, y=schedule["interest_portion"], name="利息",
        marker_color=COLORS["interest"],
        hovertemplate="%{x}<br>利息: %{y:,.2f}元<extra></extra>",
    ))
    if refund.any():
        fig.add_trace(go.Bar(
            x=[x for x, r in zip(x_labels, refund) if r],
            y=schedule.loc[refund, "total_due"],
            name="退还抵押金",
            marker_color=COLORS["deposit"],
            hovertemplate="%{x}<br>退还: %{y:,.2f}元<extra></extra>",
        ))
    fig.update_layout(
        title="每期应还构成",
        barmode="relative",
        xaxis_title="期数",
        yaxis_title="金额(元)",
        margin=dict(t=60, b=60, l=60, r=20),
        height=400,
        template=template,
    )
    return fig


def create_remaining_balance_line(schedule: pd.DataFrame, template: str = "loan_backoffice_light") -> go.Figure:
    """剩余应还折线图"""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=_get_x_labels(schedule),
        y=schedule["remaining_balance"],
        mode="lines+markers",
        name="剩余应还",
        line=dict(color=COLORS["primary"], width=2),
        fill="tozeroy",
        hovertemplate="%{x}<br>剩余: %{y:,.2f}元<extra></extra>",
    ))
    fig.update_layout(
        title="剩余应还",
        xaxis_title="期数",
        yaxis_title="金额(元)",
        hovermode="x unified",
        margin=dict(t=60, b=60, l=60, r=20),
        height=400,
        template=template,
    )
    return fig


def create_allocation_pie(allocation: PaymentAllocation, template: str = "loan_backoffice_light") -> go.Figure:
    """还款分配环形图"""
    fig = go.Figure(data=[go.Pie(
        labels=["费用", "利息", "本金", "预收"],
        values=[float(allocation.fee_portion), float(allocation.interest_portion),
                float(allocation.principal_portion), float(allocation.prepaid_credit)],
        hole=0.45,
        marker_colors=[COLORS["fee"], COLORS["interest"], COLORS["principal"], COLORS["prepaid"]],
        textinfo="label+percent",
        textposition="outside",
    )])
    fig.update_layout(
        title="还款分配",
        showlegend=True,
        margin=dict(t=60, b=20, l=20, r=20),
        height=380,
        template=template,
    )
    return fig


def create_risk_distribution_pie(distribution: pd.DataFrame, template: str = "loan_backoffice_light") -> go.Figure:
    """逾期贷款风险等级分布"""
    levels = [str(getattr(r, "value", r)) for r in distribution["risk_level"]]
    fig = go.Figure(data=[go.Pie(
        labels=levels,
        values=distribution["count"],
        hole=0.45,
        marker_colors=[COLORS.get(level, COLORS["info"]) for level in levels],
        textinfo="label+value",
    )])
    fig.update_layout(
        title="风险等级分布",
        margin=dict(t=60, b=20, l=20, r=20),
        height=380,
        template=template,
    )
    return fig


def create_method_comparison_bar(comparison: dict, template: str = "loan_backoffice_light") -> go.Figure:
    """模式1 vs 模式2：到手金额、总还款、利润"""
    metrics = [("received_amount", "到手金额"), ("total_repayment", "总还款额"), ("profit", "利润")]
    fig = go.Figure()
    for key, color in (("method1", COLORS["primary"]), ("method2", COLORS["secondary"])):
        comp = comparison[key]["computation"]
        fig.add_trace(go.Bar(
            x=[label for _, label in metrics],
            y=[float(getattr(comp, attr)) for attr, _ in metrics],
            name=comp.loan_method.label,
            marker_color=color,
        ))
    fig.update_layout(
        title="两种模式对比",
        barmode="group",
        yaxis_title="金额(元)",
        margin=dict(t=60, b=40, l=60, r=20),
        height=400,
        template=template,
    )
    return fig
