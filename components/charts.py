"""Plotly chart factories"""
import plotly.graph_objects as go
import plotly.express as px
import pandas as pd

import plotly.io as pio
from config.constants import Direction
from config.settings import COLORS, DEBT_PIE_COLORS, LOAN_PIE_COLORS

pio.templates["loan_dashboard_light"] = go.layout.Template(
    layout=go.Layout(
        font=dict(family="sans-serif", color="#333"),
        title_font=dict(size=20, color="#333"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis=dict(
            gridcolor="#e0e0e0",
            linecolor="#e0e0e0",
            zerolinecolor="#e0e0e0",
            tickfont=dict(color="#666"),
            title_font=dict(color="#666"),
        ),
        yaxis=dict(
            gridcolor="#e0e0e0",
            linecolor="#e0e0e0",
            zerolinecolor="#e0e0e0",
            tickfont=dict(color="#666"),
            title_font=dict(color="#666"),
        ),
        legend=dict(
            font=dict(color="#666"),
            bgcolor="rgba(255,255,255,0.5)",
            bordercolor="#e0e0e0",
            borderwidth=1,
        ),
        colorway=px.colors.qualitative.Plotly,
    )
)

pio.templates.default = "loan_dashboard_light"


def _installment_labels(schedule: pd.DataFrame) -> list:
    """X-axis labels of the form '#N YYYY-MM'."""
    labels = []
    for _, row in schedule.iterrows():
        number = int(row["payment_number"])
        payment_date = row.get("payment_date", "")
        if payment_date:
            if isinstance(payment_date, str):
                date_str = payment_date[:7]
            else:
                date_str = payment_date.strftime("%Y-%m")
            labels.append(f"#{number} {date_str}")
        else:
            labels.append(f"#{number}")
    return labels


def create_monthly_history_bar(history: pd.DataFrame, template: str = "loan_dashboard_light") -> go.Figure:
    """Grouped bars of payments per month, one series per direction."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        name=Direction.I_OWE.label,
        x=history["month"],
        y=history[Direction.I_OWE.value],
        marker_color=COLORS["i_owe"],
        hovertemplate="%{x}<br>Paid: %{y:,.2f}<extra></extra>",
    ))
    fig.add_trace(go.Bar(
        name=Direction.THEY_OWE.label,
        x=history["month"],
        y=history[Direction.THEY_OWE.value],
        marker_color=COLORS["they_owe"],
        hovertemplate="%{x}<br>Received: %{y:,.2f}<extra></extra>",
    ))
    fig.update_layout(
        title="Monthly payments",
        barmode="group",
        xaxis_title="Month",
        yaxis_title="Amount",
        margin=dict(t=60, b=40, l=60, r=20),
        height=400,
        template=template,
    )
    return fig


def create_breakdown_pie(
    breakdown: pd.DataFrame,
    direction: str,
    template: str = "loan_dashboard_light",
) -> go.Figure:
    """Donut of remaining balance per counterparty for one direction."""
    subset = breakdown[breakdown["direction"] == direction]
    is_debt = direction == Direction.I_OWE.value
    fig = go.Figure(data=[go.Pie(
        labels=subset["name"],
        values=subset["remaining"],
        hole=0.45,
        marker_colors=DEBT_PIE_COLORS if is_debt else LOAN_PIE_COLORS,
        textinfo="label+percent",
        textposition="outside",
    )])
    fig.update_layout(
        title="Debt breakdown" if is_debt else "Loan breakdown",
        showlegend=True,
        margin=dict(t=60, b=20, l=20, r=20),
        height=380,
        template=template,
    )
    return fig


def create_amortization_chart(schedule: pd.DataFrame, template: str = "loan_dashboard_light") -> go.Figure:
    """Stacked principal/interest per installment with the remaining balance on a second axis."""
    fig = go.Figure()
    x_labels = _installment_labels(schedule)

    fig.add_trace(go.Bar(
        x=x_labels,
        y=schedule["principal_amount"],
        name="Principal",
        marker_color=COLORS["principal"],
        hovertemplate="%{x}<br>Principal: %{y:,.2f}<extra></extra>",
    ))
    fig.add_trace(go.Bar(
        x=x_labels,
        y=schedule["interest_amount"],
        name="Interest",
        marker_color=COLORS["interest"],
        hovertemplate="%{x}<br>Interest: %{y:,.2f}<extra></extra>",
    ))
    fig.add_trace(go.Scatter(
        x=x_labels,
        y=schedule["remaining_balance"],
        mode="lines",
        name="Remaining balance",
        yaxis="y2",
        line=dict(color=COLORS["primary"], width=2),
        hovertemplate="%{x}<br>Remaining: %{y:,.2f}<extra></extra>",
    ))

    fig.update_layout(
        title="Amortization schedule",
        barmode="stack",
        xaxis_title="Installment",
        yaxis_title="Payment",
        yaxis2=dict(title="Remaining balance", overlaying="y", side="right", showgrid=False),
        hovermode="x unified",
        margin=dict(t=60, b=60, l=60, r=60),
        height=420,
        xaxis=dict(
            tickmode="auto",
            nticks=15,
            tickangle=45,
        ),
        template=template,
    )
    return fig


def create_accrual_chart(timeline: pd.DataFrame, template: str = "loan_dashboard_light") -> go.Figure:
    """Balance walk of an interest-bearing loan with cumulative interest."""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=timeline["month"],
        y=timeline["closing_balance"],
        mode="lines+markers",
        name="Balance",
        fill="tozeroy",
        line=dict(color=COLORS["primary"], width=2),
        fillcolor="rgba(31, 119, 180, 0.15)",
        hovertemplate="%{x}<br>Balance: %{y:,.2f}<extra></extra>",
    ))
    fig.add_trace(go.Scatter(
        x=timeline["month"],
        y=timeline["accrued_interest"],
        mode="lines",
        name="Accrued interest",
        line=dict(color=COLORS["interest"], width=2, dash="dash"),
        hovertemplate="%{x}<br>Accrued: %{y:,.2f}<extra></extra>",
    ))
    fig.update_layout(
        title="Interest accrual",
        xaxis_title="Month",
        yaxis_title="Amount",
        hovermode="x unified",
        margin=dict(t=60, b=60, l=60, r=20),
        height=400,
        template=template,
    )
    return fig


def create_savings_progress_bar(goals: pd.DataFrame, template: str = "loan_dashboard_light") -> go.Figure:
    """Horizontal bars of saved amount against target per goal."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=goals["name"],
        x=goals["target_amount"],
        name="Target",
        orientation="h",
        marker_color="#e0e0e0",
        hovertemplate="%{y}<br>Target: %{x:,.2f}<extra></extra>",
    ))
    fig.add_trace(go.Bar(
        y=goals["name"],
        x=goals["current_amount"],
        name="Saved",
        orientation="h",
        marker_color=COLORS["savings"],
        hovertemplate="%{y}<br>Saved: %{x:,.2f}<extra></extra>",
    ))
    fig.update_layout(
        title="Savings goals",
        barmode="overlay",
        xaxis_title="Amount",
        margin=dict(t=60, b=40, l=120, r=20),
        height=max(250, 80 * len(goals)),
        template=template,
    )
    return fig
