#!/usr/bin/env python3
"""
Irish Income Tax Calculator — Interactive Interface
===================================================
Streamlit app wrapping the tax_calculator engine.

Run with:
    streamlit run app.py
"""

import streamlit as st
import pandas as pd
from tax_calculator import (
    RATE_TABLES, CURRENT_TAX_YEAR, MAX_SCENARIOS, MaritalStatus, TaxScenario,
    TaxCalculator, TaxCalculatorError, get_rate_table, breakdown_frame,
    comparison_frame, income_sweep,
)

# ── Page config ──────────────────────────────────────────────

st.set_page_config(
    page_title="Irish Income Tax Calculator",
    page_icon="🧾",
    layout="wide",
)

STATUS_LABELS = {
    'Single': MaritalStatus.SINGLE,
    'Married': MaritalStatus.MARRIED,
    'Single parent': MaritalStatus.SINGLE_PARENT,
}


def scenario_inputs(key, default_income=50_000, label=None):
    """Income / status widgets for one scenario. Returns a TaxScenario or None."""
    income = st.number_input("Annual gross income (€)", 0, 10_000_000,
                             default_income, 1_000, key=f"{key}_income")
    status_label = st.selectbox("Marital status", list(STATUS_LABELS),
                                key=f"{key}_status")
    status = STATUS_LABELS[status_label]

    spouse_income = None
    if status is MaritalStatus.MARRIED:
        spouse_income = st.number_input("Spouse's income (€)", 0, 10_000_000,
                                        0, 1_000, key=f"{key}_spouse")
    has_children = status is MaritalStatus.SINGLE_PARENT
    if status is MaritalStatus.SINGLE:
        has_children = st.checkbox("Has children", key=f"{key}_children")

    try:
        return TaxScenario(income, status, has_children, spouse_income, label)
    except TaxCalculatorError as e:
        st.error(str(e))
        return None


# ── Sidebar: rate table ──────────────────────────────────────

with st.sidebar:
    years = sorted(RATE_TABLES, reverse=True)
    year = st.selectbox("Tax year", years, index=years.index(CURRENT_TAX_YEAR))
    rates = get_rate_table(year)
    calc = TaxCalculator(rates)
    ref = calc.tax_rates_and_bands()

    st.markdown(f"## {year} Parameters")

    st.markdown("**USC Bands**")
    usc_rows = []
    lower = 0
    for band in ref['usc']['bands']:
        upper = band['limit']
        usc_rows.append({
            'Rate': f"{band['rate'] * 100:g}%",
            'From': f"€{lower:,.0f}",
            'To': f"€{upper:,.0f}" if upper is not None else '—',
        })
        lower = upper
    st.dataframe(pd.DataFrame(usc_rows), hide_index=True)

    st.markdown("**Income Tax**")
    bands = ref['income_tax']['bands']
    it_df = pd.DataFrame({
        'Status': ['Single', 'Single parent', 'Married (1 earner)', 'Married (2 earners)'],
        'Standard Band': [
            f"€{bands['single']:,.0f}",
            f"€{bands['single_parent']:,.0f}",
            f"€{bands['married_one_income']:,.0f}",
            f"€{bands['married_two_incomes_base']:,.0f} "
            f"+ up to €{bands['married_two_incomes_max_increase']:,.0f}",
        ],
    })
    st.dataframe(it_df, hide_index=True)
    st.markdown(f"Rates: {ref['income_tax']['rates']['standard_rate']:.0%} / "
                f"{ref['income_tax']['rates']['higher_rate']:.0%}  \n"
                f"PRSI: {ref['prsi']['rate'] * 100:g}%")

    st.markdown("**Tax Credits**")
    cr_df = pd.DataFrame({
        'Credit': [k.replace('_', ' ').title() for k in ref['tax_credits']],
        'Amount': [f"€{v:,.0f}" for v in ref['tax_credits'].values()],
    })
    st.dataframe(cr_df, hide_index=True)


# ── Main content ─────────────────────────────────────────────

st.title("Irish Income Tax Calculator")
st.markdown("Income tax, USC and PRSI for a PAYE employee. "
            "All figures are **€ per year** unless marked monthly.")

tab_calc, tab_marginal, tab_compare, tab_rates = st.tabs([
    "Take-Home Calculator",
    "Marginal Rate",
    "Compare Scenarios",
    "Rates by Income",
])

# ==============================================================
# TAB 1: TAKE-HOME CALCULATOR
# ==============================================================

with tab_calc:
    st.header("Take-Home Calculator")

    in_col, out_col = st.columns([1, 2])
    with in_col:
        st.subheader("Your Details")
        scenario = scenario_inputs("th")

    with out_col:
        if scenario is not None:
            breakdown = calc.calculate_tax(scenario)
            monthly = calc.calculate_monthly_breakdown(breakdown)

            m1, m2, m3, m4 = st.columns(4)
            with m1:
                st.metric("Net Take-Home", f"€{breakdown.net_income:,.0f}")
            with m2:
                st.metric("Monthly Net", f"€{monthly.monthly_net_income:,.0f}")
            with m3:
                st.metric("Effective Rate", f"{breakdown.effective_tax_rate_pct}%")
            with m4:
                st.metric("Marginal Rate", f"{breakdown.marginal_tax_rate_pct}%")

            df = breakdown_frame(breakdown, monthly)
            st.dataframe(
                df, hide_index=True,
                column_config={
                    "Annual": st.column_config.NumberColumn(format="€%.2f"),
                    "Monthly": st.column_config.NumberColumn(format="€%.2f"),
                })

            if breakdown.net_tax == 0 and breakdown.annual_income > 0:
                st.info("Tax credits cover all income tax, USC and PRSI at this income.")


# ==============================================================
# TAB 2: MARGINAL RATE
# ==============================================================

with tab_marginal:
    st.header("What Happens to the Next €1,000?")

    if scenario is None:
        st.warning("Fix the details on the Take-Home Calculator tab first.")
    else:
        analysis = calc.marginal_rate(scenario)

        c1, c2, c3 = st.columns(3)
        with c1:
            st.metric("Marginal Rate (band)", f"{analysis.marginal_tax_rate_pct}%")
        with c2:
            st.metric("Tax on Next €1,000", f"€{analysis.tax_on_next_1000:,.2f}",
                      f"{analysis.effective_marginal_rate_pct}% effective",
                      delta_color="off")
        with c3:
            st.metric("You Keep", f"€{analysis.net_from_next_1000:,.2f}")

        if analysis.effective_marginal_rate_pct != analysis.marginal_tax_rate_pct:
            st.caption("The extra €1,000 crosses a band boundary, so the tax on it "
                       "differs from the band rate at your current income.")


# ==============================================================
# TAB 3: COMPARE SCENARIOS
# ==============================================================

with tab_compare:
    st.header("Compare Scenarios")
    n = st.number_input("Number of scenarios", 1, MAX_SCENARIOS, 2, 1, key="cmp_n")

    scenarios = []
    cols = st.columns(int(n))
    for i, col in enumerate(cols):
        with col:
            label = st.text_input("Label", f"Scenario {i + 1}", max_chars=50,
                                  key=f"cmp{i}_label")
            s = scenario_inputs(f"cmp{i}", default_income=30_000 * (i + 1),
                                label=label or None)
            if s is not None:
                scenarios.append(s)

    if len(scenarios) == int(n):
        try:
            result = calc.compare_scenarios(scenarios)
        except TaxCalculatorError as e:
            st.error(str(e))
            result = None

        if result is not None:
            st.divider()
            st.dataframe(comparison_frame(result), hide_index=True)

            summary = result.summary()
            s1, s2, s3, s4 = st.columns(4)
            with s1:
                st.metric("Highest Income", summary['highest_income']['label'],
                          f"€{summary['highest_income']['value']:,.0f}",
                          delta_color="off")
            with s2:
                st.metric("Highest Net Income", summary['highest_net_income']['label'],
                          f"€{summary['highest_net_income']['value']:,.0f}",
                          delta_color="off")
            with s3:
                st.metric("Lowest Effective Rate", summary['lowest_effective_rate']['label'],
                          f"{summary['lowest_effective_rate']['value']}%",
                          delta_color="off")
            with s4:
                st.metric("Highest Effective Rate", summary['highest_effective_rate']['label'],
                          f"{summary['highest_effective_rate']['value']}%",
                          delta_color="off")


# ==============================================================
# TAB 4: RATES BY INCOME
# ==============================================================

with tab_rates:
    st.header("Effective and Marginal Rate by Income")

    sweep_label = st.selectbox("Marital status", list(STATUS_LABELS), key="sweep_status")
    sweep_status = STATUS_LABELS[sweep_label]

    sweep = income_sweep(
        sweep_status,
        has_children=sweep_status is MaritalStatus.SINGLE_PARENT,
        rates=rates,
    )
    st.line_chart(sweep.set_index('income')[['effective_rate', 'marginal_rate']])

    with st.expander("Table"):
        st.dataframe(sweep, hide_index=True)

st.divider()
st.caption(f"Rates for tax year {rates.year}. PAYE employee, PRSI Class A1. "
           "Figures are estimates for illustration only.")
