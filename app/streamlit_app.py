import pandas as pd
import streamlit as st
from datetime import date
from hkplan.cost_tables import (
    InvalidArgument, housing_table, food_table, school_table, plan_option,
    exchange_rate, universities, dse_ready_schools,
)
from hkplan.selection import ChildEducation, UserSelection, DecisionInput, SESSION_RANGE
from hkplan.cost_projector import (
    calculate_monthly_cost, calculate_first_year_cost, calculate_seven_year_cost,
    yearly_projection, monthly_breakdown_frame,
)
from hkplan.recommendation import generate_recommendation, score_rules
from hkplan.risk import RISK_LABELS, risk_comparison_frame, overall_scores, risk_description
from hkplan.timeline import build_timeline, permanent_residence_eta
from hkplan.formatting import format_currency, hkd_to_rmb, rmb_to_hkd
from hkplan.readiness import ielts_prep_plan, materials_readiness
from hkplan.checklist import build_checklist

st.set_page_config(page_title="HK Move Planner", layout="wide")
st.title("🇭🇰 HK Move Planner")

fx = exchange_rate()
st.caption(f"Plan A (talent admission) vs Plan B (study immigration) • FX HKD→RMB {fx['hkd_to_rmb']} (updated {fx['last_update']})")


def child_inputs(label: str, key: str) -> ChildEducation:
    lo, hi = SESSION_RANGE
    schools = school_table()
    school_type = st.selectbox(
        f"{label}: school type", list(schools),
        format_func=lambda k: schools[k]["name"], key=f"{key}_school",
    )
    tutoring = st.checkbox(f"{label}: tutoring", value=True, key=f"{key}_tut")
    tutoring_count = st.slider(f"{label}: tutoring / week", lo, hi, 2, key=f"{key}_tut_n", disabled=not tutoring)
    extra = st.checkbox(f"{label}: interest classes", value=True, key=f"{key}_ext")
    extra_count = st.slider(f"{label}: interest classes / week", lo, hi, 1, key=f"{key}_ext_n", disabled=not extra)
    return ChildEducation(
        school_type=school_type,
        tutoring=tutoring,
        tutoring_count=tutoring_count,
        extracurricular=extra,
        extracurricular_count=extra_count,
    )


with st.sidebar:
    st.header("Scenario")
    plan = st.radio("Plan", ["A", "B"], index=1, horizontal=True,
                    format_func=lambda p: f"{p}: {plan_option(p)['name']}")
    study_duration = st.selectbox("Study duration (Plan B)", ["1year", "2year"])
    areas = housing_table()
    area = st.selectbox("Area", list(areas), index=1, format_func=lambda k: areas[k]["name"])
    foods = food_table()
    food_mode = st.selectbox("Food", list(foods), index=1, format_func=lambda k: foods[k]["name"])

    st.divider()
    st.header("Children")
    child1 = child_inputs("Child 1", "c1")
    child2 = child_inputs("Child 2", "c2")

    st.divider()
    include_insurance = st.checkbox("Medical insurance", value=True)
    insurance_count = st.number_input("Insured persons", min_value=0, max_value=6, value=4, step=1,
                                      disabled=not include_insurance)
    show_rmb = st.toggle("Show RMB", value=False)

selection = UserSelection(
    plan=plan,
    study_duration=study_duration,
    area=area,
    food_mode=food_mode,
    child1=child1,
    child2=child2,
    include_insurance=include_insurance,
    insurance_count=int(insurance_count),
)


def money(x):
    return format_currency(hkd_to_rmb(x), "RMB") if show_rmb else format_currency(x)


tabs = st.tabs([
    "Plan Comparison", "Cost Calculator", "Timeline",
    "Risk Assessment", "Decision", "Tools",
])

with tabs[0]:
    st.subheader("Plan Comparison")
    cols = st.columns(2)
    for col, pid in zip(cols, ["A", "B"]):
        p = plan_option(pid)
        with col:
            st.markdown(f"### Plan {pid}: {p['name']} ({p['name_cn']})")
            st.write(f"Applicant: **{p['applicant']}**")
            st.metric("Success rate", f"{p['success_rate']}%")
            st.write("**Pros**")
            for item in p["pros"]:
                st.write("✅ " + item)
            st.write("**Cons**")
            for item in p["cons"]:
                st.write("⚠️ " + item)

with tabs[1]:
    st.subheader("Cost Calculator")
    try:
        monthly = calculate_monthly_cost(selection)
        first_year = calculate_first_year_cost(selection)
        seven_year = calculate_seven_year_cost(selection)
    except InvalidArgument as e:
        st.error(str(e))
    else:
        c1, c2, c3 = st.columns(3)
        with c1:
            st.metric("Monthly", money(monthly.total))
        with c2:
            st.metric("First year", money(first_year.total))
            st.caption(f"One-time {money(first_year.one_time)} + living {money(first_year.yearly)}")
        with c3:
            st.metric("7 years", money(seven_year))
            st.caption("Living costs grow 3% a year; one-time costs only in year 1.")

        st.divider()
        left, right = st.columns(2)
        with left:
            st.write("**Monthly breakdown**")
            parts = monthly_breakdown_frame(monthly)
            parts["display"] = parts["amount"].map(money)
            st.dataframe(parts[["label", "display", "share"]], use_container_width=True)
        with right:
            st.write("**Year by year**")
            proj = yearly_projection(selection).set_index("label")[["one_time", "living"]]
            st.bar_chart(proj)

        st.write("**First-year one-time costs**")
        st.json({k: money(v) for k, v in first_year.breakdown.one_time_items().items()})
        st.caption(f"Plus first-year living costs of {money(first_year.breakdown.living)}")

with tabs[2]:
    st.subheader("Timeline")
    cols = st.columns(2)
    for col, pid in zip(cols, ["A", "B"]):
        with col:
            st.markdown(f"### Plan {pid}")
            for e in build_timeline(pid):
                st.write(f"- **{e.date}**: {e.title} — {e.description}")
            st.caption(f"Permanent residence: {permanent_residence_eta(pid)}")

with tabs[3]:
    st.subheader("Risk Assessment")
    st.caption("Scores are 1-10, higher is safer.")
    overall = overall_scores()
    c1, c2 = st.columns(2)
    with c1:
        st.metric("Plan A overall", overall["A"])
    with c2:
        st.metric("Plan B overall", overall["B"])
    st.bar_chart(risk_comparison_frame().set_index("label")[["plan_A", "plan_B"]])
    cols = st.columns(2)
    for col, pid in zip(cols, ["A", "B"]):
        risks = plan_option(pid)["risks"]
        with col:
            st.markdown(f"### Plan {pid}")
            for key, label in RISK_LABELS.items():
                st.write(f"**{label}** ({risks[key]}/10): {risk_description(pid, key)}")

with tabs[4]:
    st.subheader("Decision")
    profit_bands = {100000: "100-200k", 200000: "200-300k", 300000: "300-500k",
                    500000: "500-800k", 800000: "800k-1M", 1000000: "1M+"}
    budget_bands = {30000: "< 30k", 40000: "30-40k", 50000: "40-50k",
                    60000: "50-60k", 80000: "60-80k", 100000: "80k+"}
    col1, col2 = st.columns(2)
    with col1:
        annual_profit = st.selectbox("West Shore annual net profit (RMB)", list(profit_bands), index=2,
                                     format_func=profit_bands.get)
        can_leave = st.radio("Can the husband work full time in HK for 2-3 years?", ["No / hard", "Yes"]) == "Yes"
        english = st.selectbox("Wife's English level", ["basic", "intermediate", "advanced"], index=1)
    with col2:
        monthly_budget = st.selectbox("Monthly budget ceiling in HK (HKD)", list(budget_bands), index=2,
                                      format_func=budget_bands.get)
        has_team = st.radio("Does West Shore have a team that can run it independently?", ["No", "Yes"]) == "Yes"
        risk = st.selectbox("Risk tolerance", ["low", "medium", "high"], index=1)

    if st.button("Get recommendation"):
        inp = DecisionInput(
            annual_profit=annual_profit,
            monthly_budget=monthly_budget,
            can_husband_leave=can_leave,
            has_reliable_team=has_team,
            wife_english_level=english,
            risk_tolerance=risk,
        )
        try:
            res = generate_recommendation(selection, inp)
        except InvalidArgument as e:
            st.error(str(e))
        else:
            st.session_state["recommendation"] = res
            p = plan_option(res.recommended)
            st.success(f"Recommended: Plan {res.recommended}, {p['name']} ({res.confidence}% confidence)")
            st.caption(f"Score A {res.score_a} • Score B {res.score_b}")
            for r in res.reasons:
                st.write("✅ " + r)
            for w in res.warnings:
                st.warning(w)
            st.write("**Action items**")
            for i, a in enumerate(res.action_items, 1):
                st.write(f"{i}. {a}")
            with st.expander("Why"):
                st.dataframe(pd.DataFrame(score_rules(selection, inp), columns=["rule", "plan", "delta"]))

with tabs[5]:
    st.subheader("Tools")
    t1, t2, t3, t4, t5 = st.tabs(["Exchange", "Schools", "Rent", "Visa materials", "IELTS"])

    with t1:
        direction = st.radio("Direction", ["HKD → RMB", "RMB → HKD"], horizontal=True)
        amount = st.number_input("Amount", min_value=0, value=100000, step=1000)
        if direction == "HKD → RMB":
            st.metric("RMB", format_currency(hkd_to_rmb(amount), "RMB"))
        else:
            st.metric("HKD", format_currency(rmb_to_hkd(amount)))

    with t2:
        only_dse = st.checkbox("Only DSE-ready schools", value=True)
        schools = school_table()
        keys = dse_ready_schools() if only_dse else list(schools)
        st.dataframe(pd.DataFrame([
            {"type": schools[k]["name"], "tuition": schools[k]["tuition"], "extras": schools[k]["extras"],
             "DSE": schools[k]["dse_ready"], "notes": schools[k]["description"]}
            for k in keys
        ]), use_container_width=True)
        st.write("**Universities (Plan B)**")
        st.dataframe(pd.DataFrame([dict(u) for u in universities()])[["name", "program", "tuition", "duration", "recommended"]],
                     use_container_width=True)

    with t3:
        areas = housing_table()
        st.dataframe(pd.DataFrame([
            {"area": v["name"], "min": v["min"], "avg": v["avg"], "max": v["max"], "notes": v["description"]}
            for v in areas.values()
        ]), use_container_width=True)

    with t4:
        pid = st.radio("Materials for", ["A", "B"], index=1, horizontal=True, key="materials_plan")
        done = [m for m in plan_option(pid)["materials"] if st.checkbox(m, key=f"mat_{pid}_{m}")]
        r = materials_readiness(pid, done)
        st.metric("Readiness", f"{r['percent']}%", help=r["status"])
        st.write("**Checklist** (copy & paste)")
        st.code(build_checklist(pid, date.today(), st.session_state.get("recommendation")))

    with t5:
        level = st.selectbox("Current English level", ["basic", "intermediate", "advanced"], index=1,
                             key="ielts_level")
        prep = ielts_prep_plan(level)
        st.metric("Target score", prep["target"])
        st.metric("Suggested prep time", prep["prep_time"])
        st.write("**Resources**")
        for item in prep["resources"]:
            st.write("- " + item)
        for link in prep["links"]:
            st.markdown(f"[{link}]({link})")

st.write("")
st.caption("Figures are planning estimates from static tables. Verify fees and visa rules with official sources.")
