import streamlit as st

st.set_page_config(page_title="About • HK Move Planner", layout="wide")

st.title("📄 About This Project")
st.caption("Version 1.0 — a planning aid for one family weighing two routes to Hong Kong")

st.markdown("""
## Project Scope
This app compares two immigration pathways for a family of four:
- **Plan A: Talent Admission Scheme** — the husband is hired by a Hong Kong employer
- **Plan B: Study Immigration** — the wife takes a one-year master's, the family follows as dependants

It focuses on:
- Side-by-side **plan comparison** (success rate, pros/cons)
- A configurable **living cost calculator** with first-year and seven-year projections
- **Timelines** through to the seven-year permanent residence application
- A six-dimension **risk assessment** with a short explanation of each plan's score
- A transparent, rule-based **recommendation** with reasons, warnings and action items
- Practical **tools**: HKD/RMB conversion, school and rent references, visa materials checklist, IELTS prep guide

---

## Objectives
1. **Transparency** → every number comes from `config/hk_costs.yaml` and a formula on the Methodology page.
2. **Determinism** → the same inputs always give the same result.
3. **Privacy** → nothing is stored; all inputs are session-local.

---

## Limitations
- Costs are static averages, not live quotes.
- The recommendation is a weighted checklist, not immigration advice.
- Visa requirements change; always confirm with the Immigration Department and the universities.
""")
