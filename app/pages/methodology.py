import streamlit as st

st.set_page_config(page_title="Methodology • HK Move Planner", layout="wide")
st.title("🧩 Methodology")
st.caption("How the cost projection and the recommendation score are computed")

st.markdown("""
## Architecture Overview
The app has two deterministic engines and one configuration file:

1. **Cost tables (YAML)**
   - `config/hk_costs.yaml` holds housing, food, school and other costs, both plan descriptors
     (one-time costs, timeline, pros/cons, risk scores, next steps, visa materials) and the FX rate.
   - Point `HKPLAN_CONFIG` at another file to swap the tables.

2. **Cost projector**
   - Monthly, first-year and seven-year totals for the scenario in the sidebar.

3. **Recommendation engine**
   - A fixed table of weighted rules over the decision questionnaire.

Everything is recomputed from the current inputs; nothing is stored.
""")

st.markdown("---")

st.markdown("""
## Cost Projection
- **Housing / food**: the *average* monthly figure of the chosen area / food mode (min and max are display only).
- **Transport, utilities, miscellaneous**: fixed monthly averages.
- **Education** (per child, per year): tuition + extras, plus
  `tutoring sessions/week × 400 × 4 × 10` and `interest classes/week × 300 × 4 × 10`
  (4 weeks a month over 10 teaching months). The monthly figure is both children's total / 12.
- **Insurance**: `(2 adults × 4,000 + insured persons × 3,000) / 12` when enabled.
- **First year**: one-time costs of the plan (visa, relocation, tuition, exam) + monthly total × 12.
- **Seven years**: first year, then each later year's living cost grows 3% on the previous year.
  One-time costs are not repeated.

## Recommendation Score
| Rule | Effect |
|---|---|
| Husband cannot leave | B +30 |
| Husband can leave | A +15 |
| Reliable team | A +20 |
| No reliable team | B +25 (warning) |
| English advanced / intermediate / basic | B +25 / +15 / +5 |
| Risk tolerance low / high | B +20 / A +10 |
| Budget × 12 below Plan A first-year cost | B +10 (warning) |
| Budget × 12 below Plan B first-year cost | warning only |
| Annual profit above 500k | A +15 |

- The budget rules price the same lifestyle under **both** plans, whatever plan is selected.
- The higher score wins; a tie goes to **Plan A**.
- Confidence = winning score / total score, as a percentage (50% if both scores are 0).
- The chosen plan's four next steps are appended to the action items.
""")
