import streamlit as st
import pandas as pd
from pathlib import Path

from rollup.allocation import AllocationEngine, AllocationValidator, flatten_dataset
from rollup.analysis import MetricsCalculator
from rollup.config import DATASET_FILE
from rollup.io import DataLoader
from rollup.models import DatasetError

# ---- CONFIG ----
st.set_page_config(
    page_title="Allocation Table",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded"
)

# File paths - adjust based on where you run streamlit from
DATASET_PATH = Path(DATASET_FILE)
if not DATASET_PATH.exists():
    DATASET_PATH = Path("..") / DATASET_FILE  # Try parent directory

GROUP_STYLE = "background-color: #eef2f5; font-weight: bold"
ITEM_STYLE = "background-color: #fefefe; font-weight: normal"

# ---- CUSTOM CSS ----
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f77b4;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.2rem;
        color: #666;
        margin-bottom: 2rem;
    }
</style>
""", unsafe_allow_html=True)

# ---- HELPER FUNCTIONS ----
def init_engine():
    """Load the dataset once per session"""
    if "engine" in st.session_state:
        return
    try:
        groups = DataLoader.load_dataset(str(DATASET_PATH))
    except (OSError, DatasetError) as e:
        st.error(f"Error loading {DATASET_PATH.name}: {str(e)}")
        st.stop()
    baseline = flatten_dataset(groups)
    st.session_state.baseline = baseline
    st.session_state.engine = AllocationEngine(baseline)

def rows_to_frame(rows):
    """Build the display DataFrame from the row sequence"""
    return pd.DataFrame([
        {
            "Label": row.label if row.is_group else f"    {row.label}",
            "Current Value": row.value,
            "Baseline": row.base_value,
            "Variance %": row.variance_percent,
            "is_group": row.is_group,
        }
        for row in rows
    ])

def style_rows(df):
    """Shade group rows and render them bold"""
    styles = [
        [GROUP_STYLE if is_group else ITEM_STYLE] * (len(df.columns) - 1)
        for is_group in df["is_group"]
    ]
    visible = df.drop(columns=["is_group"])
    return visible.style.apply(
        lambda _: pd.DataFrame(styles, index=visible.index, columns=visible.columns),
        axis=None
    ).format({"Current Value": "{:,.2f}", "Baseline": "{:,.2f}"})

def on_input_change(row_index):
    """Forward the raw text of an input box to the engine"""
    engine = st.session_state.engine
    engine.set_input(row_index, st.session_state[f"input_{engine.rows[row_index].id}"])

# ---- MAIN APP ----
init_engine()
engine = st.session_state.engine

st.markdown('<div class="main-header">📊 Allocation Table</div>', unsafe_allow_html=True)
st.markdown('<div class="sub-header">Allocate by percent of baseline or by absolute value; groups and items stay in step</div>', unsafe_allow_html=True)

# ============ SIDEBAR ============
st.sidebar.title("📋 Control Panel")

metrics = MetricsCalculator.calculate(engine.rows)
st.sidebar.markdown("### 📊 Totals")
st.sidebar.metric(
    "Total Current",
    f"{metrics['total_value']:,.2f}",
    delta=metrics['total_variance_percent']
)
st.sidebar.metric("Total Baseline", f"{metrics['total_base_value']:,.2f}")

status_col1, status_col2 = st.sidebar.columns(2)
with status_col1:
    st.metric("Groups Changed", f"{metrics['groups_changed']}/{metrics['group_count']}")
with status_col2:
    st.metric("Items Changed", f"{metrics['items_changed']}/{metrics['item_count']}")

st.sidebar.markdown("---")
if st.sidebar.button("🔄 Reset Table"):
    for key in [k for k in st.session_state.keys() if k.startswith("input_")]:
        del st.session_state[key]
    st.session_state.engine = AllocationEngine(st.session_state.baseline)
    st.rerun()

# ============ TABS ============
tab1, tab2 = st.tabs(["✏️ Allocate", "✅ Checks"])

# ============ TAB 1: ALLOCATE ============
with tab1:
    header = st.columns([3, 2, 2, 2, 1, 1, 2])
    for col, title in zip(header, ["Label", "Current Value", "Baseline", "Input",
                                   "", "", "Variance %"]):
        col.markdown(f"**{title}**")

    for row_index, row in enumerate(engine.rows):
        cols = st.columns([3, 2, 2, 2, 1, 1, 2])
        label = f"**{row.label}**" if row.is_group else f"&nbsp;&nbsp;&nbsp;&nbsp;└─ {row.label}"
        cols[0].markdown(label, unsafe_allow_html=True)
        cols[1].markdown(f"{row.value:,.2f}")
        cols[2].markdown(f"{row.base_value:,.2f}")
        cols[3].text_input(
            "Input",
            value=row.input,
            key=f"input_{row.id}",
            label_visibility="collapsed",
            on_change=on_input_change,
            args=(row_index,)
        )
        if cols[4].button("Allocate %", key=f"pct_{row.id}"):
            engine.allocate_by_percent(row_index)
            st.rerun()
        if cols[5].button("Allocate Val", key=f"val_{row.id}"):
            engine.allocate_by_value(row_index)
            st.rerun()
        cols[6].markdown(row.variance_percent)

    st.markdown("---")
    st.subheader("📋 Table Snapshot")
    st.dataframe(style_rows(rows_to_frame(engine.rows)), width="stretch", hide_index=True)

# ============ TAB 2: CHECKS ============
with tab2:
    validator = AllocationValidator(st.session_state.baseline)
    issues = validator.validate(engine.rows, engine.pinned_group_ids)

    if issues:
        st.warning(f"Found {len(issues)} validation issue(s)")
        for issue in issues:
            st.markdown(f"- {issue}")
    else:
        st.success("✅ Every group matches the sum of its items")

    if engine.pinned_group_ids:
        st.info(
            "Groups set directly (may differ from their items by rounding): "
            + ", ".join(sorted(engine.pinned_group_ids))
        )

    if metrics['largest_increase']:
        inc = metrics['largest_increase']
        st.markdown(f"**Largest increase:** {inc['label']} (+{inc['change']:,.2f})")
    if metrics['largest_decrease']:
        dec = metrics['largest_decrease']
        st.markdown(f"**Largest decrease:** {dec['label']} ({dec['change']:,.2f})")
