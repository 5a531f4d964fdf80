import streamlit as st

from src.config import DATA_SOURCE, DEFAULT_DISPLAY_MODE, EXPORT_CSV_NAME, NO_PB_LABEL, PB_LABEL
from src.ingestion.loader import DataLoadError, load_datasets
from src.leaderboard.render import table_to_frame
from src.leaderboard.session import LeaderboardSession, load_failure
from src.widgets.typeahead import Typeahead, TypeaheadState

# --- Page Configuration ---
st.set_page_config(
    page_title="PSO Records Leaderboard",
    page_icon="🏆",
    layout="wide",
    initial_sidebar_state="expanded"
)

ALL_OPTION = "All"
PB_OPTIONS = {ALL_OPTION: None, PB_LABEL: True, NO_PB_LABEL: False}
SESSION_KEY = "leaderboard_session"

CUSTOM_CSS = """
<style>
table.pivot {
    border-collapse: collapse;
    width: 100%;
    font-size: 0.875rem;
}
table.pivot th, table.pivot td {
    padding: 0.3rem 0.6rem;
    text-align: left;
}
table.pivot thead th {
    border-bottom: 2px solid light-dark(#333333, #FAFAFA);
}
tr.group-label td {
    font-weight: 700;
    padding-top: 1rem !important;
}
tr.group-divider td {
    padding: 0 !important;
}
tr.group-divider .bar {
    height: 2px;
    background: linear-gradient(90deg, #FF6B6B 0%, rgba(255, 107, 107, 0) 100%);
}
</style>
"""


# --- Data Loading Functions ---
@st.cache_data(ttl=3600)
def load_data(source):
    """Load the four datasets (cached; failures are not cached)."""
    return load_datasets(source)


def get_session():
    """One LeaderboardSession per browser session; None if loading failed."""
    if SESSION_KEY not in st.session_state:
        try:
            data = load_data(DATA_SOURCE)
        except DataLoadError as e:
            result = load_failure(e)
            st.error(result.status)
            st.code(str(e))
            return None
        st.session_state[SESSION_KEY] = LeaderboardSession(data, display_mode=DEFAULT_DISPLAY_MODE)
    return st.session_state[SESSION_KEY]


# --- Typeahead Callbacks ---
def _on_query_change(picker, query_key):
    picker.input(st.session_state[query_key])


def _on_pick(picker, key, query_key):
    picker.click_suggestion(key)
    st.session_state[query_key] = ""


def _on_add_best(picker, query_key):
    picker.input(st.session_state[query_key])
    if picker.press_enter():
        st.session_state[query_key] = ""


def render_typeahead(picker: Typeahead, label: str, key_prefix: str):
    """Search box, suggestion buttons and removable chips for one typeahead."""
    query_key = f"{key_prefix}_query"

    col_input, col_add = st.columns([4, 1])
    with col_input:
        st.text_input(
            label,
            key=query_key,
            placeholder="Type to search…",
            on_change=_on_query_change,
            args=(picker, query_key),
        )
    with col_add:
        st.markdown('<div style="padding-top: 1.75rem;"></div>', unsafe_allow_html=True)
        st.button("Add", key=f"{key_prefix}_add", on_click=_on_add_best, args=(picker, query_key))

    if picker.state == TypeaheadState.SUGGESTING:
        for item in picker.suggestions:
            st.button(
                item.label,
                key=f"{key_prefix}_suggestion_{item.key}",
                on_click=_on_pick,
                args=(picker, item.key, query_key),
                use_container_width=True,
            )
        st.button("Close", key=f"{key_prefix}_close", on_click=picker.press_escape)

    for chip in picker.chips():
        st.button(
            f"{chip.label} ×",
            key=f"{key_prefix}_chip_{chip.key}",
            on_click=picker.remove,
            args=(chip.key,),
        )


# --- Main App ---
def main():
    st.html(CUSTOM_CSS)
    st.title("PSO Records Leaderboard")

    session = get_session()
    if session is None:
        return

    # --- Sidebar ---
    with st.sidebar:
        st.header("🔎 Filters")

        render_typeahead(session.player_picker, "Players", "player")
        render_typeahead(session.class_picker, "Classes", "class")

        st.markdown("---")

        meta = st.selectbox("Meta", [ALL_OPTION] + session.meta_options(), key="meta_filter")
        category = st.selectbox("Category", [ALL_OPTION] + session.category_options(), key="category_filter")
        pb_choice = st.radio("PB", list(PB_OPTIONS), horizontal=True, key="pb_filter")
        limit = st.number_input("Row limit (0 = all)", min_value=0, step=1, value=0, key="row_limit")
        show_labels = st.toggle("Show group labels", value=True, key="show_group_labels")

        session.filters.meta = None if meta == ALL_OPTION else meta
        session.filters.category = None if category == ALL_OPTION else category
        session.filters.pb = PB_OPTIONS[pb_choice]
        session.filters.limit = int(limit) or None
        session.display_mode = "label" if show_labels else "divider"

    result = session.refresh()

    col_status, col_download = st.columns([4, 1])
    with col_status:
        st.caption(result.status)
    with col_download:
        if result.table is not None:
            st.download_button(
                "📥 Download CSV",
                data=table_to_frame(result.table).to_csv(index=False),
                file_name=EXPORT_CSV_NAME,
                mime="text/csv",
            )

    st.html(result.html)


if __name__ == "__main__":
    main()
