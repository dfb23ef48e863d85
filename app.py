"""Rent vs Mortgage Map - Streamlit Application."""

import logging

import streamlit as st

from components.charts import create_affordability_map, create_ratio_histogram
from components.inputs import loan_configuration_form, table_search_input
from components.tables import (
    display_affordability_table,
    display_area_detail,
    display_legend,
    sort_controls,
)
from src.affordability import AffordabilityIndex
from src.bands import LEGEND_ORDER, classify_ratio
from src.data import DEFAULT_DATA_DIR, HousingDataset, load_dataset
from src.export import (
    Scenario,
    list_example_scenarios,
    load_example_scenario,
    loan_config_to_dict,
    rows_to_csv,
    scenario_from_json,
    scenario_to_json,
)
from src.loan import LoanConfiguration
from src.table import AffordabilityTable

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Rent vs Mortgage Map",
    page_icon="🏠",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS
st.markdown("""
<style>
    .stMetric {
        background-color: #f0f2f6;
        padding: 10px;
        border-radius: 5px;
    }
    .stMetric label, .stMetric [data-testid="stMetricValue"], .stMetric [data-testid="stMetricDelta"] {
        color: #262730 !important;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_data(show_spinner="Loading postcode data...")
def _load_dataset(data_dir: str) -> HousingDataset:
    return load_dataset(data_dir)


def _current_config() -> LoanConfiguration:
    return st.session_state.get('loan_config', LoanConfiguration())


def affordability_map_page(dataset: HousingDataset, config: LoanConfiguration):
    """Map and table of rent versus mortgage payment by postcode."""
    st.header("Rent vs Mortgage by Postcode")

    index = AffordabilityIndex(dataset.records, dataset.suburbs)
    try:
        index.recompute(config)
    except ValueError as e:
        st.error(f"Invalid loan settings: {e}")
        return

    table = AffordabilityTable(index.project_rows())

    col_map, col_legend = st.columns([4, 1])
    with col_map:
        if dataset.boundaries:
            fig = create_affordability_map(dataset.boundaries, index)
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.caption("Postcode boundaries unavailable")
    with col_legend:
        display_legend()

        counts = {band: 0 for band in LEGEND_ORDER}
        for row in table.rows:
            band = classify_ratio(row.ratio)
            if band in counts:
                counts[band] += 1
        st.divider()
        for band, count in counts.items():
            st.caption(f"{count} postcodes {band.label}")

    st.divider()

    query = table_search_input()
    sort_controls(table)
    visible = table.filter(query)
    display_affordability_table(table, query)

    st.download_button(
        "Download CSV",
        rows_to_csv(table, visible),
        "rent_vs_mortgage.csv",
        "text/csv",
    )

    st.divider()

    st.subheader("Postcode Detail")
    if visible:
        postcode = st.selectbox(
            "Postcode",
            options=[row.postcode for row in visible],
            format_func=lambda code: f"{code} - {index.suburb_label(code)}",
            key="detail_postcode",
        )
        display_area_detail(index, postcode, config.repayment_type)
    else:
        st.caption("No postcodes match the search.")

    with st.expander("Ratio distribution"):
        st.plotly_chart(create_ratio_histogram(table.rows), use_container_width=True)


def _apply_scenario(scenario: Scenario):
    st.session_state['loan_config'] = scenario.config
    # Drop widget state so the form picks up the loaded values
    for key in [k for k in st.session_state if str(k).startswith("loan_") and k != 'loan_config']:
        del st.session_state[key]
    logger.info("Applied scenario %r", scenario.name)


def data_management_page(config: LoanConfiguration):
    """Import/export loan scenarios."""
    st.header("Data Management")

    tab1, tab2, tab3 = st.tabs(["Export Scenario", "Import Scenario", "Example Scenarios"])

    with tab1:
        st.subheader("Export Current Scenario")

        name = st.text_input("Scenario Name", value="My Loan Scenario")
        description = st.text_area("Description", value="")

        scenario = Scenario(
            name=name,
            description=description,
            loan=loan_config_to_dict(config),
        )
        st.json(scenario.loan)

        st.download_button(
            "Download JSON",
            scenario_to_json(scenario),
            f"{name.lower().replace(' ', '_')}.json",
            "application/json",
        )

    with tab2:
        st.subheader("Import Scenario")

        uploaded_file = st.file_uploader("Choose a JSON file", type="json")

        if uploaded_file is not None:
            try:
                scenario = scenario_from_json(uploaded_file.getvalue().decode("utf-8"))
            except (ValueError, UnicodeDecodeError) as e:
                st.error(f"Could not read scenario: {e}")
            else:
                st.success(f"Loaded scenario: {scenario.name}")
                st.json(scenario.loan)

                if st.button("Apply Scenario"):
                    _apply_scenario(scenario)
                    st.success("Scenario applied! Go to Affordability Map to view.")

    with tab3:
        st.subheader("Example Scenarios")

        examples = list_example_scenarios()
        if not examples:
            st.info("No example scenarios found.")

        for example_name in examples:
            try:
                scenario = load_example_scenario(example_name)
            except (OSError, ValueError) as e:
                st.warning(f"Skipping {example_name}: {e}")
                continue

            with st.expander(scenario.name):
                st.markdown(scenario.description)
                st.json(scenario.loan)
                if st.button("Load", key=f"example_{example_name}"):
                    _apply_scenario(scenario)
                    st.success(f"Loaded {scenario.name}! Go to Affordability Map to view.")


def main():
    """Main application entry point."""
    st.title("🏠 Rent vs Mortgage Map")
    st.markdown("*Weekly rent compared with the weekly repayment on the median sale price, by NSW postcode*")

    st.sidebar.title("Navigation")
    page = st.sidebar.radio(
        "Select Page",
        options=["Affordability Map", "Data Management"],
    )

    st.sidebar.divider()

    config = loan_configuration_form(initial=_current_config())
    if config is None:
        config = _current_config()
    else:
        st.session_state['loan_config'] = config

    st.sidebar.divider()

    with st.sidebar.expander("Reading the ratio"):
        st.markdown("""
        **Weekly rent / weekly mortgage payment.**

        Above 1 the repayment is cheaper than renting; below 1 renting is
        cheaper. Payments use the median sale price less the deposit.
        """)

    if page == "Affordability Map":
        try:
            dataset = _load_dataset(str(DEFAULT_DATA_DIR))
        except RuntimeError as e:
            logger.error("Data loading failed: %s", e)
            st.error(f"Unable to load postcode data: {e}")
            return
        affordability_map_page(dataset, config)
    elif page == "Data Management":
        data_management_page(config)


if __name__ == "__main__":
    main()
