"""
Mixture Plot Analyzer - Streamlit Web Application
Composition-performance visualization for 3-component (ternary), 4-component
(tetrahedral) and 5+ component (parallel coordinates) mixtures
"""

import streamlit as st

from mixviz.color import COLOR_SCALES
from mixviz.data_loader import get_sample_data, parse_uploaded_file
from mixviz.help_texts import (
    COLOR_RANGE_HELP,
    COMPONENT_COUNT_HELP,
    COMPONENT_POOL_HELP,
    CONSTRAINT_FIELDS_HELP,
    DRAW_ORDER_LABELS,
    INTERPOLATION_METHODS,
    TOLERANCE_HELP,
)
from mixviz.logger import setup_logging
from mixviz.ordering import DRAW_ORDERS
from mixviz.pipeline import build, make_figure, points_dataframe
from mixviz.state import (
    MIN_COMPONENTS,
    get_color_overrides,
    get_colorscale,
    get_component_fields,
    get_component_pool,
    get_constraint_fields,
    get_constraint_targets,
    get_draw_order,
    get_performance_field,
    get_tolerance,
    initialize_session_state,
    load_dataset,
    reconcile_selection,
    render_options_from_state,
    selection_from_state,
    set_color_overrides,
    set_colorscale,
    set_component_count,
    set_component_fields,
    set_component_pool,
    set_constraint_fields,
    set_constraint_target,
    set_draw_order,
    set_performance_field,
    set_tolerance,
)

setup_logging()

# Page configuration
st.set_page_config(
    page_title="Mixture Plot Analyzer",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def _select_index(options, value) -> int:
    return options.index(value) if value in options else 0


def render_data_loader():
    """Render data loader section."""
    st.markdown("### Data Loader")

    col1, col2 = st.columns([1, 2])
    with col1:
        if st.button("Load Sample Data", key='load_sample_btn'):
            data = get_sample_data()
            load_dataset(st.session_state, data, list(data.columns))
            st.success("Sample data loaded!")
            st.rerun()

    uploaded_file = st.file_uploader(
        "Upload CSV/TXT file",
        type=['csv', 'txt', 'tsv'],
        help="The first row must hold the column names.",
        key='file_uploader'
    )

    if uploaded_file is not None and st.session_state.uploaded_file_name != uploaded_file.name:
        df, fields, error = parse_uploaded_file(uploaded_file)
        if error:
            st.error(f"Error loading file: {error}")
        else:
            load_dataset(st.session_state, df, fields, uploaded_file.name)
            st.success(f"Parsed {len(df)} rows from {uploaded_file.name}")

    data = st.session_state.data
    if len(data) > 0:
        st.caption(f"{len(data)} data points loaded")
        st.dataframe(data, use_container_width=True, height=250)


def render_selection():
    """Render the field selection panel."""
    st.markdown("### Columns")

    fields = st.session_state.fields
    if not fields:
        st.info("Load a dataset to choose columns.")
        return

    performance_options = [''] + fields
    performance = st.selectbox(
        "Performance column",
        options=performance_options,
        index=_select_index(performance_options, get_performance_field(st.session_state)),
        format_func=lambda x: x or 'Select column',
        key='performance_select'
    )
    set_performance_field(st.session_state, performance)

    pool_options = [field for field in fields if field != performance]
    pool = st.multiselect(
        "Component columns",
        options=pool_options,
        default=[field for field in get_component_pool(st.session_state) if field in pool_options],
        help=COMPONENT_POOL_HELP,
        key='pool_multiselect'
    )
    set_component_pool(st.session_state, pool)

    slot_options = pool or pool_options
    max_components = max(MIN_COMPONENTS, len(slot_options))
    count = st.number_input(
        "Number of plotted components",
        min_value=MIN_COMPONENTS,
        max_value=max_components,
        value=min(len(get_component_fields(st.session_state)), max_components),
        step=1,
        help=COMPONENT_COUNT_HELP,
        key='component_count_input'
    )
    set_component_count(st.session_state, count)

    current = get_component_fields(st.session_state)
    options = [''] + slot_options
    selected = []
    cols = st.columns(min(len(current), 4))
    for idx, value in enumerate(current):
        with cols[idx % len(cols)]:
            selected.append(st.selectbox(
                f"Component {idx + 1} column",
                options=options,
                index=_select_index(options, value),
                format_func=lambda x: x or 'Select column',
                key=f'component_select_{idx}'
            ))
    set_component_fields(st.session_state, selected)

    extra_options = [field for field in pool if field not in selected]
    constraint_fields = st.multiselect(
        "Slider components",
        options=extra_options,
        default=[field for field in get_constraint_fields(st.session_state) if field in extra_options],
        help=CONSTRAINT_FIELDS_HELP,
        key='constraint_multiselect'
    )
    set_constraint_fields(st.session_state, constraint_fields)

    if constraint_fields:
        tolerance = st.number_input(
            "Slider tolerance",
            min_value=0.0,
            max_value=0.5,
            value=float(get_tolerance(st.session_state)),
            step=0.001,
            format="%.3f",
            help=TOLERANCE_HELP,
            key='tolerance_input'
        )
        set_tolerance(st.session_state, tolerance)

    ranges = reconcile_selection(st.session_state)
    render_constraint_sliders(ranges)


def render_constraint_sliders(ranges):
    """Render one target slider per constrained component."""
    fields = get_constraint_fields(st.session_state)
    if not fields:
        return

    st.markdown("#### Slider components")
    targets = get_constraint_targets(st.session_state)
    for field in fields:
        if field not in ranges:
            st.caption(f"{field}: no valid values in the component pool")
            continue
        low, high = ranges[field]
        if high - low < 1e-9:
            st.caption(f"{field}: {low:.3f} in every row")
            continue
        value = min(max(targets.get(field, low), low), high)
        target = st.slider(
            field,
            min_value=low,
            max_value=high,
            value=value,
            step=0.001,
            format="%.3f",
            key=f'target_slider_{field}'
        )
        set_constraint_target(st.session_state, field, target)


def render_plot_settings():
    """Render plot settings panel."""
    st.markdown("### Plot Settings")

    settings = st.session_state.plot_settings

    tab1, tab2, tab3 = st.tabs(["Color", "Markers", "Interpolation"])

    with tab1:
        col1, col2 = st.columns(2)

        with col1:
            scale = st.selectbox(
                "Colorscale",
                options=COLOR_SCALES,
                index=_select_index(COLOR_SCALES, get_colorscale(st.session_state)),
                key='colorscale_select'
            )
            set_colorscale(st.session_state, scale)

            settings['reverse_colorscale'] = st.checkbox(
                "Reverse colorscale",
                value=settings.get('reverse_colorscale', False),
                key='reverse_colorscale_check'
            )

        with col2:
            cmin, cmax = get_color_overrides(st.session_state)
            cmin = st.text_input(
                "Colour min (optional)",
                value=cmin,
                placeholder="auto",
                help=COLOR_RANGE_HELP,
                key='cmin_input'
            )
            cmax = st.text_input(
                "Colour max (optional)",
                value=cmax,
                placeholder="auto",
                help=COLOR_RANGE_HELP,
                key='cmax_input'
            )
            set_color_overrides(st.session_state, cmin, cmax)

    with tab2:
        col1, col2 = st.columns(2)

        with col1:
            order = st.selectbox(
                "Draw order (tetrahedron)",
                options=list(DRAW_ORDERS),
                index=_select_index(list(DRAW_ORDERS), get_draw_order(st.session_state)),
                format_func=lambda x: DRAW_ORDER_LABELS[x],
                key='draw_order_select'
            )
            set_draw_order(st.session_state, order)

            settings['auto_subscript'] = st.checkbox(
                "Auto Subscript Numbers",
                value=settings.get('auto_subscript', True),
                help="Automatically convert numbers in labels to subscript (e.g., Li2O -> Li₂O)",
                key='auto_subscript_check'
            )

        with col2:
            custom_size = st.checkbox(
                "Custom marker size",
                value=settings.get('marker_size') is not None,
                key='custom_marker_size_check'
            )
            if custom_size:
                settings['marker_size'] = st.slider(
                    "Marker Size",
                    min_value=2,
                    max_value=30,
                    value=settings.get('marker_size') or 8,
                    key='marker_size_slider'
                )
            else:
                settings['marker_size'] = None

            settings['marker_opacity'] = st.slider(
                "Marker Opacity",
                min_value=0.0,
                max_value=1.0,
                value=settings.get('marker_opacity', 0.8),
                step=0.05,
                key='marker_opacity_slider'
            )

    with tab3:
        settings['interpolate'] = st.checkbox(
            "Enable Interpolation (ternary only)",
            value=settings.get('interpolate', False),
            help="Interpolate between data points to create a smooth heatmap",
            key='interpolate_check'
        )

        if settings['interpolate']:
            col1, col2 = st.columns(2)

            with col1:
                settings['interpolation_resolution'] = st.slider(
                    "Resolution",
                    min_value=10,
                    max_value=100,
                    value=settings.get('interpolation_resolution', 50),
                    help="Higher values create smoother interpolation but may be slower",
                    key='interpolation_resolution_slider'
                )

            with col2:
                methods = list(INTERPOLATION_METHODS)
                settings['interpolation_method'] = st.selectbox(
                    "Method",
                    options=methods,
                    index=_select_index(methods, settings.get('interpolation_method', 'linear')),
                    help=INTERPOLATION_METHODS.get(settings.get('interpolation_method', 'linear')),
                    key='interpolation_method_select'
                )

    st.session_state.plot_settings = settings


def render_plot():
    """Render the plot for the current selection, with export buttons."""
    st.markdown("### Plot")

    geometry = build(
        st.session_state.data,
        selection_from_state(st.session_state),
        render_options_from_state(st.session_state),
    )

    if geometry is None:
        st.info("Select a performance column and a column for every component to plot.")
        return

    fig = make_figure(geometry)
    st.plotly_chart(fig, use_container_width=True, key='mixture_plot')
    st.caption(f"{len(geometry.points)} of {geometry.row_count} rows plotted")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        try:
            img_bytes = fig.to_image(format="png", scale=2)
            st.download_button(
                label="Download PNG",
                data=img_bytes,
                file_name="mixture_plot.png",
                mime="image/png",
                key='download_png'
            )
        except Exception:
            st.caption("PNG export requires kaleido package")

    with col2:
        try:
            svg_bytes = fig.to_image(format="svg")
            st.download_button(
                label="Download SVG",
                data=svg_bytes,
                file_name="mixture_plot.svg",
                mime="image/svg+xml",
                key='download_svg'
            )
        except Exception:
            st.caption("SVG export requires kaleido package")

    with col3:
        st.download_button(
            label="Download HTML",
            data=fig.to_html(include_plotlyjs='cdn'),
            file_name="mixture_plot.html",
            mime="text/html",
            key='download_html'
        )

    with col4:
        csv = points_dataframe(geometry).to_csv(index=False)
        st.download_button(
            label="Download Points (CSV)",
            data=csv,
            file_name="mixture_points.csv",
            mime="text/csv",
            key='download_csv'
        )


def main():
    """Main application function."""
    initialize_session_state(st.session_state)

    st.markdown("# Mixture Plot Analyzer")
    st.markdown("Composition-performance diagrams for 3, 4 and N-component mixtures")

    st.markdown("---")

    left_col, right_col = st.columns([1, 1])

    with left_col:
        render_data_loader()
        st.markdown("---")
        render_selection()

    with right_col:
        render_plot_settings()

    st.markdown("---")

    plot_col, spacer = st.columns([3, 1])
    with plot_col:
        render_plot()


if __name__ == "__main__":
    main()
