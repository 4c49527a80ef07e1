"""Help text strings for UI tooltips."""

INTERPOLATION_METHODS = {
    'linear': 'Linear interpolation: Creates smooth surfaces by linearly interpolating between data points. Best for evenly distributed data.',
    'cubic': 'Cubic interpolation: Uses cubic splines for smoother results. Better for sparse data but may overshoot near edges.',
    'nearest': 'Nearest neighbor: Uses the value of the closest data point. Creates stepped/blocky appearance. Fast and robust.',
}

DRAW_ORDER_LABELS = {
    'high': 'High performance on top',
    'low': 'Low performance on top',
}

COMPONENT_POOL_HELP = 'Select all columns that contribute to the mass-balance total. Plotted components are divided by the sum of the whole pool.'

COMPONENT_COUNT_HELP = '3 components: ternary plot. 4: tetrahedron. 5 or more: parallel coordinates, with the last component implied by the others.'

CONSTRAINT_FIELDS_HELP = 'Choose which remaining pool components should be held at a fixed value with sliders. Only rows within the tolerance of every slider are plotted.'

TOLERANCE_HELP = 'Allowed deviation from each slider value, as a fraction of the total (0.005 = 0.5 percentage points).'

COLOR_RANGE_HELP = 'Leave blank to use the minimum / maximum of the plotted points.'
