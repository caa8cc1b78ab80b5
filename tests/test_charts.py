from app.schemas.dashboard import ChartSegment
from app.utilities.charts import build_chart_gradient, build_line_path
from app.utilities.utility import format_number


def segment(value, color):
    return ChartSegment(label=color, value=value, color=color)


def test_gradient_for_no_segments_is_placeholder():
    assert build_chart_gradient([]) == "conic-gradient(#dceaf2 0deg, #dceaf2 360deg)"


def test_gradient_for_zero_total_is_placeholder():
    assert build_chart_gradient([segment(0, "#111"), segment(0, "#222")]) == (
        "conic-gradient(#dceaf2 0deg, #dceaf2 360deg)"
    )


def test_gradient_partitions_full_turn():
    gradient = build_chart_gradient([segment(3, "#aaa"), segment(1, "#bbb")])

    assert gradient == "conic-gradient(#aaa 0deg 270deg, #bbb 270deg 360deg)"


def test_line_path_scales_to_box():
    assert build_line_path([0, 10], width=100, height=50, padding=10) == "M 10 40 L 90 10"


def test_line_path_with_all_zero_values_stays_inside_box():
    assert build_line_path([0, 0], width=100, height=50, padding=10) == "M 10 40 L 90 40"


def test_line_path_with_single_value():
    assert build_line_path([5], width=100, height=50, padding=10) == "M 10 10"


def test_line_path_with_no_values():
    assert build_line_path([], width=100, height=50, padding=10) == ""


def test_line_path_midpoints():
    path = build_line_path([4, 2, 4], width=100, height=50, padding=10)

    assert path == "M 10 10 L 50 25 L 90 10"


def test_format_number():
    assert format_number(22.0) == "22"
    assert format_number(119.2) == "119.2"
    assert format_number(0) == "0"
