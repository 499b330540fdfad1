import json

import pytest

from plotmon.colormap import COLORS, Color
from plotmon.datasets import (
    Chart,
    Dataset,
    build_chart,
    draw_datasets,
    error_screen,
    to_dataset,
)
from plotmon.filter import FilterOpts
from plotmon.logs import Logs


def _write(tmp_path, rows, name="log.jsonl"):
    path = tmp_path / name
    path.write_text("".join(json.dumps(row) + "\n" for row in rows))
    return path


def _text(row):
    return "".join(char for char, _ in row)


ROWS = [{"loss": 3, "acc": 1}, {"loss": 2, "acc": 2}, {"loss": 1}]


def _logs(tmp_path, opts=None, rows=ROWS):
    return Logs(_write(tmp_path, rows), opts, watch=False)


def test_missing_file_reports_not_found(tmp_path):
    logs = Logs(tmp_path / "missing.jsonl", watch=False)
    with pytest.raises(LookupError, match="FILE NOT FOUND"):
        build_chart(logs)


def test_empty_file_reports_no_data(tmp_path):
    logs = _logs(tmp_path, rows=[])
    with pytest.raises(LookupError, match="NO DATA"):
        build_chart(logs)


def test_everything_filtered_reports_no_data(tmp_path):
    logs = _logs(tmp_path, FilterOpts(only=["nothing"]))
    with pytest.raises(LookupError, match="NO DATA"):
        build_chart(logs)


def test_bounds_and_labels(tmp_path):
    chart = build_chart(_logs(tmp_path))
    assert chart.x_bounds == (0.0, 2.0)
    assert chart.y_bounds == (1.0, 3.0)
    assert chart.x_labels == ["0", "1", "2"]
    assert chart.y_labels == ["1.00e0", "2.00e0", "3.00e0"]
    assert chart.title == "log.jsonl"


def test_datasets_follow_colormap(tmp_path):
    chart = build_chart(_logs(tmp_path))
    assert [d.name for d in chart.datasets] == ["loss", "acc"]
    assert [d.color for d in chart.datasets] == list(COLORS[:2])
    assert chart.datasets[0].points == [(0.0, 3.0), (1.0, 2.0), (2.0, 1.0)]


def test_y_bounds_overridden_by_filter(tmp_path):
    chart = build_chart(_logs(tmp_path, FilterOpts(min_y=-1.0, max_y=5.0)))
    assert chart.y_bounds == (-1.0, 5.0)


def test_span_trims_points(tmp_path):
    chart = build_chart(_logs(tmp_path, FilterOpts(span=1.0)))
    assert chart.x_bounds[0] == 1.0
    assert all(x >= 1.0 for d in chart.datasets for x, _ in d.points)


def test_to_dataset_keeps_fields():
    points = [(0.0, 1.0), (1.0, 2.0)]
    dataset = to_dataset("loss", points, Color.CYAN)
    assert dataset == Dataset(name="loss", points=points, color=Color.CYAN)


def test_error_screen_layout():
    screen = error_screen("log.jsonl", "NO DATA", 30, 10)
    assert len(screen) == 10
    assert all(len(row) == 30 for row in screen)
    assert _text(screen[0]).strip() == "log.jsonl"
    message_row = screen[1 + 10 // 2]
    assert _text(message_row).strip() == "NO DATA"
    assert {color for char, color in message_row if char != " "} == {Color.RED}


def test_draw_missing_file_matches_error_screen(tmp_path):
    logs = Logs(tmp_path / "missing.jsonl", watch=False)
    assert draw_datasets(logs, 40, 12) == error_screen(
        "missing.jsonl", "FILE NOT FOUND", 40, 12
    )


def test_draw_chart_contents(tmp_path):
    screen = draw_datasets(_logs(tmp_path), 60, 16)
    assert len(screen) == 16
    assert all(len(row) == 60 for row in screen)
    text = "\n".join(_text(row) for row in screen)
    assert "log.jsonl" in _text(screen[0])
    assert "Epochs" in text
    assert "Value" in text
    assert "loss" in text and "acc" in text
    braille = [(c, col) for row in screen for c, col in row if 0x2800 < ord(c) <= 0x28FF]
    assert braille
    assert {col for _, col in braille} <= set(COLORS[:2])


def test_render_degenerate_sizes(tmp_path):
    chart = build_chart(_logs(tmp_path))
    assert chart.render(0, 0) == []
    small = chart.render(5, 2)
    assert len(small) == 2 and all(len(row) == 5 for row in small)


def test_render_single_point_series():
    chart = Chart(
        title="t",
        datasets=[to_dataset("only", [(0.0, 1.0)], Color.BLUE)],
        x_bounds=(0.0, 0.0),
        y_bounds=(1.0, 1.0),
        x_labels=["0", "0", "0"],
        y_labels=["a", "b", "c"],
    )
    screen = chart.render(30, 10)
    dots = [c for row in screen for c, _ in row if 0x2800 < ord(c) <= 0x28FF]
    assert len(dots) == 1