"""
Tests for the dumonitor-plot tool.
"""

import pytest

from dumonitor import plotter
from dumonitor.storage.tsv_reader import load_records

SAMPLE = "elapsed\tdisk_usage\tdelta\tpeak\n0\t1000\t0\t1000\n100\t1200\t200\t1200\n250\t900\t-100\t1200\n"


@pytest.fixture
def records_file(tmp_path):
    path = tmp_path / "run.tsv"
    path.write_text(SAMPLE)
    return path


@pytest.fixture(autouse=True)
def no_static_export(monkeypatch):
    """Kaleido is optional; keep tests independent of it."""
    def _fail(*args, **kwargs):
        raise RuntimeError("kaleido not available")
    monkeypatch.setattr("plotly.graph_objects.Figure.write_image", _fail)


def test_build_figure_has_usage_and_peak(records_file):
    fig = plotter.build_figure(load_records(records_file), "Run")

    names = [trace.name for trace in fig.data]
    assert names == ["Disk usage", "Peak"]
    assert list(fig.data[0].x) == [0.0, 0.1, 0.25]
    assert list(fig.data[1].y) == [1000, 1200, 1200]
    assert fig.layout.title.text == "Run"


def test_plot_records_file_writes_html(records_file, tmp_path, caplog):
    out_dir = tmp_path / "plots"

    html = plotter.plot_records_file(records_file, output_dir=out_dir)

    assert html == out_dir / "run_disk_usage.html"
    assert html.exists()
    assert "Failed to save static plot" in caplog.text


def test_main_with_summary(records_file, capsys):
    plotter.main([str(records_file), "--summary"])

    out = capsys.readouterr().out
    assert "samples=3" in out
    assert "peak=1200" in out
    assert "final_delta=-100" in out
    assert (records_file.parent / "run_disk_usage.html").exists()


def test_main_rejects_empty_file(tmp_path):
    empty = tmp_path / "empty.tsv"
    empty.write_text("")

    with pytest.raises(SystemExit) as exc_info:
        plotter.main([str(empty)])

    assert exc_info.value.code == 1
