from streamlit.testing.v1 import AppTest


def run_app():
    return AppTest.from_file("dashboard.py", default_timeout=60).run()


def test_dashboard_renders_sample():
    at = run_app()
    assert not at.exception
    assert at.title[0].value == "Distance-Vector Routing Simulator"
    assert any("match the Dijkstra reference" in s.value for s in at.success)
    assert not at.error


def test_dashboard_reports_bad_input():
    at = run_app()
    at.text_area[0].set_value("A\nB\n\nA Q 1\n").run()
    assert not at.exception
    assert "unknown node: Q" in at.error[0].value
