import io
import sys

import pytest

from progquik import cli
from progquik.benchmark import bench_loop, run_benchmark
from progquik.progress import Session, Settings


@pytest.mark.parametrize("extra", [[], ["-t", "3"], ["-s", "multiline"], ["-s", "final", "--lock"]])
def test_main_prints_result(monkeypatch, capsys, extra):
    monkeypatch.setattr(sys, "argv", ["progquik", "-n", "1k", *extra])
    cli.main()
    out = capsys.readouterr().out
    assert "Summing 1000 terms" in out
    assert "Elapsed:" in out
    assert "pi = 3.14" in out


def test_main_invalid_count(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["progquik", "-n", "lots"])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 1
    assert "Error: Invalid count format" in capsys.readouterr().err


def test_basel_sum_threads_add_up():
    session = Session(Settings(output=io.StringIO()))
    worker = session.init(1000)
    whole = cli.basel_sum(session, worker, range(1000), cli.show_bar)
    session.init(0)
    parts = sum(
        cli.basel_sum(session, session.init_worker(500), terms, cli.show_bar)
        for terms in (range(0, 500), range(500, 1000))
    )
    assert parts == pytest.approx(whole)


def test_styles_render_on_terminal(term):
    for show in cli.STYLES.values():
        session = Session(Settings(output=term))
        worker = session.init(10)
        worker.record(5)
        show(session)
    assert "50%" in term.getvalue()


def test_benchmark(capsys):
    session = Session(Settings(output=io.StringIO()))
    assert bench_loop(session, 1000, reporting=True) > 0
    run_benchmark(session, 1000)
    out = capsys.readouterr().out
    assert "plain loop" in out
    assert "Progress reporting overhead" in out
