import pytest

from plotmon.filter import FilterOpts
from plotmon.logs import Logs


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "train.jsonl"
    lines = [f'{{"loss": {10 - i}, "acc": {i}, "lr": 0.1}}' for i in range(10)]
    path.write_text("\n".join(lines) + "\n")
    return path


def test_missing_file_gives_none(tmp_path):
    logs = Logs(tmp_path / "absent.jsonl", watch=False)
    assert logs.lock_iter() is None
    assert logs.file.lock.locked() is False


def test_iterates_all_series(log_file):
    logs = Logs(log_file, watch=False)
    with logs.lock_iter() as view:
        result = dict(view.iter())
    assert set(result) == {"loss", "acc", "lr"}
    assert result["acc"] == logs.file.points["acc"]


def test_filter_is_applied(log_file):
    logs = Logs(log_file, FilterOpts(exclude=["lr"], min_x=5.0), watch=False)
    with logs.lock_iter() as view:
        result = dict(view)
    assert set(result) == {"loss", "acc"}
    assert result["acc"] == logs.file.points["acc"][5:]


def test_filter_can_be_replaced(log_file):
    logs = Logs(log_file, watch=False)
    logs.filter = FilterOpts(only=["loss"])
    assert logs.filter.only == ["loss"]
    with logs.lock_iter() as view:
        assert [name for name, _ in view] == ["loss"]


def test_locks_held_while_viewing(log_file):
    logs = Logs(log_file, watch=False)
    view = logs.lock_iter()
    assert logs.file.lock.locked() is True
    # Reading the filter from the same thread must not deadlock.
    assert logs.filter.span is None
    view.release()
    view.release()
    assert logs.file.lock.locked() is False


def test_invalid_path_raises():
    with pytest.raises(ValueError):
        Logs("..", watch=False)


def test_watching_logs_close(log_file):
    with Logs(log_file) as logs:
        with logs.lock_iter() as view:
            names = sorted(name for name, _ in view)
    assert names == ["acc", "loss", "lr"]
    assert logs._observer is None