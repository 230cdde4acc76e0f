import io
import logging
import sys
import pytest
from fleetroute.utils.logging import SimpleFormatter, ProgressTracker, Colors, Symbols, setup_logging

class DummyRecord(logging.LogRecord):
    def __init__(self, levelname, msg, args=()):
        super().__init__(name="test", level=getattr(logging, levelname), pathname=__file__, lineno=0, msg=msg, args=args, exc_info=None)
        self.levelname = levelname

class DummyBar:
    def __init__(self):
        self.updates = []
        self.writes = []
        self.closed = False
    def update(self, n):
        self.updates.append(n)
    def write(self, msg):
        self.writes.append(msg)
    def close(self):
        self.closed = True

@pytest.mark.parametrize("level, color", [
    ("DEBUG", Colors.GRAY),
    ("INFO", Colors.CYAN),
    ("WARNING", Colors.YELLOW),
    ("ERROR", Colors.RED),
    ("CRITICAL", Colors.RED + Colors.BOLD)
])
def test_simple_formatter_colors(level, color):
    fmt = SimpleFormatter()
    rec = DummyRecord(level, "hello")
    out = fmt.format(rec)
    assert out.startswith(color)
    assert out.endswith(Colors.RESET)
    assert "hello" in out


def test_simple_formatter_applies_args():
    out = SimpleFormatter().format(DummyRecord("INFO", "vessel %s", ("V001",)))
    assert "vessel V001" in out


def test_setup_logging_replaces_handlers():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        setup_logging(logging.DEBUG)
        setup_logging(logging.WARNING)
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, SimpleFormatter)
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])


def test_warning_and_exception_prefixes():
    fmt = SimpleFormatter()
    assert fmt.format(DummyRecord("WARNING", "slow")).startswith(Colors.YELLOW + Symbols.WARN)
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        rec = DummyRecord("ERROR", "failed")
        rec.exc_info = sys.exc_info()
    out = fmt.format(rec)
    assert "failed" in out and "RuntimeError: boom" in out


def test_setup_logging_writes_to_stream():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    stream = io.StringIO()
    try:
        setup_logging(logging.INFO, stream=stream)
        logging.getLogger("fleetroute.test").info("routed %d vessels", 3)
        logging.getLogger("fleetroute.test").debug("hidden")
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
    assert "routed 3 vessels" in stream.getvalue()
    assert "hidden" not in stream.getvalue()


@pytest.fixture
def dummy_bar(monkeypatch):
    # Monkeypatch tqdm to return our DummyBar
    import fleetroute.utils.logging as logging_utils
    dummy = DummyBar()
    monkeypatch.setattr(logging_utils, 'tqdm', lambda total, desc, bar_format: dummy)
    return dummy


def test_progress_tracker_advance_and_close(dummy_bar):
    pt = ProgressTracker(['Load Scenario', 'Optimize Routes'])

    # Advance with message
    pt.advance("msg1", status='success')
    # Advance without message
    pt.advance()
    pt.close()
    pt.close()

    assert dummy_bar.updates == [1, 1]
    assert any("msg1" in w for w in dummy_bar.writes)
    assert sum("completed" in w.lower() for w in dummy_bar.writes) == 1
    assert dummy_bar.closed


def test_progress_tracker_stopped_early(dummy_bar):
    pt = ProgressTracker(['a', 'b', 'c'])
    pt.advance()
    pt.close()
    assert not any("completed" in w.lower() for w in dummy_bar.writes)
    assert any("1/3" in w for w in dummy_bar.writes)


def test_progress_tracker_context_marks_failure(dummy_bar):
    with pytest.raises(ValueError):
        with ProgressTracker(['Load Scenario', 'Optimize Routes']) as pt:
            pt.advance()
            raise ValueError("bad input")
    assert any("Optimize Routes failed: bad input" in w for w in dummy_bar.writes)
    assert dummy_bar.closed
