"""Console logging and progress display for the command-line tools."""
import logging
import sys
from tqdm import tqdm

class Colors:
    """ANSI color codes for prettier output."""
    CYAN = '\033[36m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    RED = '\033[31m'
    BLUE = '\033[34m'
    GRAY = '\033[37m'
    BOLD = '\033[1m'
    RESET = '\033[0m'

class Symbols:
    """Unicode symbols for status indicators."""
    CHECK = '✓'
    CROSS = '✗'
    WARN = '⚠'
    ANCHOR = '⚓'
    SHIP = '🚢'
    FLAG = '🏁'

LEVEL_STYLES = {
    'DEBUG': (Colors.GRAY, ''),
    'INFO': (Colors.CYAN, ''),
    'WARNING': (Colors.YELLOW, f"{Symbols.WARN} "),
    'ERROR': (Colors.RED, f"{Symbols.CROSS} "),
    'CRITICAL': (Colors.RED + Colors.BOLD, f"{Symbols.CROSS} "),
}

class SimpleFormatter(logging.Formatter):
    """One colored line per record, prefixed with a symbol for warnings and errors."""
    def format(self, record):
        color, prefix = LEVEL_STYLES.get(record.levelname, (Colors.RESET, ''))

        # getMessage() applies %-style args
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{color}{prefix}{message}{Colors.RESET}"

def setup_logging(level: int = logging.INFO, stream=None) -> logging.Logger:
    """Route all records to a single colored console handler.

    Args:
        level: Root logger level; ``logging.DEBUG`` shows clustering rounds
            and per-route details.
        stream: Output stream, ``sys.stderr`` by default.

    Returns:
        The configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console = logging.StreamHandler(stream or sys.stderr)
    console.setFormatter(SimpleFormatter())
    logger.addHandler(console)
    return logger

class ProgressTracker:
    """Step-by-step progress bar for a CLI run.

    Can be used as a context manager: leaving the block closes the bar, and an
    exception marks the current step as failed.
    """
    def __init__(self, steps):
        self.steps = list(steps)
        self.pbar = tqdm(
            total=len(self.steps),
            desc=f"{Colors.BLUE}{Symbols.SHIP} Routing Progress{Colors.RESET}",
            bar_format="{desc}: {percentage:3.0f}%|{bar}| {n_fmt}/{total_fmt}"
        )
        self.current = 0
        self.closed = False

        self.status_formats = {
            'success': f"{Colors.GREEN}{Symbols.CHECK}",
            'warning': f"{Colors.YELLOW}{Symbols.WARN}",
            'error': f"{Colors.RED}{Symbols.CROSS}",
            'info': f"{Colors.CYAN}{Symbols.ANCHOR}",
        }

    @property
    def current_step(self):
        if self.current < len(self.steps):
            return self.steps[self.current]
        return None

    def advance(self, message=None, status='success'):
        """Complete the current step, optionally printing a status line."""
        if message:
            prefix = self.status_formats.get(status, '')
            self.pbar.write(f"{prefix} {message}{Colors.RESET}")
        self.current += 1
        self.pbar.update(1)

    def fail(self, message):
        """Report the current step as failed and close the bar."""
        step = self.current_step or 'Run'
        self.pbar.write(f"{self.status_formats['error']} {step} failed: {message}{Colors.RESET}")
        self._finish(completed=False)

    def close(self):
        """Close the bar, reporting completion only if every step ran."""
        self._finish(completed=self.current >= len(self.steps))

    def _finish(self, completed):
        if self.closed:
            return
        if completed:
            self.pbar.write(f"\n{Colors.GREEN}{Symbols.FLAG} Route optimization completed!{Colors.RESET}\n")
        else:
            self.pbar.write(
                f"{Colors.YELLOW}Stopped after {self.current}/{len(self.steps)} steps{Colors.RESET}"
            )
        self.pbar.close()
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None and not issubclass(exc_type, SystemExit):
            self.fail(exc)
        else:
            self.close()
        return False
