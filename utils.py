# --- utils.py ---

import time
import threading
from colorama import Fore, Style, init

init()

# Segment separator used by the default path segmenter
SEPARATOR = '/'

# Trailing marker that turns a segment into a Delete / WalkPath pattern
WILDCARD = '*'

VERBOSE = False
start_time = None

# Lock used for synchronized printing across threads
PRINT_LOCK = threading.Lock()

def log_with_time(msg, color=Fore.LIGHTBLUE_EX):
    """Print ``msg`` with a timestamp."""
    global start_time
    if start_time is None:
        start_time = time.time()
    elapsed = time.time() - start_time
    mins = int(elapsed // 60)
    secs = elapsed % 60
    timestamp = Style.DIM + f"[{mins:02}:{secs:06.3f}]" + Style.RESET_ALL
    with PRINT_LOCK:
        print(f"{timestamp} {color}{msg}{Style.RESET_ALL}", flush=True)

def vlog(msg, t0=None):
    if VERBOSE:
        if t0 is not None:
            elapsed = time.time() - t0
            log_with_time(f"{msg} (took {elapsed:.3f}s)")
        else:
            log_with_time(msg)

def format_rate(seconds, ops):
    """Human readable per-operation cost, e.g. ``'812.4 ns/op'``."""
    if ops <= 0:
        return "n/a"
    per_op = seconds / ops
    if per_op >= 1e-3:
        return f"{per_op * 1e3:.3f} ms/op"
    if per_op >= 1e-6:
        return f"{per_op * 1e6:.3f} us/op"
    return f"{per_op * 1e9:.1f} ns/op"
