"""Three threads counting upward and printing under a shared lock."""

import sys
import threading
import time
from dataclasses import dataclass

from .fmt import format_string

_ITERATIONS = 10


@dataclass
class ThreadData:
    """Identity and counter of one worker thread."""

    thread_id: int
    start_number: int


def my_thread(data, out, lock):
    """Bump data's counter ten times, printing each value; return the final one."""
    for _ in range(_ITERATIONS):
        data.start_number += 1
        with lock:
            out.write(format_string("thread %d: %lu\n", data.thread_id, data.start_number))
        time.sleep(0)
    return data.start_number


def run(out):
    """Start three workers, announce each, wait for all and print DONE."""
    lock = threading.Lock()
    workers = []
    for n, start in ((1, 100), (2, 200), (3, 300)):
        data = ThreadData(n, start)
        worker = threading.Thread(target=my_thread, args=(data, out, lock))
        worker.start()
        workers.append(worker)
        with lock:
            out.write(f"NEW THREAD CREATED {n}\n")
    for worker in workers:
        worker.join()
    with lock:
        out.write("DONE\n")


def main(argv=None):
    """Run the thread demonstration on standard output."""
    run(sys.stdout)
    return 0