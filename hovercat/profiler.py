import time
from collections import defaultdict, deque
from contextlib import contextmanager

import numpy as np
import psutil

WINDOW = 1000


class Profiler:
    """Frame timings per named scope plus process memory, over a sliding window"""

    def __init__(self, window=WINDOW):
        self.window = window
        self.timings = defaultdict(lambda: deque(maxlen=self.window))
        self.memory_usage = deque(maxlen=window)
        self.process = psutil.Process()

    @contextmanager
    def profile_scope(self, name: str):
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            duration = time.perf_counter_ns() - start
            self.timings[name].append(duration / 1e6)  # Convert to milliseconds

    def sample_memory(self):
        self.memory_usage.append(self.process.memory_info().rss / 1024 / 1024)

    def summary(self):
        report = {}
        for name, samples in self.timings.items():
            values = np.fromiter(samples, dtype=float)
            report[name] = {
                "mean_ms": float(values.mean()),
                "max_ms": float(values.max()),
                "p95_ms": float(np.percentile(values, 95)),
            }
        if self.memory_usage:
            report["memory_mb"] = float(self.memory_usage[-1])
        return report
