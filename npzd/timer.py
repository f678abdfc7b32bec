import timeit


class Timer:
    """Accumulating wall clock timer, used as a context manager"""

    def __init__(self):
        self.total_time = 0.0

    def __enter__(self):
        self.start_time = timeit.default_timer()
        return self

    def __exit__(self, *args, **kwargs):
        self.total_time += timeit.default_timer() - self.start_time
