import time
from contextlib import contextmanager
from typing import Iterator, Any
import logging


@contextmanager
def timed(
    logger: logging.Logger,
    name: str,
    *,
    failure_level: int = logging.WARNING,
    **kv: Any,
) -> Iterator[None]:
    """
    Usage:
      with timed(logger, "search.scan", docs=120):
          ...
    Emits "<name>.done ms=<int> key=val ..." at INFO on success and
    "<name>.failed ms=<int> ..." at `failure_level` when the block raises.
    Callers that log their own failure reason pass a lower level.
    """
    t0 = time.perf_counter()
    suffix = "".join(f" {k}={v}" for k, v in kv.items())
    try:
        yield
    except BaseException:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        logger.log(failure_level, "%s.failed ms=%d%s", name, dt_ms, suffix)
        raise
    dt_ms = int((time.perf_counter() - t0) * 1000)
    logger.info("%s.done ms=%d%s", name, dt_ms, suffix)
