import logging
import typing as t

TRACE: t.Final[int] = 5


class TraceLogLevelLogger(logging.Logger):
    def trace(self, message: str, *args: t.Any, **kwargs: t.Any):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, message, args, **kwargs)


def trace(msg: str, *args: t.Any, **kwargs: t.Any):
    if len(logging.root.handlers) == 0:
        logging.basicConfig()
    t.cast(TraceLogLevelLogger, logging.root).trace(msg, *args, **kwargs)


def install_trace_level() -> None:
    """
    Register the TRACE = 5 level, so that `TRACE` is accepted wherever a level
    name is, including the `logging` settings section
    """
    logging.setLoggerClass(TraceLogLevelLogger)
    logging.addLevelName(TRACE, "TRACE")
    logging.TRACE = TRACE  # pyright: ignore [reportAttributeAccessIssue]
    logging.trace = trace  # pyright: ignore [reportAttributeAccessIssue]
