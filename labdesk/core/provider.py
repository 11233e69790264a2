import datetime
import inspect
import logging.config
import typing as t

from .logging import install_trace_level, TraceLogLevelLogger

TimestampProvider = t.Callable[..., datetime.datetime]


class LoggingProvider(object):
    Function: t.Final[t.Literal["fn"]] = "fn"
    Class: t.Final[t.Literal["cls"]] = "cls"
    Module: t.Final[t.Literal["mod"]] = "mod"

    def __init__(self, config: dict[str, t.Any], debug: bool):
        install_trace_level()
        logging.config.dictConfig(config)
        if debug:
            self.capture_warnings(True)

    @classmethod
    def get_logger(
        cls, scope: t.Literal["mod", "cls", "fn"] = "mod", name: str | None = None, n_frames: int = 1
    ) -> TraceLogLevelLogger:
        if name:
            return t.cast(TraceLogLevelLogger, logging.getLogger(name))

        stack = inspect.stack()
        match scope:
            case cls.Module:
                name = stack[n_frames].frame.f_globals["__name__"]

            case cls.Function:
                mod = stack[n_frames].frame.f_globals["__name__"]
                fn = stack[n_frames].function
                locals = stack[n_frames].frame.f_locals
                if "self" in locals and hasattr(locals["self"], "__class__"):
                    name = f"{mod}.{locals['self'].__class__.__name__}.{fn}"
                else:
                    name = f"{mod}.{fn}"

            case cls.Class:
                locals = stack[n_frames].frame.f_locals
                if "self" in locals and hasattr(locals["self"], "__class__"):
                    owner = locals["self"].__class__
                elif "cls" in locals and isinstance(locals["cls"], type):
                    owner = locals["cls"]
                else:
                    raise RuntimeError("could not determine class")
                name = f"{owner.__module__}.{owner.__name__}"

        return t.cast(TraceLogLevelLogger, logging.getLogger(name))

    @staticmethod
    def capture_warnings(capture: bool):
        logging.captureWarnings(capture)

    def shutdown(self) -> None:
        self.capture_warnings(False)
        logging.shutdown()


def provide_logging(config: dict[str, t.Any], debug: bool) -> t.Generator[LoggingProvider]:
    lp = LoggingProvider(config, debug)
    yield lp
    lp.shutdown()
