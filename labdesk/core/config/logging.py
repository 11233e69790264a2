import pathlib
import typing as t

import pydantic as p

from .base import BaseSettings


class ExtraFormatterSettings(BaseSettings):
    class_: t.Literal["labdesk.lib.logging.ExtraFormatter"] = p.Field(alias="()")
    base: t.Literal["colorlog.ColoredFormatter", "logging.Formatter"] = "colorlog.ColoredFormatter"
    format: str | None = None
    datefmt: str | None = None
    log_colors: dict[str, str] | None = None
    no_color: bool = False
    indent: bool | None = None

    @p.model_serializer(mode="wrap")
    def drop_colors(self, handler: p.SerializerFunctionWrapHandler) -> dict[str, t.Any]:
        # plain logging.Formatter takes no log_colors argument
        d = handler(self)
        if self.base == "logging.Formatter":
            d.pop("log_colors", None)
        return d


FormatterSettings = ExtraFormatterSettings


# https://github.com/python/cpython/blob/3.10/Lib/logging/__init__.py#L91-L98
LogLevel = t.Literal["NOTSET", "TRACE", "DEBUG", "INFO", "WARNING", "WARN", "ERROR", "FATAL", "CRITICAL"]


class BaseHandlerSettings(BaseSettings):
    formatter: str
    level: LogLevel


class StreamHandlerSettings(BaseHandlerSettings):
    class_: t.Literal["colorlog.StreamHandler"] = p.Field(alias="class")
    stream: t.Literal["ext://sys.stderr", "ext://sys.stdout"] = "ext://sys.stderr"


class TimedRotatingFileHandlerSettings(BaseHandlerSettings):
    class_: t.Literal["logging.handlers.TimedRotatingFileHandler"] = p.Field(alias="class")
    backupCount: int
    filename: pathlib.Path
    when: str


HandlerSettings = t.Annotated[
    TimedRotatingFileHandlerSettings | StreamHandlerSettings,
    p.Field(discriminator="class_"),
]


class LoggerSettings(BaseSettings):
    level: LogLevel = "NOTSET"
    propagate: bool = True
    handlers: list[str] | None = None


class RootLoggerSettings(BaseSettings):
    handlers: list[str]
    level: LogLevel = "NOTSET"


class LoggingSettings(BaseSettings):
    version: t.Literal[1]
    disable_existing_loggers: bool = True
    formatters: dict[str, FormatterSettings]
    handlers: dict[str, HandlerSettings]
    root: RootLoggerSettings
    loggers: dict[str, LoggerSettings] = {}
