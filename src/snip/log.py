"""log.py - the backbone. logger and tracer.

subsystem logger plus an OpenTelemetry tracer. every line goes to stderr,
because stdout belongs to the shell: snippet bodies, paths and widget
payloads are read back by zsh and must never carry log noise.

in the world: the side channel. the shell listens on one wire, we talk
on the other.
"""

import sys
from contextlib import contextmanager
from datetime import datetime

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    SimpleSpanProcessor,
    ConsoleSpanExporter,
)

# ============================================================
# TRACER SETUP
# ============================================================

_provider = TracerProvider()
_tracer = _provider.get_tracer("snip", "0.1.0")
_console_export = False


def enable_console_export():
    """turn on span export to stderr."""
    global _console_export
    if not _console_export:
        _provider.add_span_processor(
            SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr))
        )
        _console_export = True


# ============================================================
# SUBSYSTEM LOGGER
# ============================================================

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}

_level = LEVELS["warn"]


def set_level(level: str):
    """set the threshold. unknown names fall back to warn."""
    global _level
    _level = LEVELS.get(level, LEVELS["warn"])


def log(subsystem: str, level: str, message: str, **attrs):
    """log to stderr if above threshold, record as span event either way."""
    if LEVELS.get(level, 0) >= _level:
        ts = datetime.now().strftime("%H:%M:%S")
        print(f"[{ts} snip:{subsystem}] {message}", file=sys.stderr)

    span = trace.get_current_span()
    if span and span.is_recording():
        span.add_event(
            f"snip.{subsystem}.{level}",
            attributes={"message": message, "subsystem": subsystem,
                        **{k: str(v) for k, v in attrs.items()}},
        )


def debug(subsystem: str, message: str, **attrs):
    log(subsystem, "debug", message, **attrs)


def info(subsystem: str, message: str, **attrs):
    log(subsystem, "info", message, **attrs)


def warn(subsystem: str, message: str, **attrs):
    log(subsystem, "warn", message, **attrs)


# ============================================================
# SPAN CONTEXT MANAGERS
# ============================================================

@contextmanager
def span(name: str, /, subsystem: str = "snip", **attrs):
    """Create a traced span. Everything inside is connected.

    Usage:
        with span("save", subsystem="widget", snippet="git-1"):
            header.write(path, ...)
            # any logs inside here are span events

    One widget invocation is one trace: write, editor, reconcile.
    """
    with _tracer.start_as_current_span(
        f"snip.{subsystem}.{name}",
        attributes={f"snip.{k}": str(v) for k, v in attrs.items()},
    ) as s:
        s.set_attribute("snip.subsystem", subsystem)
        yield s
