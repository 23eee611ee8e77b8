import inspect
import logging
from opentelemetry import trace


class CustomLogger:
    """
    wraps a python logger so every record carries the calling function, the
    org of the orguser being served and, inside a span, the trace ids
    """

    def __init__(self, name, level=logging.INFO):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

    def get_slug(self):
        """org slug of the nearest `orguser` local up the stack, or ''"""
        try:
            for frame_info in inspect.stack():
                orguser = frame_info.frame.f_locals.get("orguser")
                org = getattr(orguser, "org", None)
                if org is not None:
                    return org.slug or ""
        except Exception as error:  # pylint: disable=broad-except
            self.logger.error("could not read the org slug: %s", str(error))
        return ""

    @staticmethod
    def get_trace_context() -> dict:
        """trace and span ids of the active span, for log correlation"""
        current_span = trace.get_current_span()
        if current_span is None or not current_span.is_recording():
            return {}
        span_context = current_span.get_span_context()
        return {
            "trace_id": f"{span_context.trace_id:032x}",
            "span_id": f"{span_context.span_id:016x}",
            "trace_flags": span_context.trace_flags,
        }

    def _log(self, level: int, args, exc_info=False):
        # [0] is _log, [1] the level method, [2] whoever called it
        caller_name = inspect.stack()[2].function
        extra = {"caller_name": caller_name, "orgname": self.get_slug(), **self.get_trace_context()}
        self.logger.log(level, *args, extra=extra, exc_info=exc_info)

    def debug(self, *args):
        self._log(logging.DEBUG, args)

    def info(self, *args):
        self._log(logging.INFO, args)

    def warning(self, *args):
        self._log(logging.WARNING, args)

    def error(self, *args, exc_info=False):
        self._log(logging.ERROR, args, exc_info=exc_info)

    def exception(self, *args):
        """error with the current exception's traceback"""
        self._log(logging.ERROR, args, exc_info=True)
