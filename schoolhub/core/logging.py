import logging
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
import os
import json
from contextvars import ContextVar
from datetime import datetime, timezone
from functools import wraps
from typing import Optional
import traceback

from schoolhub.core.config import settings

# Set by RequestIDMiddleware for the lifetime of one request
request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestContextFilter(logging.Filter):
    """Stamps the current request id on every record"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_ctx.get() or "-"
        return True


class CustomJsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging"""
    def __init__(self, **kwargs):
        super().__init__()
        self.kwargs = kwargs

    def format(self, record):
        json_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        if getattr(record, 'request_id', None) not in (None, "-"):
            json_record['request_id'] = record.request_id

        if record.exc_info:
            json_record['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        if hasattr(record, 'duration'):
            json_record['duration_ms'] = record.duration

        if self.kwargs.get('extra_fields'):
            for field in self.kwargs['extra_fields']:
                if hasattr(record, field):
                    json_record[field] = getattr(record, field)

        return json.dumps(json_record, default=str)


class LoggerFactory:
    """Factory class for creating and configuring loggers"""

    @staticmethod
    def create_logger(name: str, log_dir: Optional[str] = None, level: str = "INFO"):
        logger = logging.getLogger(name)
        logger.setLevel(getattr(logging, level))
        logger.propagate = False

        # Remove existing handlers if any
        if logger.handlers:
            logger.handlers.clear()

        handlers = {'console': logging.StreamHandler()}

        # File handlers only when a log directory is configured
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            handlers.update({
                'app': RotatingFileHandler(
                    os.path.join(log_dir, 'app.log'),
                    maxBytes=10 * 1024 * 1024,  # 10MB
                    backupCount=5
                ),
                'error': RotatingFileHandler(
                    os.path.join(log_dir, 'error.log'),
                    maxBytes=10 * 1024 * 1024,
                    backupCount=5
                ),
                'access': TimedRotatingFileHandler(
                    os.path.join(log_dir, 'access.log'),
                    when='midnight',
                    interval=1,
                    backupCount=30
                ),
            })

        context_filter = RequestContextFilter()
        for handler_name, handler in handlers.items():
            if handler_name == 'error':
                handler.setLevel(logging.ERROR)
            else:
                handler.setLevel(getattr(logging, level))

            handler.addFilter(context_filter)

            # JSON for files, plain text for the console
            if isinstance(handler, (RotatingFileHandler, TimedRotatingFileHandler)):
                handler.setFormatter(CustomJsonFormatter(
                    extra_fields=['user_id', 'school_id', 'tenant_key', 'path']
                ))
            else:
                handler.setFormatter(logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
                ))

            logger.addHandler(handler)

        return logger


def log_function_call(logger):
    """Decorator to log coroutine entry, exit, and performance"""
    def decorator(func):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start_time = datetime.now()
            func_name = func.__name__

            logger.debug(f"Entering function: {func_name}")
            try:
                result = await func(*args, **kwargs)
                duration = (datetime.now() - start_time).total_seconds() * 1000
                logger.debug(
                    f"Exiting function: {func_name}",
                    extra={'duration': duration}
                )
                return result
            except Exception:
                logger.error(f"Error in function: {func_name}", exc_info=True)
                raise

        return async_wrapper
    return decorator


# Create default logger instance
logger = LoggerFactory.create_logger("SchoolHubLogger", log_dir=settings.LOG_DIR, level=settings.LOG_LEVEL)
