"""
Simple Logger for the Career Insights backend
A lightweight logging module without circular dependencies
"""

import os
import sys
import logging
import logging.handlers
from pathlib import Path

LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class SafeStreamHandler(logging.StreamHandler):
    """Stream handler that safely handles Unicode encoding errors"""

    def __init__(self, stream=None):
        if stream is None:
            stream = sys.stderr
        super().__init__(stream)

    def emit(self, record):
        try:
            msg = self.format(record)
            stream = self.stream
            try:
                stream.write(msg + self.terminator)
            except UnicodeEncodeError:
                # Console encodings that cannot represent the message
                safe_msg = msg.encode('ascii', errors='replace').decode('ascii')
                stream.write(safe_msg + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


class SafeFormatter(logging.Formatter):
    """Formatter that safely handles Unicode encoding errors"""

    def format(self, record):
        try:
            return super().format(record)
        except UnicodeEncodeError:
            msg = record.getMessage()
            record.msg = msg.encode('utf-8', errors='replace').decode('utf-8')
            record.args = ()
            return super().format(record)


class SimpleLogger:
    """Named loggers under the ``career_insights`` namespace"""

    def __init__(self, log_dir=None, log_to_file=None):
        self.loggers = {}
        self.handlers = {}
        if log_dir is None:
            log_dir = os.environ.get('LOG_DIR') or Path(__file__).parent.parent / 'logs'
        if log_to_file is None:
            log_to_file = os.environ.get('LOG_TO_FILE', '1').lower() in ('true', '1', 'yes')
        self._setup_logging(Path(log_dir), log_to_file)

    def _setup_logging(self, log_dir, log_to_file):
        package_logger = logging.getLogger('career_insights')
        package_logger.setLevel(logging.DEBUG)

        console_handler = SafeStreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(SafeFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package_logger.addHandler(console_handler)

        if log_to_file:
            log_dir.mkdir(parents=True, exist_ok=True)
            self._setup_file_handlers(log_dir)

    def _setup_file_handlers(self, log_dir):
        formatter = SafeFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        app_handler = logging.handlers.RotatingFileHandler(
            log_dir / 'career_insights_app.log', maxBytes=10*1024*1024, backupCount=5, encoding='utf-8'
        )
        app_handler.setLevel(logging.DEBUG)
        app_handler.setFormatter(formatter)

        error_handler = logging.handlers.RotatingFileHandler(
            log_dir / 'career_insights_errors.log', maxBytes=5*1024*1024, backupCount=3, encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)

        self.handlers = {
            'app': app_handler,
            'error': error_handler
        }

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger by name"""
        if name not in self.loggers:
            logger = logging.getLogger(f'career_insights.{name}')

            if self.handlers:
                # Rejected tokens are noisy; keep them out of the app log
                if name == 'auth':
                    logger.addHandler(self.handlers['error'])
                else:
                    logger.addHandler(self.handlers['app'])
                    logger.addHandler(self.handlers['error'])

            logger.setLevel(logging.INFO)
            self.loggers[name] = logger

        return self.loggers[name]


_simple_logger = None


def get_simple_logger():
    """Get the global simple logger instance"""
    global _simple_logger
    if _simple_logger is None:
        _simple_logger = SimpleLogger()
    return _simple_logger


def get_logger(name: str) -> logging.Logger:
    return get_simple_logger().get_logger(name)
