#!/usr/bin/env python3
"""
Demo script emitting JSON logs for jsonlogfmt.

Run it through the converter:

    python examples/json-logging-demo.py | jsonlogfmt -x logger
    python examples/json-logging-demo.py | jsonlogfmt --config examples/jsonlogfmt.yml
"""

import logging
import sys

from jsonlogfmt.logger import get_logger

logger = get_logger('demo', level=logging.DEBUG, stream=sys.stdout, use_logfmt=False)


def main():
    logger.info("Application started")
    logger.info("User login", extra={'context': {'user_id': 123, 'ip': '192.168.1.1'}})
    logger.warning("High memory usage", extra={'context': {'memory_percent': 85.5}})
    logger.debug("Cache state", extra={'context': {'keys': ['a', 'b'], 'sizes': {'a': 10, 'b': 2048}}})

    # Not JSON: jsonlogfmt passes this line through to stderr
    print("plain text from a subprocess", flush=True)

    try:
        raise ValueError("Something went wrong")
    except ValueError:
        logger.error("Error processing request", exc_info=True, extra={'context': {'request_id': 'req-456'}})


if __name__ == '__main__':
    main()
