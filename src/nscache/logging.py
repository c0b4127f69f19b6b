# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Structured logging for the ``nscache`` logger tree."""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog

from nscache.config import Config

ROOT_LOGGER = "nscache"
_HANDLER_NAME = "nscache-structlog"


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(config: Config | None = None, stream: IO[str] | None = None) -> logging.Logger:
    """Route every ``nscache.*`` structlog logger to *stream*.

    Reads ``nscache.logging.level.root`` (level of the ``nscache`` logger),
    per-module levels under ``nscache.logging.level.<module>`` and
    ``nscache.logging.format`` (``console`` or ``json``). Only the
    ``nscache`` logger gets a handler; the host's root logger is left alone.
    Calling it again replaces the previous handler.
    """
    config = config if config is not None else Config.defaults()
    levels = {k: str(v).upper() for k, v in config.get_section("nscache.logging.level").items()}
    root_level = levels.pop("root", "INFO")
    fmt = str(config.get("nscache.logging.format", "console")).lower()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=_renderer(fmt)))

    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, root_level, logging.INFO))
    logger.propagate = False

    for module, level in levels.items():
        logging.getLogger(module).setLevel(getattr(logging, level, logging.INFO))
    return logger
