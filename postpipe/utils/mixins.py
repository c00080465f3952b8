from typing import cast

import structlog


class LoggerMixin:
    """Mixin class to add a component-bound logger to any class"""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Logger named after the defining module, bound to the class name"""
        cls = self.__class__
        return cast(
            "structlog.stdlib.BoundLogger",
            structlog.get_logger(cls.__module__).bind(component=cls.__name__),
        )
