from typing import Any, Protocol, runtime_checkable

import structlog


@runtime_checkable
class LoggingHook(Protocol):
    """Receives request, response and error events of an HttpClient"""

    def log_request(self, payload: dict[str, Any]) -> None: ...

    def log_response(self, payload: dict[str, Any]) -> None: ...

    def log_error(self, payload: dict[str, Any]) -> None: ...


class StructlogHook:
    """Logging hook writing every event to a structlog logger"""

    def __init__(self, logger: Any = None, level: str = "info"):
        self.logger = logger or structlog.get_logger("service_kit.http")
        self.level = level

    def _emit(self, event: str, payload: dict[str, Any]) -> None:
        getattr(self.logger, self.level)(event, **payload)

    def log_request(self, payload: dict[str, Any]) -> None:
        self._emit("HTTP request", payload)

    def log_response(self, payload: dict[str, Any]) -> None:
        self._emit("HTTP response", payload)

    def log_error(self, payload: dict[str, Any]) -> None:
        self._emit("HTTP request failed", payload)


class CallableHook:
    """
    Logging hook forwarding every event to ``getattr(instance, function_name)``

    Any redaction of the payload is the responsibility of the target.
    """

    def __init__(self, instance: Any, function_name: str):
        self.instance = instance
        self.function_name = function_name

    def _emit(self, payload: dict[str, Any]) -> None:
        getattr(self.instance, self.function_name)(payload)

    def log_request(self, payload: dict[str, Any]) -> None:
        self._emit(payload)

    def log_response(self, payload: dict[str, Any]) -> None:
        self._emit(payload)

    def log_error(self, payload: dict[str, Any]) -> None:
        self._emit(payload)
