from __future__ import annotations

from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

from universal_minter.core.engine.errors import MintEngineError, ValidationError

T = TypeVar("T")


def status_tuple(
    fn: Callable[..., Coroutine[Any, Any, T]],
) -> Callable[..., Coroutine[Any, Any, tuple[bool, T | str | dict[str, Any]]]]:
    """Wrap an async adapter method to return ``(True, result)`` or ``(False, error)``.

    ``ValidationError`` is an expected outcome and comes back as its structured
    ``{"errors": [...], "missing_params": [...]}`` dict. Other engine failures
    are logged as warnings, anything else as errors; both return ``str(e)``.
    """

    @wraps(fn)
    async def wrapper(
        self: Any, *args: Any, **kwargs: Any
    ) -> tuple[bool, T | str | dict[str, Any]]:
        try:
            result = await fn(self, *args, **kwargs)
            return (True, result)
        except ValidationError as exc:
            self.logger.info(f"{fn.__name__} rejected: {exc}")
            return (False, exc.to_dict())
        except MintEngineError as exc:
            self.logger.warning(f"{fn.__name__} failed: {exc}")
            return (False, str(exc))
        except Exception as exc:
            self.logger.error(f"Error in {fn.__name__}: {exc}")
            return (False, str(exc))

    return wrapper  # type: ignore[return-value]
