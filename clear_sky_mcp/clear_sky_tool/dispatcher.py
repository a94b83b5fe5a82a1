"""
Tool dispatcher shared by the MCP server.

Each call runs validate -> execute once. Validation failures, upstream
failures and coverage gaps all come back as flagged text responses; nothing
raised by a tool escapes ``dispatch``.
"""

import logging
from dataclasses import dataclass
from typing import Any, AsyncContextManager, Awaitable, Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError

from .config import Settings
from .errors import ArgumentValidationError, ClearSkyError
from .nws_client import NWSClient, nws_client
from .tool_implementation import (
    get_clear_sky_window,
    get_daily_forecast,
    get_hourly_forecast,
    resolve_point_metadata,
)
from .tool_schema import (
    TOOL_DECLARATIONS,
    CoordinateArguments,
    ToolDeclaration,
    format_validation_issues,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[[NWSClient, Any], Awaitable[str]]
ClientFactory = Callable[[Settings], AsyncContextManager[NWSClient]]

DEFAULT_HANDLERS: Dict[str, ToolHandler] = {
    "resolve_point_metadata": resolve_point_metadata,
    "get_daily_forecast": get_daily_forecast,
    "get_hourly_forecast": get_hourly_forecast,
    "get_clear_sky_window": get_clear_sky_window,
}


@dataclass(frozen=True)
class ToolResponse:
    text: str
    is_error: bool = False


def validate_arguments(declaration: ToolDeclaration, arguments: Optional[Dict[str, Any]]) -> CoordinateArguments:
    """
    Validate raw caller arguments against a tool's declared model.

    Raises:
        ArgumentValidationError: Listing every invalid or missing field
    """
    try:
        return declaration.arguments.model_validate(arguments if arguments is not None else {})
    except ValidationError as e:
        raise ArgumentValidationError(format_validation_issues(e)) from e


class ToolDispatcher:
    """Routes a named tool call to its handler with a fresh NWS client per call."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: ClientFactory = nws_client,
        declarations: Iterable[ToolDeclaration] = TOOL_DECLARATIONS,
        handlers: Optional[Dict[str, ToolHandler]] = None,
    ):
        self.settings = settings or Settings.from_env()
        self.client_factory = client_factory
        self.declarations = {d.name: d for d in declarations}
        self.handlers = dict(handlers or DEFAULT_HANDLERS)
        missing = set(self.declarations) - set(self.handlers)
        if missing:
            raise ValueError(f"No handler registered for: {', '.join(sorted(missing))}")

    @property
    def tool_names(self) -> List[str]:
        return list(self.declarations)

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResponse:
        declaration = self.declarations.get(name)
        if declaration is None:
            logger.warning(f"Unknown tool requested: {name}")
            return ToolResponse(f"Unknown tool: {name}", is_error=True)

        try:
            parsed = validate_arguments(declaration, arguments)
            async with self.client_factory(self.settings) as client:
                text = await self.handlers[name](client, parsed)
        except ClearSkyError as e:
            logger.warning(f"Tool '{name}' failed: {e}")
            return ToolResponse(f"{declaration.failure_prefix} {e}", is_error=True)
        except Exception as e:
            logger.exception(f"Tool '{name}' raised an unexpected error")
            return ToolResponse(f"{declaration.failure_prefix} {e}", is_error=True)

        logger.info(f"Tool '{name}' completed")
        return ToolResponse(text)
