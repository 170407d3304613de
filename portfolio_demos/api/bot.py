"""
Bot simulator endpoint
"""

import math
import time
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from .deps import DemoSystem, get_demo_system
from .schemas import BotSimulateRequest
from ..logging_config import get_logger, log_action


router = APIRouter()

logger = get_logger("api")


def _limit_response(error_type: str, retry_after: int, reason: str, headers: dict) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={
            "response": f"❌ {reason}",
            "error": {
                "type": error_type,
                "retryAfter": retry_after,
                "message": reason
            }
        },
        headers={"Retry-After": str(retry_after), **headers}
    )


@router.post("/simulate")
async def simulate(
    payload: BotSimulateRequest,
    request: Request,
    system: DemoSystem = Depends(get_demo_system)
):
    """Run one bot command against the caller's queues"""
    identifier = payload.user_id or (request.client.host if request.client else None) or "unknown"

    rate_limit = system.rate_limiter.check(identifier)
    if rate_limit.limited:
        log_action(
            logger, "warning", "Bot rate limit exceeded",
            user_id=payload.user_id, action="rate_limited", resource="bot",
            extra={"identifier": identifier, "retry_after": rate_limit.retry_after}
        )
        return _limit_response(
            "RATE_LIMIT_EXCEEDED", rate_limit.retry_after, rate_limit.reason,
            {
                "X-RateLimit-Limit": str(system.rate_limiter.max_requests),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(math.ceil(time.time() + rate_limit.retry_after))
            }
        )

    command_name = system.bot.command_name(payload.command)
    if system.bot.is_bulk_operation(command_name):
        bulk_limit = system.bulk_limiter.check(identifier)
        if bulk_limit.limited:
            log_action(
                logger, "warning", "Bulk operation limit exceeded",
                user_id=payload.user_id, action="bulk_limited", resource="bot",
                extra={"identifier": identifier, "command": command_name}
            )
            return _limit_response(
                "BULK_OPERATION_LIMIT_EXCEEDED", bulk_limit.retry_after, bulk_limit.reason,
                {
                    "X-RateLimit-Type": "bulk-operation",
                    "X-RateLimit-Limit": str(system.bulk_limiter.max_operations)
                }
            )

    try:
        result = system.bot.handle(
            payload.command, payload.params, payload.pools, payload.user_id
        )
    except Exception as e:
        logger.error(f"Bot command {command_name} failed: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"response": "❌ Internal server error"})

    return result.to_dict()
