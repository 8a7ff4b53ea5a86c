"""AWS Lambda handler for API Gateway requests.

API Gateway events are passed to the FastAPI application through the Mangum
ASGI adapter.
"""

import logging
import os
from typing import Any

from mangum import Mangum

from lambda_dependencies import get_fastapi_app, initialize_lambda_environment

logger = logging.getLogger(__name__)

# Initialize during cold start and cache the adapter for warm starts (skipped in test mode)
if os.getenv("ENVIRONMENT") != "test":
    initialize_lambda_environment()
    app = get_fastapi_app()
    mangum_handler = Mangum(app, lifespan="off")
else:
    app = None  # type: ignore
    mangum_handler = None  # type: ignore


def is_api_gateway_event(event: dict[str, Any]) -> bool:
    """Determine if the event came from API Gateway.

    Args:
        event: The Lambda event payload

    Returns:
        True for REST (v1) and HTTP (v2) API Gateway events, False otherwise
    """
    return "requestContext" in event and ("httpMethod" in event or "rawPath" in event)


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda entry point.

    Args:
        event: The API Gateway event payload
        context: The Lambda context object

    Returns:
        Response dict with statusCode and body
    """
    logger.info(f"Received Lambda invocation, request_id: {context.aws_request_id}")

    if not is_api_gateway_event(event):
        logger.warning(f"Unsupported event received with keys: {sorted(event.keys())}")
        return {"statusCode": 400, "body": "Unsupported event type"}

    try:
        result: dict[str, Any] = mangum_handler(event, context)
        return result

    except Exception as e:
        logger.exception(f"Unhandled error in Lambda handler: {e}")
        return {"statusCode": 500, "body": "Internal server error"}
