"""Main application entry point for the catering inquiry service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os
from decimal import Decimal
from typing import Any

import boto3
from fastapi import FastAPI

from catering_inquiry_service.adapters.web3forms_adapter import WEB3FORMS_ENDPOINT, Web3FormsAdapter
from catering_inquiry_service.handlers.api_handler import create_app
from catering_inquiry_service.observability import configure_logging, setup_observability
from catering_inquiry_service.repositories.session_repository import InquirySessionRepository
from catering_inquiry_service.services.inquiry_session_service import InquirySessionService
from catering_inquiry_service.services.menu_service_client import MenuServiceClient
from catering_inquiry_service.services.pricing import (
    CURRENCY,
    DELIVERY_FEE,
    FREE_DELIVERY_THRESHOLD,
    PricingPolicy,
)
from catering_inquiry_service.services.submission_service import SubmissionService

logger = logging.getLogger(__name__)


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        # Local DynamoDB - credentials can be anything but must be present
        access_key = os.getenv("AWS_ACCESS_KEY_ID", "dummy")
        secret_key = os.getenv("AWS_SECRET_ACCESS_KEY", "dummy")
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
        )
    else:
        logger.info(f"Using AWS DynamoDB in region {region}")
        return boto3.resource("dynamodb", region_name=region)


def create_pricing_policy() -> PricingPolicy:
    """Read pricing configuration from environment variables.

    Returns:
        PricingPolicy with the configured fee, threshold and currency
    """
    policy = PricingPolicy(
        delivery_fee=Decimal(os.getenv("DELIVERY_FEE", str(DELIVERY_FEE))),
        free_delivery_threshold=Decimal(
            os.getenv("FREE_DELIVERY_THRESHOLD", str(FREE_DELIVERY_THRESHOLD))
        ),
        currency=os.getenv("CURRENCY", CURRENCY),
    )
    logger.info(
        f"Pricing configured - delivery fee: {policy.format_price(policy.delivery_fee)}, "
        f"free delivery from: {policy.format_price(policy.free_delivery_threshold)}"
    )
    return policy


def create_submission_service(pricing: PricingPolicy) -> SubmissionService:
    """Create the submission dispatcher and its email relay adapter.

    A missing access key is not fatal at startup; submissions will fail
    with a generic message until it is configured.

    Returns:
        Configured SubmissionService instance
    """
    access_key = os.getenv("WEB3FORMS_ACCESS_KEY")
    if not access_key:
        logger.warning("WEB3FORMS_ACCESS_KEY not configured - form submissions will fail")

    relay = Web3FormsAdapter(
        access_key=access_key,
        endpoint=os.getenv("WEB3FORMS_ENDPOINT", WEB3FORMS_ENDPOINT),
    )
    return SubmissionService(
        relay=relay,
        pricing=pricing,
        contact_email=os.getenv("CONTACT_EMAIL") or None,
    )


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the DynamoDB session repository
    3. Creates the menu client and the submission dispatcher
    4. Creates the session service
    5. Creates the FastAPI app and sets up observability

    Returns:
        Configured FastAPI application instance
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Initializing catering inquiry service...")

    sessions_table = os.getenv("DYNAMODB_INQUIRY_SESSIONS_TABLE", "catering-inquiry-sessions")
    session_repository = InquirySessionRepository(
        dynamodb_resource=get_dynamodb_resource(), table_name=sessions_table
    )
    logger.info(f"Session repository configured - table: {sessions_table}")

    menu_service_url = os.getenv("MENU_SERVICE_BASE_URL")
    menu_service_api_key = os.getenv("MENU_SERVICE_API_KEY")

    if not menu_service_url or not menu_service_api_key:
        raise ValueError(
            "MENU_SERVICE_BASE_URL and MENU_SERVICE_API_KEY must be set in environment"
        )

    menu_service_client = MenuServiceClient(base_url=menu_service_url, api_key=menu_service_api_key)
    logger.info(f"Menu service client configured - URL: {menu_service_url}")

    pricing = create_pricing_policy()
    session_service = InquirySessionService(
        session_repository=session_repository,
        menu_service_client=menu_service_client,
        submission_service=create_submission_service(pricing),
        pricing=pricing,
        session_ttl_hours=int(os.getenv("SESSION_TTL_HOURS", "24")),
    )

    app = create_app(session_service=session_service, menu_service_client=menu_service_client)
    setup_observability(app)

    logger.info("Catering inquiry service initialized successfully")
    return app


# Only build the real application outside of tests so importing this
# module during test collection does not need AWS or menu configuration
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
