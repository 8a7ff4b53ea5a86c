"""Shared dependency factory for the Lambda handler.

Dependencies are created once and reused across invocations within the same
Lambda container to keep cold starts cheap.
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

# Module-level caches for Lambda container reuse
_dynamodb_resource: Any | None = None
_pricing_policy: PricingPolicy | None = None
_menu_service_client: MenuServiceClient | None = None
_session_service: InquirySessionService | None = None
_fastapi_app: FastAPI | None = None


def get_dynamodb_resource() -> Any:
    """Create or retrieve cached DynamoDB resource.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    global _dynamodb_resource

    if _dynamodb_resource is not None:
        return _dynamodb_resource

    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        _dynamodb_resource = boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
        )
    else:
        logger.info(f"Using AWS DynamoDB in region {region}")
        _dynamodb_resource = boto3.resource("dynamodb", region_name=region)

    return _dynamodb_resource


def get_pricing_policy() -> PricingPolicy:
    """Create or retrieve cached pricing configuration."""
    global _pricing_policy

    if _pricing_policy is None:
        _pricing_policy = PricingPolicy(
            delivery_fee=Decimal(os.getenv("DELIVERY_FEE", str(DELIVERY_FEE))),
            free_delivery_threshold=Decimal(
                os.getenv("FREE_DELIVERY_THRESHOLD", str(FREE_DELIVERY_THRESHOLD))
            ),
            currency=os.getenv("CURRENCY", CURRENCY),
        )

    return _pricing_policy


def get_menu_service_client() -> MenuServiceClient:
    """Create or retrieve cached menu client.

    Raises:
        ValueError: If the menu service is not configured
    """
    global _menu_service_client

    if _menu_service_client is not None:
        return _menu_service_client

    menu_service_url = os.getenv("MENU_SERVICE_BASE_URL")
    menu_service_api_key = os.getenv("MENU_SERVICE_API_KEY")

    if not menu_service_url or not menu_service_api_key:
        raise ValueError(
            "MENU_SERVICE_BASE_URL and MENU_SERVICE_API_KEY must be set in environment"
        )

    _menu_service_client = MenuServiceClient(
        base_url=menu_service_url, api_key=menu_service_api_key
    )
    return _menu_service_client


def get_session_service() -> InquirySessionService:
    """Create or retrieve cached session service.

    Returns:
        Configured InquirySessionService instance
    """
    global _session_service

    if _session_service is not None:
        return _session_service

    sessions_table = os.getenv("DYNAMODB_INQUIRY_SESSIONS_TABLE", "catering-inquiry-sessions")
    session_repository = InquirySessionRepository(
        dynamodb_resource=get_dynamodb_resource(), table_name=sessions_table
    )

    access_key = os.getenv("WEB3FORMS_ACCESS_KEY")
    if not access_key:
        logger.warning("WEB3FORMS_ACCESS_KEY not configured - form submissions will fail")

    pricing = get_pricing_policy()
    submission_service = SubmissionService(
        relay=Web3FormsAdapter(
            access_key=access_key,
            endpoint=os.getenv("WEB3FORMS_ENDPOINT", WEB3FORMS_ENDPOINT),
        ),
        pricing=pricing,
        contact_email=os.getenv("CONTACT_EMAIL") or None,
    )

    _session_service = InquirySessionService(
        session_repository=session_repository,
        menu_service_client=get_menu_service_client(),
        submission_service=submission_service,
        pricing=pricing,
        session_ttl_hours=int(os.getenv("SESSION_TTL_HOURS", "24")),
    )

    logger.info("Session service initialized")
    return _session_service


def get_fastapi_app() -> FastAPI:
    """Create or retrieve cached FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    global _fastapi_app

    if _fastapi_app is not None:
        return _fastapi_app

    _fastapi_app = create_app(
        session_service=get_session_service(),
        menu_service_client=get_menu_service_client(),
    )
    setup_observability(_fastapi_app)

    logger.info("FastAPI application initialized")
    return _fastapi_app


def initialize_lambda_environment() -> None:
    """Initialize Lambda environment with logging.

    Should be called once during Lambda cold start.
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Lambda environment initialized")
