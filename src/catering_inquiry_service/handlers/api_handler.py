"""FastAPI application for the menu, inquiry cart and form endpoints."""

import logging
from typing import Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from catering_inquiry_service.models.inquiry_models import CartTotals, FormType, InquiryItem
from catering_inquiry_service.models.menu_models import MenuItem
from catering_inquiry_service.models.session_models import InquirySession
from catering_inquiry_service.services.inquiry_session_service import (
    CartNotAvailableError,
    InquirySessionService,
    SessionStoreError,
)
from catering_inquiry_service.services.menu_service_client import MenuServiceClient
from catering_inquiry_service.services.submission_service import SubmissionOutcome

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


class CreateSessionRequest(BaseModel):
    """Request model for starting an inquiry session."""

    form_type: FormType = FormType.CONTACT


class SessionResponse(BaseModel):
    """Response model describing a session's draft, cart and totals."""

    session_id: str
    form_type: FormType
    fields: dict[str, str]
    items: list[InquiryItem]
    totals: CartTotals | None = None


class FieldUpdateRequest(BaseModel):
    """Request model for a single field edit."""

    value: str = ""


class FieldUpdateResponse(BaseModel):
    """Response model for a single field edit."""

    field: str
    error: str


class AddItemRequest(BaseModel):
    """Request model for adding a menu item to the cart."""

    menu_item_id: str


class SetQuantityRequest(BaseModel):
    """Request model for replacing an item's quantity."""

    quantity: int


class SubmissionResponse(BaseModel):
    """Response model for a form submission."""

    success: bool
    message: str
    errors: dict[str, str] = Field(default_factory=dict)


SUBMISSION_STATUS_CODES = {
    SubmissionOutcome.SENT: 200,
    SubmissionOutcome.INVALID: 422,
    SubmissionOutcome.IN_PROGRESS: 409,
    SubmissionOutcome.RELAY_FAILED: 502,
    SubmissionOutcome.MISCONFIGURED: 502,
}


def create_app(
    session_service: InquirySessionService,
    menu_service_client: MenuServiceClient,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        session_service: Service managing inquiry sessions
        menu_service_client: Client for reading the menu

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Catering Inquiry API",
        description="Menu browsing, inquiry cart and contact/careers form submission",
        version="1.0.0",
    )

    app.state.session_service = session_service
    app.state.menu_service_client = menu_service_client

    def to_response(session: InquirySession) -> SessionResponse:
        totals = None
        if session.form_type == FormType.CONTACT:
            totals = app.state.session_service.get_totals(session)
        return SessionResponse(
            session_id=session.session_id,
            form_type=session.form_type,
            fields=session.fields,
            items=session.items,
            totals=totals,
        )

    def session_not_found(session_id: str) -> HTTPException:
        return HTTPException(status_code=404, detail=f"Session {session_id} not found")

    @app.exception_handler(SessionStoreError)
    async def session_store_error_handler(
        _request: Request, exc: SessionStoreError
    ) -> JSONResponse:
        logger.error(f"Session store unavailable: {exc}")
        return JSONResponse(
            status_code=503,
            content={"detail": "Service temporarily unavailable. Please try again."},
        )

    @app.exception_handler(CartNotAvailableError)
    async def cart_not_available_handler(
        _request: Request, exc: CartNotAvailableError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/menu", response_model=list[MenuItem], tags=["Menu"])
    async def list_menu() -> list[MenuItem]:
        """List available menu items ordered by category.

        Raises:
            HTTPException: 502 if the menu could not be loaded
        """
        items: list[MenuItem] | None = (
            await app.state.menu_service_client.list_available_menu_items()
        )
        if items is None:
            raise HTTPException(status_code=502, detail="Menu is temporarily unavailable")
        return items

    @app.post(
        "/inquiry/sessions", response_model=SessionResponse, status_code=201, tags=["Sessions"]
    )
    async def create_session(request: CreateSessionRequest) -> SessionResponse:
        """Start a new inquiry session for the given form."""
        session = app.state.session_service.create_session(request.form_type)
        return to_response(session)

    @app.get("/inquiry/sessions/{session_id}", response_model=SessionResponse, tags=["Sessions"])
    async def get_session(session_id: str) -> SessionResponse:
        """Get a session's draft, cart and pricing summary."""
        session = app.state.session_service.get_session(session_id)
        if session is None:
            raise session_not_found(session_id)
        return to_response(session)

    @app.delete("/inquiry/sessions/{session_id}", status_code=204, tags=["Sessions"])
    async def end_session(session_id: str) -> None:
        """Discard a session."""
        if not app.state.session_service.end_session(session_id):
            raise HTTPException(status_code=503, detail="Could not end session")

    @app.put(
        "/inquiry/sessions/{session_id}/fields/{field_name}",
        response_model=FieldUpdateResponse,
        tags=["Forms"],
    )
    async def update_field(
        session_id: str, field_name: str, request: FieldUpdateRequest
    ) -> FieldUpdateResponse:
        """Store a draft value and return its validation message ("" when valid)."""
        try:
            updated = app.state.session_service.update_field(session_id, field_name, request.value)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown field '{field_name}'") from None

        if updated is None:
            raise session_not_found(session_id)

        _session, error = updated
        return FieldUpdateResponse(field=field_name, error=error)

    @app.post(
        "/inquiry/sessions/{session_id}/items", response_model=SessionResponse, tags=["Cart"]
    )
    async def add_item(session_id: str, request: AddItemRequest) -> SessionResponse:
        """Add a menu item to the cart, or bump its quantity by one."""
        if app.state.session_service.get_session(session_id) is None:
            raise session_not_found(session_id)

        session = await app.state.session_service.add_item(session_id, request.menu_item_id)
        if session is None:
            raise HTTPException(
                status_code=404, detail=f"Menu item {request.menu_item_id} is not available"
            )
        return to_response(session)

    @app.put(
        "/inquiry/sessions/{session_id}/items/{item_id}",
        response_model=SessionResponse,
        tags=["Cart"],
    )
    async def set_quantity(
        session_id: str, item_id: str, request: SetQuantityRequest
    ) -> SessionResponse:
        """Replace an item's quantity; zero or less removes the item."""
        session = app.state.session_service.set_item_quantity(session_id, item_id, request.quantity)
        if session is None:
            raise session_not_found(session_id)
        return to_response(session)

    @app.post(
        "/inquiry/sessions/{session_id}/items/{item_id}/decrement",
        response_model=SessionResponse,
        tags=["Cart"],
    )
    async def decrement_item(session_id: str, item_id: str) -> SessionResponse:
        """Lower an item's quantity by one, removing it below its minimum order quantity."""
        session = app.state.session_service.decrement_item(session_id, item_id)
        if session is None:
            raise session_not_found(session_id)
        return to_response(session)

    @app.delete(
        "/inquiry/sessions/{session_id}/items/{item_id}",
        response_model=SessionResponse,
        tags=["Cart"],
    )
    async def remove_item(session_id: str, item_id: str) -> SessionResponse:
        """Remove an item from the cart."""
        session = app.state.session_service.remove_item(session_id, item_id)
        if session is None:
            raise session_not_found(session_id)
        return to_response(session)

    @app.post(
        "/inquiry/sessions/{session_id}/submit",
        response_model=SubmissionResponse,
        tags=["Forms"],
    )
    async def submit(session_id: str) -> Union[SubmissionResponse, JSONResponse]:
        """Validate the session's form and send it to the restaurant.

        Returns 422 with every field error when validation fails, 409 while a
        submission from the same session is in flight, and 502 with a generic
        message when the relay could not deliver it.
        """
        result = await app.state.session_service.submit(session_id)
        if result is None:
            raise session_not_found(session_id)

        response = SubmissionResponse(
            success=result.success, message=result.message, errors=result.errors
        )
        status_code = SUBMISSION_STATUS_CODES[result.outcome]
        if status_code != 200:
            return JSONResponse(status_code=status_code, content=response.model_dump())

        return response

    return app

