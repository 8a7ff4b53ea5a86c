"""Service for managing inquiry sessions: form drafts, carts and submission."""

import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from catering_inquiry_service.models.inquiry_models import CartTotals, FormType
from catering_inquiry_service.models.session_models import InquirySession, empty_fields
from catering_inquiry_service.observability.metrics import record_cart_mutation
from catering_inquiry_service.repositories.session_repository import InquirySessionRepository
from catering_inquiry_service.services.inquiry_cart import InquiryCart
from catering_inquiry_service.services.menu_service_client import MenuServiceClient
from catering_inquiry_service.services.pricing import PricingPolicy
from catering_inquiry_service.services.submission_service import (
    SubmissionOutcome,
    SubmissionResult,
    SubmissionService,
)
from catering_inquiry_service.validation.field_validators import validate_field

logger = logging.getLogger(__name__)

SUBMISSION_IN_PROGRESS_MESSAGE = "Your submission is already being sent"

# Relay calls finish well within this; an older guard belongs to a dead invocation
SUBMISSION_GUARD_TIMEOUT = timedelta(seconds=60)


class SessionStoreError(Exception):
    """Raised when a session change could not be written to the store."""


class CartNotAvailableError(Exception):
    """Raised when a cart operation is attempted on a form without a cart."""


class InquirySessionService:
    """Owns the lifecycle of inquiry sessions.

    Every cart change loads the session, applies exactly one InquiryCart
    operation and writes the session back. Sessions are independent; there
    is no locking across sessions.
    """

    def __init__(
        self,
        session_repository: InquirySessionRepository,
        menu_service_client: MenuServiceClient,
        submission_service: SubmissionService,
        pricing: PricingPolicy | None = None,
        session_ttl_hours: int = 24,
    ) -> None:
        """Initialize the InquirySessionService.

        Args:
            session_repository: Repository for storing sessions
            menu_service_client: Client for looking up menu items
            submission_service: Dispatcher for completed forms
            pricing: Pricing configuration for cart totals
            session_ttl_hours: Hours until an idle session expires
        """
        self.session_repository = session_repository
        self.menu_service_client = menu_service_client
        self.submission_service = submission_service
        self.pricing = pricing or PricingPolicy()
        self.session_ttl_hours = session_ttl_hours

    def _save(self, session: InquirySession) -> InquirySession:
        if not self.session_repository.save_session(session):
            raise SessionStoreError(f"Could not save inquiry session {session.session_id}")
        return session

    def _cart(self, session: InquirySession) -> InquiryCart:
        if session.form_type != FormType.CONTACT:
            raise CartNotAvailableError(f"{session.form_type.value} sessions have no inquiry cart")
        return InquiryCart(session.items, pricing=self.pricing)

    def _mutate_cart(
        self,
        session_id: str,
        operation: str,
        mutate: Callable[[InquiryCart], object],
    ) -> InquirySession | None:
        session = self.session_repository.get_session(session_id)
        if session is None:
            return None

        cart = self._cart(session)
        mutate(cart)
        session.items = cart.items
        record_cart_mutation(operation)
        return self._save(session)

    def create_session(self, form_type: FormType) -> InquirySession:
        """Start a new session with a blank form and an empty cart.

        Raises:
            SessionStoreError: If the session could not be stored
        """
        now = datetime.now(UTC)
        session = InquirySession(
            session_id=f"inq_{uuid.uuid4().hex[:16]}",
            form_type=form_type,
            fields=empty_fields(form_type),
            created_at=now,
            expires_at=int((now + timedelta(hours=self.session_ttl_hours)).timestamp()),
        )
        logger.info(f"Created {form_type.value} session {session.session_id}")
        return self._save(session)

    def get_session(self, session_id: str) -> InquirySession | None:
        """Get a session by ID, None if it does not exist or has expired."""
        return self.session_repository.get_session(session_id)

    def end_session(self, session_id: str) -> bool:
        """Discard a session and everything staged in it."""
        return self.session_repository.delete_session(session_id)

    def get_totals(self, session: InquirySession) -> CartTotals:
        """Compute the current pricing summary of a session's cart."""
        return InquiryCart(session.items, pricing=self.pricing).compute_totals()

    def update_field(
        self, session_id: str, field_name: str, value: str
    ) -> tuple[InquirySession, str] | None:
        """Store a draft field value and validate it.

        Args:
            session_id: The session to update
            field_name: Form field being edited
            value: Raw value as entered by the user

        Returns:
            Tuple of (session, error message or ""), or None if the session does not exist

        Raises:
            KeyError: If the field does not belong to the session's form
            SessionStoreError: If the session could not be stored
        """
        session = self.session_repository.get_session(session_id)
        if session is None:
            return None

        if field_name not in session.fields:
            raise KeyError(field_name)

        session.fields[field_name] = value
        error = validate_field(field_name, value, session.form_type)
        return self._save(session), error

    async def add_item(self, session_id: str, menu_item_id: str) -> InquirySession | None:
        """Add a menu item to the session's cart.

        Returns:
            The updated session, or None if the session or the menu item does not exist
        """
        session = self.session_repository.get_session(session_id)
        if session is None:
            return None

        cart = self._cart(session)
        menu_item = await self.menu_service_client.get_menu_item(menu_item_id)
        if menu_item is None:
            logger.warning(f"Menu item {menu_item_id} is not available")
            return None

        cart.add(menu_item)
        session.items = cart.items
        record_cart_mutation("add")
        return self._save(session)

    def set_item_quantity(
        self, session_id: str, item_id: str, quantity: int
    ) -> InquirySession | None:
        """Replace an item's quantity; zero or less removes it."""
        return self._mutate_cart(
            session_id, "set_quantity", lambda cart: cart.set_quantity(item_id, quantity)
        )

    def decrement_item(self, session_id: str, item_id: str) -> InquirySession | None:
        """Lower an item's quantity by one, removing it below its minimum order quantity."""
        return self._mutate_cart(session_id, "decrement", lambda cart: cart.decrement(item_id))

    def remove_item(self, session_id: str, item_id: str) -> InquirySession | None:
        """Remove an item from the cart."""
        return self._mutate_cart(session_id, "remove", lambda cart: cart.remove(item_id))

    def _submission_in_flight(self, session: InquirySession) -> bool:
        if not session.submitting:
            return False

        started = session.submitting_since
        if started is not None and datetime.now(UTC) - started < SUBMISSION_GUARD_TIMEOUT:
            return True

        logger.warning(f"Clearing stale submission guard on session {session.session_id}")
        return False

    async def submit(self, session_id: str) -> SubmissionResult | None:
        """Validate and send the session's form.

        A session that is already submitting is turned away, unless its guard
        is older than SUBMISSION_GUARD_TIMEOUT. On success the form draft and
        the cart are reset; on failure both are kept so the user can try again.
        Once the relay has been called, a failure to store the outcome is
        logged but does not change the result returned to the user.

        Returns:
            SubmissionResult, or None if the session does not exist

        Raises:
            SessionStoreError: If the guard could not be stored before sending
        """
        session = self.session_repository.get_session(session_id)
        if session is None:
            return None

        if self._submission_in_flight(session):
            logger.warning(f"Session {session_id} already has a submission in flight")
            return SubmissionResult(
                outcome=SubmissionOutcome.IN_PROGRESS,
                message=SUBMISSION_IN_PROGRESS_MESSAGE,
            )

        session.submitting = True
        session.submitting_since = datetime.now(UTC)
        self._save(session)

        try:
            result = await self.submission_service.dispatch(
                session.form_type,
                session.fields,
                items=session.items if session.form_type == FormType.CONTACT else None,
            )
            if result.success:
                logger.info(f"Session {session_id} submitted, clearing form and cart")
                session.reset()
        finally:
            session.submitting = False
            session.submitting_since = None
            if not self.session_repository.save_session(session):
                # The stale guard check releases the session later
                logger.error(f"Could not store submission outcome for session {session_id}")

        return result
