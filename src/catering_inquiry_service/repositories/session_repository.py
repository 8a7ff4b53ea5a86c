"""DynamoDB repository for inquiry sessions.

Expected failures are reported with simple return values (None/False)
rather than raised exceptions; callers decide how to surface them.
"""

import logging
import time
from collections.abc import Callable

from botocore.exceptions import ClientError
from mypy_boto3_dynamodb.service_resource import DynamoDBServiceResource, Table

from catering_inquiry_service.models.session_models import InquirySession

logger = logging.getLogger(__name__)


class InquirySessionRepository:
    """Repository for inquiry session CRUD operations.

    Manages session records in DynamoDB keyed by session_id. The table's TTL
    on expires_at deletes expired sessions eventually, possibly days late, so
    reads also treat a passed expires_at as missing.
    """

    def __init__(
        self,
        dynamodb_resource: DynamoDBServiceResource,
        table_name: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize repository.

        Args:
            dynamodb_resource: Boto3 DynamoDB resource
            table_name: Name of the DynamoDB table
            clock: Source of the current epoch time, used for expiry checks
        """
        self.dynamodb = dynamodb_resource
        self.table_name = table_name
        self.clock = clock
        self.table: Table = dynamodb_resource.Table(table_name)

    def get_session(self, session_id: str) -> InquirySession | None:
        """Retrieve a session.

        Args:
            session_id: Session identifier

        Returns:
            InquirySession if found and not expired, None otherwise
        """
        try:
            response = self.table.get_item(Key={"session_id": session_id})

            if "Item" not in response:
                return None

            session = InquirySession.from_dynamodb_item(response["Item"])
            if session.expires_at is not None and session.expires_at <= self.clock():
                logger.info(f"Inquiry session {session_id} has expired")
                return None

            return session

        except ClientError as e:
            logger.error(f"Failed to get inquiry session {session_id}: {e}")
            return None

    def save_session(self, session: InquirySession) -> bool:
        """Save or replace a session.

        Args:
            session: InquirySession to save

        Returns:
            bool: True if save succeeded, False otherwise
        """
        try:
            self.table.put_item(Item=session.to_dynamodb_item())
            return True

        except ClientError as e:
            logger.error(f"Failed to save inquiry session {session.session_id}: {e}")
            return False

    def delete_session(self, session_id: str) -> bool:
        """Delete a session.

        Args:
            session_id: Session identifier

        Returns:
            bool: True if delete succeeded, False otherwise
        """
        try:
            self.table.delete_item(Key={"session_id": session_id})
            return True

        except ClientError as e:
            logger.error(f"Failed to delete inquiry session {session_id}: {e}")
            return False
