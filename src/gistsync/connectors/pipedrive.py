"""
Pipedrive connector for creating activities.
"""

import logging
from typing import List

from pydantic import ValidationError

from ..exceptions import PublishError
from ..integrations.pipedrive.client import PipedriveClient
from ..models.records import Activity, PublishOutcome
from .base import BaseConnector

logger = logging.getLogger(__name__)


class ActivityPublisher(BaseConnector):
    """
    Posts activities to Pipedrive one at a time.

    Best effort: a rejected activity is logged and skipped, activities
    already created stay created.
    """
    
    def __init__(self, client: PipedriveClient):
        super().__init__(client)
    
    def publish(self, activities: List[Activity]) -> List[PublishOutcome]:
        """
        Create an activity for every input record, in order.
        
        Args:
            activities: Activities to create
            
        Returns:
            Outcomes for the accepted activities only, in input order
        """
        outcomes: List[PublishOutcome] = []
        
        for activity in activities:
            try:
                body = self.client.create_activity(activity.model_dump())
            except PublishError as e:
                logger.error(f"Failed to create activity: {e}")
                continue
            
            data = body["data"]
            logger.info(f"Activity created with id: {data['id']}")
            try:
                outcome = PublishOutcome(
                    id=data["id"],
                    subject=data.get("subject"),
                    success=bool(body.get("success", True))
                )
            except ValidationError as e:
                # Created on the Pipedrive side; record it with the subject that was sent
                logger.warning(f"Unexpected response body for activity {data['id']}: {e}")
                outcome = PublishOutcome(id=data["id"], subject=activity.subject, success=True)
            outcomes.append(outcome)
        
        logger.info(f"Total activities posted: {len(outcomes)}")
        return outcomes
