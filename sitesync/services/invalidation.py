"""
CloudFront cache invalidation for deployed files.

One batch invalidation is issued per apply; reading, updating and
deleting an invalidation are no-ops since CloudFront keeps no state we
reconcile against.
"""
import time
from typing import Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..errors import InvalidationError
from ..utils.key_codec import decode_key
from ..utils.logger import get_logger

log = get_logger(__name__)


def invalidation_paths(files: Dict[str, str]) -> List[str]:
    """Absolute URL paths for every encoded key in *files*."""
    return sorted(f"/{decode_key(key)}" for key in files)


def caller_reference() -> str:
    """Fresh correlation token so CloudFront never dedupes a request."""
    return str(time.time_ns())


class InvalidationResource:
    """Issues CloudFront invalidations for a set of deployed files.

    Args:
        cloudfront_client: ``boto3`` CloudFront client
    """

    def __init__(self, cloudfront_client):
        self.cloudfront_client = cloudfront_client

    def create(self, distribution_id: str, files: Dict[str, str]) -> Optional[str]:
        """Invalidate every file in *files* on *distribution_id*.

        Args:
            distribution_id: CloudFront distribution ID
            files: State map of encoded key to fingerprint

        Returns:
            Invalidation ID, or None when there was nothing to invalidate

        Raises:
            InvalidationError: If CloudFront rejects the request
        """
        paths = invalidation_paths(files)
        if not paths:
            log.info("No files to invalidate on %s", distribution_id)
            return None

        log.info("Creating invalidation request. paths=%d", len(paths))
        try:
            response = self.cloudfront_client.create_invalidation(
                DistributionId=distribution_id,
                InvalidationBatch={
                    'Paths': {
                        'Quantity': len(paths),
                        'Items': paths,
                    },
                    'CallerReference': caller_reference(),
                },
            )
        except (ClientError, BotoCoreError) as e:
            raise InvalidationError(
                f"Failed to invalidate distribution {distribution_id}: {e}"
            ) from e

        invalidation_id = response['Invalidation']['Id']
        log.info("Invalidation %s created on %s", invalidation_id, distribution_id)
        return invalidation_id

    def read(self, invalidation_id):
        return invalidation_id

    def update(self, invalidation_id):
        return invalidation_id

    def delete(self, invalidation_id):
        return None
