"""
S3 implementation of :class:`RemoteStore`.

Uploads go through ``upload_fileobj`` with a transfer config whose part
size matches :data:`~sitesync.services.checksum.PART_SIZE`, so the ETag
S3 assigns equals the fingerprint computed locally.
"""
from boto3.exceptions import S3UploadFailedError
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import BotoCoreError, ClientError

from ...errors import DeleteError, NotFoundError, RemoteStoreError, UploadError
from ...utils.logger import get_logger
from ..checksum import PART_SIZE
from .store import RemoteStore

log = get_logger(__name__)

NOT_FOUND_CODES = frozenset({"NoSuchBucket", "404", "NotFound"})

# Multipart only above PART_SIZE bytes, in PART_SIZE parts
TRANSFER_CONFIG = TransferConfig(
    multipart_threshold=PART_SIZE + 1,
    multipart_chunksize=PART_SIZE,
)


def _error_code(error):
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "")
    return ""


class S3RemoteStore(RemoteStore):
    """Object store backed by an S3 client.

    boto3 clients are thread-safe, so one client serves every upload
    worker.

    Args:
        s3_client: ``boto3`` S3 client (or anything with the same methods)
        transfer_config: Override for the multipart transfer settings
    """

    def __init__(self, s3_client, transfer_config=None):
        self.s3_client = s3_client
        self.transfer_config = transfer_config or TRANSFER_CONFIG

    def list_objects(self, bucket):
        """List every object in *bucket* across all result pages.

        Raises:
            NotFoundError: If the bucket does not exist
            RemoteStoreError: For any other listing failure
        """
        objects = []
        try:
            paginator = self.s3_client.get_paginator('list_objects_v2')
            for page in paginator.paginate(Bucket=bucket):
                for obj in page.get('Contents', []):
                    objects.append((obj['Key'], obj.get('ETag', '')))
        except ClientError as e:
            if _error_code(e) in NOT_FOUND_CODES:
                raise NotFoundError(f"Bucket {bucket} does not exist") from e
            raise RemoteStoreError(f"Failed to list bucket {bucket}: {e}") from e
        except BotoCoreError as e:
            raise RemoteStoreError(f"Failed to list bucket {bucket}: {e}") from e

        log.debug("Listed %d object(s) in %s", len(objects), bucket)
        return objects

    def put_object(self, bucket, key, body, content_type="", content_encoding="",
                   cache_control="", expires=""):
        extra_args = {}
        if content_type:
            extra_args['ContentType'] = content_type
        if content_encoding:
            extra_args['ContentEncoding'] = content_encoding
        if cache_control:
            extra_args['CacheControl'] = cache_control
        if expires:
            extra_args['Expires'] = expires

        log.debug("PUT s3://%s/%s %s", bucket, key, extra_args)
        try:
            self.s3_client.upload_fileobj(
                body, bucket, key,
                ExtraArgs=extra_args or None,
                Config=self.transfer_config,
            )
        except (ClientError, BotoCoreError, S3UploadFailedError) as e:
            raise UploadError(f"Failed to upload s3://{bucket}/{key}: {e}") from e

    def delete_object(self, bucket, key):
        log.debug("Deleting key. bucket=%s, key=%s", bucket, key)
        try:
            self.s3_client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise DeleteError(f"Failed to delete s3://{bucket}/{key}: {e}") from e
