from __future__ import annotations

import io

import boto3
import pytest
from boto3.exceptions import S3UploadFailedError
from botocore.stub import Stubber

from sitesync.errors import DeleteError, NotFoundError, RemoteStoreError, UploadError
from sitesync.services.aws.operations import S3RemoteStore
from sitesync.services.checksum import PART_SIZE


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


class _RecordingS3Client:
    def __init__(self, error=None):
        self.uploads = []
        self.error = error

    def upload_fileobj(self, fileobj, bucket, key, ExtraArgs=None, Config=None):  # noqa: N803
        if self.error is not None:
            raise self.error
        self.uploads.append({
            "body": fileobj.read(),
            "bucket": bucket,
            "key": key,
            "extra_args": ExtraArgs,
            "config": Config,
        })


def test_list_objects_follows_pagination(s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "list_objects_v2",
            {
                "Contents": [{"Key": "index.html", "ETag": '"abc"'}],
                "IsTruncated": True,
                "NextContinuationToken": "token-1",
            },
        )
        stubber.add_response(
            "list_objects_v2",
            {
                "Contents": [{"Key": "assets/app.js", "ETag": '"def-2"'}],
                "IsTruncated": False,
            },
        )

        objects = S3RemoteStore(s3_client).list_objects("site")

        stubber.assert_no_pending_responses()

    assert objects == [("index.html", '"abc"'), ("assets/app.js", '"def-2"')]


def test_list_objects_of_empty_bucket(s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_response("list_objects_v2", {"IsTruncated": False})

        assert S3RemoteStore(s3_client).list_objects("site") == []


def test_missing_bucket_maps_to_not_found(s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_client_error(
            "list_objects_v2", service_error_code="NoSuchBucket", http_status_code=404
        )

        with pytest.raises(NotFoundError):
            S3RemoteStore(s3_client).list_objects("site")


def test_other_listing_errors_are_store_errors(s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_client_error(
            "list_objects_v2", service_error_code="AccessDenied", http_status_code=403
        )

        with pytest.raises(RemoteStoreError) as excinfo:
            S3RemoteStore(s3_client).list_objects("site")

    assert not isinstance(excinfo.value, NotFoundError)


def test_put_object_sends_metadata_and_part_size():
    client = _RecordingS3Client()

    S3RemoteStore(client).put_object(
        "site", "index.html", io.BytesIO(b"<html></html>"),
        content_type="text/html",
        cache_control="no-cache, no-store, must-revalidate",
        expires="0",
    )

    upload = client.uploads[0]
    assert upload["key"] == "index.html"
    assert upload["body"] == b"<html></html>"
    assert upload["extra_args"] == {
        "ContentType": "text/html",
        "CacheControl": "no-cache, no-store, must-revalidate",
        "Expires": "0",
    }
    assert upload["config"].multipart_chunksize == PART_SIZE
    assert upload["config"].multipart_threshold == PART_SIZE + 1


def test_put_object_without_metadata_sends_no_extra_args():
    client = _RecordingS3Client()

    S3RemoteStore(client).put_object("site", "robots.txt", io.BytesIO(b""))

    assert client.uploads[0]["extra_args"] is None


def test_failed_upload_raises_upload_error():
    client = _RecordingS3Client(error=S3UploadFailedError("connection reset"))

    with pytest.raises(UploadError):
        S3RemoteStore(client).put_object("site", "index.html", io.BytesIO(b"x"))


def test_delete_object(s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_response("delete_object", {}, {"Bucket": "site", "Key": "old.html"})

        S3RemoteStore(s3_client).delete_object("site", "old.html")

        stubber.assert_no_pending_responses()


def test_failed_delete_raises_delete_error(s3_client):
    with Stubber(s3_client) as stubber:
        stubber.add_client_error("delete_object", service_error_code="AccessDenied", http_status_code=403)

        with pytest.raises(DeleteError):
            S3RemoteStore(s3_client).delete_object("site", "old.html")
