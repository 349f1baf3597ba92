"""AWS utilities sub-package.

Contains boto3 session management and client factories.
"""
from .aws_utils import (
    create_boto3_session,
    session_from_config,
    build_remote_store,
    build_cloudfront_client,
)

__all__ = [
    'create_boto3_session',
    'session_from_config',
    'build_remote_store',
    'build_cloudfront_client',
]
