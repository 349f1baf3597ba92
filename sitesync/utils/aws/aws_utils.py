"""AWS utilities for session management.

This module builds boto3 sessions and the service clients SiteSync needs
from the loaded configuration.
"""
from typing import Any, Dict, Optional

import boto3

from ...services.aws.operations import S3RemoteStore


def create_boto3_session(
    profile_name: Optional[str] = None,
    region_name: Optional[str] = None
):
    """Create a boto3 session.

    Empty values fall through to boto3's own resolution (environment,
    shared config, instance metadata).

    Args:
        profile_name: AWS profile name
        region_name: Optional AWS region

    Returns:
        boto3.Session object

    Example:
        >>> session = create_boto3_session('deploy', 'us-west-2')
        >>> s3 = session.client('s3')
    """
    return boto3.Session(
        profile_name=profile_name or None,
        region_name=region_name or None,
    )


def session_from_config(config: Dict[str, Any]):
    """Create a boto3 session from the ``aws_*`` config keys."""
    return create_boto3_session(
        (config.get('aws_profile') or '').strip(),
        (config.get('aws_region') or '').strip(),
    )


def build_remote_store(config: Dict[str, Any], session=None) -> S3RemoteStore:
    """Build the S3-backed remote store for *config*."""
    session = session or session_from_config(config)
    return S3RemoteStore(session.client('s3'))


def build_cloudfront_client(config: Dict[str, Any], session=None):
    """Build a CloudFront client for *config*."""
    session = session or session_from_config(config)
    return session.client('cloudfront')
