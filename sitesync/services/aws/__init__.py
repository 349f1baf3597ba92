"""
AWS service package.

- :mod:`store`      — abstract object store interface used by the core
- :mod:`operations` — S3 implementation of the store on top of boto3
"""
from .store import RemoteStore
from .operations import S3RemoteStore

__all__ = [
    'RemoteStore',
    'S3RemoteStore',
]
