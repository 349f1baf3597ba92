"""
SiteSync — static site deployment to S3.

Extracts a site archive, fingerprints every file with the S3 multipart
ETag algorithm, and reconciles the bucket against the last applied
state with a plan/apply lifecycle.
"""

__version__ = "0.3.0"
