"""
Services for SiteSync.

- :mod:`archive_extractor`  — zip extraction into a scoped staging dir
- :mod:`checksum`           — S3-compatible content fingerprints
- :mod:`metadata_decorator` — content type / encoding / cache headers
- :mod:`reconciler`         — state diff and apply
- :mod:`site_resource`      — declarative site lifecycle
- :mod:`invalidation`       — CloudFront invalidation
- :mod:`artifact_fetcher`   — artifact repository download
- :mod:`aws`                — object store interface and S3 backend
"""
