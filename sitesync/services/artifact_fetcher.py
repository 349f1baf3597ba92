"""
Download site archives from an artifact repository.

Fetches ``<repository>/<artifact>`` with HTTP basic auth and stores it
locally so it can be handed to :class:`ArchiveExtractor`.
"""
import os
import tempfile

import requests

from ..errors import ArtifactDownloadError
from ..utils.logger import get_logger
from ..utils.persistence.file_utils import ensure_dir

log = get_logger(__name__)

DOWNLOAD_TIMEOUT = 60
CHUNK_SIZE = 1024 * 1024


def artifact_url(repository: str, artifact: str) -> str:
    """Join repository base URL and artifact path."""
    return f"{repository.rstrip('/')}/{artifact.lstrip('/')}"


def fetch_artifact(repository, artifact, username="", password="", dest_dir=None):
    """Download an artifact and return its local path.

    Args:
        repository: Repository base URL
        artifact: Artifact path inside the repository
        username: Basic auth user (no auth when empty)
        password: Basic auth password
        dest_dir: Target directory, a temp dir when omitted

    Returns:
        Path of the downloaded file

    Raises:
        ArtifactDownloadError: On transport errors or non-200 responses
    """
    url = artifact_url(repository, artifact)
    dest_dir = dest_dir or tempfile.mkdtemp(prefix="sitesync-artifact-")
    ensure_dir(dest_dir)
    local_path = os.path.join(dest_dir, os.path.basename(artifact.rstrip('/')))

    auth = (username, password) if username else None

    log.info("Downloading artifact %s", url)
    try:
        with requests.get(url, auth=auth, stream=True, timeout=DOWNLOAD_TIMEOUT) as response:
            if response.status_code != 200:
                raise ArtifactDownloadError(
                    f"Error downloading artifact. HttpStatusCode={response.status_code}"
                )
            with open(local_path, 'wb') as fh:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        fh.write(chunk)
    except requests.RequestException as e:
        raise ArtifactDownloadError(f"Error downloading artifact {url}: {e}") from e
    except OSError as e:
        raise ArtifactDownloadError(f"Cannot write artifact to {local_path}: {e}") from e

    log.debug("Artifact stored at %s", local_path)
    return local_path
