"""Bearer token resolution for the Vertex AI backend.

Steps are tried in order and the first non-empty token wins:

1. an explicit token from configuration (GOOGLE_OAUTH_ACCESS_TOKEN);
2. application-default credentials through google-auth, when installed;
3. `gcloud auth application-default print-access-token`;
4. `gcloud auth print-access-token`.

Failures of the first three steps are only logged. If the last step fails
too, `CredentialResolutionError` is raised.
"""
from typing import Callable, List, Optional, Sequence, Tuple
import logging
import subprocess

from .config import Settings
from .errors import CredentialResolutionError

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
GCLOUD_ADC_CMD = ("gcloud", "auth", "application-default", "print-access-token")
GCLOUD_USER_CMD = ("gcloud", "auth", "print-access-token")

GUIDANCE = (
    "Failed to get Vertex AI access token. Configure ADC via GOOGLE_APPLICATION_CREDENTIALS "
    "or 'gcloud auth application-default login', or run 'gcloud auth login'"
)


def explicit_token(settings: Settings) -> Optional[str]:
    token = (settings.access_token or "").strip()
    return token or None


def google_auth_token() -> Optional[str]:
    import google.auth
    from google.auth.transport.requests import Request

    credentials, _ = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
    credentials.refresh(Request())
    token = credentials.token
    if isinstance(token, str) and token.strip():
        return token.strip()
    return None


def gcloud_token(cmd: Sequence[str], timeout: float, run: Callable = subprocess.run) -> str:
    proc = run(list(cmd), capture_output=True, text=True, check=True, timeout=timeout)
    token = (proc.stdout or "").strip()
    if not token:
        raise RuntimeError(f"No output from: {' '.join(cmd)}")
    return token


def resolve_access_token(settings: Settings, run: Callable = subprocess.run) -> str:
    steps: List[Tuple[str, Callable[[], Optional[str]]]] = [
        ("explicit token", lambda: explicit_token(settings)),
        ("google-auth ADC", google_auth_token),
        ("gcloud ADC", lambda: gcloud_token(GCLOUD_ADC_CMD, settings.timeout, run)),
        ("gcloud user", lambda: gcloud_token(GCLOUD_USER_CMD, settings.timeout, run)),
    ]
    last_error: Optional[BaseException] = None
    for name, step in steps:
        try:
            token = step()
        except Exception as e:
            logger.debug("access token via %s unavailable: %s", name, e)
            last_error = e
            continue
        if token:
            logger.debug("access token resolved via %s", name)
            return token
    raise CredentialResolutionError(f"{GUIDANCE}. Error: {_describe(last_error)}") from last_error


def _describe(err: Optional[BaseException]) -> str:
    if isinstance(err, subprocess.CalledProcessError):
        detail = (err.stderr or "").strip() or f"exit status {err.returncode}"
        return f"{' '.join(err.cmd)}: {detail}"
    return str(err) if err else "no credentials found"
