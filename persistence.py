"""Send finished configurations to the storefront's configuration API."""
import json
import logging
import urllib.error
import urllib.request

from models import PersistencePayload

logger = logging.getLogger(__name__)


def save_configuration(
    payload: PersistencePayload,
    api_url: str,
    headers: dict | None = None,
    timeout: int = 15,
) -> bool:
    """POST one configuration. Returns True when the API accepted it.

    There is no retry here; callers decide whether to try again. Auth
    headers are passed in explicitly.
    """
    if not api_url:
        logger.warning("No configuration API URL configured, skipping save")
        return False

    data = json.dumps(payload.to_dict(), ensure_ascii=False).encode("utf-8")
    req = urllib.request.Request(
        api_url,
        data=data,
        method="POST",
        headers={
            "Content-Type": "application/json",
            "User-Agent": "PCBuildNormalizer/1.0",
            **(headers or {}),
        },
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            if 200 <= resp.status < 300:
                logger.info(f"Saved configuration '{payload.name}' ({len(payload.products)} products)")
                return True
            logger.warning(f"Configuration API responded with status {resp.status}")
            return False
    except urllib.error.HTTPError as e:
        body = e.read().decode("utf-8", errors="replace")
        logger.error(f"Failed to save configuration '{payload.name}': {e.code} {body}")
        return False
    except (urllib.error.URLError, OSError) as e:
        logger.error(f"Failed to save configuration '{payload.name}': {e}")
        return False
