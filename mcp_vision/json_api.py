from typing import Optional
import logging

from .config import Settings, load_config
from .errors import VisionError
from .services.analyzer import AnalyzerService

logger = logging.getLogger(__name__)


def handle_json_request(req: dict, settings: Optional[Settings] = None, service: Optional[AnalyzerService] = None) -> dict:
    """Dict in, dict out: `{"ok": True, "text": ...}` or `{"ok": False, "errors": [...]}`."""
    if not isinstance(req, dict):
        return {"ok": False, "errors": ["request must be an object"]}

    action = req.get("action", "analyze")
    if action != "analyze":
        return {"ok": False, "errors": ["unsupported action"]}

    try:
        if service is None:
            service = AnalyzerService(settings or load_config())
        text = service.analyze(req.get("images"), req.get("instruction"))
    except VisionError as e:
        logger.info("analyze failed: %s", e)
        return {"ok": False, "errors": [str(e)]}
    except Exception as e:
        logger.exception("unexpected error while analyzing images")
        return {"ok": False, "errors": [f"unexpected error: {e}"]}
    return {"ok": True, "text": text}
