"""Audit trail: one structured line per security-relevant action on the ``donors.audit`` logger."""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger('donors.audit')


def log_action(*, actor=None, action: str, object_type: Optional[str] = None,
               object_id: Optional[int] = None, detail: Optional[Dict[str, Any]] = None) -> None:
    """Write one audit line.  ``detail`` must never contain secrets."""
    who = f"{actor.role}:{actor.pk}" if actor is not None and getattr(actor, 'pk', None) else 'anonymous'
    logger.info(
        "action=%s actor=%s object=%s:%s detail=%s",
        action, who, object_type or '-', object_id if object_id is not None else '-', detail or {},
    )
