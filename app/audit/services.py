# app/audit/services.py
import json
from datetime import datetime

from loguru import logger

from app.audit.models import AuditLog
from app.core.data_accessor import DataAccessor
from app.core.result import Result


def record(
    accessor: DataAccessor,
    entity_name: str,
    entity_id,
    action: str,
    actor_id: int,
    metadata: dict | None = None,
) -> Result[AuditLog]:
    entry = AuditLog(
        entity_name=entity_name,
        entity_id=str(entity_id),
        action=action,
        timestamp=datetime.now(),
        actor_id=actor_id,
        extra=json.dumps(metadata, default=str) if metadata else None,
    )
    result = accessor.create(entry)
    if not result:
        logger.warning(
            "Audit entry {action} {entity}:{entity_id} not stored: {message}",
            action=action,
            entity=entity_name,
            entity_id=entity_id,
            message=result.message,
        )
    return result


def entries_for(accessor: DataAccessor, entity_name: str, entity_id) -> list[AuditLog]:
    return (
        accessor.query(AuditLog, AuditLog.entity_name == entity_name, AuditLog.entity_id == str(entity_id))
        .order_by(AuditLog.id)
        .all()
    )
