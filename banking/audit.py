"""
Audit Trail Module

Hash-chained in-memory audit log with SHA-256 for tamper detection.
Every registry state change and every PIN check is logged here.
PINs themselves are never recorded.
"""

import hashlib
import json
import threading
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class AuditEventType(Enum):
    """Types of audit events"""
    ACCOUNT_OPENED = "account_opened"
    ACCOUNT_CREDITED = "account_credited"
    ACCOUNT_DEBITED = "account_debited"
    DEBIT_REJECTED = "debit_rejected"
    AUTHENTICATION_SUCCEEDED = "authentication_succeeded"
    AUTHENTICATION_FAILED = "authentication_failed"
    AUTHORIZED_USER_ADDED = "authorized_user_added"


@dataclass(frozen=True)
class AuditEvent:
    """
    Immutable audit event chained to its predecessor by hash
    """
    id: str
    created_at: datetime
    event_type: AuditEventType
    account_number: int
    previous_hash: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    current_hash: str = ""

    def calculate_hash(self) -> str:
        """
        Calculate SHA-256 hash of this event
        Hash includes all fields except current_hash
        """
        hash_data = {
            'id': self.id,
            'created_at': self.created_at.isoformat(),
            'event_type': self.event_type.value,
            'account_number': self.account_number,
            'previous_hash': self.previous_hash,
            'metadata': self.metadata
        }

        json_data = json.dumps(hash_data, sort_keys=True, separators=(',', ':'), default=str)
        return hashlib.sha256(json_data.encode('utf-8')).hexdigest()

    def verify_hash(self) -> bool:
        """Verify that the current hash is correct"""
        return self.current_hash == self.calculate_hash()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'created_at': self.created_at.isoformat(),
            'event_type': self.event_type.value,
            'account_number': self.account_number,
            'previous_hash': self.previous_hash,
            'current_hash': self.current_hash,
            'metadata': dict(self.metadata),
        }


class AuditTrail:
    """
    Hash-chained audit trail for tamper detection

    A disabled trail accepts log calls and records nothing.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._events: List[AuditEvent] = []
        self._last_hash = ""
        self._lock = threading.Lock()

    def log_event(
        self,
        event_type: AuditEventType,
        account_number: int,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Optional[AuditEvent]:
        """
        Log an audit event with hash chaining

        Args:
            event_type: Type of audit event
            account_number: Account the event concerns
            metadata: Additional event-specific data

        Returns:
            Created AuditEvent, or None when the trail is disabled
        """
        if not self.enabled:
            return None

        with self._lock:
            event = AuditEvent(
                id=str(uuid.uuid4()),
                created_at=datetime.now(timezone.utc),
                event_type=event_type,
                account_number=account_number,
                previous_hash=self._last_hash,
                metadata=dict(metadata or {})
            )
            event = replace(event, current_hash=event.calculate_hash())

            self._events.append(event)
            self._last_hash = event.current_hash
            return event

    @property
    def events(self) -> List[AuditEvent]:
        """All events in logging order"""
        with self._lock:
            return list(self._events)

    def get_events_for_account(self, account_number: int) -> List[AuditEvent]:
        return [e for e in self.events if e.account_number == account_number]

    def get_events_by_type(self, event_type: AuditEventType) -> List[AuditEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def verify_integrity(self) -> Dict[str, Any]:
        """
        Verify the hash chain

        Returns:
            Dictionary with 'valid', 'total_events' and the list of
            'broken_links' (event ids whose hash or link does not match)
        """
        events = self.events
        broken_links = []
        previous_hash = ""

        for event in events:
            if not event.verify_hash() or event.previous_hash != previous_hash:
                broken_links.append(event.id)
            previous_hash = event.current_hash

        return {
            'valid': not broken_links,
            'total_events': len(events),
            'broken_links': broken_links,
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
