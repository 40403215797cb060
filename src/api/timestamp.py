"""
Timestamp converter backend.
Keeps a local date-time, a Unix timestamp in seconds and a Unix timestamp in
milliseconds describing one instant in sync, whichever of them is edited.

The state is an immutable TimestampState driven by the pure reduce() function.
TimestampSynchronizer wraps the reducer for callers that want exceptions.
"""

import logging
import re
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone, tzinfo
from email.utils import format_datetime
from enum import Enum
from typing import Any, Dict, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from api.exceptions import (
    InvalidDateFormat,
    InvalidMillisecondTimestamp,
    InvalidTimestamp,
    TimestampError,
    ToolConfigError,
    ToolError,
)

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)
DEFAULT_LOCAL_DISPLAY_FORMAT = '%Y-%m-%d %H:%M:%S %Z'

_INTEGER_RE = re.compile(r'^[+-]?[0-9]+$')


class Field(Enum):
    """The three user-editable representations of the instant."""
    LOCAL = 'local'
    SECONDS = 'seconds'
    MILLIS = 'millis'


_FIELD_ATTRS = {
    Field.LOCAL: 'local_datetime',
    Field.SECONDS: 'epoch_seconds',
    Field.MILLIS: 'epoch_millis',
}

_DISPLAY_ATTRS = {
    'local_display': 'local_time_display',
    'utc_display': 'utc_time_display',
}


@dataclass(frozen=True)
class TimestampState:
    local_datetime: str = ''
    epoch_seconds: str = ''
    epoch_millis: str = ''
    local_time_display: str = ''
    utc_time_display: str = ''
    authority: Optional[Field] = None
    error: str = ''
    error_kind: str = ''

    @property
    def is_empty(self) -> bool:
        return not (self.local_datetime or self.epoch_seconds or self.epoch_millis)

    def value_of(self, field: Union[Field, str]) -> str:
        """Current text of a field, for copy-to-clipboard."""
        if isinstance(field, Field):
            return getattr(self, _FIELD_ATTRS[field])
        if field in _DISPLAY_ATTRS:
            return getattr(self, _DISPLAY_ATTRS[field])
        return getattr(self, _FIELD_ATTRS[parse_field(field)])

    def to_dict(self) -> Dict[str, Any]:
        return {
            'local_datetime': self.local_datetime,
            'epoch_seconds': self.epoch_seconds,
            'epoch_millis': self.epoch_millis,
            'local_time_display': self.local_time_display,
            'utc_time_display': self.utc_time_display,
            'authority': self.authority.value if self.authority else None,
            'error': self.error,
            'error_kind': self.error_kind,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'TimestampState':
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ToolError('State must be an object')
        authority = data.get('authority')
        return cls(
            local_datetime=_text(data.get('local_datetime')),
            epoch_seconds=_text(data.get('epoch_seconds')),
            epoch_millis=_text(data.get('epoch_millis')),
            local_time_display=_text(data.get('local_time_display')),
            utc_time_display=_text(data.get('utc_time_display')),
            authority=parse_field(authority) if authority else None,
            error=_text(data.get('error')),
            error_kind=_text(data.get('error_kind')),
        )


def _text(value: Any) -> str:
    return '' if value is None else str(value)


# Events

@dataclass(frozen=True)
class EditLocal:
    value: str


@dataclass(frozen=True)
class EditSeconds:
    value: str


@dataclass(frozen=True)
class EditMillis:
    value: str


@dataclass(frozen=True)
class UseNow:
    at: Optional[datetime] = None


@dataclass(frozen=True)
class ClearField:
    field: Field


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[EditLocal, EditSeconds, EditMillis, UseNow, ClearField, Reset]


def parse_field(name: Any) -> Field:
    try:
        return Field(name)
    except ValueError:
        raise ToolError(f'Unknown field: {name}')


def event_from_dict(data: Dict[str, Any]) -> Event:
    """Build an event from its JSON form, e.g. {"type": "edit_seconds", "value": "0"}"""
    if not isinstance(data, dict):
        raise ToolError('Event must be an object')

    event_type = data.get('type', '')
    value = data.get('value', '')
    if value is None:
        value = ''

    if event_type == 'edit_local':
        return EditLocal(str(value))
    if event_type == 'edit_seconds':
        return EditSeconds(str(value))
    if event_type == 'edit_millis':
        return EditMillis(str(value))
    if event_type == 'use_now':
        return UseNow()
    if event_type == 'clear_field':
        return ClearField(parse_field(data.get('field')))
    if event_type == 'reset':
        return Reset()
    raise ToolError(f'Unknown event type: {event_type}')


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Map a configured zone name to a tzinfo. None means the system local zone."""
    if name is None:
        return None
    if not isinstance(name, str):
        raise ToolConfigError(f'Timezone must be a string, got {type(name).__name__}')
    if not name:
        return None
    if name.upper() in ('UTC', 'Z'):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ToolConfigError(f'Unknown timezone: {name}')


# Conversions

def parse_local_datetime(text: str, tz: Optional[tzinfo] = None) -> int:
    """Parse a YYYY-MM-DDTHH:mm string as wall-clock time in tz, returning epoch milliseconds"""
    text = (text or '').strip()
    if not text:
        raise InvalidDateFormat('Invalid date format')
    try:
        moment = datetime.fromisoformat(text)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=tz) if tz else moment.astimezone()
        return (moment - EPOCH) // ONE_MILLISECOND
    except (ValueError, OverflowError, OSError):
        raise InvalidDateFormat('Invalid date format')


def parse_integer(text: str, error_cls: type, message: str) -> int:
    text = (text or '').strip()
    if not _INTEGER_RE.match(text):
        raise error_cls(message)
    try:
        return int(text, 10)
    except ValueError:
        # digit strings past the interpreter limit on int conversion
        raise error_cls(message)


def project_instant(millis: int, tz: Optional[tzinfo], display_format: str,
                    error_cls: type = TimestampError) -> Dict[str, str]:
    """Compute every textual projection of an instant given in epoch milliseconds"""
    try:
        moment = EPOCH + timedelta(milliseconds=millis)
        local = moment.astimezone(tz) if tz else moment.astimezone()
        return {
            'local_datetime': local.replace(tzinfo=None).isoformat(timespec='minutes'),
            'epoch_seconds': str(millis // 1000),
            'epoch_millis': str(millis),
            'local_time_display': local.strftime(display_format),
            'utc_time_display': format_datetime(moment, usegmt=True),
        }
    except (OverflowError, ValueError, OSError):
        raise error_cls('Timestamp out of range')


# Reducer

def apply_event(state: TimestampState, event: Event, tz: Optional[tzinfo] = None,
                display_format: str = DEFAULT_LOCAL_DISPLAY_FORMAT) -> TimestampState:
    """
    Apply one event and return the new state.

    Raises TimestampError subclasses on invalid input. A gated edit returns
    the very same state object.
    """
    if isinstance(event, EditLocal):
        millis = parse_local_datetime(event.value, tz)
        fields = project_instant(millis, tz, display_format, InvalidDateFormat)
        fields['local_datetime'] = event.value.strip()
        return TimestampState(authority=Field.LOCAL, **fields)

    if isinstance(event, EditSeconds):
        if state.authority is Field.LOCAL:
            logger.debug("Ignored seconds edit, local date-time is authoritative")
            return state
        seconds = parse_integer(event.value, InvalidTimestamp, 'Invalid timestamp')
        fields = project_instant(seconds * 1000, tz, display_format, InvalidTimestamp)
        fields['epoch_seconds'] = event.value.strip()
        return TimestampState(authority=Field.SECONDS, **fields)

    if isinstance(event, EditMillis):
        if state.authority in (Field.LOCAL, Field.SECONDS):
            logger.debug("Ignored millisecond edit, %s field is authoritative", state.authority.value)
            return state
        millis = parse_integer(event.value, InvalidMillisecondTimestamp,
                               'Invalid millisecond timestamp')
        fields = project_instant(millis, tz, display_format, InvalidMillisecondTimestamp)
        fields['epoch_millis'] = event.value.strip()
        return TimestampState(authority=Field.MILLIS, **fields)

    if isinstance(event, UseNow):
        now = event.at or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.astimezone()
        fields = project_instant((now - EPOCH) // ONE_MILLISECOND, tz, display_format)
        return TimestampState(**fields)

    if isinstance(event, ClearField):
        attr = _FIELD_ATTRS[event.field]
        if not getattr(state, attr):
            return state
        authority = None if state.authority is event.field else state.authority
        cleared = replace(state, authority=authority, **{attr: ''})
        return TimestampState() if cleared.is_empty else cleared

    if isinstance(event, Reset):
        return TimestampState()

    raise ToolError(f'Unsupported event: {event!r}')


def reduce(state: TimestampState, event: Event, tz: Optional[tzinfo] = None,
           display_format: str = DEFAULT_LOCAL_DISPLAY_FORMAT) -> TimestampState:
    """Pure (state, event) -> state'. Invalid input is reported in state.error."""
    try:
        new_state = apply_event(state, event, tz, display_format)
    except TimestampError as e:
        logger.debug("Rejected %s: %s", type(event).__name__, e)
        return replace(state, error=str(e), error_kind=e.kind)
    return new_state


class TimestampSynchronizer:
    """Owns one TimestampState and exposes a setter per field. Setters raise on invalid input."""

    def __init__(self, tz: Optional[tzinfo] = None,
                 display_format: str = DEFAULT_LOCAL_DISPLAY_FORMAT,
                 state: Optional[TimestampState] = None):
        self.tz = tz
        self.display_format = display_format
        self.state = state or TimestampState()

    def _dispatch(self, event: Event) -> TimestampState:
        try:
            self.state = apply_event(self.state, event, self.tz, self.display_format)
        except TimestampError as e:
            self.state = replace(self.state, error=str(e), error_kind=e.kind)
            raise
        return self.state

    def set_local_datetime(self, text: str) -> TimestampState:
        return self._dispatch(EditLocal(text))

    def set_epoch_seconds(self, text: str) -> TimestampState:
        return self._dispatch(EditSeconds(text))

    def set_epoch_millis(self, text: str) -> TimestampState:
        return self._dispatch(EditMillis(text))

    def use_current_time(self, at: Optional[datetime] = None) -> TimestampState:
        return self._dispatch(UseNow(at))

    def clear_field(self, field: Union[Field, str]) -> TimestampState:
        if not isinstance(field, Field):
            field = parse_field(field)
        return self._dispatch(ClearField(field))

    def reset(self) -> TimestampState:
        return self._dispatch(Reset())

    def value_of(self, field: Union[Field, str]) -> str:
        return self.state.value_of(field)


def process_timestamp_event(state_data: Optional[Dict[str, Any]], event_data: Dict[str, Any],
                            timezone_name: Optional[str] = None,
                            display_format: str = DEFAULT_LOCAL_DISPLAY_FORMAT) -> Dict[str, Any]:
    """
    Apply an event received over HTTP.

    Returns:
        Dict with 'success', 'state', 'applied' and, on failure, 'error' and 'error_kind'
    """
    try:
        tz = resolve_timezone(timezone_name)
        state = TimestampState.from_dict(state_data)
        event = event_from_dict(event_data)
    except ToolError as e:
        return {'success': False, 'error': str(e)}

    try:
        new_state = apply_event(state, event, tz, display_format)
    except TimestampError as e:
        failed = replace(state, error=str(e), error_kind=e.kind)
        return {
            'success': False,
            'error': str(e),
            'error_kind': e.kind,
            'state': failed.to_dict(),
        }

    return {
        'success': True,
        'applied': new_state is not state,
        'state': new_state.to_dict(),
    }
