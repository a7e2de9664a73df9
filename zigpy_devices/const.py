"""zigpy-devices constants."""

from __future__ import annotations

import enum

# Inbound message types
ATTRIBUTE_REPORT = "attributeReport"
READ_RESPONSE = "readResponse"
WRITE_RESPONSE = "writeResponse"
COMMAND_NOTIFICATION = "commandNotification"
COMMAND_COMMISSIONING_NOTIFICATION = "commandCommissioningNotification"
COMMAND_STATUS_CHANGE_NOTIFICATION = "commandStatusChangeNotification"
COMMAND_ON = "commandOn"
COMMAND_OFF = "commandOff"
COMMAND_TOGGLE = "commandToggle"
COMMAND_MOVE = "commandMove"
COMMAND_MOVE_WITH_ON_OFF = "commandMoveWithOnOff"
COMMAND_STOP = "commandStop"
COMMAND_STOP_WITH_ON_OFF = "commandStopWithOnOff"
COMMAND_RECALL = "commandRecall"
COMMAND_UP_OPEN = "commandUpOpen"
COMMAND_DOWN_CLOSE = "commandDownClose"

REPORT_TYPES = (ATTRIBUTE_REPORT, READ_RESPONSE)

# Device lifecycle events passed to `Definition.handle_event`
EVENT_START = "start"
EVENT_STOP = "stop"
EVENT_DEVICE_INTERVIEW = "deviceInterview"
EVENT_DEVICE_ANNOUNCE = "deviceAnnounce"
EVENT_DEVICE_OPTIONS_CHANGED = "deviceOptionsChanged"
EVENT_MESSAGE = "message"

MANUFACTURER_CODE_SCHNEIDER_ELECTRIC = 0x105E

META_DEVICE_CONFIG = "device_config"

GREEN_POWER_ENDPOINT_ID = 242

ENTITY_CATEGORY_CONFIG = "config"
ENTITY_CATEGORY_DIAGNOSTIC = "diagnostic"


class RepInterval(enum.IntEnum):
    """Commonly used reporting intervals, in seconds."""

    SECONDS_5 = 5
    SECONDS_10 = 10
    MINUTE = 60
    MINUTES_5 = 300
    MINUTES_10 = 600
    MINUTES_15 = 900
    MINUTES_30 = 1800
    HOUR = 3600
    MAX = 62000
