"""
API-level type definitions.

This module contains types and constants that belong to the API layer:
- Gateway endpoint paths and login form values
- RPC method names used by the control interface
- Constants used by the API layer
"""

import re
from enum import Enum


class XComfortMethod(Enum):
    CONTROL_DEVICE = "StatusControlFunction/controlDevice"
    TRIGGER_SCENE = "SceneFunction/triggerScene"


# API-level constants
class Const:
    """API-level constants"""
    # HTTP endpoints
    LOGIN_PATH = "/system/http/login"
    RPC_PATH = "/remote/json-rpc"
    LOGIN_REFERER = "/bcgui/index.html"

    # Session cookie
    SESSION_COOKIE = "JSESSIONID"
    SESSION_COOKIE_PATTERN = re.compile(r"JSESSIONID=([^;\s]+)")

    # JSON-RPC
    JSONRPC_VERSION = "2.0"
    UNSUPPORTED_METHOD_RESULT = "unsupported method called"
    STATUS_OK = "ok"

    # Dimming
    MIN_DIM = 0
    MAX_DIM = 100
    SWITCH_STATES = ("on", "off")

    # Setup file used by auto setup
    DEFAULT_SETUP_FILE = "xcomfort.yaml"


class Message:
    """Literal error messages surfaced to callers"""
    NO_FIELD = "No {field} supplied"
    WRONG_CREDENTIALS = "Wrong username or password"
    LOGIN_FAILED = "Login failed"
    SESSION_REJECTED = "Session rejected after login"
    UNKNOWN_ERROR = "Unknown error occured"
    UNSUPPORTED_METHOD = "Unsupported method called"
    MALFORMED_RESPONSE = "Malformed JSON-RPC response"
    NO_SUCH_DEVICE = "No such device"
    NO_SUCH_SCENE = "No scene with that name exists"
    INVALID_STATE = "State value not valid (on/off or 0-100 integer)"
