from enum import Enum


class ErrorCode(str, Enum):
    UNKNOWN_FUNCTION = "unknown_function"
    CAPABILITY_FAILURE = "capability_failure"
    DECODE_FAILURE = "decode_failure"
    TRANSPORT_FAILURE = "transport_failure"
    INTERNAL_ERROR = "internal_error"


class FramingPolicy(str, Enum):
    SPLIT = "split"
    LAST_NUL = "last_nul"
