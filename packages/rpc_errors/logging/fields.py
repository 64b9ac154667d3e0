"""Canonical logging field names for structured fault logs.

Keeping names centralized prevents drift between the server handlers, the
client decoders and the safe exception logger.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"

# Fault identification fields.
ERROR_INSTANCE_ID = "error_instance_id"
ERROR_CODE = "error_code"
ERROR_NAME = "error_name"
EXCEPTION_TYPE = "exception_type"
STATUS = "status"

# Prefix applied to safe argument names so they cannot shadow core fields.
ARG_PREFIX = "arg."

# QoS directive fields.
QOS_REASON = "qos_reason"
QOS_DUE_TO = "qos_due_to"
QOS_RETRY_HINT = "qos_retry_hint"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
