import os

# Emit a logger.debug line for every element tried by the matcher.
TRACE_LOGGING = os.environ.get("TOKENRULES_TRACE", "").strip().lower() in (
    "1",
    "true",
    "yes",
    "on",
)
