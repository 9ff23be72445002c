"""ID generation utilities for agent studio.

This module provides UUID v4 based identifiers for catalog items and runs.
"""

import uuid


def generate_uuid() -> str:
    """Generate a UUID v4 as a string.

    Returns:
        UUID v4 string (without dashes)
    """
    return uuid.uuid4().hex


def generate_agent_id() -> str:
    """Generate a unique agent identifier.

    Returns:
        Agent ID prefixed with "agent-"
    """
    return f"agent-{generate_uuid()}"


def generate_pipeline_id() -> str:
    """Generate a unique pipeline identifier.

    Returns:
        Pipeline ID prefixed with "pipeline-"
    """
    return f"pipeline-{generate_uuid()}"


def generate_message_id() -> str:
    """Generate a unique chat message identifier."""
    return f"msg-{generate_uuid()}"


def generate_run_id() -> str:
    """Generate a unique run identifier."""
    return f"run-{generate_uuid()}"
