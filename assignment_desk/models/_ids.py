import uuid


def generate_id() -> str:
    """Generated document key, unique per collection."""
    return uuid.uuid4().hex
