"""
Image identifier generation.
"""
import uuid

IMAGE_ID_LENGTH = 32


def generate_image_id() -> str:
    """
    Generate a new image id.

    128 random bits from the OS CSPRNG (uuid4), hex-encoded without
    separators. The id is also the object key; collisions are not checked.
    """
    return uuid.uuid4().hex
