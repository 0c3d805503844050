"""Catalog models — the records the data client reads and writes.

Category is the only collection the app manages today. Its identity is the
Firestore document id; the remaining attributes map one-to-one onto document
fields (image_url is stored as ``imageUrl``).
"""

from pydantic import BaseModel


class Category(BaseModel):
    """A food category shown on the home list."""

    id: str = ""
    name: str = ""
    description: str | None = None
    image_url: str | None = None
